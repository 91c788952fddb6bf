"""Tests for the key-value store adapters.

These tests exercise each KeyValueStorePort implementation against
temporary files and databases to check persistence across instances
and the handling of corrupt stored data.
"""
