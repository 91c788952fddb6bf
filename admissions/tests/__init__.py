"""Test suite for the CGU admissions portal.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for the key-value store adapters
   - Run against temporary files and databases
   - Validate persistence and corrupt-data handling

3. fakes/: Port implementations for testing
   - In-memory implementations of KeyValueStorePort and AccountDirectoryPort
   - Used by core unit tests
"""
