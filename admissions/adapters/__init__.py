"""External adapters for the CGU admissions portal.

This package contains all I/O (files, SQLite, the terminal) and provides
implementations of the core port interfaces.

Adapter Organization:

- store/: Key-value persistence (in-memory, JSON file, SQLite)
- cli/: Command-line interface and portal commands
"""
