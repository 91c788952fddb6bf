"""Key-value store adapters for portal persistence.

Implementations support multiple backends:
- In-memory (session scope, tests)
- JSON file (single human-readable document)
- SQLite (zero-config, single-file)
"""
