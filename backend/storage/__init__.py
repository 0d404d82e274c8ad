"""
Persistence layer.

Responsibilities:
- Expose one storage-agnostic ``Repository`` interface for the catalog,
  saved briefs and registered contacts.
- Provide interchangeable in-memory and SQLite backends.
- Run the explicit one-time setup (schema + catalog seed) at startup.
"""
