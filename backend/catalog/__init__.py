"""
Vendor catalog.

Responsibilities:
- Define the vendor record and match request/response schemas.
- Hold the curated seed records and per-category display definitions.
- Score and rank cloud vendors against a user's need (see ``matching``).
"""
