"""
Pydantic schema definitions for API payloads.

Users and contacts each define their own request and response models.
Schemas are kept apart from the SQLite rows so the API representation
can change without touching storage.
"""
