"""
Service layer.

Services hold the business rules for users and contacts and raise the
error kinds from ``core.errors``.  ``contact_store`` is the only module
that talks to the ``contacts`` table.
"""
