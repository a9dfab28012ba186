"""
Service layer.

Each service encapsulates the business logic of one domain and talks
to SQLite through ``core.db``.  Services are stateless classes with
async classmethods; endpoints call them and never run SQL directly.
Failures are raised as the domain errors of ``core.exceptions``.
"""
