"""
Pydantic schema definitions for API payloads.

Each domain (profiles, vendors, inquiries, budget, timeline, ...)
defines its own request and response models.  Schemas are separated
from the SQL in the services so the JSON representation can evolve
independently of the tables.  All models derive from ``CamelModel``:
the wire format is camelCase, Python attributes stay snake_case.
"""
