"""
Application package initializer.

The API is split by concern: ``core`` holds configuration, logging,
database access, errors and authentication; ``schemas`` holds the
Pydantic request/response models; ``services`` holds the business
logic for each domain (profiles, vendors, inquiries, planning tools,
calendar, favourites, notifications, object storage); and
``api/v1/endpoints`` exposes one router per domain.
"""

from .main import app  # noqa: F401
