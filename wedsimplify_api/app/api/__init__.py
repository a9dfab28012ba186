"""
API package containing versioned routes.

A version subpackage exposes a top-level ``router`` which includes all
of its domain-specific endpoints.  ``v1`` is mounted under ``/api``.
"""
