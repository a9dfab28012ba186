"""
Version 1 of the WedSimplify API.

Breaking changes to the REST contract belong in a new version
subpackage (e.g. ``v2``) so existing clients keep working.
"""
