"""
Models shared by the server and its services.

Subpackages:
- io: API request/response schemas
"""
