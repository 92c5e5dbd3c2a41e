"""
Data access layer.

Modules:
- base: Repository interface and query helpers
- businesses: Business directory repository
"""

from .base import AsyncBaseRepository, QueryBuilder
from .businesses import BusinessRepository

__all__ = ["AsyncBaseRepository", "BusinessRepository", "QueryBuilder"]
