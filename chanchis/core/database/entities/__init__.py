"""
Database entity models.

Modules:
- businesses: Affiliated businesses listed in the mini-app directory
"""

from . import businesses

__all__ = ["businesses"]
