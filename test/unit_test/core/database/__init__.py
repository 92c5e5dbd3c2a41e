"""Unit tests for the database layer in chanchis/core/database.

This package contains tests for:
- Entity models
- Repository operations
"""
