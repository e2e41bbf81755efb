"""
Error Types
===========
Exceptions raised by the data model.

ValidationError is raised for malformed input at construction time and is
never repaired silently. OutOfBoundsError is raised for index-based grid
lookups that fall outside the backing storage.
"""


class ValidationError(ValueError):
    """Malformed record, value, metadata or configuration."""


class OutOfBoundsError(IndexError):
    """Grid index outside the allocated cells."""
