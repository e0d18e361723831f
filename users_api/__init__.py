"""Users API - CRUD service over a single users table."""

__version__ = "0.1.0"
