"""HTTP service for managing patient records stored in PostgreSQL."""

__version__ = "0.1.0"