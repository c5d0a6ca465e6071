"""Static checks for database client connection-pool settings."""

__version__ = "0.1.0"
