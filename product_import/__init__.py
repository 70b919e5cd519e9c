"""Product CSV -> PostgreSQL importer."""

__version__ = "0.1.0"
