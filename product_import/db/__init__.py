"""Persistence layer (PostgreSQL via psycopg2)."""
