"""Durable key-value backends (SQLite, JSON file, in-memory)."""
