"""Persistence boundary: relational document storage and the chunk vector index."""
