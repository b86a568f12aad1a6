"""Core domain logic: processing, providers, indexing, retrieval, knowledge graph."""
