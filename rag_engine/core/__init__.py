"""Core business logic: chunking, resource pacing, ingestion, retrieval, citations."""
