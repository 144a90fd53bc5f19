"""
Boundary layer: adapters to PostgreSQL/pgvector, embedding providers and PDF parsing.

System role: External system integration
"""
