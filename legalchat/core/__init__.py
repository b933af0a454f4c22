"""
Core domain layer.

Jurisdiction extraction, balanced retrieval, answer composition and the
document ingestion pipeline.
"""
