"""
Boundary layer.

Adapters for external collaborators: HTTP pool and retry policy, language
model clients, vector index and blob storage.
"""
