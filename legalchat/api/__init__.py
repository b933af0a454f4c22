"""
HTTP API layer.

Routers under /api and the dependency container.
"""
