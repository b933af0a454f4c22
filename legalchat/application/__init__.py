"""Application layer: request-level orchestration services."""
