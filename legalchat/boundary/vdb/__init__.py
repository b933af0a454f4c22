"""
Vector index module.

Exports the index contract, its implementations and the factory.
"""

from .azure_search_index import AzureSearchIndex
from .base import VectorIndex
from .memory_index import InMemoryVectorIndex
from .vector_schemas import BatchResult, IndexDocument, SearchHit
from .vector_store_factory import get_vector_index

__all__ = [
    "AzureSearchIndex",
    "BatchResult",
    "InMemoryVectorIndex",
    "IndexDocument",
    "SearchHit",
    "VectorIndex",
    "get_vector_index",
]
