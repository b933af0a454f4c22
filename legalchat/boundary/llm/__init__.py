"""Language model clients (chat completion and embeddings)."""

from .chat_client import ChatClient
from .embedding_client import EmbeddingClient
from .model_factory import build_chat_model, build_embedding_model

__all__ = ["ChatClient", "EmbeddingClient", "build_chat_model", "build_embedding_model"]
