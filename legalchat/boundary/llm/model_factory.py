"""
Azure OpenAI model construction.

Builds LangChain chat and embedding models bound to the shared httpx pool.
SDK retries are disabled; callers wrap each call in the RetryPolicy.

Dependencies: langchain_openai, httpx, legalchat.configs
System role: Single place where deployment names become model objects
"""

import httpx
from langchain_openai import AzureChatOpenAI, AzureOpenAIEmbeddings

from legalchat.configs.model_service import ModelServiceSettings


def build_chat_model(
    settings: ModelServiceSettings,
    http_client: httpx.AsyncClient,
    deployment: str | None = None,
) -> AzureChatOpenAI:
    """
    Create a deterministic chat model.

    Args:
        settings: OPENAI_* settings
        http_client: Shared async HTTP client
        deployment: Deployment name override (defaults to chat deployment)

    Returns:
        AzureChatOpenAI: Chat model with temperature pinned to 0
    """
    return AzureChatOpenAI(
        azure_endpoint=settings.endpoint,
        api_key=settings.api_key,
        api_version=settings.api_version,
        azure_deployment=deployment or settings.chat_deployment,
        temperature=0.0,
        max_retries=0,
        http_async_client=http_client,
    )


def build_embedding_model(
    settings: ModelServiceSettings,
    http_client: httpx.AsyncClient,
) -> AzureOpenAIEmbeddings:
    """
    Create the embedding model.

    Args:
        settings: OPENAI_* settings
        http_client: Shared async HTTP client

    Returns:
        AzureOpenAIEmbeddings: Embedding model sending raw text input
    """
    return AzureOpenAIEmbeddings(
        azure_endpoint=settings.endpoint,
        api_key=settings.api_key,
        api_version=settings.api_version,
        azure_deployment=settings.embed_deployment,
        check_embedding_ctx_length=False,
        max_retries=0,
        http_async_client=http_client,
    )
