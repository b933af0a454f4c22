"""
Language model service configuration.

Dependencies: pydantic_settings
System role: Azure OpenAI endpoint, key and deployment names
"""

from typing import ClassVar

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from legalchat.configs.base import ServiceSettings


class ModelServiceSettings(ServiceSettings):
    """Settings for chat, embedding and vision deployments."""

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    required_fields: ClassVar[tuple[str, ...]] = (
        "endpoint",
        "api_key",
        "chat_deployment",
        "embed_deployment",
    )

    endpoint: str = Field(default="", description="Azure OpenAI resource endpoint")
    api_key: str = Field(default="", description="Azure OpenAI API key")
    api_version: str = Field(default="2024-12-01-preview", description="Azure OpenAI API version")
    chat_deployment: str = Field(default="gpt-5-chat", description="Chat completion deployment")
    embed_deployment: str = Field(
        default="text-embedding-3-large",
        description="Embedding deployment",
    )
    caption_deployment: str = Field(
        default="",
        description="Vision-capable deployment for image captions; empty disables captioning",
    )
    embedding_dimension: int = Field(default=3072, description="Embedding vector length")

    @property
    def captioning_enabled(self) -> bool:
        """Whether a vision deployment is configured."""
        return bool(self.caption_deployment.strip())
