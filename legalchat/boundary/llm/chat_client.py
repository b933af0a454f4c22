"""
Chat completion client.

Wraps a LangChain chat model with the shared retry policy and flattens the
model reply to a string.

Dependencies: langchain_core, legalchat.boundary.http
System role: Every chat/vision call in the application goes through here
"""

import logging
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

from legalchat.boundary.http.retry_policy import RetryPolicy, is_retryable
from legalchat.core.exceptions import ChatCompletionError

logger = logging.getLogger(__name__)


class ChatClient:
    """Chat model invocation with retry and error mapping."""

    def __init__(self, model: BaseChatModel, retry_policy: RetryPolicy, name: str = "chat") -> None:
        """
        Initialize chat client.

        Args:
            model: LangChain chat model (temperature 0)
            retry_policy: Backoff policy for each call
            name: Label used in logs (chat, caption)
        """
        self._model = model
        self._retry = retry_policy
        self._name = name

    async def complete(self, messages: list[BaseMessage], **bind_kwargs: Any) -> str:
        """
        Send messages and return the reply text.

        Args:
            messages: System/user message sequence
            **bind_kwargs: Extra request parameters (e.g. response_format)

        Returns:
            str: Reply content

        Raises:
            ChatCompletionError: Call failed after all retries
        """
        runnable = self._model.bind(**bind_kwargs) if bind_kwargs else self._model
        try:
            reply = await self._retry.call(runnable.ainvoke, messages, operation=self._name)
        except Exception as e:
            if not is_retryable(e):
                raise
            logger.error(
                f"{__name__}:complete - {type(e).__name__}: {e}",
                extra={"client": self._name},
            )
            raise ChatCompletionError(f"{self._name} completion failed: {e}") from e
        return _content_text(reply.content)


def _content_text(content: Any) -> str:
    """Flatten str or content-part list into plain text."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)
