"""
Answer composer.

Numbers retrieved chunks in retrieval order, joins them into one context
block and asks the chat model for a Summary/Details answer. Source numbers
match RetrievalResult order because the model cites by position.

Dependencies: langchain_core, legalchat.boundary.llm
System role: Final stage of question answering
"""

import logging

from legalchat.boundary.llm.chat_client import ChatClient
from legalchat.boundary.vdb.vector_schemas import SearchHit
from legalchat.core.answer.composer_prompt import ANSWER_PROMPT

logger = logging.getLogger(__name__)

SOURCE_SEPARATOR = "\n\n---\n\n"


def build_context(hits: list[SearchHit]) -> str:
    """
    Numbered context block.

    Args:
        hits: Retrieved chunks in citation order

    Returns:
        str: ``**SOURCE n: XX (Document Section)**`` blocks separated by rules
    """
    return SOURCE_SEPARATOR.join(
        f"**SOURCE {i}: {hit.iso_code} (Document Section)**\n{hit.chunk}"
        for i, hit in enumerate(hits, start=1)
    )


class AnswerComposer:
    """Compose a grounded answer from retrieved chunks."""

    def __init__(self, chat_client: ChatClient) -> None:
        self._chat = chat_client

    async def compose(self, question: str, hits: list[SearchHit]) -> str:
        """
        Draft the answer.

        Args:
            question: User question
            hits: Retrieved chunks in citation order

        Returns:
            str: Markdown answer

        Raises:
            ChatCompletionError: Model call failed after retries
        """
        context = build_context(hits)
        messages = ANSWER_PROMPT.format_messages(question=question, context=context)
        answer = await self._chat.complete(messages)
        logger.info(
            f"{__name__}:compose - Answer drafted",
            extra={"sources": len(hits), "answer_chars": len(answer)},
        )
        return answer.strip()
