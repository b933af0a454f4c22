"""
Question answering service.

Runs the three stages strictly in sequence: jurisdiction extraction ->
balanced retrieval -> answer composition. "No jurisdiction detected" and
"no documents for the detected jurisdictions" are ordinary answers, not
errors.

Dependencies: legalchat.core.jurisdiction, legalchat.core.retrieval, legalchat.core.answer
System role: Orchestration behind POST/GET /api/ask
"""

import logging
import time

from legalchat.core.answer import AnswerComposer, build_country_header, build_summary
from legalchat.core.exceptions import ValidationError
from legalchat.core.jurisdiction import JurisdictionExtractor
from legalchat.core.retrieval import BalancedRetriever
from legalchat.models.ask import AskResponse, CountryDetection

logger = logging.getLogger(__name__)

NO_JURISDICTION_MESSAGE = "Could not determine a country from your query. Please be more specific."
NO_DOCUMENTS_MESSAGE = (
    "No documents found for the specified countries: {codes}. "
    "Please try another query or check if the relevant legislation is available."
)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class AskService:
    """Answer a legal question grounded in jurisdiction documents."""

    def __init__(
        self,
        extractor: JurisdictionExtractor,
        retriever: BalancedRetriever,
        composer: AnswerComposer,
        top_k: int = 15,
    ) -> None:
        """
        Initialize ask service.

        Args:
            extractor: Jurisdiction code extractor
            retriever: Balanced retriever
            composer: Answer composer
            top_k: Chunks passed to the composer
        """
        self._extractor = extractor
        self._retriever = retriever
        self._composer = composer
        self._top_k = top_k

    async def ask(self, question: str | None) -> AskResponse:
        """
        Answer a question.

        Args:
            question: Free-text question

        Returns:
            AskResponse: Header, answer and country detection

        Raises:
            ValidationError: Empty question
            ExternalServiceError: A model or index call failed after retries
        """
        question = (question or "").strip()
        if not question:
            raise ValidationError(
                "Please pass a question on the query string or in the request body, e.g., /api/ask?question=...",
                field="question",
            )

        total_start = time.perf_counter()

        stage_start = time.perf_counter()
        iso_codes = await self._extractor.extract(question)
        logger.info(
            f"{__name__}:ask - Jurisdiction detection done",
            extra={"iso_detection_ms": _elapsed_ms(stage_start), "iso_codes": iso_codes},
        )

        if not iso_codes:
            return AskResponse(
                country_header="",
                refined_answer=NO_JURISDICTION_MESSAGE,
                country_detection=CountryDetection(),
            )

        stage_start = time.perf_counter()
        hits = await self._retriever.retrieve(question, iso_codes, self._top_k)
        logger.info(
            f"{__name__}:ask - Retrieval done",
            extra={"retrieve_ms": _elapsed_ms(stage_start), "hits": len(hits)},
        )

        found = {hit.iso_code for hit in hits}
        detection = CountryDetection(
            iso_codes=iso_codes,
            available=sorted(found & set(iso_codes)),
            summary=build_summary(iso_codes, found),
        )
        header = build_country_header(iso_codes, found)

        if not hits:
            return AskResponse(
                country_header=header,
                refined_answer=NO_DOCUMENTS_MESSAGE.format(codes=", ".join(iso_codes)),
                country_detection=detection,
            )

        stage_start = time.perf_counter()
        answer = await self._composer.compose(question, hits)
        logger.info(
            f"{__name__}:ask - Answer composed",
            extra={"answer_ms": _elapsed_ms(stage_start), "total_ms": _elapsed_ms(total_start)},
        )

        return AskResponse(
            country_header=header,
            refined_answer=answer,
            country_detection=detection,
        )
