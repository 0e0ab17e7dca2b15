"""
Search service orchestrator.

Answers a question over the uploaded documents: retrieve matching
chunks, synthesize a grounded answer, and cite the chunks used.

Dependencies: docqa.core.retriever, docqa.core.answer_synthesizer
System role: Question answering orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docqa.core.answer_synthesizer import AnswerSynthesizer
from docqa.core.citation_builder import build_citations
from docqa.core.exceptions import ValidationError
from docqa.core.file_types import FileType
from docqa.core.retriever import Retriever
from docqa.models.search import SearchResponse

logger = logging.getLogger(__name__)


class SearchService:
    """Retrieval-augmented question answering."""

    def __init__(
        self,
        db: AsyncSession,
        retriever: Retriever,
        synthesizer: AnswerSynthesizer,
        excerpt_length: int = 200,
    ) -> None:
        """
        Initialize search service.

        Args:
            db: AsyncSession for the vector query
            retriever: Similarity search engine
            synthesizer: Grounded answer generator
            excerpt_length: Characters per cited excerpt
        """
        self.db = db
        self._retriever = retriever
        self._synthesizer = synthesizer
        self._excerpt_length = excerpt_length

    async def search(self, query: str, file_type: FileType | None = None) -> SearchResponse:
        """
        Answer a question with cited sources.

        Args:
            query: Natural-language question
            file_type: Restrict retrieval to one document format

        Returns:
            SearchResponse: Answer plus sources, best match first

        Raises:
            ValidationError: Empty query
            EmbeddingError: Query embedding failed
        """
        if not query or not query.strip():
            raise ValidationError("Query is required", field="query")

        results = await self._retriever.search(self.db, query, file_type=file_type)
        answer = await self._synthesizer.answer(query, [result.content for result in results])

        logger.info(
            f"{__name__}:search - Answered query",
            extra={"sources": len(results), "file_type": file_type.value if file_type else None},
        )
        return SearchResponse(
            answer=answer,
            sources=build_citations(results, self._excerpt_length),
        )
