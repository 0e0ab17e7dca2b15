"""
Integration tests for the query path: Retriever plus AnswerSynthesizer.

System role: Verification of retrieval and the empty-context short circuit
"""

import pytest

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.core.answer_synthesizer import AnswerSynthesizer
from docqa.core.document_processing.tasks.embedding_task import EmbeddingClient
from docqa.core.exceptions import ValidationError
from docqa.core.file_types import FileType
from docqa.core.retriever import Retriever
from tests.fakes import FakeModelProvider, make_vector


class TestRetriever:
    """Test suite for Retriever.search()."""

    @pytest.mark.asyncio
    async def test_empty_store_answers_with_canned_message(
        self, test_async_db, fake_provider: FakeModelProvider, retrieval_settings
    ) -> None:
        # Arrange
        retriever = Retriever(EmbeddingClient(fake_provider), retrieval_settings)
        synthesizer = AnswerSynthesizer(fake_provider, retrieval_settings)

        # Act
        results = await retriever.search(test_async_db, "Wat is de omzet in Q3?")
        answer = await synthesizer.answer("Wat is de omzet in Q3?", [r.content for r in results])

        # Assert
        assert results == []
        assert answer == retrieval_settings.no_results_message
        assert fake_provider.embed_calls == ["Wat is de omzet in Q3?"]
        assert fake_provider.complete_calls == []

    @pytest.mark.asyncio
    async def test_query_embedding_matched_against_chunks(
        self, test_async_db, create_document, retrieval_settings
    ) -> None:
        # Arrange
        document = await create_document("rapport.pdf", FileType.PDF)
        await chunk_crud.create_many(
            test_async_db,
            [
                {
                    "document_id": document.id,
                    "content": "De omzet in Q3 bedroeg 1,2 miljoen euro.",
                    "embedding": make_vector(1.0, 0.1),
                    "chunk_index": 0,
                    "page_number": 4,
                },
                {
                    "document_id": document.id,
                    "content": "Het personeelsbestand groeide met tien procent.",
                    "embedding": make_vector(0.0, 1.0),
                    "chunk_index": 1,
                    "page_number": 5,
                },
            ],
        )
        await test_async_db.commit()
        provider = FakeModelProvider(vectors={"omzet Q3": make_vector(1.0)})
        retriever = Retriever(EmbeddingClient(provider), retrieval_settings)

        # Act
        results = await retriever.search(test_async_db, "omzet Q3")

        # Assert
        assert len(results) == 1
        assert results[0].page_number == 4
        assert results[0].similarity > 0.99

    @pytest.mark.asyncio
    async def test_query_newlines_normalized_before_embedding(
        self, test_async_db, fake_provider: FakeModelProvider, retrieval_settings
    ) -> None:
        retriever = Retriever(EmbeddingClient(fake_provider), retrieval_settings)

        await retriever.search(test_async_db, "eerste regel\ntweede regel")

        assert fake_provider.embed_calls == ["eerste regel tweede regel"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [{"query": "   "}, {"query": "vraag", "threshold": 1.5}, {"query": "vraag", "top_k": 0}],
    )
    async def test_invalid_arguments_rejected_without_embedding(
        self, test_async_db, fake_provider: FakeModelProvider, retrieval_settings, kwargs: dict
    ) -> None:
        retriever = Retriever(EmbeddingClient(fake_provider), retrieval_settings)

        with pytest.raises(ValidationError):
            await retriever.search(test_async_db, **kwargs)

        assert fake_provider.embed_calls == []
