"""
Integration tests for chunk persistence and similarity search.

Runs against in-memory SQLite; similarity is scored in-process with the
same contract as the pgvector query.

System role: Verification of match_documents and cascade delete
"""

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.core.file_types import FileType
from tests.fakes import make_vector

QUERY = make_vector(1.0)


async def _add_chunks(db, document, vectors: list[list[float]]) -> None:
    await chunk_crud.create_many(
        db,
        [
            {
                "document_id": document.id,
                "content": f"{document.file_name} chunk {index}",
                "embedding": vector,
                "chunk_index": index,
                "chunk_metadata": {"chunk_size": 10, "total_chunks": len(vectors)},
            }
            for index, vector in enumerate(vectors)
        ],
    )
    await db.commit()


@pytest.fixture
async def seeded(test_async_db, create_document):
    """
    Two documents with chunks at known similarities to QUERY.

    rapport.pdf: 1.0, 0.8, 0.0   cijfers.xlsx: 0.6
    """
    pdf = await create_document("rapport.pdf", FileType.PDF)
    xlsx = await create_document("cijfers.xlsx", FileType.XLSX)
    await _add_chunks(
        test_async_db,
        pdf,
        [make_vector(1.0, 0.0), make_vector(0.8, 0.6), make_vector(0.0, 1.0)],
    )
    await _add_chunks(test_async_db, xlsx, [make_vector(0.6, 0.8)])
    return pdf, xlsx


class TestMatchDocuments:
    """Test suite for ChunkCRUD.match_documents()."""

    @pytest.mark.asyncio
    async def test_results_ordered_by_similarity_and_thresholded(self, test_async_db, seeded) -> None:
        # Act
        results = await chunk_crud.match_documents(
            test_async_db, QUERY, match_threshold=0.5, match_count=10
        )

        # Assert
        assert [round(r.similarity, 3) for r in results] == [1.0, 0.8, 0.6]
        assert results[0].file_name == "rapport.pdf"
        assert results[0].chunk_index == 0
        assert results[2].file_type == FileType.XLSX

    @pytest.mark.asyncio
    async def test_threshold_is_monotonic(self, test_async_db, seeded) -> None:
        previous = None
        for threshold in (0.0, 0.5, 0.7, 0.9, 1.0):
            results = await chunk_crud.match_documents(
                test_async_db, QUERY, match_threshold=threshold, match_count=10
            )
            ids = {r.id for r in results}
            assert all(r.similarity >= threshold - 1e-9 for r in results)
            if previous is not None:
                assert ids <= previous
            previous = ids

    @pytest.mark.asyncio
    async def test_match_count_caps_results(self, test_async_db, seeded) -> None:
        results = await chunk_crud.match_documents(
            test_async_db, QUERY, match_threshold=0.0, match_count=2
        )

        assert [round(r.similarity, 3) for r in results] == [1.0, 0.8]

    @pytest.mark.asyncio
    async def test_file_type_filter(self, test_async_db, seeded) -> None:
        results = await chunk_crud.match_documents(
            test_async_db,
            QUERY,
            match_threshold=0.5,
            match_count=10,
            filter_file_type=FileType.XLSX,
        )

        assert [r.file_name for r in results] == ["cijfers.xlsx"]

    @pytest.mark.asyncio
    async def test_nothing_above_threshold_returns_empty(self, test_async_db, seeded) -> None:
        results = await chunk_crud.match_documents(
            test_async_db, make_vector(0.0, 0.0, 1.0), match_threshold=0.5, match_count=5
        )

        assert results == []

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty(self, test_async_db) -> None:
        results = await chunk_crud.match_documents(
            test_async_db, QUERY, match_threshold=0.0, match_count=5
        )

        assert results == []


class TestChunkConstraints:
    """Test suite for chunk table constraints."""

    @pytest.mark.asyncio
    async def test_deleting_document_cascades_to_chunks(self, test_async_db, seeded) -> None:
        # Arrange
        pdf, xlsx = seeded
        assert await chunk_crud.count_by_document_id(test_async_db, pdf.id) == 3

        # Act
        deleted = await document_crud.delete_by_id(test_async_db, pdf.id)
        await test_async_db.commit()

        # Assert
        assert deleted is True
        assert await chunk_crud.count_by_document_id(test_async_db, pdf.id) == 0
        assert await chunk_crud.count_by_document_id(test_async_db, xlsx.id) == 1

    @pytest.mark.asyncio
    async def test_duplicate_chunk_index_rejected(self, test_async_db, create_document) -> None:
        document = await create_document()
        await _add_chunks(test_async_db, document, [make_vector(1.0)])

        with pytest.raises(IntegrityError):
            await _add_chunks(test_async_db, document, [make_vector(0.5)])
        await test_async_db.rollback()

    @pytest.mark.asyncio
    async def test_chunks_returned_in_index_order(self, test_async_db, seeded) -> None:
        pdf, _ = seeded

        chunks = await chunk_crud.get_by_document_id(test_async_db, pdf.id)

        assert [c.chunk_index for c in chunks] == [0, 1, 2]


def test_postgres_statement_uses_cosine_distance_operator() -> None:
    stmt = chunk_crud.build_match_statement(QUERY, 0.5, 5, FileType.PDF)
    sql = str(stmt.compile(dialect=postgresql.dialect()))

    assert "<=>" in sql
    assert "JOIN documents" in sql
    assert "ORDER BY" in sql
    assert "LIMIT" in sql
