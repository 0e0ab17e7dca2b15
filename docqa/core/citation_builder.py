"""
Citation formatting for search responses.

Turns retrieval results into cited sources with truncated excerpts.

Dependencies: docqa.models
System role: Citation formatting business logic
"""

from docqa.models.citation import Citation
from docqa.models.search import SearchResult

ELLIPSIS = "..."


def build_citations(results: list[SearchResult], excerpt_length: int = 200) -> list[Citation]:
    """
    Build citations from search results, preserving order.

    Args:
        results: Retrieval results, best match first
        excerpt_length: Characters of content kept before the ellipsis

    Returns:
        list[Citation]: One citation per result
    """
    return [
        Citation(
            id=result.id,
            document_id=result.document_id,
            file_name=result.file_name,
            file_type=result.file_type.value,
            content=result.content[:excerpt_length] + ELLIPSIS,
            similarity=result.similarity,
            page_number=result.page_number,
            sheet_name=result.sheet_name,
        )
        for result in results
    ]
