"""
Chunking task turning extracted spans into numbered chunk drafts.

PDF pages are joined into one text separated by newlines; every chunk is
tagged with the page holding its first non-whitespace character. Excel
sheets and Word bodies are chunked span by span. Chunk indices are
assigned across the whole document, contiguously, after short fragments
are dropped.

Dependencies: docqa.core.document_processing.chunker
System role: Second stage of document ingestion pipeline
"""

from bisect import bisect_right

from docqa.core.file_types import FileType

from ..chunker import Chunker
from ..models import Chunk, TextSpan

PAGE_SEPARATOR = "\n"


class ChunkingTask:
    """Split text spans into chunk drafts with location metadata."""

    def __init__(
        self,
        chunk_size: int = 3000,
        chunk_overlap: int = 150,
        min_chunk_length: int = 50,
    ) -> None:
        """
        Initialize chunking task with chunker configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            min_chunk_length: Minimum trimmed chunk length kept
        """
        self._chunker = Chunker(
            chunk_size=chunk_size,
            overlap=chunk_overlap,
            min_chunk_length=min_chunk_length,
        )

    def chunk(self, spans: list[TextSpan], file_type: FileType) -> list[Chunk]:
        """
        Split spans into chunks.

        Args:
            spans: Extracted text spans in document order
            file_type: Document format

        Returns:
            list[Chunk]: Chunks numbered 0..N-1 with metadata filled in
        """
        if file_type == FileType.PDF:
            drafts = self._chunk_pages(spans)
        else:
            drafts = [
                (text, None, span.sheet_name)
                for span in spans
                for text in self._chunker.chunk(span.text)
            ]

        total = len(drafts)
        return [
            Chunk(
                content=content,
                chunk_index=index,
                page_number=page_number,
                sheet_name=sheet_name,
                metadata={
                    "chunk_size": len(content.encode("utf-8")),
                    "total_chunks": total,
                },
            )
            for index, (content, page_number, sheet_name) in enumerate(drafts)
        ]

    def _chunk_pages(self, pages: list[TextSpan]) -> list[tuple[str, int | None, None]]:
        offsets: list[int] = []
        position = 0
        for page in pages:
            offsets.append(position)
            position += len(page.text) + len(PAGE_SEPARATOR)

        text = PAGE_SEPARATOR.join(page.text for page in pages)
        drafts = []
        for window in self._chunker.windows(text):
            page = pages[bisect_right(offsets, window.start) - 1]
            drafts.append((window.text, page.page_number, None))
        return drafts
