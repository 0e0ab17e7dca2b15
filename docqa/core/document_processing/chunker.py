"""
Fixed-window character chunker with overlap.

Windows start every (chunk_size - overlap) characters and end at
min(start + chunk_size, len(text)). Splitting stops with the first window
that reaches the end of the text, so a text of length L > overlap yields
ceil((L - overlap) / (chunk_size - overlap)) windows.

Dependencies: None
System role: Deterministic text segmentation shared by every format
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextWindow:
    """Raw window of text with its offset in the source string."""

    start: int
    text: str


def split_text(text: str, chunk_size: int, overlap: int) -> list[TextWindow]:
    """
    Split text into overlapping fixed-size windows.

    Args:
        text: Text to split
        chunk_size: Window length in characters
        overlap: Characters shared by consecutive windows

    Returns:
        list[TextWindow]: Windows in order; empty for empty text

    Raises:
        ValueError: overlap not in [0, chunk_size)
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError(
            f"overlap must satisfy 0 <= overlap < chunk_size, got {overlap} / {chunk_size}"
        )

    step = chunk_size - overlap
    length = len(text)
    windows: list[TextWindow] = []
    start = 0
    while start < length:
        end = min(start + chunk_size, length)
        windows.append(TextWindow(start=start, text=text[start:end]))
        if end >= length:
            break
        start += step
    return windows


class Chunker:
    """Split text into trimmed chunks and drop fragments below a minimum length."""

    def __init__(self, chunk_size: int = 3000, overlap: int = 150, min_chunk_length: int = 50) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Maximum chunk length in characters
            overlap: Overlap between consecutive windows
            min_chunk_length: Trimmed windows shorter than this are dropped

        Raises:
            ValueError: Invalid size/overlap combination
        """
        if overlap < 0 or overlap >= chunk_size:
            raise ValueError(
                f"overlap must satisfy 0 <= overlap < chunk_size, got {overlap} / {chunk_size}"
            )
        self.chunk_size = chunk_size
        self.overlap = overlap
        self.min_chunk_length = min_chunk_length

    def windows(self, text: str) -> list[TextWindow]:
        """
        Split text and keep only windows long enough after trimming.

        Returned windows carry trimmed text and the offset of its first
        character in the source string.
        """
        kept = []
        for window in split_text(text, self.chunk_size, self.overlap):
            content = window.text.strip()
            if len(content) >= self.min_chunk_length:
                leading = len(window.text) - len(window.text.lstrip())
                kept.append(TextWindow(start=window.start + leading, text=content))
        return kept

    def chunk(self, text: str) -> list[str]:
        """
        Split text into trimmed chunk strings.

        Args:
            text: Text to split

        Returns:
            list[str]: Chunk contents in document order
        """
        return [window.text for window in self.windows(text)]
