"""
Supported document formats and extension-based detection.

Dependencies: docqa.core.exceptions
System role: Upload fast-fail gate for unsupported formats
"""

import enum
from pathlib import PurePath, PureWindowsPath

from docqa.core.exceptions import ValidationError


class FileType(str, enum.Enum):
    """Document formats the extractor understands."""

    PDF = "pdf"
    DOCX = "docx"
    XLSX = "xlsx"


EXTENSION_MAP: dict[str, FileType] = {
    ".pdf": FileType.PDF,
    ".doc": FileType.DOCX,
    ".docx": FileType.DOCX,
    ".xls": FileType.XLSX,
    ".xlsx": FileType.XLSX,
}


def detect_file_type(filename: str) -> FileType:
    """
    Detect document format from the filename extension.

    Args:
        filename: Original filename supplied by the uploader

    Returns:
        FileType: Detected format

    Raises:
        ValidationError: Extension missing or not supported
    """
    extension = PurePath(filename).suffix.lower()
    file_type = EXTENSION_MAP.get(extension)
    if file_type is None:
        supported = ", ".join(sorted(EXTENSION_MAP))
        raise ValidationError(
            f"Unsupported file type '{extension or filename}'. Supported: {supported}",
            field="file",
        )
    return file_type


def title_from_filename(filename: str) -> str:
    """Strip the final extension from a filename."""
    path = PurePath(filename)
    return path.stem if path.suffix else path.name


def base_filename(filename: str) -> str:
    """Drop any client-side directory part (either separator style)."""
    return PureWindowsPath(filename).name
