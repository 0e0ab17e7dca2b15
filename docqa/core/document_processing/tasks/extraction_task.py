"""
Text extraction task for PDF, Word and Excel payloads.

Converts raw document bytes into an ordered list of TextSpans:
one per PDF page (with page number), one for a Word body, and one per
Excel sheet (flattened to CSV rows, with sheet name).

Dependencies: pypdf, python-docx, pandas (openpyxl / xlrd engines)
System role: First stage of document ingestion pipeline
"""

import logging
from io import BytesIO

import docx
import pandas as pd
from pypdf import PasswordType, PdfReader

from docqa.core.exceptions import ExtractionError
from docqa.core.file_types import FileType

from ..models import TextSpan

logger = logging.getLogger(__name__)

# Legacy .xls files are OLE2 compound documents
_OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


class ExtractionTask:
    """Extract text spans from document payloads."""

    def extract(self, payload: bytes, file_type: FileType) -> list[TextSpan]:
        """
        Extract text spans from a document payload.

        Args:
            payload: Raw document bytes
            file_type: Format detected at upload time

        Returns:
            list[TextSpan]: Spans in document order

        Raises:
            ExtractionError: Payload cannot be parsed as its declared format
        """
        extractors = {
            FileType.PDF: self._extract_pdf,
            FileType.DOCX: self._extract_docx,
            FileType.XLSX: self._extract_excel,
        }
        extractor = extractors.get(file_type)
        if extractor is None:
            raise ExtractionError(f"No extractor for file type: {file_type}", file_type=str(file_type))

        try:
            spans = extractor(payload)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Failed to extract {file_type.value} document: {e}",
                file_type=file_type.value,
            ) from e

        logger.info(
            f"{__name__}:extract - Extracted {len(spans)} spans",
            extra={"file_type": file_type.value, "total_chars": sum(len(s.text) for s in spans)},
        )
        return spans

    def _extract_pdf(self, payload: bytes) -> list[TextSpan]:
        reader = PdfReader(BytesIO(payload))
        # Owner-only (permission) encryption opens with the empty user password
        if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
            raise ExtractionError("PDF is password protected", file_type=FileType.PDF.value)

        return [
            TextSpan(text=page.extract_text() or "", page_number=number)
            for number, page in enumerate(reader.pages, start=1)
        ]

    def _extract_docx(self, payload: bytes) -> list[TextSpan]:
        document = docx.Document(BytesIO(payload))

        lines = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                lines.append("\t".join(cell.text for cell in row.cells))

        return [TextSpan(text="\n".join(lines))]

    def _extract_excel(self, payload: bytes) -> list[TextSpan]:
        engine = "xlrd" if payload.startswith(_OLE2_SIGNATURE) else "openpyxl"
        sheets = pd.read_excel(
            BytesIO(payload),
            sheet_name=None,
            header=None,
            dtype=str,
            keep_default_na=False,
            engine=engine,
        )

        return [
            TextSpan(
                text=frame.to_csv(index=False, header=False).rstrip("\n"),
                sheet_name=str(name),
            )
            for name, frame in sheets.items()
        ]
