"""
Extracted text span model.

A span is a run of text taken from one location of the source document:
a PDF page, an Excel sheet, or the whole body of a Word document.

Dependencies: pydantic
System role: Output of the extraction stage, input of the chunking stage
"""

from pydantic import BaseModel, Field


class TextSpan(BaseModel):
    """Text extracted from one location of a document."""

    text: str = Field(description="Extracted text")
    page_number: int | None = Field(default=None, description="1-based PDF page number")
    sheet_name: str | None = Field(default=None, description="Excel sheet name")
