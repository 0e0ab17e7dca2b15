"""
Document API endpoints.

Routes:
- POST /documents - Upload a document and schedule ingestion
- GET /documents - List documents, newest first
- GET /documents/{document_id} - Get one document with its ingestion status
- DELETE /documents/{document_id} - Delete document, blob and chunks

Dependencies: docqa.application.services, docqa.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status

from docqa.api.deps import get_document_service
from docqa.api.routers.router_utils import handle_service_errors
from docqa.application.services.document_service import DocumentService
from docqa.core.exceptions import ValidationError
from docqa.models.document import (
    DocumentListResponse,
    DocumentResponse,
    DocumentUploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentUploadResponse)
@handle_service_errors("upload document")
async def upload_document(
    file: UploadFile | None = File(default=None),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentUploadResponse:
    """
    Upload a document.

    Stores the file and its record, then processes it in the background.
    Poll GET /documents/{id} for the ingestion status.

    Args:
        file: Multipart file (PDF, Word or Excel)
        document_service: Injected DocumentService

    Returns:
        DocumentUploadResponse: Created document with status "processing"

    Raises:
        HTTPException(400): Missing, empty, oversized or unsupported file
        HTTPException(500): Storage failure
    """
    if file is None:
        raise ValidationError("No file provided", field="file")

    payload = await file.read()
    logger.info(
        "Document upload received",
        extra={"file_name": file.filename, "size": len(payload), "content_type": file.content_type},
    )

    document = await document_service.upload_document(
        filename=file.filename,
        payload=payload,
        content_type=file.content_type,
    )
    return DocumentUploadResponse(document=DocumentResponse.model_validate(document))


@router.get("", response_model=DocumentListResponse)
@handle_service_errors("list documents")
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """
    List all documents, most recent upload first.

    Raises:
        HTTPException(500): Database or service error
    """
    documents = [
        DocumentResponse.model_validate(doc)
        for doc in await document_service.list_documents()
    ]
    return DocumentListResponse(documents=documents, total=len(documents))


@router.get("/{document_id}", response_model=DocumentResponse)
@handle_service_errors("get document")
async def get_document(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Get a document and its ingestion status.

    Raises:
        HTTPException(404): Document not found
    """
    document = await document_service.get_document(document_id)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_service_errors("delete document")
async def delete_document(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """
    Delete a document.

    Removes the stored file and the record; chunks go with it by cascade.

    Args:
        document_id: Document UUID to delete
        document_service: Injected DocumentService

    Returns:
        204 No Content on success

    Raises:
        HTTPException(404): Document not found
        HTTPException(500): Deletion failed
    """
    logger.info("Document deletion request", extra={"document_id": str(document_id)})
    await document_service.delete_document(document_id)
