"""
Search API endpoint.

Routes: POST /search

Dependencies: docqa.application.services, docqa.models
System role: Question answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from docqa.api.deps import get_search_service
from docqa.api.routers.router_utils import handle_service_errors
from docqa.application.services.search_service import SearchService
from docqa.models.search import SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse, response_model_by_alias=True)
@handle_service_errors("search documents")
async def search_documents(
    request: SearchRequest,
    search_service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """
    Answer a question from the uploaded documents.

    Args:
        request: Query and optional fileType filter
        search_service: Injected SearchService

    Returns:
        SearchResponse: Answer and cited sources

    Raises:
        HTTPException(400): Empty query
        HTTPException(502): Embedding provider failure
    """
    return await search_service.search(request.query, file_type=request.file_type)
