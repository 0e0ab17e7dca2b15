"""
Service error handling for API endpoints.

Provides a decorator mapping domain exceptions raised by the service
layer to HTTPExceptions with consistent logging.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from docqa.core.exceptions import (
    DocumentNotFoundError,
    EmbeddingError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_service_errors(operation: str) -> Callable[[F], F]:
    """
    Decorator factory translating domain errors into HTTP responses.

    ValidationError -> 400, DocumentNotFoundError -> 404,
    EmbeddingError -> 502, StorageError and anything unexpected -> 500.

    Args:
        operation: Human-readable operation name used in logs and 500 details
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except HTTPException:
                raise

            except ValidationError as e:
                logger.warning(f"Invalid {operation} request", extra={"error": e.message, **e.details})
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

            except DocumentNotFoundError as e:
                logger.warning("Document not found", extra={"error": e.message})
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

            except EmbeddingError as e:
                logger.error(f"Embedding failed during {operation}", extra={"error": str(e)})
                raise HTTPException(
                    status_code=status.HTTP_502_BAD_GATEWAY,
                    detail="Embedding provider request failed",
                )

            except StorageError as e:
                logger.exception(f"Storage failure during {operation}", extra={"error": str(e)})
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"Failed to {operation}",
                )

            except Exception as e:
                logger.exception(f"Unexpected failure during {operation}", extra={"error": str(e)})
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"Failed to {operation}",
                )

        return wrapper  # type: ignore

    return decorator
