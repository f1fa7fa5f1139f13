from enum import Enum
import logging
from typing import Any
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ResourceType(str, Enum):
    PAGE = "Page"


# Exceptions
class ResourceNotFoundException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' not found")


class InvalidPagePathException(Exception):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path '{path}' does not address a page")


class StorageUnavailableException(Exception):
    def __init__(self, backend: str, message: str):
        self.backend = backend
        super().__init__(f"Page store '{backend}' is unavailable: {message}")


class PersistFailureException(Exception):
    def __init__(self, title: str, message: str):
        self.title = title
        super().__init__(f"Failed to save page '{title}': {message}")


class DuplicateKeyException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' already exists")


class PageTooLargeException(Exception):
    def __init__(self, title: str, size: int, limit: int):
        self.title = title
        self.size = size
        self.limit = limit
        super().__init__(
            f"Page '{title}' is {size} bytes, the limit is {limit} bytes"
        )


# Exception handlers
def resource_not_found_handler(request: Request, exc: ResourceNotFoundException):
    logger.error(exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


def invalid_page_path_handler(request: Request, exc: InvalidPagePathException):
    # Same body as an unmatched route, so invalid titles look like absent ones.
    logger.info(exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Not Found"},
    )


def storage_unavailable_handler(request: Request, exc: Exception):
    logger.error(f"Page store unavailable: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service unavailable"},
    )


def persist_failure_handler(request: Request, exc: PersistFailureException):
    logger.error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def page_too_large_handler(request: Request, exc: PageTooLargeException):
    logger.error(exc)
    return JSONResponse(
        status_code=status.HTTP_413_CONTENT_TOO_LARGE,
        content={"detail": str(exc)},
    )


def unexpected_exception_handler(request: Request, exc: Exception):
    logger.error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred"},
    )


# Response definitions for OpenAPI documentation
ResponseDict = dict[int | str, dict[str, Any]]


def redirect_response(target: str) -> ResponseDict:
    return {
        302: {
            "description": f"Redirect to {target}",
        }
    }


service_unavailable_response: ResponseDict = {
    503: {
        "description": "Service unavailable",
        "content": {"application/json": {"example": {"detail": "Service unavailable"}}},
    }
}

internal_error_response: ResponseDict = {
    500: {
        "description": "Internal server error",
        "content": {
            "application/json": {"example": {"detail": "An unexpected error occurred"}}
        },
    }
}

not_found_response: ResponseDict = {
    404: {
        "description": "Not found",
        "content": {"application/json": {"example": {"detail": "Not Found"}}},
    }
}
