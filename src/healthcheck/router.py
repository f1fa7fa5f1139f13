from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.common.exceptions import StorageUnavailableException
from src.pages.store.base import PageStore
from src.pages.store.dependencies import get_page_store

router = APIRouter()


@router.get(
    "/healthcheck",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "store": {"status": "ok", "backend": "filesystem"},
                    }
                }
            },
        },
        503: {
            "description": "Service unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "store": {
                            "status": "error",
                            "backend": "sql",
                            "message": "Page store 'sql' is unavailable: connection refused",
                        },
                    }
                }
            },
        },
    },
)
def healthcheck(
    page_store: PageStore = Depends(get_page_store),
) -> JSONResponse:
    health_status: dict[str, Any] = {
        "api": {"status": "ok"},
        "store": {"status": "ok", "backend": page_store.backend_name},
    }

    try:
        page_store.ping()
    except StorageUnavailableException as e:
        health_status["store"].update({"status": "error", "message": str(e)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
