import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, status
from fastapi.responses import RedirectResponse
from redis.exceptions import ConnectionError
from sqlalchemy.exc import OperationalError

from src.common.exceptions import (
    InvalidPagePathException,
    PageTooLargeException,
    PersistFailureException,
    ResourceNotFoundException,
    StorageUnavailableException,
    invalid_page_path_handler,
    page_too_large_handler,
    persist_failure_handler,
    resource_not_found_handler,
    storage_unavailable_handler,
    unexpected_exception_handler,
    internal_error_response,
    service_unavailable_response,
)
from src.common.opentelemetry import setup_tracing
from src.config import get_settings
from src.healthcheck.router import router as health_router
from src.pages.router import router as pages_router
from src.pages.routing import PageAction, page_url
from src.pages.store.backend import get_page_store_backend

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.page_store = get_page_store_backend(settings)
    logger.info(f"Serving pages from the {settings.PAGE_STORE_BACKEND} store")
    yield
    app.state.page_store.close()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    responses={
        **service_unavailable_response,
        **internal_error_response,
    },
    version=settings.TINYWIKI_VERSION,
)

if settings.OTEL_ENABLED:
    setup_tracing(settings, app)

app.exception_handler(InvalidPagePathException)(invalid_page_path_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(StorageUnavailableException)(storage_unavailable_handler)
app.exception_handler(ConnectionError)(storage_unavailable_handler)
app.exception_handler(OperationalError)(storage_unavailable_handler)
app.exception_handler(PersistFailureException)(persist_failure_handler)
app.exception_handler(PageTooLargeException)(page_too_large_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(
        url=page_url(PageAction.VIEW, settings.FRONT_PAGE_TITLE),
        status_code=status.HTTP_302_FOUND,
    )


app.include_router(health_router)
app.include_router(pages_router)


def run() -> None:
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
