from fastapi import Depends

from src.config import Settings, get_settings
from src.pages.service import PageService
from src.pages.store.base import PageStore
from src.pages.store.dependencies import get_page_store


def get_page_service(
    page_store: PageStore = Depends(get_page_store),
    settings: Settings = Depends(get_settings),
) -> PageService:
    return PageService(
        page_store=page_store,
        body_max_bytes=settings.PAGE_BODY_MAX_BYTES,
    )
