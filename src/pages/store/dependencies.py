from fastapi import Request

from src.pages.store.base import PageStore


def get_page_store(request: Request) -> PageStore:
    return request.app.state.page_store
