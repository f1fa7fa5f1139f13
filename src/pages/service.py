import logging
from opentelemetry import trace

from src.common.exceptions import (
    PageTooLargeException,
    ResourceNotFoundException,
)
from src.pages.rendering import render_page_body
from src.pages.schemas import Page, PageView
from src.pages.store.base import PageStore

logger = logging.getLogger(__name__)

tracer = trace.get_tracer(__name__)


class PageService:
    def __init__(self, page_store: PageStore, body_max_bytes: int | None = None):
        self.page_store = page_store
        self.body_max_bytes = body_max_bytes

    def view_page(self, title: str) -> PageView:
        with tracer.start_as_current_span(
            "page.view", attributes={"page.title": title}
        ):
            page = self.page_store.get_page(title)
            return PageView(
                title=page.title, display_body=render_page_body(page.body)
            )

    def get_page_for_edit(self, title: str) -> Page:
        with tracer.start_as_current_span(
            "page.edit", attributes={"page.title": title}
        ) as span:
            try:
                return self.page_store.get_page(title)
            except ResourceNotFoundException:
                logger.debug(
                    f"Page '{title}' does not exist yet, starting with an empty body"
                )
                span.set_attribute("page.new", True)
                return Page(title=title)

    def save_page(self, title: str, body: str) -> Page:
        size = len(body.encode("utf-8"))

        with tracer.start_as_current_span(
            "page.save", attributes={"page.title": title, "page.size": size}
        ):
            if self.body_max_bytes is not None and size > self.body_max_bytes:
                raise PageTooLargeException(title, size, self.body_max_bytes)

            return self.page_store.save_page(Page(title=title, body=body))
