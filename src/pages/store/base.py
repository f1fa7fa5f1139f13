from abc import ABC, abstractmethod

from src.pages.schemas import Page


class PageStore(ABC):
    backend_name: str

    @abstractmethod
    def get_page(self, title: str) -> Page:
        """Raises ResourceNotFoundException when no page has this title."""
        pass

    @abstractmethod
    def save_page(self, page: Page) -> Page:
        """Create the page or replace the body of an existing one."""
        pass

    @abstractmethod
    def ping(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass
