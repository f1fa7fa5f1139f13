import logging
import os
import tempfile
from pathlib import Path

from src.common.exceptions import (
    PersistFailureException,
    ResourceNotFoundException,
    ResourceType,
    StorageUnavailableException,
)
from src.pages.routing import is_valid_title
from src.pages.schemas import Page
from src.pages.store.base import PageStore

logger = logging.getLogger(__name__)

PAGE_FILE_SUFFIX = ".txt"
PAGE_FILE_MODE = 0o600


class FilesystemPageStore(PageStore):
    """One ``<title>.txt`` file per page inside ``data_dir``.

    Bodies are stored as raw UTF-8 bytes. Writes go to a temporary file in
    the same directory which is then renamed over the page file, so readers
    see either the old body or the new one.
    """

    backend_name = "filesystem"

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _page_path(self, title: str) -> Path:
        # Titles become file names, anything else could escape data_dir.
        if not is_valid_title(title):
            raise ValueError(f"Invalid page title: {title!r}")
        return self.data_dir / f"{title}{PAGE_FILE_SUFFIX}"

    def get_page(self, title: str) -> Page:
        path = self._page_path(title)
        try:
            body = path.read_bytes()
        except FileNotFoundError:
            raise ResourceNotFoundException(ResourceType.PAGE, title)
        except OSError as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e

        logger.debug(f"Loaded page '{title}' from {path}")
        # Files written by other tools may hold bytes that are not UTF-8.
        return Page(title=title, body=body.decode("utf-8", errors="replace"))

    def save_page(self, page: Page) -> Page:
        path = self._page_path(page.title)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{page.title}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(page.body.encode("utf-8"))
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.chmod(tmp_name, PAGE_FILE_MODE)
            os.replace(tmp_name, path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise PersistFailureException(page.title, str(e)) from e

        logger.info(f"Saved page '{page.title}' to {path}")
        return page

    def ping(self) -> None:
        if not self.data_dir.is_dir() or not os.access(self.data_dir, os.W_OK):
            raise StorageUnavailableException(
                self.backend_name, f"{self.data_dir} is not a writable directory"
            )

    def close(self) -> None:
        pass
