import logging
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from src.common.exceptions import (
    PersistFailureException,
    ResourceNotFoundException,
    ResourceType,
    StorageUnavailableException,
)
from src.common.redis import RedisClient
from src.pages.schemas import Page
from src.pages.store.base import PageStore

logger = logging.getLogger(__name__)


class RedisPageStore(PageStore):
    backend_name = "redis"

    def __init__(self, *, redis_client: RedisClient, key_prefix: str):
        self.client = redis_client
        self.key_prefix = key_prefix

    def _get_page_key(self, title: str) -> str:
        return f"{self.key_prefix}:{title}"

    def get_page(self, title: str) -> Page:
        try:
            body = self.client.get(self._get_page_key(title))
        except (ConnectionError, TimeoutError) as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e

        if body is None:
            raise ResourceNotFoundException(ResourceType.PAGE, title)

        logger.debug(f"Loaded page '{title}'")
        return Page(title=title, body=body)

    def save_page(self, page: Page) -> Page:
        try:
            self.client.set(self._get_page_key(page.title), page.body)
        except (ConnectionError, TimeoutError) as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e
        except RedisError as e:
            raise PersistFailureException(page.title, str(e)) from e

        logger.info(f"Saved page '{page.title}'")
        return page

    def ping(self) -> None:
        try:
            self.client.ping()
        except RedisError as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e

    def close(self) -> None:
        self.client.close()
