from src.config import Settings
from src.common.redis import create_redis_client
from src.pages.store.base import PageStore
from src.pages.store.filesystem.store import FilesystemPageStore
from src.pages.store.redis.store import RedisPageStore
from src.pages.store.sql.store import SQLPageStore


def get_page_store_backend(settings: Settings) -> PageStore:
    if settings.PAGE_STORE_BACKEND == "filesystem":
        return FilesystemPageStore(data_dir=settings.PAGE_STORE_DATA_DIR)
    elif settings.PAGE_STORE_BACKEND == "sql":
        return SQLPageStore(
            database_url=settings.DATABASE_URL,
            table_name=settings.PAGE_STORE_NAMESPACE,
        )
    elif settings.PAGE_STORE_BACKEND == "redis":
        return RedisPageStore(
            redis_client=create_redis_client(settings.REDIS_URL),
            key_prefix=settings.PAGE_STORE_NAMESPACE,
        )
    else:
        raise ValueError(
            f"Unsupported page store backend: {settings.PAGE_STORE_BACKEND}"
        )
