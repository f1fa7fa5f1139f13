import logging
from typing import Any
from sqlalchemy import create_engine, insert, select, text, update
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from src.common.exceptions import (
    DuplicateKeyException,
    PersistFailureException,
    ResourceNotFoundException,
    ResourceType,
    StorageUnavailableException,
)
from src.pages.schemas import Page
from src.pages.store.base import PageStore
from src.pages.store.sql.model import Base, create_page_model

logger = logging.getLogger(__name__)


class SQLPageStore(PageStore):
    backend_name = "sql"

    def __init__(self, *, database_url: str, table_name: str):
        self.engine = create_engine(database_url)
        self.Session = sessionmaker(bind=self.engine)
        self.PageModel = create_page_model(table_name)

        try:
            Base.metadata.create_all(self.engine, tables=[self.PageModel.__table__])
        except OperationalError as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e

    def page_exists(self, title: str) -> bool:
        try:
            with self.Session() as session:
                return session.query(
                    session.query(self.PageModel).filter_by(title=title).exists()
                ).scalar()
        except OperationalError as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e

    def get_page(self, title: str) -> Page:
        try:
            with self.Session() as session:
                body = session.execute(
                    select(self.PageModel.body).where(self.PageModel.title == title)
                ).scalar_one_or_none()
        except OperationalError as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e

        if body is None:
            raise ResourceNotFoundException(ResourceType.PAGE, title)

        logger.debug(f"Loaded page '{title}'")
        return Page(title=title, body=body)

    def save_page(self, page: Page) -> Page:
        upsert_stmt = self._upsert_statement(page)

        try:
            if upsert_stmt is not None:
                with self.Session() as session:
                    session.execute(upsert_stmt)
                    session.commit()
            else:
                try:
                    self._insert_page(page)
                except DuplicateKeyException:
                    self._update_page(page)
        except OperationalError as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e
        except SQLAlchemyError as e:
            raise PersistFailureException(page.title, str(e)) from e

        logger.info(f"Saved page '{page.title}'")
        return page

    def ping(self) -> None:
        try:
            with self.engine.connect() as connection:
                result = connection.execute(text("SELECT 1")).scalar()
        except SQLAlchemyError as e:
            raise StorageUnavailableException(self.backend_name, str(e)) from e

        if result != 1:
            raise StorageUnavailableException(
                self.backend_name, "Unexpected result from SELECT 1"
            )

    def close(self) -> None:
        self.engine.dispose()

    def _upsert_statement(self, page: Page) -> Any:
        table = self.PageModel.__table__
        values = {"title": page.title, "body": page.body}
        dialect = self.engine.dialect.name

        if dialect == "postgresql":
            pg_stmt = postgresql.insert(table).values(**values)
            return pg_stmt.on_conflict_do_update(
                index_elements=[table.c.title],
                set_={"body": pg_stmt.excluded.body},
            )
        if dialect == "sqlite":
            sqlite_stmt = sqlite.insert(table).values(**values)
            return sqlite_stmt.on_conflict_do_update(
                index_elements=[table.c.title],
                set_={"body": sqlite_stmt.excluded.body},
            )
        if dialect in ("mysql", "mariadb"):
            mysql_stmt = mysql.insert(table).values(**values)
            return mysql_stmt.on_duplicate_key_update(body=mysql_stmt.inserted.body)

        return None

    def _insert_page(self, page: Page) -> None:
        with self.Session() as session:
            try:
                session.execute(
                    insert(self.PageModel).values(title=page.title, body=page.body)
                )
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if self.page_exists(page.title):
                    raise DuplicateKeyException(ResourceType.PAGE, page.title) from e
                raise PersistFailureException(page.title, str(e)) from e

    def _update_page(self, page: Page) -> None:
        with self.Session() as session:
            result = session.execute(
                update(self.PageModel)
                .where(self.PageModel.title == page.title)
                .values(body=page.body)
            )
            updated_rows = result.rowcount
            session.commit()

        # The row that caused the duplicate key was removed in between.
        if updated_rows == 0:
            raise PersistFailureException(
                page.title, "page disappeared before it could be updated"
            )
