from typing import Any
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import declarative_base

Base = declarative_base()

_model_registry: dict[str, Any] = {}

# MySQL compares with a case-insensitive collation unless told otherwise.
TitleType = String(255).with_variant(
    mysql.VARCHAR(255, charset="utf8mb4", collation="utf8mb4_bin"), "mysql", "mariadb"
)


def create_page_model(table_name: str):
    if table_name in _model_registry:
        return _model_registry[table_name]

    class PageModel(Base):
        __tablename__ = table_name

        id = Column(Integer, primary_key=True, autoincrement=True)
        title = Column(TitleType, unique=True, nullable=False)
        body = Column(Text, nullable=False, default="")

        __table_args__ = {"extend_existing": True}

    _model_registry[table_name] = PageModel
    return PageModel
