from markupsafe import Markup
from pydantic import BaseModel, ConfigDict, Field

from src.pages.routing import TITLE_PATTERN


class Page(BaseModel):
    title: str = Field(pattern=TITLE_PATTERN)
    body: str = ""


class PageView(BaseModel):
    """Display form of a page. Built per request, never stored."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    title: str
    display_body: Markup
