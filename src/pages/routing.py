import re
from enum import Enum
from typing import NamedTuple

from fastapi import Request

from src.common.exceptions import InvalidPagePathException

TITLE_PATTERN = r"^[a-zA-Z0-9]+$"

VALID_TITLE = re.compile(r"[a-zA-Z0-9]+")

VALID_PAGE_PATH = re.compile(r"/(edit|save|view)/([a-zA-Z0-9]+)")


class PageAction(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    SAVE = "save"


class PageRoute(NamedTuple):
    action: PageAction
    title: str


def is_valid_title(title: str) -> bool:
    return VALID_TITLE.fullmatch(title) is not None


def parse_page_path(path: str) -> PageRoute | None:
    match = VALID_PAGE_PATH.fullmatch(path)
    if match is None:
        return None
    return PageRoute(action=PageAction(match.group(1)), title=match.group(2))


def page_url(action: PageAction, title: str) -> str:
    return f"/{action.value}/{title}"


def get_page_route(request: Request) -> PageRoute:
    route = parse_page_path(request.url.path)
    if route is None:
        raise InvalidPagePathException(request.url.path)
    return route
