import re

from markupsafe import Markup, escape

from src.pages.routing import PageAction, page_url

BRACKET_LINK = re.compile(r"\[([a-zA-Z0-9]+)\]")


def _link(match: re.Match[str]) -> str:
    title = match.group(1)
    return f'<a href="{page_url(PageAction.VIEW, title)}">{title}</a>'


def render_page_body(body: str) -> Markup:
    """Escape a raw page body and turn each ``[Title]`` into a link.

    Escaping runs first, so only the anchors produced here are markup.
    Brackets, ASCII letters and digits are left alone by escaping, which
    keeps every link token intact for the substitution pass.
    """
    escaped = str(escape(body))
    return Markup(BRACKET_LINK.sub(_link, escaped))
