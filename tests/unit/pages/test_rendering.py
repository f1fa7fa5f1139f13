from markupsafe import Markup

from src.pages.rendering import render_page_body


def test_bracket_link_becomes_anchor() -> None:
    result = render_page_body("see [PageTwo] now")

    assert result == 'see <a href="/view/PageTwo">PageTwo</a> now'
    assert "[PageTwo]" not in result


def test_result_is_markup() -> None:
    assert isinstance(render_page_body("plain"), Markup)


def test_hostile_markup_is_escaped() -> None:
    result = render_page_body("<script>alert(1)</script> [X]")

    assert "<script>" not in result
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in result
    assert '<a href="/view/X">X</a>' in result


def test_quotes_and_ampersands_are_escaped() -> None:
    result = render_page_body("Tom & \"Jerry\" 'cat'")

    assert result == "Tom &amp; &#34;Jerry&#34; &#39;cat&#39;"


def test_multiple_links_left_to_right() -> None:
    result = render_page_body("[One][Two] and [Three]")

    assert result == (
        '<a href="/view/One">One</a>'
        '<a href="/view/Two">Two</a>'
        ' and <a href="/view/Three">Three</a>'
    )


def test_links_are_case_sensitive() -> None:
    result = render_page_body("[frontPage]")

    assert result == '<a href="/view/frontPage">frontPage</a>'


def test_non_alphanumeric_tokens_are_left_alone() -> None:
    body = "[two words] [dash-ed] [] [Ünï]"

    assert render_page_body(body) == body


def test_nested_brackets_link_only_inner_token() -> None:
    result = render_page_body("[[Inner]]")

    assert result == '[<a href="/view/Inner">Inner</a>]'


def test_markup_inside_brackets_is_not_linked() -> None:
    result = render_page_body("[<b>]")

    assert result == "[&lt;b&gt;]"
    assert "<a" not in result


def test_empty_body() -> None:
    assert render_page_body("") == ""
