import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from pytest_mock import MockerFixture

from src.common.exceptions import (
    PageTooLargeException,
    ResourceNotFoundException,
    ResourceType,
    StorageUnavailableException,
)
from src.pages.schemas import Page
from src.pages.service import PageService
from src.pages.store.base import PageStore


@pytest.fixture
def mock_page_store(mocker: MockerFixture) -> PageStore:
    return mocker.Mock(spec=PageStore)


@pytest.fixture
def page_service(mock_page_store: PageStore) -> PageService:
    return PageService(page_store=mock_page_store)


def test_view_page_renders_links(
    page_service: PageService, mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(
        mock_page_store,
        "get_page",
        return_value=Page(title="FrontPage", body="see [PageTwo] now"),
    )

    result = page_service.view_page("FrontPage")

    assert result.title == "FrontPage"
    assert result.display_body == 'see <a href="/view/PageTwo">PageTwo</a> now'


def test_view_page_not_found_propagates(
    page_service: PageService, mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(
        mock_page_store,
        "get_page",
        side_effect=ResourceNotFoundException(ResourceType.PAGE, "Missing"),
    )

    with pytest.raises(ResourceNotFoundException):
        page_service.view_page("Missing")


def test_get_page_for_edit_existing(
    page_service: PageService, mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    page = Page(title="FrontPage", body="<b>raw</b>")
    mocker.patch.object(mock_page_store, "get_page", return_value=page)

    assert page_service.get_page_for_edit("FrontPage") == page


def test_get_page_for_edit_missing_returns_empty_page(
    page_service: PageService, mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(
        mock_page_store,
        "get_page",
        side_effect=ResourceNotFoundException(ResourceType.PAGE, "NewPage"),
    )

    assert page_service.get_page_for_edit("NewPage") == Page(title="NewPage", body="")


def test_get_page_for_edit_storage_error_propagates(
    page_service: PageService, mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(
        mock_page_store,
        "get_page",
        side_effect=StorageUnavailableException("sql", "connection refused"),
    )

    with pytest.raises(StorageUnavailableException):
        page_service.get_page_for_edit("FrontPage")


def test_save_page(
    page_service: PageService, mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    page = Page(title="NewPage", body="hello")
    mock_save = mocker.patch.object(mock_page_store, "save_page", return_value=page)

    assert page_service.save_page("NewPage", "hello") == page
    mock_save.assert_called_once_with(page)


def test_save_page_within_limit(
    mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    page_service = PageService(page_store=mock_page_store, body_max_bytes=5)
    mock_save = mocker.patch.object(mock_page_store, "save_page")

    page_service.save_page("Small", "hello")

    mock_save.assert_called_once_with(Page(title="Small", body="hello"))


def test_save_page_over_limit(
    mock_page_store: PageStore, mocker: MockerFixture
) -> None:
    page_service = PageService(page_store=mock_page_store, body_max_bytes=5)
    mock_save = mocker.patch.object(mock_page_store, "save_page")

    # Two characters, six bytes once encoded.
    with pytest.raises(PageTooLargeException) as exc_info:
        page_service.save_page("Big", "中文")

    assert exc_info.value.size == 6
    assert exc_info.value.limit == 5
    mock_save.assert_not_called()


@pytest.fixture
def span_exporter(mocker: MockerFixture) -> InMemorySpanExporter:
    exporter = InMemorySpanExporter()
    tracer_provider = TracerProvider()
    tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))
    mocker.patch(
        "src.pages.service.tracer", tracer_provider.get_tracer("src.pages.service")
    )
    return exporter


def test_operations_record_spans(
    page_service: PageService,
    mock_page_store: PageStore,
    span_exporter: InMemorySpanExporter,
    mocker: MockerFixture,
) -> None:
    mocker.patch.object(
        mock_page_store,
        "get_page",
        side_effect=ResourceNotFoundException(ResourceType.PAGE, "NewPage"),
    )
    mocker.patch.object(
        mock_page_store, "save_page", return_value=Page(title="NewPage", body="hé")
    )

    page_service.get_page_for_edit("NewPage")
    page_service.save_page("NewPage", "hé")

    edit_span, save_span = span_exporter.get_finished_spans()
    assert edit_span.name == "page.edit"
    assert edit_span.attributes["page.title"] == "NewPage"
    assert edit_span.attributes["page.new"] is True
    assert save_span.name == "page.save"
    assert save_span.attributes["page.size"] == 3
