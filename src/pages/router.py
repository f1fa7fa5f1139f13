from pathlib import Path
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.common.exceptions import (
    ResourceNotFoundException,
    internal_error_response,
    not_found_response,
    redirect_response,
    service_unavailable_response,
)
from src.pages.dependencies import get_page_service
from src.pages.routing import PageAction, PageRoute, get_page_route, page_url
from src.pages.service import PageService

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

router = APIRouter(
    tags=["Pages"],
    responses={**not_found_response},
)


def _redirect(action: PageAction, title: str) -> RedirectResponse:
    return RedirectResponse(
        url=page_url(action, title), status_code=status.HTTP_302_FOUND
    )


@router.get(
    "/view/{title}",
    response_class=HTMLResponse,
    responses={**redirect_response("/edit/{title}")},
)
def view_page(
    request: Request,
    route: PageRoute = Depends(get_page_route),
    page_service: PageService = Depends(get_page_service),
):
    try:
        page_view = page_service.view_page(route.title)
    except ResourceNotFoundException:
        return _redirect(PageAction.EDIT, route.title)

    return templates.TemplateResponse(request, "view.html", {"page": page_view})


@router.get("/edit/{title}", response_class=HTMLResponse)
def edit_page(
    request: Request,
    route: PageRoute = Depends(get_page_route),
    page_service: PageService = Depends(get_page_service),
):
    page = page_service.get_page_for_edit(route.title)
    return templates.TemplateResponse(request, "edit.html", {"page": page})


@router.post(
    "/save/{title}",
    status_code=status.HTTP_302_FOUND,
    responses={
        **redirect_response("/view/{title}"),
        **service_unavailable_response,
        **internal_error_response,
    },
)
def save_page(
    body: str = Form(""),
    route: PageRoute = Depends(get_page_route),
    page_service: PageService = Depends(get_page_service),
) -> RedirectResponse:
    page_service.save_page(route.title, body)
    return _redirect(PageAction.VIEW, route.title)
