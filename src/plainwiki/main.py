"""PlainWiki FastAPI application."""

import logging

from fastapi import Depends, FastAPI, Form, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from plainwiki.config import Settings, settings as default_settings
from plainwiki.core.errors import ErrorKind, PageNotFoundError, WikiError
from plainwiki.core.models import Page
from plainwiki.core.storage import PageStore
from plainwiki.core.templates import TemplateRegistry
from plainwiki.routing import Route, valid_title

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.IO_FAILURE: 500,
    ErrorKind.CONFIGURATION: 500,
}


async def view_page(request: Request, title: str = Depends(valid_title)):
    """View a wiki page."""
    try:
        page = await request.app.state.store.load(title)
    except PageNotFoundError:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)
    return request.app.state.registry.render_template(request, "view.html", page)


async def edit_page(request: Request, title: str = Depends(valid_title)):
    """Edit page form."""
    try:
        page = await request.app.state.store.load(title)
    except PageNotFoundError:
        page = Page(title=title)
    return request.app.state.registry.render_template(request, "edit.html", page)


async def save_page(
    request: Request,
    title: str = Depends(valid_title),
    body: str = Form(""),
):
    """Save page content."""
    page = Page(title=title, body=body.encode("utf-8"))
    await request.app.state.store.save(page)
    return RedirectResponse(url=f"/view/{title}", status_code=302)


async def root(request: Request):
    """Front page redirect."""
    front_page = request.app.state.settings.front_page
    return RedirectResponse(url=f"/view/{front_page}", status_code=302)


ROUTES = (
    Route("GET", "view", view_page),
    Route("GET", "edit", edit_page),
    Route("POST", "save", save_page),
)


async def wiki_error_handler(request: Request, exc: WikiError):
    """Report a wiki error as plain text with a status chosen by kind."""
    status_code = ERROR_STATUS[exc.kind]
    if exc.kind is not ErrorKind.NOT_FOUND:
        logger.error(
            "%s error on %s: %s", exc.kind.value, request.url.path, exc, exc_info=exc
        )
    return PlainTextResponse(str(exc), status_code=status_code)


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Answer any request outside the route table with 404.

    Each path has exactly one method, so a method mismatch is also a miss.
    """
    if exc.status_code == 405:
        exc = StarletteHTTPException(status_code=404)
    return await http_exception_handler(request, exc)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    The page store and template registry are created once here and kept on
    ``app.state`` for the life of the process.
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.store = PageStore(settings.data_dir, settings.data_format)
    app.state.registry = TemplateRegistry(
        settings.templates_dir,
        settings.includes_dir,
        settings.template_format,
        template_globals={"app_title": settings.app_title},
    )

    app.add_exception_handler(WikiError, wiki_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    app.add_api_route("/", root, methods=["GET"])
    for route in ROUTES:
        app.add_api_route(
            route.path,
            route.handler,
            methods=[route.method],
            name=route.verb,
        )
    app.mount(
        "/static",
        StaticFiles(directory=str(settings.static_dir), check_dir=False),
        name="static",
    )
    return app
