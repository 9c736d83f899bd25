"""Template registry.

Every top-level template is parsed together with the shared includes once,
at startup. Templates extend the ``base.html`` include, which is the entry
point that produces the full document.
"""

import logging
from pathlib import Path

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from plainwiki.core.errors import TemplateNotRegisteredError
from plainwiki.core.models import Page

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """Immutable set of named, pre-parsed templates.

    Templates and includes are compiled into the environment cache at
    construction. The cache never evicts and never checks file mtimes, so
    edits on disk are not seen until the process restarts.
    """

    def __init__(
        self,
        templates_dir: Path,
        includes_dir: Path,
        extension: str = ".html",
        template_globals: dict | None = None,
    ):
        self.env = Environment(
            loader=FileSystemLoader([str(templates_dir), str(includes_dir)]),
            autoescape=select_autoescape(),
            auto_reload=False,
            cache_size=-1,
        )
        self.env.globals.update(template_globals or {})
        self.templates = Jinja2Templates(env=self.env)

        # Parse eagerly so a broken template fails startup, not a request.
        units = sorted(p.name for p in templates_dir.glob("*" + extension))
        includes = sorted(p.name for p in includes_dir.glob("*" + extension))
        for name in units + includes:
            self.env.get_template(name)
        self._units = frozenset(units)

        logger.info(
            "Loaded %d templates (%s) with %d includes",
            len(units),
            ", ".join(units),
            len(includes),
        )

    @property
    def names(self) -> frozenset[str]:
        """Names of all registered templates."""
        return self._units

    def __contains__(self, name: str) -> bool:
        return name in self._units

    def render_template(self, request: Request, name: str, page: Page) -> Response:
        """Render a registered template with ``page`` as its context.

        Raises:
            TemplateNotRegisteredError: ``name`` was never registered.
        """
        if name not in self._units:
            logger.warning("Requested unregistered template %s", name)
            raise TemplateNotRegisteredError(name)

        try:
            return self.templates.TemplateResponse(
                request,
                name,
                {"page": page},
                media_type="text/html",
            )
        except TemplateError as e:
            logger.exception("Error rendering template %s for %s", name, page.title)
            return PlainTextResponse(str(e), status_code=500)
