"""Data models for PlainWiki."""

from markupsafe import Markup
from pydantic import BaseModel, Field

from plainwiki.core.renderer import render
from plainwiki.routing import TITLE_REGEX


class Page(BaseModel):
    """Represents a wiki page."""

    title: str = Field(pattern=f"^{TITLE_REGEX}$")
    body: bytes = b""

    @property
    def text(self) -> str:
        """Return the body decoded for display in the editor."""
        return self.body.decode("utf-8", errors="replace")

    def html_body(self) -> Markup:
        """Render the body to sanitized HTML.

        Called from templates, so pages are only rendered when shown.
        """
        return render(self.body)
