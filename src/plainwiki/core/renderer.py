"""Markdown to sanitized HTML rendering."""

import nh3
from markdown import Markdown
from markupsafe import Markup

# User-generated-content allowlist: ammonia's defaults plus the
# checkboxes emitted for task lists.
ALLOWED_TAGS = nh3.ALLOWED_TAGS | {"input"}
ALLOWED_ATTRIBUTES = {
    **{tag: set(attrs) for tag, attrs in nh3.ALLOWED_ATTRIBUTES.items()},
    "input": {"checked", "disabled"},
}
ALLOWED_ATTRIBUTE_VALUES = {"input": {"type": {"checkbox"}}}
URL_SCHEMES = {"http", "https", "mailto"}
LINK_REL = "nofollow noopener noreferrer"


def create_parser() -> Markdown:
    """Create a Markdown parser for a GitHub-flavored dialect.

    Returns:
        Configured Markdown parser instance.
    """
    return Markdown(
        extensions=[
            "extra",  # tables, fenced_code, footnotes, def_list, ...
            "sane_lists",
            "nl2br",  # newlines inside a paragraph are hard breaks
            "pymdownx.tilde",  # ~~strikethrough~~
            "pymdownx.tasklist",  # - [x] task lists
            "pymdownx.magiclink",  # bare URLs become links
        ],
        extension_configs={
            "pymdownx.tilde": {"subscript": False},
        },
    )


def sanitize(html: str) -> str:
    """Strip everything outside the allowlist from an HTML fragment."""
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        tag_attribute_values=ALLOWED_ATTRIBUTE_VALUES,
        url_schemes=URL_SCHEMES,
        link_rel=LINK_REL,
    )


def render(body: bytes) -> Markup:
    """Render raw page markup to HTML that is safe to embed unescaped.

    Args:
        body: Raw page content. Invalid UTF-8 is replaced, not rejected.

    Returns:
        Sanitized HTML marked safe for Jinja2 templates.
    """
    source = body.decode("utf-8", errors="replace")
    html = create_parser().convert(source)
    return Markup(sanitize(html))
