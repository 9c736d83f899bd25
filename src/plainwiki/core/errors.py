"""Error kinds raised by the page store and template registry.

Handlers switch on ``WikiError.kind`` rather than on exception text.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """The closed set of failure kinds."""

    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"
    CONFIGURATION = "configuration"


class WikiError(Exception):
    """Base for all wiki errors."""

    kind: ErrorKind


class PageNotFoundError(WikiError):
    """The page file is absent or unreadable."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, title: str) -> None:
        super().__init__(f"Page {title} does not exist.")
        self.title = title


class PageWriteError(WikiError):
    """Writing the page file failed."""

    kind = ErrorKind.IO_FAILURE

    def __init__(self, title: str, reason: str) -> None:
        super().__init__(reason)
        self.title = title


class TemplateNotRegisteredError(WikiError):
    """A template was requested that the registry never loaded.

    This is a wiring defect, not a runtime condition.
    """

    kind = ErrorKind.CONFIGURATION

    def __init__(self, name: str) -> None:
        super().__init__(f"The template {name} does not exist.")
        self.name = name
