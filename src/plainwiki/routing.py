"""Page routing: verb paths and title validation."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException

TITLE_REGEX = r"[a-zA-Z0-9]+"
TITLE_PATTERN = re.compile(TITLE_REGEX)


@dataclass(frozen=True)
class Route:
    """One entry of the page route table."""

    method: str
    verb: str
    handler: Callable[..., Any]

    @property
    def path(self) -> str:
        return f"/{self.verb}/{{title}}"


def valid_title(title: str) -> str:
    """FastAPI dependency rejecting titles that are not plain tokens.

    Runs before the handler, so a rejected title never reaches storage.
    """
    if TITLE_PATTERN.fullmatch(title) is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return title
