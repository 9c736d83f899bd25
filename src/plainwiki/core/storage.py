"""Flat-file storage for wiki pages."""

import logging
import os
from pathlib import Path

from plainwiki.core.errors import PageNotFoundError, PageWriteError
from plainwiki.core.models import Page

logger = logging.getLogger(__name__)


class PageStore:
    """File-based page store.

    Each page lives in its own file, ``<base_path>/<title><extension>``.
    Titles are alphanumeric, so they are used as filenames unchanged.
    There is no locking: concurrent saves of one title race and the last
    writer wins.
    """

    FILE_MODE = 0o600

    def __init__(self, base_path: Path, extension: str = ".md"):
        self.base_path = base_path
        self.extension = extension
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, title: str) -> Path:
        """Get full path for a page."""
        return self.base_path / (title + self.extension)

    async def load(self, title: str) -> Page:
        """Load a page by title.

        Raises:
            PageNotFoundError: The file is missing or cannot be read.
        """
        try:
            body = self.path_for(title).read_bytes()
        except OSError as e:
            raise PageNotFoundError(title) from e
        return Page(title=title, body=body)

    async def save(self, page: Page) -> None:
        """Write the page body, creating or truncating its file.

        New files are readable and writable by the owner only.

        Raises:
            PageWriteError: The file could not be written.
        """
        path = self.path_for(page.title)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(page.body)
        except OSError as e:
            raise PageWriteError(page.title, str(e)) from e
        logger.info("Saved page %s (%d bytes)", page.title, len(page.body))
