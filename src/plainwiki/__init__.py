"""PlainWiki: a minimal file-backed personal wiki."""
