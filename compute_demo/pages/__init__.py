"""Pages module - the static front end."""

from .router import INDEX_HTML, router


__all__ = ["INDEX_HTML", "router"]
