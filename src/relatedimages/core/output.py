"""Response sink for special page handlers.

Handlers do not build HTTP responses themselves.  They write a status code,
localized messages and HTML fragments into an :class:`OutputPage`, and the
HTTP layer turns the collected output into a response.
"""

import logging

from .markup import element
from .messages import FALLBACK_LANGUAGE, get_message

logger = logging.getLogger(__name__)


class OutputPage:
    """Collects the status code, title and body of one response."""

    def __init__(self, language: str = FALLBACK_LANGUAGE) -> None:
        self.language = language
        self.status_code = 200
        self.page_title = ""
        self._fragments: list[str] = []

    def set_status_code(self, status_code: int) -> None:
        self.status_code = status_code

    def set_page_title(self, title: str) -> None:
        self.page_title = title

    def msg(self, key: str) -> str:
        """Localized text of a message in the output language."""
        return get_message(key, self.language)

    def add_wiki_msg(self, key: str) -> None:
        """Append a localized message as a paragraph."""
        self._fragments.append(element("p", None, self.msg(key)))

    def add_html(self, fragment: str) -> None:
        """Append a raw HTML fragment."""
        self._fragments.append(fragment)

    def get_html(self) -> str:
        return "\n".join(self._fragments)
