"""Page title normalization and validation.

Wiki page names arrive from URLs in a loose, human-typed form ("birds of
prey", " Birds_of  prey ").  Before they can be matched against the
``page`` and ``categorylinks`` tables they must be turned into the canonical
*db key* form used by the store: underscores instead of spaces, no
surrounding whitespace, first letter capitalized.

Two constructors are provided:

- :func:`make_title` trusts its input and is used for names that come back
  from the database, which are already canonical.
- :func:`make_title_safe` validates untrusted input and returns ``None`` when
  the name cannot be a page title.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relatedimages.core.database import CategoryStore

logger = logging.getLogger(__name__)

NS_MAIN = 0
NS_FILE = 6
NS_CATEGORY = 14

NAMESPACE_NAMES: dict[int, str] = {
    NS_MAIN: "",
    NS_FILE: "File",
    NS_CATEGORY: "Category",
}

# Titles are stored in a VARBINARY(255) column.
MAX_TITLE_BYTES = 255

_ILLEGAL_CHARS_RE = re.compile(r"[#<>\[\]|{}\x00-\x1f\x7f\ufffd]")
_PERCENT_ENCODED_RE = re.compile(r"%[0-9A-Fa-f]{2}")
_WHITESPACE_RE = re.compile(r"[ _\u00a0\u1680\u180e\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+")


@dataclass(frozen=True)
class Title:
    """Canonical reference to a wiki page: namespace plus db key."""

    namespace: int
    dbkey: str

    @property
    def text(self) -> str:
        """Page name without namespace, with spaces (display form)."""
        return self.dbkey.replace("_", " ")

    @property
    def namespace_name(self) -> str:
        return NAMESPACE_NAMES.get(self.namespace, "")

    @property
    def prefixed_dbkey(self) -> str:
        """Namespace-qualified db key, e.g. ``Category:Birds_of_prey``."""
        if self.namespace_name:
            return f"{self.namespace_name}:{self.dbkey}"
        return self.dbkey

    @property
    def prefixed_text(self) -> str:
        """Namespace-qualified display name, e.g. ``Category:Birds of prey``."""
        return self.prefixed_dbkey.replace("_", " ")

    def __str__(self) -> str:
        return self.prefixed_text


def make_title(namespace: int, dbkey: str) -> Title:
    """Build a title from a name already in db key form. No validation."""
    return Title(namespace, dbkey)


def _is_relative_path(dbkey: str) -> bool:
    """Check for names that would be interpreted as relative URL paths."""
    return (
        dbkey in (".", "..")
        or dbkey.startswith("./")
        or dbkey.startswith("../")
        or "/./" in dbkey
        or "/../" in dbkey
        or dbkey.endswith("/.")
        or dbkey.endswith("/..")
    )


def normalize_dbkey(text: str) -> str | None:
    """Turn a user-supplied page name into db key form.

    Args:
        text: Page name as typed by a user or taken from a URL

    Returns:
        Canonical db key, or None if the name is not a valid title
    """
    dbkey = _WHITESPACE_RE.sub("_", text.strip()).strip("_")

    if not dbkey:
        return None
    if _ILLEGAL_CHARS_RE.search(dbkey):
        return None
    if _PERCENT_ENCODED_RE.search(dbkey):
        return None
    if _is_relative_path(dbkey):
        return None
    if dbkey.startswith(":"):
        return None
    if "~~~" in dbkey:
        return None
    if len(dbkey.encode("utf-8")) > MAX_TITLE_BYTES:
        return None

    return dbkey[0].upper() + dbkey[1:]


def make_title_safe(namespace: int, text: str | None) -> Title | None:
    """Build a title from untrusted input.

    Args:
        namespace: Namespace the name belongs to
        text: Page name without namespace prefix

    Returns:
        Title, or None if ``text`` is empty or not a valid page name
    """
    if not text:
        return None

    dbkey = normalize_dbkey(text)
    if dbkey is None:
        logger.debug(f"Rejected invalid title: {text!r}")
        return None

    return Title(namespace, dbkey)


class TitleResolver:
    """Resolve existence of titles against the category store."""

    def __init__(self, store: CategoryStore) -> None:
        self.store = store

    def exists(self, title: Title) -> bool:
        """Check whether a page with this title exists.

        Args:
            title: Title to check

        Returns:
            True if the ``page`` table has a row for the title
        """
        return self.store.page_exists(title.namespace, title.dbkey)
