"""Small HTML building helpers.

The service produces HTML fragments by string concatenation, the same way the
rest of the page is assembled, so these helpers only take care of escaping.
Contents passed to :func:`tags` are raw HTML; everything else is escaped.
"""

from __future__ import annotations

import html
from urllib.parse import quote

from .titles import Title


def _attributes(attrs: dict[str, str] | None) -> str:
    if not attrs:
        return ""
    return "".join(
        f' {name}="{html.escape(str(value), quote=True)}"'
        for name, value in attrs.items()
        if value is not None
    )


def tags(name: str, attrs: dict[str, str] | None, contents: str) -> str:
    """Wrap raw HTML ``contents`` in an element.

    Args:
        name: Element name
        attrs: Attribute mapping, values are escaped. ``None`` values are skipped.
        contents: Raw HTML placed between the tags

    Returns:
        HTML string
    """
    return f"<{name}{_attributes(attrs)}>{contents}</{name}>"


def element(name: str, attrs: dict[str, str] | None = None, text: str = "") -> str:
    """Like :func:`tags`, but escapes ``text``."""
    return tags(name, attrs, html.escape(text, quote=False))


def void_element(name: str, attrs: dict[str, str] | None = None) -> str:
    """Build an element without contents, e.g. ``<img ...>``."""
    return f"<{name}{_attributes(attrs)}>"


def page_url(title: Title, article_path: str) -> str:
    """Build the URL of a page from the article path template.

    Args:
        title: Page to link to
        article_path: URL template, ``$1`` is replaced by the page name

    Returns:
        URL with the namespace-qualified db key percent-encoded
    """
    return article_path.replace("$1", quote(title.prefixed_dbkey, safe=":/"))


def link(title: Title, text: str, article_path: str = "/wiki/$1") -> str:
    """Build an anchor pointing to a page.

    Args:
        title: Page to link to
        text: Display text (escaped)
        article_path: URL template for pages

    Returns:
        ``<a href="..." title="...">text</a>``
    """
    return element("a", {"href": page_url(title, article_path), "title": title.prefixed_text}, text)
