"""Special:SubcatImagesGallery — images from subcategories of a category.

This hidden special page returns the HTML of a gallery of all images in the
direct subcategories of ``Special:SubcatImagesGallery/<CategoryName>``.
Category pages use it to add a "Show images from subcategories" link that
loads the gallery in place.

Processing Steps
----------------
1. Validate the category name and check that the category exists.
   Otherwise respond with 404 and the bad title message.
2. Query the store for (filename, subcategory) pairs, ordered by
   subcategory name, then by sort key within the subcategory.
3. Drop files already seen under an earlier subcategory.
4. Group the remaining files by subcategory, keeping query order.
5. Spend the image budget (``max_images``) group by group.
6. Render one ``<h3>`` header + gallery per subcategory inside a
   ``mw-subcatimagesgallery-result`` container.

Image Budget
------------
The budget is checked before each subcategory starts and decremented for
every file added.  A subcategory that exhausts the budget is rendered up to
and including the file that exhausted it, and nothing after it is rendered.
With a budget of zero or less no subcategory is rendered at all: the result
container is empty.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .database import CategoryStore, ImageRow
from .gallery import ImageGalleryBase
from .markup import link, tags
from .output import OutputPage
from .titles import NS_CATEGORY, NS_FILE, Title, TitleResolver, make_title, make_title_safe

logger = logging.getLogger(__name__)

RESULT_CLASS = "mw-subcatimagesgallery-result"


def group_filenames_by_category(rows: Iterable[ImageRow]) -> dict[str, list[str]]:
    """Group files by subcategory, keeping each file only once.

    A file that appears under several subcategories is kept under the first
    one encountered.  Key order and the order of files inside each group
    follow the order of ``rows``.

    Args:
        rows: (filename, category) rows in query order

    Returns:
        Mapping of subcategory db key to file names
    """
    filenames_by_category: dict[str, list[str]] = {}
    seen_filenames: set[str] = set()

    for row in rows:
        if row.filename in seen_filenames:
            continue
        seen_filenames.add(row.filename)

        filenames_by_category.setdefault(row.category, []).append(row.filename)

    return filenames_by_category


def allot_images(
    filenames_by_category: dict[str, list[str]], limit: int
) -> list[tuple[str, list[str]]]:
    """Apply the global image budget to grouped files.

    Args:
        filenames_by_category: Output of :func:`group_filenames_by_category`
        limit: Maximum number of files across all groups

    Returns:
        (category, filenames) pairs to render, in order. Groups after the one
        that exhausts the budget are not included.
    """
    limit_left = limit
    allotted: list[tuple[str, list[str]]] = []

    for category, filenames in filenames_by_category.items():
        if limit_left <= 0:
            break

        taken = filenames[:limit_left]
        limit_left -= len(taken)
        allotted.append((category, taken))

    return allotted


class SubcatImagesGallery:
    """Handler for ``Special:SubcatImagesGallery/<CategoryName>``."""

    name = "SubcatImagesGallery"

    def __init__(
        self,
        store: CategoryStore,
        *,
        max_images: int,
        gallery_factory: Callable[[], ImageGalleryBase],
        article_path: str = "/wiki/$1",
    ) -> None:
        """Initialize the handler.

        Args:
            store: Replica store for the ``page`` and ``categorylinks`` tables
            max_images: Maximum number of thumbnails to add
            gallery_factory: Creates an empty gallery widget
            article_path: URL template for links to subcategories
        """
        self.store = store
        self.resolver = TitleResolver(store)
        self.max_images = max_images
        self.gallery_factory = gallery_factory
        self.article_path = article_path

    def execute(self, param: str | None, out: OutputPage) -> None:
        """Handle a request.

        Args:
            param: Category name from the URL (without namespace), may be None
            out: Sink receiving status, messages and HTML
        """
        out.set_page_title(out.msg("subcatimagesgallery"))

        target = make_title_safe(NS_CATEGORY, param) if param else None
        if not target or not self.resolver.exists(target):
            logger.debug(f"Unknown category requested: {param!r}")
            out.set_status_code(404)
            out.add_wiki_msg("badtitletext")
            return

        self.display_gallery(target, out)

    def display_gallery(self, category_title: Title, out: OutputPage) -> None:
        """Find all images in subcategories and output the resulting gallery.

        Args:
            category_title: Existing category
            out: Sink receiving messages and HTML
        """
        rows = self.store.fetch_subcategory_images(category_title.dbkey)
        if not rows:
            out.add_wiki_msg("subcatimagesgallery-empty")
            return

        filenames_by_category = group_filenames_by_category(rows)
        allotted = allot_images(filenames_by_category, self.max_images)

        html = ""
        for category, filenames in allotted:
            gallery = self.gallery_factory()
            gallery.set_hide_bad_images(True)

            for filename in filenames:
                gallery.add(make_title(NS_FILE, filename))

            subcategory_title = make_title(NS_CATEGORY, category)
            header = link(subcategory_title, subcategory_title.text, self.article_path)

            html += tags("h3", None, header)
            html += gallery.to_html()

        logger.info(
            f"Rendered {sum(len(f) for _, f in allotted)} image(s) from "
            f"{len(allotted)} subcategories of {category_title}"
        )
        out.add_html(tags("div", {"class": RESULT_CLASS}, html))
