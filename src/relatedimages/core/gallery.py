"""Gallery widgets and registry.

A gallery widget collects file titles one at a time and renders them as a
block of thumbnails.  Several layouts exist; which one is used is decided
once at startup from ``config.gallery_mode`` and handed to the request
handler as a factory, so each subcategory gets a fresh widget of the same
kind.

Gallery Modes
-------------
- **traditional**: fixed-size boxes in a grid, caption under each box
- **packed**: boxes sized to the thumbnail, rows packed tightly

Bad Images
----------
Files on the configured bad-image list are not suitable for inline display.
A widget created with ``set_hide_bad_images(True)`` silently drops them when
rendering; they still count as added.

Usage Example
-------------
    >>> from relatedimages.core.gallery import gallery_registry
    >>> make_gallery = gallery_registry.factory("traditional", config)
    >>> gallery = make_gallery()
    >>> gallery.add(make_title(NS_FILE, "Sparrow.jpg"))
    >>> html = gallery.to_html()
"""

import hashlib
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from urllib.parse import quote

from .config import RelatedImagesConfig
from .markup import element, page_url, tags, void_element
from .titles import Title

logger = logging.getLogger(__name__)


def file_url(filename: str, upload_path: str) -> str:
    """Build the URL of an uploaded file.

    Uploads are spread over a two-level directory tree named after the first
    hex digits of the md5 of the file name, e.g. ``/images/a/ab/Sparrow.jpg``.

    Args:
        filename: File name in db key form
        upload_path: Base URL of uploaded files

    Returns:
        URL of the original file
    """
    digest = hashlib.md5(filename.encode("utf-8")).hexdigest()
    return f"{upload_path.rstrip('/')}/{digest[0]}/{digest[:2]}/{quote(filename)}"


class ImageGalleryBase(ABC):
    """Abstract base class for gallery widgets.

    Attributes
    ----------
    mode : str
        Registry name of the layout
    description : str
        Short description of the layout
    config : RelatedImagesConfig
        Supplies thumbnail size, URL templates and the bad-image list
    """

    mode: str = "base"
    description: str = "Base class for gallery widgets"

    def __init__(self, config: RelatedImagesConfig) -> None:
        self.config = config
        self.widths = config.gallery_image_width
        self.heights = config.gallery_image_height
        self._images: list[tuple[Title, str]] = []
        self._hide_bad_images = False
        self._bad_images = frozenset(config.bad_images)

    def add(self, title: Title, caption: str = "") -> None:
        """Append a file to the gallery.

        Args:
            title: File title
            caption: Optional caption text shown under the thumbnail
        """
        self._images.append((title, caption))

    def set_hide_bad_images(self, hide: bool = True) -> None:
        self._hide_bad_images = hide

    def is_bad_image(self, title: Title) -> bool:
        return title.dbkey in self._bad_images

    def count(self) -> int:
        """Number of files added, including ones that will be hidden."""
        return len(self._images)

    def is_empty(self) -> bool:
        return not self._images

    def visible_images(self) -> list[tuple[Title, str]]:
        """Files that will actually be rendered."""
        if not self._hide_bad_images:
            return list(self._images)
        visible = [(t, c) for t, c in self._images if not self.is_bad_image(t)]
        hidden = len(self._images) - len(visible)
        if hidden:
            logger.debug(f"Hid {hidden} bad image(s) from gallery")
        return visible

    def thumbnail(self, title: Title, box_width: int | None = None) -> str:
        """Render the link + ``<img>`` for one file."""
        img = void_element(
            "img",
            {
                "src": file_url(title.dbkey, self.config.upload_path),
                "alt": title.text,
                "decoding": "async",
                "loading": "lazy",
                "width": str(box_width) if box_width else None,
                "height": str(self.heights),
            },
        )
        return tags(
            "a",
            {
                "href": page_url(title, self.config.article_path),
                "class": "mw-file-description",
                "title": title.text,
            },
            img,
        )

    @abstractmethod
    def to_html(self) -> str:
        """Render the gallery.

        Returns
        -------
        str
            HTML fragment (empty ``<ul>`` if no visible images)
        """
        pass


class TraditionalImageGallery(ImageGalleryBase):
    """Grid of fixed-size boxes with the caption below each thumbnail."""

    mode = "traditional"
    description = "Fixed-size thumbnail boxes in a grid"

    # Padding around the thumbnail inside a box, in pixels.
    THUMB_PADDING = 30
    GB_PADDING = 5

    def to_html(self) -> str:
        box_width = self.widths + self.THUMB_PADDING
        items = []
        for title, caption in self.visible_images():
            thumb = tags(
                "div",
                {
                    "class": "thumb",
                    "style": f"width: {box_width}px; height: {self.heights + self.THUMB_PADDING}px;",
                },
                self.thumbnail(title, self.widths),
            )
            text = element("div", {"class": "gallerytext"}, caption)
            items.append(
                tags(
                    "li",
                    {"class": "gallerybox", "style": f"width: {box_width + self.GB_PADDING}px"},
                    thumb + text,
                )
            )

        return tags("ul", {"class": "gallery mw-gallery-traditional"}, "\n".join(items))


class PackedImageGallery(ImageGalleryBase):
    """Rows of thumbnails scaled to a common height, without fixed boxes."""

    mode = "packed"
    description = "Thumbnails packed in rows of equal height"

    def to_html(self) -> str:
        items = []
        for title, caption in self.visible_images():
            thumb = tags("div", {"class": "thumb"}, self.thumbnail(title))
            text = element("div", {"class": "gallerytext"}, caption)
            items.append(tags("li", {"class": "gallerybox"}, thumb + text))

        return tags("ul", {"class": "gallery mw-gallery-packed"}, "\n".join(items))


class GalleryRegistry:
    """Registry of gallery widget classes, keyed by mode name."""

    def __init__(self) -> None:
        self._galleries: dict[str, type[ImageGalleryBase]] = {}

    def register(self, gallery_class: type[ImageGalleryBase]) -> None:
        """Register a gallery widget class under its ``mode`` name."""
        mode = gallery_class.mode

        if mode in self._galleries:
            logger.warning(f"Gallery mode '{mode}' is already registered, overwriting")

        self._galleries[mode] = gallery_class
        logger.info(f"Registered gallery mode: {mode}")

    def instantiate(self, mode: str, config: RelatedImagesConfig) -> ImageGalleryBase:
        """Create a new, empty gallery widget.

        Args:
            mode: Registered gallery mode
            config: Configuration object

        Returns
        -------
        ImageGalleryBase
            New gallery widget

        Raises
        ------
        KeyError
            If mode is not registered
        """
        if mode not in self._galleries:
            available = ", ".join(self.list_available())
            raise KeyError(f"Gallery mode '{mode}' not found. Available modes: {available}")

        return self._galleries[mode](config)

    def factory(self, mode: str, config: RelatedImagesConfig) -> Callable[[], ImageGalleryBase]:
        """Select a gallery mode once and return a constructor for it.

        Raises
        ------
        KeyError
            If mode is not registered
        """
        # Fail at startup rather than on the first request.
        self.instantiate(mode, config)
        logger.info(f"Using gallery mode: {mode}")
        return lambda: self.instantiate(mode, config)

    def list_available(self) -> list[str]:
        return list(self._galleries.keys())


# Global gallery registry instance
gallery_registry = GalleryRegistry()
gallery_registry.register(TraditionalImageGallery)
gallery_registry.register(PackedImageGallery)
