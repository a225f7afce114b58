"""Core functionality of the subcategory image gallery.

- **RelatedImagesConfig / config**: Configuration using Pydantic Settings
- **CategoryStore**: Read access to the wiki ``page`` and ``categorylinks`` tables
- **Title helpers**: Normalization and validation of page names
- **Gallery widgets**: Thumbnail layouts and the ``gallery_registry``
- **OutputPage**: Status, messages and HTML collected by a handler
- **SubcatImagesGallery**: The ``Special:SubcatImagesGallery`` handler

Usage Example
-------------
    from relatedimages.core import (
        CategoryStore, OutputPage, SubcatImagesGallery, config, gallery_registry,
    )

    handler = SubcatImagesGallery(
        CategoryStore(config.database_path),
        max_images=config.max_subcat_images,
        gallery_factory=gallery_registry.factory(config.gallery_mode, config),
    )
    out = OutputPage(config.language)
    handler.execute("Animals", out)
    print(out.status_code, out.get_html())
"""

from relatedimages.core.config import RelatedImagesConfig, config
from relatedimages.core.database import CategoryStore, ImageRow
from relatedimages.core.gallery import ImageGalleryBase, gallery_registry
from relatedimages.core.output import OutputPage
from relatedimages.core.subcat_gallery import SubcatImagesGallery
from relatedimages.core.titles import Title, make_title, make_title_safe

__all__ = [
    "CategoryStore",
    "ImageGalleryBase",
    "ImageRow",
    "OutputPage",
    "RelatedImagesConfig",
    "SubcatImagesGallery",
    "Title",
    "config",
    "gallery_registry",
    "make_title",
    "make_title_safe",
]
