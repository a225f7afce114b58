"""RelatedImages - gallery of images from subcategories of a wiki category."""

__version__ = "0.1.0"

from relatedimages.core.config import RelatedImagesConfig, config
from relatedimages.core.gallery import ImageGalleryBase, gallery_registry
from relatedimages.core.subcat_gallery import SubcatImagesGallery

__all__ = [
    "ImageGalleryBase",
    "gallery_registry",
    "RelatedImagesConfig",
    "config",
    "SubcatImagesGallery",
]
