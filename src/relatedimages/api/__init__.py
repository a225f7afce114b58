"""RelatedImages — FastAPI HTTP layer.

Modules
-------
main
    FastAPI application serving ``Special:SubcatImagesGallery`` and the
    ``main()`` CLI entry point.
"""
