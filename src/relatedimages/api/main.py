"""RelatedImages — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the routes, and the ``main()`` CLI function that
launches the uvicorn server.

Architecture
------------
- **Configuration** is read once, at startup, from
  :data:`~relatedimages.core.config.config`.
- **The handler** (:class:`~relatedimages.core.subcat_gallery.SubcatImagesGallery`)
  is built in the lifespan hook with a replica
  :class:`~relatedimages.core.database.CategoryStore` and the configured
  gallery widget, and kept on ``app.state``.
- **Responses** are raw ``HTMLResponse`` fragments meant to be inserted into
  a category page by the caller.  No template engine is needed.

Endpoints
---------
========  ===============================================  ==========================
Method    Path                                             Purpose
========  ===============================================  ==========================
GET       ``/wiki/Special:SubcatImagesGallery``            404, no category given
GET       ``/wiki/Special:SubcatImagesGallery/{category}``  Gallery of subcategory images
GET       ``/api/health``                                  Liveness and version
========  ===============================================  ==========================

Usage
-----
CLI (installed entry point)::

    relatedimages

Direct invocation::

    python -m relatedimages.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse

from relatedimages import __version__
from relatedimages.core.config import RelatedImagesConfig, config
from relatedimages.core.database import CategoryStore
from relatedimages.core.gallery import gallery_registry
from relatedimages.core.output import OutputPage
from relatedimages.core.subcat_gallery import SubcatImagesGallery

logger = logging.getLogger(__name__)

SPECIAL_PAGE_PATH = "/wiki/Special:SubcatImagesGallery"


def create_handler(cfg: RelatedImagesConfig) -> SubcatImagesGallery:
    """Build the special page handler from configuration.

    Args:
        cfg: Configuration to read the database path, image cap and
            gallery mode from.

    Returns:
        Ready-to-use handler.

    Raises:
        KeyError: If ``cfg.gallery_mode`` is not a registered gallery mode.
    """
    store = CategoryStore(cfg.database_path, replica=True)
    return SubcatImagesGallery(
        store,
        max_images=cfg.max_subcat_images,
        gallery_factory=gallery_registry.factory(cfg.gallery_mode, cfg),
        article_path=cfg.article_path,
    )


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the handler on startup and store it on ``app.state``.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.subcat_gallery = create_handler(config)
    app.state.language = config.language
    logger.info(
        f"SubcatImagesGallery ready (database={config.database_path}, "
        f"max_images={config.max_subcat_images}, mode={config.gallery_mode})."
    )

    yield


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="RelatedImages",
    description="Gallery of images from subcategories of a wiki category.",
    version=__version__,
    lifespan=lifespan,
)


def get_handler(request: Request) -> SubcatImagesGallery:
    """Dependency returning the handler built at startup."""
    return request.app.state.subcat_gallery


def get_output(request: Request) -> OutputPage:
    """Dependency returning a fresh output sink in the configured language."""
    return OutputPage(request.app.state.language)


def _render(handler: SubcatImagesGallery, param: str | None, out: OutputPage) -> HTMLResponse:
    handler.execute(param, out)
    return HTMLResponse(content=out.get_html(), status_code=out.status_code)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get(SPECIAL_PAGE_PATH, response_class=HTMLResponse)
def subcat_images_gallery_index(
    handler: SubcatImagesGallery = Depends(get_handler),
    out: OutputPage = Depends(get_output),
) -> HTMLResponse:
    """Special page called without a category: always 404."""
    return _render(handler, None, out)


@app.get(SPECIAL_PAGE_PATH + "/{category:path}", response_class=HTMLResponse)
def subcat_images_gallery(
    category: str,
    handler: SubcatImagesGallery = Depends(get_handler),
    out: OutputPage = Depends(get_output),
) -> HTMLResponse:
    """Return the gallery of images from subcategories of ``category``.

    The route is synchronous: the store query blocks, so FastAPI runs it in
    its thread pool.

    Args:
        category: Category name without the ``Category:`` prefix.

    Returns:
        HTML fragment with one header and gallery per subcategory, or a
        localized message if the category has no subcategory images.
        Status 404 with the bad title message if the category is invalid or
        does not exist.
    """
    return _render(handler, category, out)


@app.get("/api/health")
async def health() -> dict:
    """Return service liveness and version."""
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~relatedimages.core.config.config`
    (``RELATEDIMAGES_SERVER_HOST`` and ``RELATEDIMAGES_SERVER_PORT``).
    Defaults to ``0.0.0.0:8080``.

    This function is registered as the ``relatedimages`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "relatedimages.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
