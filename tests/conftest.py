"""Shared pytest fixtures for RelatedImages tests."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from relatedimages.core.config import RelatedImagesConfig
from relatedimages.core.database import CategoryStore
from relatedimages.core.gallery import gallery_registry
from relatedimages.core.subcat_gallery import SubcatImagesGallery
from relatedimages.core.titles import NS_CATEGORY, NS_FILE, NS_MAIN


class WikiBuilder:
    """Writes pages and category links into a test database."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.store = CategoryStore(db_path, replica=False)
        self.store.initialize()

    def add_category(self, name: str, parents: tuple[str, ...] = ()) -> int:
        page_id = self.store.add_page(NS_CATEGORY, name)
        for parent in parents:
            self.store.add_category_link(page_id, parent, name.upper())
        return page_id

    def add_file(self, name: str, categories: dict[str, str | None]) -> int:
        """Add a file page. ``categories`` maps category -> sort key (None = name)."""
        page_id = self.store.add_page(NS_FILE, name)
        for category, sortkey in categories.items():
            self.store.add_category_link(page_id, category, sortkey or name.upper())
        return page_id

    def add_article(self, name: str, categories: tuple[str, ...] = ()) -> int:
        page_id = self.store.add_page(NS_MAIN, name)
        for category in categories:
            self.store.add_category_link(page_id, category, name.upper())
        return page_id


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def wiki(temp_dir: Path) -> WikiBuilder:
    """Empty wiki database with the schema created."""
    return WikiBuilder(temp_dir / "wiki.sqlite")


@pytest.fixture
def seeded_wiki(wiki: WikiBuilder) -> WikiBuilder:
    """Wiki database with a small category tree.

    Category:Animals
        Category:Birds   -> F1.jpg, F2.jpg
        Category:Cats    -> F2.jpg, F3.jpg
        Category:Dogs    -> F4.jpg
        Lion (article, not a subcategory)
    Category:Plants
        Category:Trees   -> Oak (article only)
    Category:Empty
    Category:Water
        Category:Fish    -> Zander.jpg (sort key A), Carp.jpg (sort key B)
    """
    for top in ("Animals", "Plants", "Empty", "Water"):
        wiki.add_category(top)

    wiki.add_category("Birds", parents=("Animals",))
    wiki.add_category("Cats", parents=("Animals",))
    wiki.add_category("Dogs", parents=("Animals",))
    wiki.add_category("Trees", parents=("Plants",))
    wiki.add_category("Fish", parents=("Water",))

    wiki.add_file("F1.jpg", {"Birds": None})
    wiki.add_file("F2.jpg", {"Birds": None, "Cats": None})
    wiki.add_file("F3.jpg", {"Cats": None})
    wiki.add_file("F4.jpg", {"Dogs": None})
    wiki.add_article("Lion", ("Animals",))
    wiki.add_article("Oak", ("Trees",))
    wiki.add_file("Zander.jpg", {"Fish": "A"})
    wiki.add_file("Carp.jpg", {"Fish": "B"})

    return wiki


@pytest.fixture
def test_config(seeded_wiki: WikiBuilder) -> RelatedImagesConfig:
    """Create a test configuration pointing at the seeded database.

    Returns:
        RelatedImagesConfig instance for testing
    """
    return RelatedImagesConfig(
        _env_file=None,
        database_path=seeded_wiki.db_path,
        max_subcat_images=200,
        gallery_mode="traditional",
        bad_images=[],
        language="en",
    )


@pytest.fixture
def replica_store(seeded_wiki: WikiBuilder) -> CategoryStore:
    """Read-only store on the seeded database."""
    return CategoryStore(seeded_wiki.db_path)


@pytest.fixture
def make_handler(
    replica_store: CategoryStore, test_config: RelatedImagesConfig
) -> Callable[..., SubcatImagesGallery]:
    """Factory building a handler on the seeded database with a given cap."""

    def _make(max_images: int = 200, **config_overrides) -> SubcatImagesGallery:
        cfg = test_config.model_copy(update=config_overrides)
        return SubcatImagesGallery(
            replica_store,
            max_images=max_images,
            gallery_factory=gallery_registry.factory(cfg.gallery_mode, cfg),
            article_path=cfg.article_path,
        )

    return _make


@pytest.fixture
def test_client(monkeypatch, test_config: RelatedImagesConfig) -> Generator[TestClient, None, None]:
    """FastAPI TestClient running the app against the seeded database."""
    from relatedimages.api import main

    monkeypatch.setattr(main, "config", test_config)
    with TestClient(main.app) as client:
        yield client
