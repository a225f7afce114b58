"""Configuration management for the RelatedImages gallery service.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the RELATEDIMAGES_
prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (RELATEDIMAGES_* prefix)
2. .env file in the project root
3. Default values defined in RelatedImagesConfig

Example .env file:
    RELATEDIMAGES_DATABASE_PATH=/srv/wiki/wiki.sqlite
    RELATEDIMAGES_MAX_SUBCAT_IMAGES=200
    RELATEDIMAGES_GALLERY_MODE=traditional
    RELATEDIMAGES_LANGUAGE=en

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Only the application wiring in ``relatedimages.api.main`` reads it; the request
handler receives the values it needs (image cap, gallery widget) as explicit
constructor arguments.

Usage Example
-------------
    from relatedimages.core.config import config

    print(config.max_subcat_images)
    print(config.database_path)

See Also
--------
- RelatedImagesConfig: Full configuration class documentation
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelatedImagesConfig(BaseSettings):
    """Main configuration for the RelatedImages gallery service.

    Attributes
    ----------
    Gallery Settings:
        max_subcat_images : int
            Maximum number of thumbnails rendered across all subcategories.
            Zero or negative values render no groups at all.
        gallery_mode : str
            Name of the gallery widget (see ``gallery_registry``)
        bad_images : list[str]
            File names (db key form, without namespace) considered unsafe.
            Galleries always hide them.
        gallery_image_width : int
            Thumbnail box width in pixels
        gallery_image_height : int
            Thumbnail box height in pixels

    Wiki Settings:
        database_path : Path
            SQLite database holding the ``page`` and ``categorylinks`` tables
        article_path : str
            URL template for page links, ``$1`` is replaced by the page name
        upload_path : str
            Base URL under which uploaded files are served
        language : str
            Language code for user-facing messages

    Server Settings:
        server_host : str
            Server bind address
        server_port : int
            Server port (1024-65535)

    Examples
    --------
        >>> custom_config = RelatedImagesConfig(
        ...     database_path="/tmp/wiki.sqlite",
        ...     max_subcat_images=50,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RELATEDIMAGES_",
        case_sensitive=False,
    )

    # Gallery settings
    max_subcat_images: int = Field(
        default=200,
        description="Maximum number of thumbnails to add from all subcategories",
    )
    gallery_mode: str = Field(
        default="traditional",
        description="Gallery widget used to render each subcategory (traditional, packed)",
    )
    bad_images: list[str] = Field(
        default_factory=list,
        description="File names that must not be displayed inline",
    )
    gallery_image_width: int = Field(default=120, ge=16, le=1024)
    gallery_image_height: int = Field(default=120, ge=16, le=1024)

    # Wiki settings
    database_path: Path = Field(
        default=Path("wiki.sqlite"),
        description="SQLite database with the page and categorylinks tables",
    )
    article_path: str = Field(
        default="/wiki/$1",
        description="URL template for page links ($1 is replaced by the page name)",
    )
    upload_path: str = Field(
        default="/images",
        description="Base URL of uploaded files",
    )
    language: str = Field(
        default="en",
        description="Language code for user-facing messages",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=8080,
        description="Server port",
        ge=1024,
        le=65535,
    )


# Global configuration instance
# Loads values from environment variables (RELATEDIMAGES_* prefix) and .env file.
config = RelatedImagesConfig()
