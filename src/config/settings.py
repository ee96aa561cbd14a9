"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MAPDOWN_ prefix (e.g., MAPDOWN_HEADER_LEVELS=3).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MAPDOWN_ prefix.

    Examples:
        MAPDOWN_DEFAULT_STYLE=doku
        MAPDOWN_HEADER_LEVELS=3
        MAPDOWN_REFERENCES_PER_SLIDE=5
    """

    model_config = SettingsConfigDict(
        env_prefix="MAPDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Reader configuration
    content_file: str = Field(
        default="content.json",
        description="Name of the JSON member holding the sheets inside the .xmind archive",
    )

    # Rendering configuration
    default_style: str = Field(
        default="md",
        description="Output dialect used when none is given on the command line",
    )

    header_levels: int = Field(
        default=2,
        ge=0,
        description="Number of outline levels rendered as headings (0 renders everything as a list)",
    )

    max_depth: int = Field(
        default=200,
        gt=0,
        le=250,
        description="Outline depth beyond which subtrees are not descended (kept below the interpreter recursion limit)",
    )

    styles_dir: Optional[str] = Field(
        default=None,
        description="Directory holding custom style YAML files (defaults to the packaged styles)",
    )

    # Slide configuration
    highlight_marker: str = Field(
        default="tag-red",
        description="Marker id that highlights a node (or a whole slide when set on its root)",
    )

    highlight_class: str = Field(
        default="highlight",
        description="Wrap class used for highlighted slide content",
    )

    background_placeholder: str = Field(
        default=":1px.png",
        description="Background asset written in a slide header until a background directive replaces it",
    )

    map_title: str = Field(
        default="Presentation outline",
        description="Heading of the presentation map slides",
    )

    # Reference configuration
    reference_format: str = Field(
        default="long",
        description="Default PubMed rendering format of the bibliography",
    )

    references_per_slide: int = Field(
        default=4,
        gt=0,
        description="Number of references shown on each paginated reference slide",
    )

    references_title: str = Field(
        default="References",
        description="Heading of the bibliography section in the linear document",
    )

    bibliography_title: str = Field(
        default="Bibliography",
        description="Heading of the bibliography slide and its presentation map entry",
    )

    # Output configuration
    deck_infix: str = Field(
        default="_revealjs",
        description="Infix inserted before the extension of the slide deck file name",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
