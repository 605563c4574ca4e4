from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_PADDING = 5
DEFAULT_FONT_FAMILY = "sans-serif"


class ConvertOptions(BaseModel):
    padding: float = Field(default=DEFAULT_PADDING, description="Uniform margin around the logical canvas")
    font_family: str = Field(default=DEFAULT_FONT_FAMILY, alias="fontFamily")
    font_url: str = Field(default="", alias="fontURL", description="Font to fetch and register before measuring")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "padding": 5,
                "fontFamily": "Balsamiq Sans",
                "fontURL": "https://example.com/fonts/BalsamiqSans-Regular.ttf",
            }
        },
    }


__all__ = ["ConvertOptions", "DEFAULT_FONT_FAMILY", "DEFAULT_PADDING"]
