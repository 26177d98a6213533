"""Static file-type legend shared with the rendering side."""

from pydantic import BaseModel, Field

FILE_TYPES: dict[str, str] = {
    "tsx": "#4FC7FF",
    "jsx": "#54B9D1",
    "ts": "#3B86CB",
    "js": "#d6cb2d",
    "json": "#cf8f30",
    "css": "#e6659a",
    "html": "#e34c26",
    "other": "#B86542",
}

# Displayed upper-case in the legend
CAPITALIZE_KEYS = frozenset({"tsx", "jsx", "other"})


class LegendEntry(BaseModel):
    """One legend swatch."""

    extension: str = Field(description="File extension group")
    color: str = Field(description="Hex colour")
    capitalize: bool = Field(default=False, description="Render the extension upper-case")


def legend() -> list[LegendEntry]:
    """Legend entries in display order."""
    return [
        LegendEntry(extension=ext, color=color, capitalize=ext in CAPITALIZE_KEYS)
        for ext, color in FILE_TYPES.items()
    ]


def color_for(group: str) -> str:
    """Colour for a node group, falling back to 'other'."""
    return FILE_TYPES.get(group, FILE_TYPES["other"])
