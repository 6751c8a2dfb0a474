"""Diagram models: concepts, themes and layout kinds"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ThemeId(str, Enum):
    """Named visual themes a diagram can be drawn in"""
    CLASSIC = "Classic"
    MODERN = "Modern"
    MINIMALIST = "Minimalist"
    COLORFUL = "Colorful"
    FLOW = "Flow"
    NETWORK = "Network"
    PROCESS = "Process"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "ThemeId":
        """Case-insensitive lookup. Unknown or empty ids map to CLASSIC."""
        if isinstance(value, ThemeId):
            return value
        key = str(value or "").strip().lower()
        for theme in cls:
            if theme.value.lower() == key:
                return theme
        return cls.CLASSIC


class LayoutKind(str, Enum):
    """Arrangement used for a given concept count"""
    TITLE_ONLY = "title_only"    # no concepts
    RADIAL = "radial"            # one ring around the title
    RADIAL_LARGE = "radial_large"  # wider ring, taller canvas
    GRID = "grid"                # rows under the title
    DUAL_RING = "dual_ring"      # inner ring + outer ring
    TREE = "tree"                # title -> branches -> leaves


class Concept(BaseModel):
    """
    One idea to visualize.
    Immutable once built; order within a list is meaningful.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Short label, 2-4 words")
    description: str = Field(default="", description="Short phrase, 3-8 words")
