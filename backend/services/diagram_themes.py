"""Diagram theme palettes and shape styles

Each ThemeId maps to one DiagramTheme: an ordered concept palette (cycled
when there are more concepts than colors), title/background/text colors and
a ShapeStyle (corner class + stroke weight).

Classic uses the host page's CSS theme variables so the diagram follows the
light/dark theme of whatever surface it is injected into.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from models.diagram import ThemeId


class CornerStyle(str, Enum):
    SHARP = "sharp"
    MEDIUM = "medium"
    PILL = "pill"


class StrokeWeight(str, Enum):
    THIN = "thin"
    MEDIUM = "medium"
    BOLD = "bold"


STROKE_WIDTHS = {
    StrokeWeight.THIN: 1,
    StrokeWeight.MEDIUM: 2,
    StrokeWeight.BOLD: 3,
}


@dataclass(frozen=True)
class ShapeStyle:
    corner: CornerStyle
    stroke: StrokeWeight

    @property
    def stroke_width(self) -> int:
        return STROKE_WIDTHS[self.stroke]

    def corner_radius(self, height: float) -> float:
        """Corner radius for a box of the given height."""
        if self.corner == CornerStyle.SHARP:
            return 0
        if self.corner == CornerStyle.PILL:
            return round(height / 2, 1)
        return 8


@dataclass(frozen=True)
class DiagramTheme:
    """Colors and shape style for one theme."""
    id: ThemeId
    palette: Tuple[str, ...]
    title_fill: str
    title_text: str
    box_text: str
    connector: str
    background: Optional[str]   # None = transparent
    stroke: str
    shape: ShapeStyle

    def color_for(self, index: int) -> str:
        """Palette color for the concept at index (cycles)."""
        return self.palette[index % len(self.palette)]


THEMES: Dict[ThemeId, DiagramTheme] = {
    ThemeId.CLASSIC: DiagramTheme(
        id=ThemeId.CLASSIC,
        palette=(
            "hsl(var(--secondary))",
            "hsl(var(--accent))",
            "hsl(var(--muted))",
        ),
        title_fill="hsl(var(--primary))",
        title_text="hsl(var(--primary-foreground))",
        box_text="hsl(var(--foreground))",
        connector="hsl(var(--foreground))",
        background="hsl(var(--background))",
        stroke="hsl(var(--border))",
        shape=ShapeStyle(CornerStyle.MEDIUM, StrokeWeight.MEDIUM),
    ),
    ThemeId.MODERN: DiagramTheme(
        id=ThemeId.MODERN,
        palette=("#6366f1", "#8b5cf6", "#0ea5e9", "#14b8a6", "#f97316", "#ec4899"),
        title_fill="#1e293b",
        title_text="#f1f5f9",
        box_text="#ffffff",
        connector="#64748b",
        background="#f8fafc",
        stroke="#e2e8f0",
        shape=ShapeStyle(CornerStyle.MEDIUM, StrokeWeight.THIN),
    ),
    ThemeId.MINIMALIST: DiagramTheme(
        id=ThemeId.MINIMALIST,
        palette=("#ffffff",),
        title_fill="#111827",
        title_text="#ffffff",
        box_text="#111827",
        connector="#9ca3af",
        background=None,
        stroke="#111827",
        shape=ShapeStyle(CornerStyle.SHARP, StrokeWeight.THIN),
    ),
    ThemeId.COLORFUL: DiagramTheme(
        id=ThemeId.COLORFUL,
        palette=("#ef4444", "#f97316", "#eab308", "#22c55e", "#3b82f6", "#8b5cf6"),
        title_fill="#1f2937",
        title_text="#ffffff",
        box_text="#ffffff",
        connector="#374151",
        background="#ffffff",
        stroke="#ffffff",
        shape=ShapeStyle(CornerStyle.PILL, StrokeWeight.MEDIUM),
    ),
    ThemeId.FLOW: DiagramTheme(
        id=ThemeId.FLOW,
        palette=("#0ea5e9", "#06b6d4", "#14b8a6", "#0d9488", "#0891b2", "#0284c7"),
        title_fill="#0c4a6e",
        title_text="#f0f9ff",
        box_text="#ffffff",
        connector="#0369a1",
        background="#f0f9ff",
        stroke="#bae6fd",
        shape=ShapeStyle(CornerStyle.PILL, StrokeWeight.BOLD),
    ),
    ThemeId.NETWORK: DiagramTheme(
        id=ThemeId.NETWORK,
        palette=("#22c55e", "#16a34a", "#84cc16", "#10b981", "#65a30d", "#15803d"),
        title_fill="#052e16",
        title_text="#dcfce7",
        box_text="#052e16",
        connector="#94a3b8",
        background="#1e293b",
        stroke="#f1f5f9",
        shape=ShapeStyle(CornerStyle.MEDIUM, StrokeWeight.THIN),
    ),
    ThemeId.PROCESS: DiagramTheme(
        id=ThemeId.PROCESS,
        palette=("#f97316", "#fb923c", "#f59e0b", "#dc2626", "#ea580c", "#d97706"),
        title_fill="#431407",
        title_text="#fff7ed",
        box_text="#ffffff",
        connector="#9a3412",
        background="#fff7ed",
        stroke="#7c2d12",
        shape=ShapeStyle(CornerStyle.SHARP, StrokeWeight.BOLD),
    ),
}


def get_theme(theme: Optional[str]) -> DiagramTheme:
    """Resolve a theme id (any case) to its DiagramTheme, Classic if unknown."""
    return THEMES[ThemeId.resolve(theme)]
