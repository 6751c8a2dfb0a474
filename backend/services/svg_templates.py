"""SVG Diagram Synthesizer

Deterministic fallback diagrams: (title, concepts, theme) -> SVG string.
Used when the LLM diagram path fails validation, and directly by callers
that already have a concept list.

=============================================================================
RENDERING RULES
=============================================================================

1. TEXT
   - Title, concept name and description are cleaned, then shortened to
     their own limits (20 / 24 / 48 chars) with a trailing ellipsis
   - Lines are packed greedily by word; a single word longer than the line
     budget is broken mid-word
   - Line budget: box inner width / (font size * 0.55)
   - When a box has fewer lines than the text needs, the last line is
     shortened with an ellipsis. The description always gets one line
   - Everything is XML-escaped before it is embedded

2. STRUCTURE
   <svg width height viewBox xmlns>
     <defs> one arrow marker </defs>
     background rect (omitted for transparent themes)
     connectors (drawn first so boxes sit on top)
     title box
     <g class="concept"> per concept
   </svg>

3. PURITY
   - Same input, same bytes: no randomness, no timestamps, no I/O
   - Never raises; bad input degrades to fewer or shorter labels
=============================================================================
"""
import html
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from models.diagram import Concept, LayoutKind
from services.diagram_layouts import (
    DiagramLayout,
    LayoutNode,
    compute_layout,
    node_id,
)
from services.diagram_themes import DiagramTheme, get_theme
from services.placeholder_assets import PLACEHOLDER_SVG

logger = logging.getLogger(__name__)

ELLIPSIS = "…"
ARROW_ID = "diagram-arrow"

# Anything outside the XML 1.0 Char production (C0 controls, U+FFFE/FFFF, lone surrogates)
_XML_ILLEGAL_RE = re.compile(r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


@dataclass(frozen=True)
class SVGConfig:
    """Configuration for diagram generation."""
    font_family: str = "ui-sans-serif, system-ui, -apple-system, sans-serif"
    title_max_len: int = 20
    name_max_len: int = 24
    description_max_len: int = 48
    font_size_title: int = 13
    char_width_factor: float = 0.55
    line_height: float = 1.2
    node_padding: int = 5


DEFAULT_CONFIG = SVGConfig()


# =============================================================================
# Text utilities
# =============================================================================

def clean_label_text(text: Any) -> str:
    """Remove citation artifacts and markdown, collapse whitespace.

    Strips patterns like [1], (Cited in [1], [2]) and **bold** markers that
    LLM-extracted concepts tend to carry, plus control characters XML cannot
    hold (PDF text is full of them). Control whitespace becomes a space.
    """
    if text is None:
        return ""
    cleaned = str(text)
    cleaned = re.sub(r'\s*\[\d+\]', '', cleaned)
    cleaned = re.sub(r'\s*\(Cited in[^)]*\)', '', cleaned)
    cleaned = re.sub(r'\*\*', '', cleaned)
    cleaned = re.sub(r'\s*\(\s*\)', '', cleaned)
    cleaned = _XML_ILLEGAL_RE.sub('', re.sub(r'\s', ' ', cleaned))
    return re.sub(r'\s+', ' ', cleaned).strip()


def shorten(text: str, max_len: int) -> str:
    """Cut text to at most max_len characters, ending in an ellipsis when cut."""
    if len(text) <= max_len:
        return text
    if max_len <= 1:
        return ELLIPSIS
    return text[:max_len - 1].rstrip() + ELLIPSIS


def escape_svg_text(text: str) -> str:
    """Escape text for safe embedding in SVG markup."""
    return html.escape(_XML_ILLEGAL_RE.sub("", text or ""), quote=True)


def chars_for_width(width: float, font_size: float,
                    factor: float = DEFAULT_CONFIG.char_width_factor) -> int:
    """Approximate number of characters that fit in `width` at `font_size`."""
    return max(1, int(width // (font_size * factor)))


def wrap_text(text: str, max_chars: int, max_lines: Optional[int] = None) -> List[str]:
    """Greedy word wrap. Words longer than max_chars are broken mid-word.

    With max_lines, overflow is folded into the last kept line, which is
    then shortened with an ellipsis.
    """
    max_chars = max(1, max_chars)
    lines: List[str] = []
    current = ""
    for word in (text or "").split():
        while len(word) > max_chars:
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:max_chars])
            word = word[max_chars:]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)

    if max_lines is not None and len(lines) > max(1, max_lines):
        keep = max(1, max_lines)
        kept = lines[:keep]
        kept[-1] = shorten(f"{kept[-1]} {lines[keep]}", max_chars)
        lines = kept
    return lines


def fit_label(name: str, description: str, width: float, height: float,
              name_font: float, desc_font: float,
              config: SVGConfig = DEFAULT_CONFIG) -> Tuple[List[str], List[str]]:
    """Split name and description into lines that fit a box.

    The name gets two lines only when a description line still fits below
    them; the description takes whatever height is left (at least one line).
    """
    inner_w = width - 2 * config.node_padding
    available = height - 2 * config.node_padding
    name_lh = name_font * config.line_height
    desc_lh = desc_font * config.line_height

    name_max = 2 if available >= 2 * name_lh + desc_lh else 1
    name_lines = wrap_text(name, chars_for_width(inner_w, name_font, config.char_width_factor), name_max)

    remaining = available - len(name_lines) * name_lh
    desc_max = max(1, int(remaining // desc_lh))
    desc_lines = wrap_text(description, chars_for_width(inner_w, desc_font, config.char_width_factor), desc_max)
    return name_lines, desc_lines


def _num(value: float) -> str:
    """Compact, stable number formatting for attributes."""
    value = round(value, 1)
    if value == int(value):
        return str(int(value))
    return f"{value:.1f}"


# =============================================================================
# Input coercion
# =============================================================================

def coerce_concept(item: Any) -> Concept:
    """Build a Concept from a Concept, a mapping, an object or anything else."""
    if isinstance(item, Concept):
        return item
    if isinstance(item, Mapping):
        name, description = item.get("name"), item.get("description")
    elif hasattr(item, "name"):
        name, description = getattr(item, "name", ""), getattr(item, "description", "")
    else:
        name, description = item, ""
    return Concept(
        name="" if name is None else str(name),
        description="" if description is None else str(description),
    )


def _coerce_concepts(concepts: Any) -> List[Concept]:
    if concepts is None or isinstance(concepts, (str, bytes)) or isinstance(concepts, Mapping):
        return []
    try:
        items = list(concepts)
    except TypeError:
        return []
    return [coerce_concept(item) for item in items]


# =============================================================================
# Plan
# =============================================================================

@dataclass(frozen=True)
class DiagramPlan:
    """Everything needed to render: shortened text, theme and geometry."""
    title: str
    concepts: Tuple[Concept, ...]
    theme: DiagramTheme
    layout: DiagramLayout

    @property
    def kind(self) -> LayoutKind:
        return self.layout.kind

    @property
    def width(self) -> int:
        return self.layout.width

    @property
    def height(self) -> int:
        return self.layout.height


def plan_diagram(title: Any, concepts: Iterable[Any], theme: Optional[str] = None,
                 config: SVGConfig = DEFAULT_CONFIG) -> DiagramPlan:
    """Shorten every text field, pick the theme and compute the layout."""
    items = _coerce_concepts(concepts)
    short = tuple(
        Concept(
            name=shorten(clean_label_text(c.name), config.name_max_len),
            description=shorten(clean_label_text(c.description), config.description_max_len),
        )
        for c in items
    )
    return DiagramPlan(
        title=shorten(clean_label_text(title), config.title_max_len),
        concepts=short,
        theme=get_theme(theme),
        layout=compute_layout(len(short)),
    )


# =============================================================================
# Rendering
# =============================================================================

class DiagramSVGBuilder:
    """Renders a DiagramPlan into SVG markup."""

    def __init__(self, plan: DiagramPlan, config: SVGConfig = DEFAULT_CONFIG):
        self.plan = plan
        self.config = config
        self.theme = plan.theme
        self.layout = plan.layout

    def _svg_header(self) -> str:
        w, h = self.layout.width, self.layout.height
        label = escape_svg_text(self.plan.title)
        return (
            f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
            f'xmlns="http://www.w3.org/2000/svg" role="img" aria-label="{label}" '
            f'font-family="{self.config.font_family}">\n'
        )

    def _defs(self) -> str:
        return (
            '  <defs>\n'
            f'    <marker id="{ARROW_ID}" viewBox="0 0 10 10" refX="10" refY="5" '
            'markerWidth="8" markerHeight="8" markerUnits="userSpaceOnUse" orient="auto">\n'
            f'      <path d="M 0 0 L 10 5 L 0 10 z" fill="{self.theme.connector}"/>\n'
            '    </marker>\n'
            '  </defs>\n'
        )

    def _background(self) -> str:
        if not self.theme.background:
            return ""
        return f'  <rect width="100%" height="100%" fill="{self.theme.background}"/>\n'

    def _rect(self, box: LayoutNode, fill: str, stroke: str, stroke_width: int, indent: str = "  ") -> str:
        rx = self.theme.shape.corner_radius(box.height)
        return (
            f'{indent}<rect x="{_num(box.left)}" y="{_num(box.top)}" '
            f'width="{_num(box.width)}" height="{_num(box.height)}" rx="{_num(rx)}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>\n'
        )

    def _text_element(self, x: float, y: float, text: str, font_size: float,
                      color: str, bold: bool = False, indent: str = "  ") -> str:
        weight = "600" if bold else "400"
        return (
            f'{indent}<text x="{_num(x)}" y="{_num(y)}" font-size="{_num(font_size)}" '
            f'fill="{color}" text-anchor="middle" font-weight="{weight}">'
            f'{escape_svg_text(text)}</text>\n'
        )

    def _text_block(self, box: LayoutNode, blocks: List[Tuple[List[str], float, bool]],
                    color: str, indent: str) -> str:
        """Vertically centered lines; blocks are (lines, font_size, bold)."""
        lh = self.config.line_height
        total = sum(len(lines) * size * lh for lines, size, _ in blocks)
        line_top = box.top + (box.height - total) / 2
        result = ""
        for lines, size, bold in blocks:
            for line in lines:
                baseline = line_top + size * lh * 0.8
                result += self._text_element(box.x, baseline, line, size, color, bold, indent)
                line_top += size * lh
        return result

    def _title_box(self) -> str:
        box = self.layout.title
        size = self.config.font_size_title
        inner_w = box.width - 2 * self.config.node_padding
        max_lines = max(1, int((box.height - 2 * self.config.node_padding) // (size * self.config.line_height)))
        lines = wrap_text(self.plan.title, chars_for_width(inner_w, size, self.config.char_width_factor), max_lines)
        result = '  <g class="diagram-title">\n'
        result += self._rect(box, self.theme.title_fill, self.theme.stroke,
                             self.theme.shape.stroke_width + 1, indent="    ")
        result += self._text_block(box, [(lines, size, True)], self.theme.title_text, indent="    ")
        result += '  </g>\n'
        return result

    def _concept_box(self, index: int, concept: Concept) -> str:
        box = self.layout.nodes[index]
        emphasized = index in self.layout.emphasized
        name_font = self.layout.name_font + (1 if emphasized else 0)
        desc_font = self.layout.desc_font
        name_lines, desc_lines = fit_label(concept.name, concept.description, box.width, box.height,
                                           name_font, desc_font, self.config)
        stroke_width = self.theme.shape.stroke_width + (1 if emphasized else 0)

        result = f'  <g class="concept" data-index="{index}">\n'
        result += self._rect(box, self.theme.color_for(index), self.theme.stroke, stroke_width, indent="    ")
        result += self._text_block(
            box,
            [(name_lines, name_font, True), (desc_lines, desc_font, False)],
            self.theme.box_text,
            indent="    ",
        )
        result += '  </g>\n'
        return result

    @staticmethod
    def _edge_point(box: LayoutNode, toward_x: float, toward_y: float) -> Tuple[float, float]:
        """Where the segment from the box center to (toward_x, toward_y) leaves the box."""
        dx, dy = toward_x - box.x, toward_y - box.y
        if dx == 0 and dy == 0:
            return box.x, box.y
        tx = (box.width / 2) / abs(dx) if dx else math.inf
        ty = (box.height / 2) / abs(dy) if dy else math.inf
        t = min(tx, ty, 1.0)
        return box.x + dx * t, box.y + dy * t

    def _connector(self, child_index: int, parent_id: str, route: str) -> str:
        child = self.layout.nodes[child_index]
        parent = self.layout.node(parent_id)
        if route == "elbow":
            spine_x = parent.left + 8
            d = f"M {_num(spine_x)} {_num(parent.bottom)} V {_num(child.y)} H {_num(child.left)}"
        else:
            x1, y1 = self._edge_point(parent, child.x, child.y)
            x2, y2 = self._edge_point(child, parent.x, parent.y)
            d = f"M {_num(x1)} {_num(y1)} L {_num(x2)} {_num(y2)}"
        return (
            f'  <path class="connector" data-from="{parent_id}" data-to="{node_id(child_index)}" '
            f'd="{d}" fill="none" stroke="{self.theme.connector}" '
            f'stroke-width="{self.theme.shape.stroke_width}" marker-end="url(#{ARROW_ID})"/>\n'
        )

    def build(self) -> str:
        svg = self._svg_header()
        svg += self._defs()
        svg += self._background()
        for connector in self.layout.connectors:
            svg += self._connector(connector.child, connector.parent, connector.route)
        svg += self._title_box()
        for index, concept in enumerate(self.plan.concepts):
            svg += self._concept_box(index, concept)
        svg += "</svg>"
        return svg


def render_plan(plan: DiagramPlan, config: SVGConfig = DEFAULT_CONFIG) -> str:
    return DiagramSVGBuilder(plan, config).build()


def synthesize_diagram(title: Any, concepts: Iterable[Any], theme: Optional[str] = "Classic") -> str:
    """Build a complete SVG diagram for a title and a list of concepts.

    This is the main entry point for deterministic diagram generation.
    Unknown themes render as Classic; an empty concept list renders the
    title alone.
    """
    try:
        return render_plan(plan_diagram(title, concepts, theme))
    except Exception as e:
        # Last line of defense; the caller always gets markup.
        logger.error(f"[Diagram] Synthesis failed, using placeholder: {type(e).__name__}: {e}")
        return PLACEHOLDER_SVG
