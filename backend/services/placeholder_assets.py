"""Static placeholder assets

Hardcoded SVGs substituted when a generated asset fails validation and no
secondary generator succeeds. The user always sees something.

placeholder_for() picks a themed placeholder by keyword hits in the scene or
diagram description (English and Turkish keywords), so a failed "court
process" scene still shows a small legal-process sketch instead of a blank
box.
"""
import re
from typing import Dict, List, Tuple

PLACEHOLDER_SVG = (
    '<svg width="500" height="300" viewBox="0 0 500 300" xmlns="http://www.w3.org/2000/svg" '
    'fill="hsl(var(--card-foreground))">'
    '<rect width="100%" height="100%" fill="hsl(var(--muted))"/>'
    '<text x="50%" y="50%" dominant-baseline="middle" text-anchor="middle" '
    'font-family="sans-serif" font-size="20px">Visualization unavailable.</text>'
    '</svg>'
)

_ARROW_DEFS = (
    '<defs><marker id="placeholder-arrow" markerWidth="10" markerHeight="10" refX="9" refY="3" orient="auto">'
    '<polygon points="0 0, 10 3, 0 6" fill="hsl(var(--foreground))"/></marker></defs>'
)


def _arrow(x1: int, y1: int, x2: int, y2: int) -> str:
    return (
        f'<path d="M{x1} {y1} L{x2} {y2}" stroke="hsl(var(--foreground))" stroke-width="2" '
        'marker-end="url(#placeholder-arrow)"/>'
    )


def _box(x: int, y: int, w: int, h: int, color: str, label: str, rx: int = 5, size: int = 12) -> str:
    return (
        f'<rect x="{x}" y="{y}" width="{w}" height="{h}" fill="hsl(var(--{color}))" rx="{rx}"/>'
        f'<text x="{x + w // 2}" y="{y + h // 2 + 4}" text-anchor="middle" fill="white" font-size="{size}">{label}</text>'
    )


def _dot(cx: int, cy: int, r: int, color: str, label: str = "", size: int = 12) -> str:
    result = f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="hsl(var(--{color}))"/>'
    if label:
        result += f'<text x="{cx}" y="{cy + 5}" text-anchor="middle" fill="white" font-size="{size}">{label}</text>'
    return result


def _frame(elements: str, caption: str, heading: str) -> str:
    return (
        '<svg width="500" height="300" viewBox="0 0 500 300" xmlns="http://www.w3.org/2000/svg">'
        '<rect width="100%" height="100%" fill="hsl(var(--background))"/>'
        f'{elements}'
        f'<text x="250" y="270" text-anchor="middle" fill="hsl(var(--muted-foreground))" font-size="12">{caption}</text>'
        f'<text x="250" y="30" text-anchor="middle" fill="hsl(var(--foreground))" font-size="14" font-weight="bold">{heading}</text>'
        '</svg>'
    )


# =============================================================================
# Illustration placeholders (scene images)
# =============================================================================

_SPACE = (
    '<circle cx="250" cy="150" r="30" fill="hsl(var(--primary))" opacity="0.8"/>'
    '<text x="250" y="155" text-anchor="middle" fill="white" font-size="12">Sun</text>'
    + _dot(150, 150, 8, "secondary") + _dot(200, 150, 12, "accent")
    + _dot(300, 150, 10, "destructive") + _dot(350, 150, 15, "constructive")
    + '<text x="250" y="220" text-anchor="middle" font-size="14">Solar System</text>'
)

_LEGAL = (
    _ARROW_DEFS
    + _box(50, 100, 80, 40, "primary", "Case") + _arrow(140, 120, 180, 120)
    + _box(190, 100, 80, 40, "secondary", "Court") + _arrow(280, 120, 320, 120)
    + _box(330, 100, 80, 40, "constructive", "Ruling")
)

_EDUCATION = (
    _ARROW_DEFS
    + '<rect x="100" y="80" width="300" height="140" fill="hsl(var(--muted))" stroke="hsl(var(--border))" stroke-width="2" rx="10"/>'
    + _dot(150, 120, 20, "primary", "1") + _dot(250, 120, 20, "secondary", "2") + _dot(350, 120, 20, "accent", "3")
    + '<text x="150" y="160" text-anchor="middle" font-size="10">Learn</text>'
    + '<text x="250" y="160" text-anchor="middle" font-size="10">Practice</text>'
    + '<text x="350" y="160" text-anchor="middle" font-size="10">Assess</text>'
    + _arrow(170, 120, 230, 120) + _arrow(270, 120, 330, 120)
)

_BUSINESS = (
    _ARROW_DEFS
    + '<rect x="50" y="50" width="400" height="200" fill="hsl(var(--muted))" stroke="hsl(var(--border))" stroke-width="2" rx="10"/>'
    + _box(80, 100, 60, 40, "primary", "Start", size=11) + _box(180, 100, 60, 40, "secondary", "Work", size=11)
    + _box(280, 100, 60, 40, "accent", "Result", size=11) + _box(380, 100, 60, 40, "constructive", "Done", size=11)
    + _arrow(150, 120, 170, 120) + _arrow(250, 120, 270, 120) + _arrow(350, 120, 370, 120)
)

_GENERIC_ILLUSTRATION = (
    _ARROW_DEFS
    + '<rect x="100" y="100" width="300" height="100" fill="hsl(var(--muted))" stroke="hsl(var(--border))" stroke-width="2" rx="10"/>'
    + _dot(150, 150, 25, "primary", "?") + _dot(250, 150, 25, "secondary", "!") + _dot(350, 150, 25, "accent", "✓")
    + _arrow(175, 150, 225, 150) + _arrow(275, 150, 325, 150)
)


# =============================================================================
# Diagram placeholders
# =============================================================================

_PROCESS = (
    _ARROW_DEFS
    + _box(70, 120, 80, 60, "primary", "Start", rx=10) + _arrow(160, 150, 190, 150)
    + _box(200, 120, 80, 60, "secondary", "Process", rx=10) + _arrow(290, 150, 320, 150)
    + _box(330, 120, 80, 60, "accent", "Result", rx=10)
)

_HIERARCHY = (
    _ARROW_DEFS
    + _box(200, 50, 100, 50, "primary", "Main Unit", rx=8)
    + _arrow(220, 110, 170, 140) + _arrow(280, 110, 330, 140)
    + _box(120, 150, 80, 40, "secondary", "Sub Unit 1", size=11)
    + _box(300, 150, 80, 40, "secondary", "Sub Unit 2", size=11)
)

_FLOW = (
    _ARROW_DEFS
    + _dot(100, 100, 30, "primary", "Begin") + _arrow(130, 100, 170, 100)
    + '<polygon points="200,80 240,100 200,120 160,100" fill="hsl(var(--secondary))"/>'
    + '<text x="200" y="105" text-anchor="middle" fill="white" font-size="11">Choice?</text>'
    + _arrow(240, 100, 280, 100)
    + '<text x="260" y="95" text-anchor="middle" fill="hsl(var(--foreground))" font-size="10">Yes</text>'
    + _dot(320, 100, 30, "constructive", "End")
    + _arrow(200, 130, 200, 170)
    + '<text x="210" y="150" text-anchor="start" fill="hsl(var(--foreground))" font-size="10">No</text>'
    + _box(160, 180, 80, 40, "destructive", "Repeat", size=11)
)

_COMPARISON = (
    '<rect x="50" y="80" width="150" height="140" fill="hsl(var(--primary))" opacity="0.2" stroke="hsl(var(--primary))" stroke-width="2" rx="10"/>'
    '<text x="125" y="105" text-anchor="middle" fill="hsl(var(--primary))" font-size="14" font-weight="bold">Option A</text>'
    + _dot(100, 140, 15, "primary", "✓", 10) + _dot(150, 140, 15, "primary", "✓", 10)
    + _dot(125, 180, 15, "muted-foreground", "✗", 10)
    + '<rect x="300" y="80" width="150" height="140" fill="hsl(var(--secondary))" opacity="0.2" stroke="hsl(var(--secondary))" stroke-width="2" rx="10"/>'
    '<text x="375" y="105" text-anchor="middle" fill="hsl(var(--secondary))" font-size="14" font-weight="bold">Option B</text>'
    + _dot(350, 140, 15, "secondary", "✓", 10) + _dot(400, 140, 15, "muted-foreground", "✗", 10)
    + _dot(375, 180, 15, "secondary", "✓", 10)
)

_GENERIC_DIAGRAM = (
    _ARROW_DEFS
    + '<rect x="100" y="80" width="300" height="140" fill="hsl(var(--muted))" stroke="hsl(var(--border))" stroke-width="2" rx="15"/>'
    + _dot(180, 150, 25, "primary", "A") + _dot(250, 120, 20, "secondary", "B") + _dot(320, 150, 25, "accent", "C")
    + _arrow(205, 150, 225, 135) + _arrow(270, 125, 295, 140) + _arrow(205, 150, 295, 150)
)


# (keywords, elements, caption) checked in order; first hit wins
PLACEHOLDER_CATEGORIES: Dict[str, List[Tuple[Tuple[str, ...], str, str]]] = {
    "illustration": [
        (("space", "planet", "sun", "uzay", "gezegen", "güneş"), _SPACE, "Space and Planets"),
        (("court", "lawsuit", "legal", "law", "dava", "hukuk", "mahkeme"), _LEGAL, "Legal Process"),
        (("education", "teaching", "lesson", "eğitim", "öğretim", "ders"), _EDUCATION, "Learning Process"),
        (("business", "company", "trade", "şirket", "ticaret"), _BUSINESS, "Business Process"),
    ],
    "diagram": [
        (("process", "step", "stage", "süreç", "adım", "aşama"), _PROCESS, "Process Diagram"),
        (("structure", "organization", "hierarchy", "yapı", "organizasyon", "hiyerarşi"), _HIERARCHY, "Structure Diagram"),
        (("flow", "path", "sequence", "akış", "yol", "sıra"), _FLOW, "Flow Diagram"),
        (("compare", "comparison", "difference", "similar", "karşılaştır", "fark", "benzer"), _COMPARISON, "Comparison Diagram"),
    ],
}

_GENERIC = {
    "illustration": (_GENERIC_ILLUSTRATION, "Educational Visual", "Preparing visual..."),
    "diagram": (_GENERIC_DIAGRAM, "Diagram Outline", "Preparing diagram..."),
}


def placeholder_for(description: str = "", kind: str = "illustration") -> str:
    """Keyword-matched placeholder SVG for a failed scene or diagram."""
    if kind not in _GENERIC:
        return PLACEHOLDER_SVG
    text = (description or "").lower()
    words = set(re.findall(r"\w+", text))
    _, _, heading = _GENERIC[kind]
    for keywords, elements, caption in PLACEHOLDER_CATEGORIES[kind]:
        if any(k in words or (len(k) > 4 and k in text) for k in keywords):
            return _frame(elements, caption, heading)
    elements, caption, heading = _GENERIC[kind]
    return _frame(elements, caption, heading)
