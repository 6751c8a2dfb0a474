"""Diagram Layout Strategies

Maps a concept count to box positions and a connector topology.

=============================================================================
BUCKETS
=============================================================================
    0       title only      500x300
    1-6     radial          500x300   one ring around the title
    7-8     radial_large    500x400   wider ring
    9-10    grid            500x300+  rows under the title
    11-12   dual_ring       500x600   inner ring -> title, outer -> inner
    13+     tree            500x600+  title -> 3 branches -> leaves

Ring geometry is fixed per bucket; grid and tree grow in height with the
number of rows so any count can be placed. Every computed layout is checked
for overlaps and canvas bounds, and anything that fails the check is laid
out as a grid instead (the grid never overlaps).

Nodes use center coordinates (x, y); the edge properties derive from them.
"""
import math
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from models.diagram import LayoutKind

CANVAS_WIDTH = 500
MIN_CANVAS_HEIGHT = 300
MARGIN = 20
TITLE_ID = "title"


@dataclass
class LayoutNode:
    """A box with position and size for collision detection."""
    id: str
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    def overlaps(self, other: 'LayoutNode', padding: float = 2) -> bool:
        """Check if this node overlaps with another (with optional padding)."""
        return not (
            self.right + padding < other.left or
            self.left - padding > other.right or
            self.bottom + padding < other.top or
            self.top - padding > other.bottom
        )

    def inside(self, width: float, height: float) -> bool:
        return self.left >= 0 and self.top >= 0 and self.right <= width and self.bottom <= height


@dataclass
class Connector:
    """Edge from a concept box back to its parent node."""
    child: int
    parent: str           # TITLE_ID or a concept node id
    route: str = "straight"   # straight | elbow


@dataclass
class DiagramLayout:
    kind: LayoutKind
    width: int
    height: int
    title: LayoutNode
    nodes: List[LayoutNode]
    connectors: List[Connector]
    name_font: int = 11
    desc_font: int = 9
    emphasized: Set[int] = field(default_factory=set)

    def node(self, node_id: str) -> LayoutNode:
        if node_id == TITLE_ID:
            return self.title
        return self.nodes[int(node_id[1:])]


def node_id(index: int) -> str:
    return f"c{index}"


def select_layout_kind(count: int) -> LayoutKind:
    """Pick the arrangement for a concept count."""
    if count <= 0:
        return LayoutKind.TITLE_ONLY
    if count <= 6:
        return LayoutKind.RADIAL
    if count <= 8:
        return LayoutKind.RADIAL_LARGE
    if count <= 10:
        return LayoutKind.GRID
    if count <= 12:
        return LayoutKind.DUAL_RING
    return LayoutKind.TREE


def layout_fits(layout: DiagramLayout) -> bool:
    """True when every box is on the canvas and no two boxes overlap."""
    boxes = [layout.title] + layout.nodes
    for box in boxes:
        if not box.inside(layout.width, layout.height):
            return False
    for i, a in enumerate(boxes):
        for b in boxes[i + 1:]:
            if a.overlaps(b):
                return False
    return True


def compute_layout(count: int) -> DiagramLayout:
    """Compute box positions and connectors for `count` concepts."""
    count = max(0, count)
    kind = select_layout_kind(count)

    if kind == LayoutKind.TITLE_ONLY:
        layout = _title_only()
    elif kind == LayoutKind.RADIAL:
        layout = _radial(count, kind, height=300, rx=175, ry=100,
                         box=(110, 50), title=(120, 44))
    elif kind == LayoutKind.RADIAL_LARGE:
        layout = _radial(count, kind, height=400, rx=180, ry=150,
                         box=(100, 46), title=(130, 46))
    elif kind == LayoutKind.DUAL_RING:
        layout = _dual_ring(count)
    elif kind == LayoutKind.TREE:
        layout = _tree(count)
    else:
        layout = _grid(count)

    if kind != LayoutKind.GRID and not layout_fits(layout):
        layout = _grid(count)
    return layout


# =============================================================================
# Strategies
# =============================================================================

def _ring_positions(count: int, cx: float, cy: float, rx: float, ry: float,
                    offset: float = 0.0) -> List[Tuple[float, float, float]]:
    """(x, y, angle) for `count` evenly spaced points on an ellipse, first at 12 o'clock."""
    points = []
    for i in range(count):
        angle = offset + (2 * math.pi * i / count) - math.pi / 2
        points.append((
            round(cx + rx * math.cos(angle), 1),
            round(cy + ry * math.sin(angle), 1),
            angle,
        ))
    return points


def _title_only() -> DiagramLayout:
    title = LayoutNode(TITLE_ID, CANVAS_WIDTH / 2, MIN_CANVAS_HEIGHT / 2, 200, 56)
    return DiagramLayout(LayoutKind.TITLE_ONLY, CANVAS_WIDTH, MIN_CANVAS_HEIGHT, title, [], [])


def _radial(count: int, kind: LayoutKind, height: int, rx: float, ry: float,
            box: Tuple[int, int], title: Tuple[int, int]) -> DiagramLayout:
    cx, cy = CANVAS_WIDTH / 2, height / 2
    title_node = LayoutNode(TITLE_ID, cx, cy, *title)
    nodes = [
        LayoutNode(node_id(i), x, y, *box)
        for i, (x, y, _) in enumerate(_ring_positions(count, cx, cy, rx, ry))
    ]
    connectors = [Connector(i, TITLE_ID) for i in range(count)]
    return DiagramLayout(kind, CANVAS_WIDTH, height, title_node, nodes, connectors)


def _grid(count: int) -> DiagramLayout:
    """Rows of boxes under a top title; each box hangs off the box above it."""
    cols = 3 if count <= 9 else 4
    gap_x, gap_y = 12, 24
    box_w = (CANVAS_WIDTH - 2 * MARGIN - (cols - 1) * gap_x) // cols
    box_h = 60
    top = 100
    rows = max(1, math.ceil(count / cols))
    height = max(MIN_CANVAS_HEIGHT, top + rows * box_h + (rows - 1) * gap_y + MARGIN)

    title = LayoutNode(TITLE_ID, CANVAS_WIDTH / 2, 42, 200, 44)
    nodes = []
    connectors = []
    for i in range(count):
        row, col = divmod(i, cols)
        x = MARGIN + col * (box_w + gap_x) + box_w / 2
        y = top + row * (box_h + gap_y) + box_h / 2
        nodes.append(LayoutNode(node_id(i), x, y, box_w, box_h))
        parent = TITLE_ID if row == 0 else node_id(i - cols)
        connectors.append(Connector(i, parent))
    return DiagramLayout(LayoutKind.GRID, CANVAS_WIDTH, height, title, nodes, connectors,
                         name_font=11 if cols == 3 else 10)


def _dual_ring(count: int) -> DiagramLayout:
    """Inner ring tied to the title; outer ring tied to the nearest inner box."""
    height = 600
    cx, cy = CANVAS_WIDTH / 2, height / 2
    inner_count = min(5, count // 2)
    outer_count = count - inner_count
    box = (90, 46)

    inner = _ring_positions(inner_count, cx, cy, 90, 140)
    outer = _ring_positions(outer_count, cx, cy, 190, 255, offset=math.pi / outer_count)

    title = LayoutNode(TITLE_ID, cx, cy, 110, 34)
    nodes = []
    connectors = []
    for i, (x, y, _) in enumerate(inner):
        nodes.append(LayoutNode(node_id(i), x, y, *box))
        connectors.append(Connector(i, TITLE_ID))
    for j, (x, y, angle) in enumerate(outer):
        index = inner_count + j
        nodes.append(LayoutNode(node_id(index), x, y, *box))
        connectors.append(Connector(index, node_id(_nearest_by_angle(angle, inner))))
    return DiagramLayout(LayoutKind.DUAL_RING, CANVAS_WIDTH, height, title, nodes, connectors,
                         name_font=10, desc_font=9)


def _nearest_by_angle(angle: float, ring: List[Tuple[float, float, float]]) -> int:
    best, best_delta = 0, math.inf
    for i, (_, _, other) in enumerate(ring):
        delta = abs(math.atan2(math.sin(angle - other), math.cos(angle - other)))
        if delta < best_delta - 1e-9:
            best, best_delta = i, delta
    return best


def _split_contiguous(total: int, parts: int) -> List[int]:
    """Sizes of `parts` contiguous chunks covering `total` items, larger chunks first."""
    base, extra = divmod(total, parts)
    return [base + (1 if k < extra else 0) for k in range(parts)]


def _tree(count: int) -> DiagramLayout:
    """Title -> branch categories (first concepts) -> leaf columns."""
    branch_count = min(3, count)
    gap = 20
    col_w = (CANVAS_WIDTH - 2 * MARGIN - (branch_count - 1) * gap) / branch_count
    branch_y, branch_h = 110, 48
    leaf_indent, leaf_gap = 20, 14
    leaf_top = branch_y + branch_h / 2 + 22

    sizes = _split_contiguous(count - branch_count, branch_count)
    rows = max(sizes) if sizes else 0
    leaf_h = 64
    if rows:
        leaf_h = max(64, min(90, (600 - MARGIN - leaf_top - (rows - 1) * leaf_gap) / rows))
    height = max(600, int(math.ceil(leaf_top + rows * (leaf_h + leaf_gap) - leaf_gap + MARGIN)))

    title = LayoutNode(TITLE_ID, CANVAS_WIDTH / 2, 40, 180, 40)
    nodes = []
    connectors = []
    for k in range(branch_count):
        x0 = MARGIN + k * (col_w + gap)
        nodes.append(LayoutNode(node_id(k), x0 + col_w / 2, branch_y, col_w, branch_h))
        connectors.append(Connector(k, TITLE_ID))

    index = branch_count
    for k, size in enumerate(sizes):
        x0 = MARGIN + k * (col_w + gap)
        leaf_w = col_w - leaf_indent
        for row in range(size):
            y = leaf_top + row * (leaf_h + leaf_gap) + leaf_h / 2
            nodes.append(LayoutNode(node_id(index), x0 + leaf_indent + leaf_w / 2, y, leaf_w, leaf_h))
            connectors.append(Connector(index, node_id(k), route="elbow"))
            index += 1

    return DiagramLayout(LayoutKind.TREE, CANVAS_WIDTH, height, title, nodes, connectors,
                         emphasized=set(range(branch_count)))
