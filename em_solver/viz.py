"""
Visualization utilities for edge-matching boards.
"""

from .board import Board
from .compass import Compass, FaceKind
from .config import CFG

# Face colors for the SVG, indexed by color value (cycled when exceeded)
PALETTE = [
    "#de241b",  # red
    "#00a0de",  # cyan
    "#ffc100",  # yellow
    "#006c43",  # teal
    "#7a2d9e",  # purple
    "#ff8717",  # orange
    "#ee68a7",  # rose
    "#8bd100",  # lime
    "#8a5e3c",  # brown
    "#00325b",  # deep blue
]
BOUNDARY_COLOR = "#555555"
OPEN_COLOR = "#1b2856"


def format_board(board: "Board") -> str:
    """
    Text picture of the board, three lines per row of cells: the north
    face, then "west piece-id east", then the south face.
    '#' is the grid boundary, '.' an empty side.
    """
    width = max(2, len(str(len(board.pieces) - 1)))
    face_w = max(len(str(c)) for p in board.pieces for c in p.colors) if board.pieces else 1
    cell_w = 2 * face_w + width + 2

    lines = []
    for row in range(board.size):
        top, middle, bottom = [], [], []
        for col in range(board.size):
            cell = board.cell((row, col))
            faces = cell.faces()
            pid = "." if cell.piece is None else str(cell.piece.id)
            top.append(f"{str(faces[Compass.NORTH]):^{cell_w}}")
            middle.append(
                f"{str(faces[Compass.WEST]):>{face_w}} {pid:^{width}} {str(faces[Compass.EAST]):<{face_w}}")
            bottom.append(f"{str(faces[Compass.SOUTH]):^{cell_w}}")
        lines.append(" | ".join(top))
        lines.append(" | ".join(middle))
        lines.append(" | ".join(bottom))
        if row < board.size - 1:
            lines.append("-+-".join("-" * cell_w for _ in range(board.size)))
    return "\n".join(lines)


def display_board(board: "Board") -> None:
    """Print the board with its fill count."""
    print(f"\nBoard {board.size}x{board.size}:")
    print(format_board(board))
    filled = sum(1 for pos in board.placed if pos is not None)
    print(f"Placed: {filled}/{len(board.pieces)}")


def _fill(face) -> str:
    if face.kind is FaceKind.BOUNDARY:
        return BOUNDARY_COLOR
    if face.kind is FaceKind.OPEN:
        return OPEN_COLOR
    return PALETTE[(face.color - 1) % len(PALETTE)]


def svg_markup(board: "Board", cell_px: int | None = None) -> str:
    """SVG of the board; each cell is split into four triangles colored by face."""
    scale = cell_px or CFG.SVG_CELL_PX
    margin = 10
    size_px = margin * 2 + board.size * scale

    svg_parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size_px}" height="{size_px}">',
        f'<rect width="100%" height="100%" fill="{OPEN_COLOR}"/>',
    ]

    for row in range(board.size):
        for col in range(board.size):
            x0 = margin + col * scale
            y0 = margin + row * scale
            x1, y1 = x0 + scale, y0 + scale
            cx, cy = x0 + scale / 2, y0 + scale / 2
            corners = {
                Compass.NORTH: ((x0, y0), (x1, y0)),
                Compass.EAST: ((x1, y0), (x1, y1)),
                Compass.SOUTH: ((x1, y1), (x0, y1)),
                Compass.WEST: ((x0, y1), (x0, y0)),
            }
            cell = board.cell((row, col))
            for direction, face in zip(Compass, cell.faces()):
                (ax, ay), (bx, by) = corners[direction]
                svg_parts.append(
                    f'<polygon points="{ax},{ay} {bx},{by} {cx:.1f},{cy:.1f}" '
                    f'fill="{_fill(face)}" stroke="#000" stroke-width="1"/>'
                )
            if cell.piece is not None:
                svg_parts.append(
                    f'<text x="{cx:.1f}" y="{cy:.1f}" text-anchor="middle" '
                    f'dominant-baseline="middle" font-size="10" fill="#fff">{cell.piece.id}</text>'
                )

    svg_parts.append('</svg>')
    return "\n".join(svg_parts)


def render_svg(board: "Board", filename: str = "solution.svg") -> str:
    """
    Render board to SVG file with colored faces.
    Returns the filename.
    """
    with open(filename, "w", encoding="utf-8") as f:
        f.write(svg_markup(board))
    return filename
