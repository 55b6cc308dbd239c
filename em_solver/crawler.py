"""
Traversal cursor over the board positions.

Two orders are available, both visiting each of the size*size positions once:
- row_major: (0,0), (0,1), ... (0,n-1), (1,0), ...
- spiral: the outer ring clockwise from (0,0), then the next ring inwards
"""

from typing import Collection, Iterator

Position = tuple[int, int]

ORDERS = ("row_major", "spiral")


def row_major(size: int) -> list[Position]:
    return [(row, col) for row in range(size) for col in range(size)]


def spiral(size: int) -> list[Position]:
    out: list[Position] = []
    top, left, bottom, right = 0, 0, size - 1, size - 1
    while top <= bottom and left <= right:
        out.extend((top, col) for col in range(left, right + 1))
        out.extend((row, right) for row in range(top + 1, bottom + 1))
        if top < bottom:
            out.extend((bottom, col) for col in range(right - 1, left - 1, -1))
        if left < right:
            out.extend((row, left) for row in range(bottom - 1, top, -1))
        top, left, bottom, right = top + 1, left + 1, bottom - 1, right - 1
    return out


def traversal(size: int, order: str = "row_major") -> list[Position]:
    if order == "row_major":
        return row_major(size)
    if order == "spiral":
        return spiral(size)
    raise ValueError(f"unknown traversal order {order!r}, expected one of {ORDERS}")


class Crawler:
    """A cursor walking the positions of a board in a fixed order.

    Positions in ``skip`` (pre-filled cells) are left out of the walk.
    """

    def __init__(self, size: int, order: str = "row_major", skip: Collection[Position] = ()):
        self.size = size
        self.order = order
        self._steps = [pos for pos in traversal(size, order) if pos not in skip]
        self.index = 0

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._steps)

    def __getitem__(self, index: int) -> Position:
        return self._steps[index]

    def current(self) -> Position | None:
        if 0 <= self.index < len(self._steps):
            return self._steps[self.index]
        return None

    def next(self) -> Position | None:
        """Advance and return the new position, or None once past the last one."""
        if self.index < len(self._steps):
            self.index += 1
        return self.current()

    def previous(self) -> Position | None:
        """Step back and return the new position, or None when before the first one."""
        if self.index >= 0:
            self.index -= 1
        return self.current()

    def reset(self) -> None:
        self.index = 0
