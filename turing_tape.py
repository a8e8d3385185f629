"""
Unbounded binary tape.

The tape is stored as two growable byte arrays, one for positions >= 0 and
one for positions < 0 (position -1 is index 0 of the left half). The head is
an integer position. Cells are materialized as the head first reaches them
and are never released, so the materialized region is always the contiguous
range [-len(left), len(right)) and always contains the head.
"""

from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from transition_table import Symbol


class Tape:
    def __init__(self):
        self._right = bytearray(1)  # position 0 starts materialized
        self._left = bytearray()
        self.position = 0

    def read(self) -> Symbol:
        """Return the symbol under the head."""
        if self.position >= 0:
            return Symbol(self._right[self.position])
        return Symbol(self._left[-self.position - 1])

    def write(self, symbol):
        """Write a symbol under the head."""
        if self.position >= 0:
            self._right[self.position] = symbol
        else:
            self._left[-self.position - 1] = symbol

    def move_left(self) -> int:
        """Move the head one cell left, materializing a ZERO cell if needed."""
        self.position -= 1
        if self.position < 0 and -self.position > len(self._left):
            self._left.append(Symbol.ZERO)
        return self.position

    def move_right(self) -> int:
        """Move the head one cell right, materializing a ZERO cell if needed."""
        self.position += 1
        if self.position >= len(self._right):
            self._right.append(Symbol.ZERO)
        return self.position

    @property
    def bounds(self) -> Tuple[int, int]:
        """(leftmost, rightmost) materialized positions, inclusive."""
        return -len(self._left), len(self._right) - 1

    def __len__(self):
        return len(self._left) + len(self._right)

    def __contains__(self, position):
        leftmost, rightmost = self.bounds
        return leftmost <= position <= rightmost

    def __getitem__(self, position) -> Symbol:
        if position not in self:
            raise IndexError(f"position {position} is not materialized")
        if position >= 0:
            return Symbol(self._right[position])
        return Symbol(self._left[-position - 1])

    def neighbors(self, position) -> Tuple[Optional[int], Optional[int]]:
        """
        Return the materialized (left, right) neighbours of a cell.

        A neighbour that has not been materialized is None.
        """
        if position not in self:
            raise IndexError(f"position {position} is not materialized")
        left = position - 1 if position - 1 in self else None
        right = position + 1 if position + 1 in self else None
        return left, right

    def cells(self) -> Iterator[Tuple[int, Symbol]]:
        """Yield (position, symbol) for every materialized cell, left to right."""
        leftmost, _ = self.bounds
        for i, value in enumerate(reversed(self._left)):
            yield leftmost + i, Symbol(value)
        for i, value in enumerate(self._right):
            yield i, Symbol(value)

    def count_ones(self) -> int:
        """Count the cells currently holding ONE."""
        return self._left.count(1) + self._right.count(1)

    def to_dict(self) -> Dict[int, int]:
        """Map every materialized position to its symbol value."""
        return {position: int(symbol) for position, symbol in self.cells()}

    def to_numpy(self) -> Tuple[np.ndarray, int]:
        """
        Copy the materialized cells into a numpy array.

        Returns:
            Tuple of (cells, offset) where cells[i] is the symbol at
            position i + offset
        """
        cells = np.concatenate([
            np.frombuffer(bytes(reversed(self._left)), dtype=np.uint8),
            np.frombuffer(bytes(self._right), dtype=np.uint8),
        ])
        return cells, -len(self._left)

    def to_string(self, mark_head=False) -> str:
        """
        Render the materialized cells as a string of 0s and 1s.

        Args:
            mark_head: If True, the cell under the head is shown in brackets
        """
        result = []
        for position, symbol in self.cells():
            if mark_head and position == self.position:
                result.append(f"[{int(symbol)}]")
            else:
                result.append(str(int(symbol)))
        return ''.join(result)
