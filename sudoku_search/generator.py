"""
Puzzle generator: seed the diagonal boxes at random, complete the grid by
backtracking, then clear random cells until only the requested share of
hints is left. The resulting puzzle is not checked for a unique solution.
"""
import logging
import random
from math import floor
from typing import Dict, List, Optional, Sequence

from .graph import section_size, symbol

log = logging.getLogger(__name__)

Matrix = List[List[int]]

DIFFICULTY_RATIOS: Dict[str, float] = {
    "easy": 0.40,
    "medium": 0.37,
    "hard": 0.33,
}

MAX_FILL_ATTEMPTS = 100


def hints_for(N: int, hint_ratio: float) -> int:
    if not 0.0 <= hint_ratio <= 1.0:
        raise ValueError(f"hint_ratio must be within [0, 1] (got {hint_ratio})")
    return floor(hint_ratio * N * N)


class GridGenerator:
    def __init__(self, N: int, *, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.N = N
        self.S = section_size(N)
        self.rng = rng if rng is not None else random.Random(seed)
        self.mat: Matrix = [[0] * N for _ in range(N)]

    # ---------- safety checks ----------
    def unused_in_box(self, row_start: int, col_start: int, num: int) -> bool:
        S = self.S
        for i in range(S):
            for j in range(S):
                if self.mat[row_start + i][col_start + j] == num:
                    return False
        return True

    def unused_in_row(self, i: int, num: int) -> bool:
        return num not in self.mat[i]

    def unused_in_col(self, j: int, num: int) -> bool:
        return all(row[j] != num for row in self.mat)

    def is_safe(self, i: int, j: int, num: int) -> bool:
        S = self.S
        return (self.unused_in_row(i, num)
                and self.unused_in_col(j, num)
                and self.unused_in_box(i - i % S, j - j % S, num))

    # ---------- fill ----------
    def fill_diagonal(self) -> None:
        """Diagonal boxes share no row or column, so each is filled on its own."""
        for k in range(0, self.N, self.S):
            self.fill_box(k, k)

    def fill_box(self, row: int, col: int) -> None:
        S = self.S
        for i in range(S):
            for j in range(S):
                num = self.rng.randint(1, self.N)
                while not self.unused_in_box(row, col, num):
                    num = self.rng.randint(1, self.N)
                self.mat[row + i][col + j] = num

    def _in_diagonal_box(self, i: int, j: int) -> bool:
        return i // self.S == j // self.S

    def fill_remaining(self, pos: int = 0) -> bool:
        """Backtracking fill of every non-diagonal cell, trying 1..N in order."""
        N = self.N
        while pos < N * N and self._in_diagonal_box(pos // N, pos % N):
            pos += 1
        if pos >= N * N:
            return True

        i, j = divmod(pos, N)
        for num in range(1, N + 1):
            if self.is_safe(i, j, num):
                self.mat[i][j] = num
                if self.fill_remaining(pos + 1):
                    return True
                self.mat[i][j] = 0
        return False

    def fill_values(self) -> Matrix:
        """
        Produce one complete, valid grid. Some diagonal seedings cannot be
        completed (about half of them for N=4), so the diagonal is re-seeded
        until the fill succeeds.
        """
        for attempt in range(1, MAX_FILL_ATTEMPTS + 1):
            self.mat = [[0] * self.N for _ in range(self.N)]
            self.fill_diagonal()
            if self.fill_remaining():
                return self.mat
            log.debug("diagonal seeding %d could not be completed, re-seeding", attempt)
        raise RuntimeError(
            f"could not complete a {self.N}x{self.N} grid in {MAX_FILL_ATTEMPTS} attempts")

    # ---------- removal ----------
    def remove_k_digits(self, k: int) -> None:
        """Clear exactly k random filled cells."""
        N = self.N
        filled = sum(1 for row in self.mat for v in row if v)
        assert 0 <= k <= filled, f"cannot clear {k} of {filled} filled cells"
        count = k
        while count:
            cell = self.rng.randrange(N * N)
            i, j = divmod(cell, N)
            if self.mat[i][j] != 0:
                self.mat[i][j] = 0
                count -= 1

    def generate(self, hint_ratio: float) -> List[str]:
        """A fresh puzzle keeping floor(hint_ratio * N*N) hints, as text rows."""
        hints = hints_for(self.N, hint_ratio)
        self.fill_values()
        self.remove_k_digits(self.N * self.N - hints)
        log.debug("generated %dx%d puzzle with %d hints", self.N, self.N, hints)
        return self.to_rows()

    def to_rows(self) -> List[str]:
        return ["".join(symbol(v) for v in row) for row in self.mat]


def generate_puzzles(N: int, ratios: Sequence[float], *, seed: Optional[int] = None) -> List[List[str]]:
    """One puzzle text block per requested hint ratio."""
    gen = GridGenerator(N, seed=seed)
    return [gen.generate(r) for r in ratios]
