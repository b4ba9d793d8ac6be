from dataclasses import dataclass, field
from typing import List, Protocol

from .graph import ConstraintGraph, State


@dataclass
class SearchResult:
    """What one solve() call found, and what it cost."""
    engine: str
    solutions: List[State] = field(default_factory=list)
    nodes_expanded: int = 0
    elapsed: float = 0.0

    @property
    def solved(self) -> bool:
        return bool(self.solutions)

    def __repr__(self):
        return (f"SearchResult(engine={self.engine!r}, solutions={len(self.solutions)}, "
                f"nodes={self.nodes_expanded}, elapsed={self.elapsed:.4f}s)")


class SudokuSolver(Protocol):
    name: str

    def solve(self, graph: ConstraintGraph, state: State) -> SearchResult:
        ...
