"""
CSP backtracking: MRV variable ordering, LCV value ordering and a forward
check of each value against the live state before it is assigned.
"""
import logging
import time
from typing import List, Optional

from .base import SearchResult
from .graph import ConstraintGraph, State

log = logging.getLogger(__name__)


# ---------- heuristics ----------
def select_mrv_cell(graph: ConstraintGraph, state: State) -> Optional[int]:
    """
    Minimum remaining values: the empty cell with the fewest legal values.
    Ties go to the first cell scanned. None when the state is complete.
    """
    best_cell: Optional[int] = None
    best_count = graph.N + 1
    for cell, v in enumerate(state):
        if v != 0:
            continue
        count = len(graph.legal_values(state, cell))
        if count < best_count:
            best_count = count
            best_cell = cell
    return best_cell


def count_constraints(graph: ConstraintGraph, state: State, cell: int, value: int) -> int:
    """How many empty neighbours of `cell` would still accept `value`."""
    count = 0
    for other in graph.neighbors(cell):
        if state[other] == 0 and graph.is_valid_candidate(state, other, value):
            count += 1
    return count


def order_lcv(graph: ConstraintGraph, state: State, cell: int) -> List[int]:
    """Legal values of `cell`, least constraining first (stable on ties)."""
    values = graph.legal_values(state, cell)
    values.sort(key=lambda v: count_constraints(graph, state, cell, v))
    return values


# ---------- solver ----------
class CSPBacktrackingSolver:
    name = "csp"

    def solve(self, graph: ConstraintGraph, state: State) -> SearchResult:
        result = SearchResult(engine=self.name)
        start = time.perf_counter()
        result.nodes_expanded = self._backtrack(graph, list(state), result.solutions)
        result.elapsed = time.perf_counter() - start
        log.debug("csp search: %d nodes, %d solutions",
                  result.nodes_expanded, len(result.solutions))
        return result

    def _backtrack(self, graph: ConstraintGraph, state: State, solutions: List[State]) -> int:
        cell = select_mrv_cell(graph, state)
        if cell is None:
            # givens can clash, so a full grid still has to be checked
            if graph.is_valid_solution(state):
                solutions.append(state[:])
            return 0

        nodes = 1
        for value in order_lcv(graph, state, cell):
            # the ordering was computed before earlier siblings were explored
            if not graph.is_valid_candidate(state, cell, value):
                continue
            state[cell] = value
            nodes += self._backtrack(graph, state, solutions)
            state[cell] = 0
        return nodes
