import logging
import time
from typing import List, Optional

from .base import SearchResult
from .graph import ConstraintGraph, State

log = logging.getLogger(__name__)


class HeuristicDepthLimitedSolver:
    """
    Recursive backtracking on a single mutable state, picking the cell with
    the fewest legal values first and collecting every solution it meets.

    depth_limit: maximum number of assignments below the initial state.
                 None (default) = number of empty cells in the initial state,
                 which never cuts a completion off. A smaller value bounds the
                 runtime and may miss solutions.
    """
    name = "depth-limited"

    def __init__(self, *, depth_limit: Optional[int] = None):
        if depth_limit is not None and depth_limit < 0:
            raise ValueError(f"depth_limit must be >= 0 (got {depth_limit})")
        self.depth_limit = depth_limit

    def solve(self, graph: ConstraintGraph, state: State) -> SearchResult:
        limit = self.depth_limit
        if limit is None:
            limit = graph.count_empty(state)
        log.debug("depth-limited search, limit=%d", limit)

        result = SearchResult(engine=self.name)
        start = time.perf_counter()
        result.nodes_expanded = self._search(graph, list(state), 0, limit, result.solutions)
        result.elapsed = time.perf_counter() - start
        return result

    def _search(self, graph: ConstraintGraph, state: State, depth: int, limit: int,
                solutions: List[State]) -> int:
        nodes = 1

        if graph.is_complete(state):
            if graph.is_valid_solution(state):
                solutions.append(state[:])
            return nodes

        if depth >= limit:
            return nodes

        cell = graph.least_remaining_cell(state)
        for value in graph.legal_values(state, cell):
            state[cell] = value
            nodes += self._search(graph, state, depth + 1, limit, solutions)
            state[cell] = 0
        return nodes
