"""
Exhaustive frontier search with iterative deepening.

Each bounded run is a breadth-first expansion that never goes deeper than the
current bound, so the visited set only ever holds states of one bounded run.
Deepening stops after the first bound that yields a solution. Depth counts
assignments, so a solution that only appears past that bound is not reported.
"""
import logging
import time
from collections import deque
from typing import Deque, List, Set, Tuple

from .base import SearchResult
from .graph import ConstraintGraph, State

log = logging.getLogger(__name__)


class ExhaustiveSearchSolver:
    name = "exhaustive"

    def solve(self, graph: ConstraintGraph, state: State) -> SearchResult:
        result = SearchResult(engine=self.name)
        start = time.perf_counter()

        max_depth = graph.count_empty(state)
        for bound in range(max_depth + 1):
            nodes = self._bounded_run(graph, state, bound, result.solutions)
            result.nodes_expanded += nodes
            log.debug("bound %d: %d nodes, %d solutions so far",
                      bound, nodes, len(result.solutions))
            if result.solutions:
                break

        result.elapsed = time.perf_counter() - start
        return result

    def _bounded_run(self, graph: ConstraintGraph, initial: State, bound: int,
                     solutions: List[State]) -> int:
        """Breadth-first expansion down to `bound` assignments. Returns pops."""
        frontier: Deque[Tuple[State, int]] = deque()
        seen: Set[bytes] = set()

        frontier.append((list(initial), 0))
        seen.add(graph.fingerprint(initial))
        nodes = 0

        while frontier:
            current, depth = frontier.popleft()
            nodes += 1

            if graph.is_complete(current):
                if graph.is_valid_solution(current):
                    solutions.append(current)
                continue

            if depth >= bound:
                continue

            cell = graph.least_remaining_cell(current)
            # a cell with no legal value yields no children
            for value in graph.legal_values(current, cell):
                child = current[:]
                child[cell] = value
                key = graph.fingerprint(child)
                if key not in seen:
                    seen.add(key)
                    frontier.append((child, depth + 1))

        return nodes
