"""
N×N Sudoku search engines over a constraint graph, plus a puzzle generator.
"""

from .graph import ConstraintGraph, FormatError, State, parse_puzzle, format_solutions
from .base import SearchResult, SudokuSolver
from .exhaustive import ExhaustiveSearchSolver
from .depth_limited import HeuristicDepthLimitedSolver
from .csp import CSPBacktrackingSolver
from .generator import GridGenerator, DIFFICULTY_RATIOS, generate_puzzles

__version__ = "1.0.0"
__all__ = [
    "ConstraintGraph",
    "FormatError",
    "State",
    "parse_puzzle",
    "format_solutions",
    "SearchResult",
    "SudokuSolver",
    "ExhaustiveSearchSolver",
    "HeuristicDepthLimitedSolver",
    "CSPBacktrackingSolver",
    "GridGenerator",
    "DIFFICULTY_RATIOS",
    "generate_puzzles",
    "make_solver",
]

ENGINES = {
    ExhaustiveSearchSolver.name: ExhaustiveSearchSolver,
    HeuristicDepthLimitedSolver.name: HeuristicDepthLimitedSolver,
    CSPBacktrackingSolver.name: CSPBacktrackingSolver,
}


def make_solver(name: str, **options) -> SudokuSolver:
    """Build an engine by name: 'exhaustive', 'depth-limited' or 'csp'."""
    try:
        cls = ENGINES[name]
    except KeyError:
        raise ValueError(f"Unknown engine {name!r}; choose from {sorted(ENGINES)}") from None
    return cls(**options)
