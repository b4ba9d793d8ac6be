"""
Command-line runner.

    sudoku-search solve puzzle.txt --engine csp
    sudoku-search compare puzzle.txt --output-dir out/
    sudoku-search generate 9 --difficulty easy --difficulty hard --seed 7
"""
import argparse
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from cardinal_pythonlib.argparse_func import RawDescriptionArgumentDefaultsHelpFormatter
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from . import ENGINES, make_solver
from .base import SearchResult
from .generator import DIFFICULTY_RATIOS, generate_puzzles
from .graph import ConstraintGraph, FormatError, format_solutions, parse_puzzle
from .sat_oracle import enumerate_solutions

log = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


# ---------- helpers ----------
def read_lines(filename: str, encoding: str = "UTF-8") -> List[str]:
    with open(filename, "r", encoding=encoding) as f:
        return f.read().splitlines()


def run_engine(name: str, lines: Sequence[str], depth_limit: Optional[int] = None):
    """Parse and solve with one engine. Every call owns its graph and state."""
    graph, state = parse_puzzle(lines)
    options = {}
    if name == "depth-limited" and depth_limit is not None:
        options["depth_limit"] = depth_limit
    solver = make_solver(name, **options)
    log.info("Solving %dx%d puzzle with %s", graph.N, graph.N, name)
    return graph, solver.solve(graph, state)


def report(graph: ConstraintGraph, result: SearchResult) -> str:
    return (f"Solutions via {result.engine}:\n"
            f"{format_solutions(graph, result.solutions)}"
            f"Execution Time: {result.elapsed} seconds\n"
            f"Nodes Expanded: {result.nodes_expanded}\n")


def summary(result: SearchResult) -> str:
    return (f"Solutions found via {result.engine}: {len(result.solutions)}\n"
            f"{result.engine} Execution Time: {result.elapsed:.6f} seconds\n"
            f"{result.engine} Nodes Expanded: {result.nodes_expanded}")


# ---------- commands ----------
def cmd_solve(args) -> int:
    lines = read_lines(args.puzzle, args.encoding)
    graph, result = run_engine(args.engine, lines, args.depth_limit)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(report(graph, result))
    else:
        print(format_solutions(graph, result.solutions), end="")
    print(summary(result))

    if args.verify:
        _, state = parse_puzzle(lines)
        expected = {tuple(s) for s in enumerate_solutions(graph, state)}
        found = {tuple(s) for s in result.solutions}
        if found != expected:
            print(f"Verification FAILED: engine found {len(found)}, "
                  f"SAT reference found {len(expected)}")
            return EXIT_FAILURE
        print(f"Verified against SAT reference ({len(expected)} solutions)")
    return EXIT_SUCCESS


def cmd_compare(args) -> int:
    lines = read_lines(args.puzzle, args.encoding)
    # one worker per engine: a repeated name would write the same file twice
    engines = list(dict.fromkeys(e.strip() for e in args.engines.split(",") if e.strip()))
    for name in engines:
        if name not in ENGINES:
            raise ValueError(f"Unknown engine {name!r}; choose from {sorted(ENGINES)}")
    # reject malformed input before any worker starts
    parse_puzzle(lines)

    os.makedirs(args.output_dir, exist_ok=True)

    def task(name: str) -> SearchResult:
        print(f"Solving using {name}...")
        graph, result = run_engine(name, lines, args.depth_limit)
        path = os.path.join(args.output_dir, f"{name}_solutions.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write(report(graph, result))
        return result

    with ThreadPoolExecutor(max_workers=2) as executor:
        futures = [executor.submit(task, name) for name in engines]
        results = [fut.result() for fut in futures]

    for result in results:
        print(summary(result))
    return EXIT_SUCCESS


def cmd_generate(args) -> int:
    ratios = [DIFFICULTY_RATIOS[d] for d in (args.difficulty or [])]
    ratios += args.ratio or []
    if not ratios:
        ratios = [DIFFICULTY_RATIOS["medium"]]

    blocks = generate_puzzles(args.size, ratios, seed=args.seed)
    text = "\n\n".join("\n".join(rows) for rows in blocks) + "\n"
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {len(blocks)} puzzle(s) to {args.output}")
    else:
        print(text, end="")
    return EXIT_SUCCESS


# ---------- argument parsing ----------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-search",
        description=__doc__,
        formatter_class=RawDescriptionArgumentDefaultsHelpFormatter)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    help_puzzle = "Puzzle file: N lines of N characters ('.'/0 empty, 1-9, A.. for 10+)"

    p_solve = subparsers.add_parser("solve", help="Solve a puzzle with one engine")
    p_solve.add_argument("puzzle", help=help_puzzle)
    p_solve.add_argument("--engine", choices=sorted(ENGINES), default="csp")
    p_solve.add_argument("--depth-limit", type=int, default=None,
                         help="Depth limit for the depth-limited engine (default: empty cells)")
    p_solve.add_argument("--encoding", default="UTF-8", help="Puzzle file encoding")
    p_solve.add_argument("--output", help="Write solutions to this file instead of stdout")
    p_solve.add_argument("--verify", action="store_true",
                         help="Check the solutions against the SAT reference enumerator")
    p_solve.set_defaults(func=cmd_solve)

    p_cmp = subparsers.add_parser("compare", help="Run two engines concurrently")
    p_cmp.add_argument("puzzle", help=help_puzzle)
    p_cmp.add_argument("--engines", default="exhaustive,depth-limited",
                       help="Comma-separated engine names")
    p_cmp.add_argument("--depth-limit", type=int, default=None)
    p_cmp.add_argument("--encoding", default="UTF-8")
    p_cmp.add_argument("--output-dir", default=".")
    p_cmp.set_defaults(func=cmd_compare)

    p_gen = subparsers.add_parser("generate", help="Generate puzzles")
    p_gen.add_argument("size", type=int, help="Grid size N (a perfect square)")
    p_gen.add_argument("--difficulty", action="append", choices=sorted(DIFFICULTY_RATIOS))
    p_gen.add_argument("--ratio", action="append", type=float, help="Hint ratio in [0, 1]")
    p_gen.add_argument("--seed", type=int, default=None)
    p_gen.add_argument("--output", help="Write puzzles to this file")
    p_gen.set_defaults(func=cmd_generate)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    main_only_quicksetup_rootlogger(level=logging.DEBUG if args.verbose
                                    else logging.WARNING)

    if not args.command:
        parser.print_usage(sys.stderr)
        return EXIT_FAILURE
    try:
        return args.func(args)
    except FormatError as e:
        print(f"Error: {e}", file=sys.stderr)
    except LookupError as e:
        print(f"Unsupported encoding: {e}", file=sys.stderr)
    except (OSError, UnicodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
    return EXIT_FAILURE
