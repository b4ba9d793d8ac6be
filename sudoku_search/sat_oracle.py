"""
Reference enumerator: encode a puzzle as CNF and let a SAT solver list every
completion. Independent of the search engines, so their output can be
checked against it.
"""
from typing import List, Optional
from pysat.formula import CNF
from pysat.solvers import Solver
from pysat.card import CardEnc, EncType

from .graph import ConstraintGraph, State

# ---------- encoding helpers ----------
_ENC_MAP = {
    "pairwise": EncType.pairwise,     # O(k^2) AMO, no aux vars
    "seq": EncType.seqcounter,        # sequential/ladder AMO, linear + aux vars
    "cardnet": EncType.cardnetwrk,    # sorting/cardinality networks, strong + aux vars
}


def vid(cell: int, d: int, N: int) -> int:
    """
    cell in [0..N*N-1], d in [1..N]
    Maps (cell,d) -> {1..N^3}
    """
    return cell * N + d


def _exactly_one(cnf: CNF, lits: List[int], enc: EncType, top: int) -> int:
    """ sum(lits) == 1  (ALO + AMO via chosen encoding); returns the new top var id """
    cnf.append(lits[:])  # ALO
    if enc == EncType.pairwise:
        for i in range(len(lits)):
            for j in range(i + 1, len(lits)):
                cnf.append([-lits[i], -lits[j]])
        return top
    amo = CardEnc.atmost(lits=lits, bound=1, top_id=top, encoding=enc)
    cnf.extend(amo.clauses)
    return max(top, amo.nv)


def sudoku_cnf(graph: ConstraintGraph, state: State, encoding: str = "pairwise") -> CNF:
    """Cell, row, column and section exactly-one constraints plus the givens."""
    if encoding not in _ENC_MAP:
        raise ValueError(f"Unknown encoding {encoding!r}; choose from {sorted(_ENC_MAP)}")
    enc = _ENC_MAP[encoding]
    N, S = graph.N, graph.S
    top = N * N * N  # vars 1..N^3 are the (cell,d) primaries

    cnf = CNF()

    # 1) exactly one digit per cell
    for cell in range(N * N):
        top = _exactly_one(cnf, [vid(cell, d, N) for d in range(1, N + 1)], enc, top)

    # 2) each digit exactly once per row, column and section
    units = []
    for r in range(N):
        units.append([r * N + c for c in range(N)])
    for c in range(N):
        units.append([r * N + c for r in range(N)])
    for br in range(0, N, S):
        for bc in range(0, N, S):
            units.append([r * N + c
                          for r in range(br, br + S)
                          for c in range(bc, bc + S)])
    for unit in units:
        for d in range(1, N + 1):
            top = _exactly_one(cnf, [vid(cell, d, N) for cell in unit], enc, top)

    # 3) clues
    for cell, d in enumerate(state):
        if d:
            assert 1 <= d <= N, f"clue {d} out of range at cell {cell}"
            cnf.append([vid(cell, d, N)])
    return cnf


def enumerate_solutions(
    graph: ConstraintGraph,
    state: State,
    *,
    max_solutions: Optional[int] = None,
    encoding: str = "pairwise",
) -> List[State]:
    """Every completion of `state` (or the first max_solutions), in solver order."""
    N = graph.N
    n_primary = N * N * N
    cnf = sudoku_cnf(graph, state, encoding)

    def decode_model(model_pos_set) -> State:
        out = [0] * (N * N)
        for cell in range(N * N):
            for d in range(1, N + 1):
                if vid(cell, d, N) in model_pos_set:
                    out[cell] = d
                    break
        return out

    solutions: List[State] = []
    with Solver(name="g3", bootstrap_with=cnf.clauses) as s:
        while s.solve():
            model = s.get_model()
            model_pos = {l for l in model if 0 < l <= n_primary}
            solutions.append(decode_model(model_pos))

            # block only the primary true literals
            s.add_clause([-l for l in model_pos])

            if max_solutions is not None and len(solutions) >= max_solutions:
                break
    return solutions


def count_solutions(graph: ConstraintGraph, state: State, *, limit: Optional[int] = None) -> int:
    return len(enumerate_solutions(graph, state, max_solutions=limit))
