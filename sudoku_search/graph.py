from typing import List, Optional, Sequence, Set, Tuple
from math import isqrt

# A puzzle state is a flat list of N*N values indexed by row*N+col, 0 = empty.
State = List[int]


class FormatError(ValueError):
    """Malformed puzzle text or an unsupported grid size."""


# ---------- symbol codec ----------
def _value_of(ch: str) -> Optional[int]:
    """
    '.' or '0' -> 0, '1'..'9' -> 1..9, A..Z / a..z -> 10..35.
    Anything else -> None.
    """
    if ch in "0.":
        return 0
    if "1" <= ch <= "9":
        return int(ch)
    if "A" <= ch <= "Z":
        return 10 + ord(ch) - ord("A")
    if "a" <= ch <= "z":
        return 10 + ord(ch) - ord("a")
    return None


def symbol(v: int) -> str:
    # base-36 style: '.', 1..9, A..Z
    if v == 0:
        return "."
    if 1 <= v <= 9:
        return str(v)
    return chr(ord("A") + (v - 10))


def section_size(N: int) -> int:
    """Return S with S*S == N, or raise FormatError."""
    if N <= 0:
        raise FormatError(f"Grid size must be positive (got N={N}).")
    n = isqrt(N)
    if n * n != N:
        raise FormatError(f"N must be a perfect square (got N={N}).")
    return n


# ---------- constraint graph ----------
class ConstraintGraph:
    """
    Cells 0..N*N-1 joined to every other cell in the same row, column and
    S×S section. Read-only once constructed.
    """

    def __init__(self, N: int):
        self.N = N
        self.S = section_size(N)
        self.cell_count = N * N
        self.values = range(1, N + 1)
        self.adjacency: List[Set[int]] = []
        self.build_adjacency()

    def build_adjacency(self) -> None:
        """Union of row-, column- and section-mates for every cell, minus itself."""
        N, S = self.N, self.S
        adjacency: List[Set[int]] = []
        for r in range(N):
            for c in range(N):
                cell = r * N + c
                mates = set()
                for k in range(N):
                    mates.add(r * N + k)
                    mates.add(k * N + c)
                br, bc = r - r % S, c - c % S
                for i in range(br, br + S):
                    for j in range(bc, bc + S):
                        mates.add(i * N + j)
                mates.discard(cell)
                adjacency.append(mates)
        # rebuilt in one go so a second call never leaves a half-filled table
        self.adjacency = adjacency

    @classmethod
    def parse(cls, rows: Sequence[str]) -> Tuple["ConstraintGraph", State]:
        """
        Parse N rows of N characters into (graph, state).
        N is the number of rows and must be a perfect square.
        """
        lines = [raw.strip() for raw in rows]
        lines = [s for s in lines if s]
        if not lines:
            raise FormatError("No rows parsed.")
        N = len(lines)
        graph = cls(N)

        state: State = []
        for r, s in enumerate(lines):
            if len(s) != N:
                raise FormatError(
                    f"Row {r + 1} has {len(s)} characters, expected {N}.")
            for c, ch in enumerate(s):
                v = _value_of(ch)
                if v is None:
                    raise FormatError(f"Illegal character {ch!r} at ({r},{c}).")
                if v > N:
                    raise FormatError(
                        f"Cell ({r},{c}) value {v} out of range 1..{N}")
                state.append(v)
        return graph, state

    # ---------- queries ----------
    def neighbors(self, cell: int) -> Set[int]:
        assert 0 <= cell < self.cell_count, f"cell {cell} out of range"
        return self.adjacency[cell]

    def empty_state(self) -> State:
        return [0] * self.cell_count

    def is_valid_candidate(self, state: State, cell: int, value: int) -> bool:
        """True iff no neighbour of `cell` currently holds `value`."""
        for other in self.neighbors(cell):
            if state[other] == value:
                return False
        return True

    def legal_values(self, state: State, cell: int) -> List[int]:
        used = {state[other] for other in self.neighbors(cell)}
        return [v for v in self.values if v not in used]

    def is_complete(self, state: State) -> bool:
        return 0 not in state

    def count_empty(self, state: State) -> int:
        return state.count(0)

    def is_valid_solution(self, state: State) -> bool:
        """
        Every row, column and section must be full and free of repeats.
        Stops at the first violation.
        """
        assert len(state) == self.cell_count, "state has the wrong length"
        N, S = self.N, self.S

        for r in range(N):
            seen = set()
            for c in range(N):
                v = state[r * N + c]
                if v == 0 or v in seen:
                    return False
                seen.add(v)

        for c in range(N):
            seen = set()
            for r in range(N):
                v = state[r * N + c]
                if v == 0 or v in seen:
                    return False
                seen.add(v)

        for br in range(0, N, S):
            for bc in range(0, N, S):
                seen = set()
                for r in range(br, br + S):
                    for c in range(bc, bc + S):
                        v = state[r * N + c]
                        if v == 0 or v in seen:
                            return False
                        seen.add(v)
        return True

    def fingerprint(self, state: State) -> bytes:
        """Canonical serialisation of a state, used for duplicate detection."""
        return bytes(state)

    def least_remaining_cell(self, state: State) -> int:
        """
        Empty cell with the fewest legal values; ties go to the lowest index.
        A count of one cannot be beaten, so the scan stops there.
        Returns -1 when the state has no empty cell.
        """
        best_cell = -1
        best_count = self.N + 1
        for cell, v in enumerate(state):
            if v != 0:
                continue
            count = len(self.legal_values(state, cell))
            if count < best_count:
                best_count = count
                best_cell = cell
                if best_count <= 1:
                    break
        return best_cell

    # ---------- text output ----------
    def to_rows(self, state: State) -> List[str]:
        N = self.N
        return ["".join(symbol(state[r * N + c]) for c in range(N)) for r in range(N)]

    def format_grid(self, state: State) -> str:
        """Grid text followed by a separating blank line."""
        return "\n".join(self.to_rows(state)) + "\n\n"

    def __repr__(self):
        return f"ConstraintGraph(N={self.N}, S={self.S})"


def parse_puzzle(rows: Sequence[str]) -> Tuple[ConstraintGraph, State]:
    return ConstraintGraph.parse(rows)


def format_solutions(graph: ConstraintGraph, solutions: Sequence[State]) -> str:
    return "".join(graph.format_grid(s) for s in solutions)
