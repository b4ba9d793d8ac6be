import pytest

from sudoku_search import parse_puzzle
from sudoku_search.sat_oracle import count_solutions, enumerate_solutions, sudoku_cnf

from puzzles import EASY_9, OPEN_4, PUZZLE_4, PUZZLE_4_SOLUTION, SOLVED_9


def test_unique_4x4():
    graph, state = parse_puzzle(PUZZLE_4)
    assert enumerate_solutions(graph, state) == [PUZZLE_4_SOLUTION]


def test_unique_9x9():
    graph, state = parse_puzzle(EASY_9)
    _, solved = parse_puzzle(SOLVED_9)
    assert enumerate_solutions(graph, state) == [solved]


def test_empty_4x4_has_288_grids(graph4):
    assert count_solutions(graph4, graph4.empty_state()) == 288


@pytest.mark.parametrize("encoding", ["pairwise", "seq", "cardnet"])
def test_encodings_agree(encoding):
    graph, state = parse_puzzle(OPEN_4)
    found = {tuple(s) for s in enumerate_solutions(graph, state, encoding=encoding)}
    baseline = {tuple(s) for s in enumerate_solutions(graph, state)}
    assert found == baseline
    for s in found:
        assert graph.is_valid_solution(list(s))


def test_max_solutions(graph4):
    assert len(enumerate_solutions(graph4, graph4.empty_state(), max_solutions=3)) == 3
    assert count_solutions(graph4, graph4.empty_state(), limit=1) == 1


def test_unknown_encoding(graph4):
    with pytest.raises(ValueError):
        sudoku_cnf(graph4, graph4.empty_state(), encoding="totalizer")
