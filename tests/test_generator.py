import random
from math import floor

import pytest

from sudoku_search import ConstraintGraph, FormatError, GridGenerator, generate_puzzles, parse_puzzle
from sudoku_search.generator import DIFFICULTY_RATIOS, hints_for


@pytest.mark.parametrize("N", [4, 9])
def test_full_grid_is_valid(N):
    gen = GridGenerator(N, seed=1234)
    mat = gen.fill_values()
    graph = ConstraintGraph(N)
    state = [v for row in mat for v in row]
    assert graph.is_complete(state)
    assert graph.is_valid_solution(state)


def test_4x4_fill_completes_for_every_seed():
    graph = ConstraintGraph(4)
    for seed in range(200):
        state = [v for row in GridGenerator(4, seed=seed).fill_values() for v in row]
        assert graph.is_valid_solution(state), seed


def test_many_full_grids_are_valid():
    gen = GridGenerator(9, rng=random.Random(7))
    graph = ConstraintGraph(9)
    for _ in range(5):
        state = [v for row in gen.fill_values() for v in row]
        assert graph.is_valid_solution(state)


def test_diagonal_boxes_hold_every_digit():
    gen = GridGenerator(9, seed=3)
    gen.fill_diagonal()
    for k in range(0, 9, 3):
        box = {gen.mat[k + i][k + j] for i in range(3) for j in range(3)}
        assert box == set(range(1, 10))
    # nothing outside the diagonal boxes yet
    assert gen.mat[0][3] == 0 and gen.mat[8][0] == 0


def test_hint_count_for_037_of_81():
    rows = GridGenerator(9, seed=42).generate(0.37)
    graph, state = parse_puzzle(rows)
    hints = floor(0.37 * 81)
    assert sum(1 for v in state if v) == hints
    assert state.count(0) == 81 - hints


def test_puzzle_comes_from_a_valid_grid():
    gen = GridGenerator(4, seed=5)
    rows = gen.generate(0.5)
    graph, state = parse_puzzle(rows)
    assert state.count(0) == 8
    # givens never clash with each other
    for cell, v in enumerate(state):
        if v:
            assert graph.is_valid_candidate(state, cell, v)


def test_seed_is_reproducible():
    assert GridGenerator(9, seed=99).generate(0.4) == GridGenerator(9, seed=99).generate(0.4)


def test_generate_puzzles_one_block_per_ratio():
    ratios = [DIFFICULTY_RATIOS["easy"], DIFFICULTY_RATIOS["hard"]]
    blocks = generate_puzzles(9, ratios, seed=1)
    assert len(blocks) == 2
    for rows, ratio in zip(blocks, ratios):
        assert len(rows) == 9 and all(len(r) == 9 for r in rows)
        _, state = parse_puzzle(rows)
        assert 81 - state.count(0) == floor(ratio * 81)


def test_rows_use_letters_above_nine():
    gen = GridGenerator(16, seed=0)
    gen.mat[0][:3] = [10, 16, 9]
    assert gen.to_rows()[0].startswith("AG9.")


def test_ratio_bounds():
    assert hints_for(9, 0.0) == 0
    assert hints_for(9, 1.0) == 81
    with pytest.raises(ValueError):
        hints_for(9, 1.5)
    with pytest.raises(ValueError):
        hints_for(9, -0.1)


def test_bad_size():
    with pytest.raises(FormatError):
        GridGenerator(10)
