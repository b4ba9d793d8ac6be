import pytest

from sudoku_search import ConstraintGraph


@pytest.fixture
def graph4():
    return ConstraintGraph(4)


@pytest.fixture
def graph9():
    return ConstraintGraph(9)
