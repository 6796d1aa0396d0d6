import numpy as np
import pytest

from chain_diagnostics.diagnostics.splitting import split_chains
from chain_diagnostics.errors import EmptyInputError


def _as_lists(split):
    return [list(c) for c in split]


def test_split_even_chains():
    split = split_chains([[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]])
    assert _as_lists(split) == [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0], [7.0, 8.0]]


def test_split_odd_chains_drops_middle_draw():
    split = split_chains([[1.0, 2.0, 3.0, 4.0, 4.5], [5.0, 6.0, 7.0, 8.0, 8.5]])
    assert _as_lists(split) == [[1.0, 2.0], [4.0, 4.5], [5.0, 6.0], [8.0, 8.5]]


def test_split_trims_to_shortest_chain():
    split = split_chains([[1.0, 2.0, 3.0, 4.0, 5.0, 6.0], [7.0, 8.0, 9.0, 10.0, 11.0]])
    assert _as_lists(split) == [[1.0, 2.0], [4.0, 5.0], [7.0, 8.0], [10.0, 11.0]]


def test_split_empty_chains():
    with pytest.raises(EmptyInputError):
        split_chains([])
    with pytest.raises(EmptyInputError):
        split_chains([[1.0], [], []])
    with pytest.raises(EmptyInputError):
        split_chains([[], []])


@pytest.mark.parametrize("n_chains,n_draws", [(1, 1), (1, 2), (3, 7), (4, 10), (2, 1001)])
def test_split_counts(n_chains, n_draws):
    chains = np.random.default_rng(0).normal(size=(n_chains, n_draws))
    split = split_chains(chains)
    assert len(split) == 2 * n_chains
    assert all(len(c) == n_draws // 2 for c in split)
    assert sum(len(c) for c in split) == 2 * (n_draws // 2) * n_chains
