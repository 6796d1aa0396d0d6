"""
Chain splitting shared by split-ESS and split-Rhat.
"""

from __future__ import annotations

from chain_diagnostics.errors import EmptyInputError
from chain_diagnostics.stats.summary import ChainSet, ChainsLike, as_chain_set, effective_length


def split_chains(chains: ChainsLike) -> ChainSet:
    """
    Split each chain into two halves of equal length.

    All chains are trimmed to the shortest length N first. When N is odd the
    middle draw (index (N - 1) / 2) is dropped from every chain. The output
    keeps input order: first half then second half of chain 0, then chain 1,
    and so on, so it holds 2 * len(chains) chains of floor(N / 2) draws.
    """

    chain_set = as_chain_set(chains)
    if not chain_set:
        raise EmptyInputError("Can't split empty array of chains")
    num_draws = effective_length(chain_set)
    if num_draws < 1:
        raise EmptyInputError("No samples to split", data={"n_chains": len(chain_set)})

    if num_draws % 2 == 0:
        half, offset = num_draws // 2, 0
    else:
        half, offset = (num_draws - 1) // 2, 1

    split: ChainSet = []
    for chain in chain_set:
        split.append(chain[:half])
        split.append(chain[half + offset : num_draws])
    return split
