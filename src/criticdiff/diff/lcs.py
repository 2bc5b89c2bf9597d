#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/diff/lcs.py
"""Longest-common-subsequence helpers.

Two flavours are provided. :func:`lcs_length` is the textbook length-only
computation over hashable tokens, used by the divergence metric.
:func:`weighted_lcs` pairs items of two sequences through a weight
function, so that the block and sentence aligners can prefer identical
pairs over merely similar ones while still running in ``O(n * m)``.
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Sequence

from criticdiff.constants import LARGE_ALIGNMENT_CELLS

logger = logging.getLogger(__name__)


def lcs_length(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    """Return the length of the longest common subsequence of two sequences.

    Parameters
    ----------
    a, b : Sequence[Hashable]
        Token sequences

    Returns
    -------
    int
        Number of tokens in the longest common subsequence

    Examples
    --------
    >>> lcs_length("ABCBDAB", "BDCABA")
    4

    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return 0

    previous = [0] * (len(b) + 1)
    for item in a:
        current = [0]
        for j, other in enumerate(b):
            if item == other:
                current.append(previous[j] + 1)
            else:
                current.append(max(previous[j + 1], current[j]))
        previous = current
    return previous[-1]


def anchor_weight(n: int, m: int) -> int:
    """Return a pair weight that outranks every set of unit-weight pairs.

    At most ``min(n, m)`` pairs fit in any pairing, so one pair of this
    weight scores more than all the unit-weight pairs together. Weighing
    identical items this way makes :func:`weighted_lcs` maximize the
    number of identical pairs first and similar pairs second.

    Examples
    --------
    >>> anchor_weight(2, 5)
    3

    """
    return min(n, m) + 1


def weighted_lcs(n: int, m: int, weight: Callable[[int, int], int]) -> list[tuple[int, int]]:
    """Pair indices of two sequences maximizing the total pair weight.

    ``weight(i, j)`` scores pairing item ``i`` of the first sequence with
    item ``j`` of the second; a weight of zero forbids the pair. The
    returned pairs are strictly increasing in both coordinates. When
    several pairings reach the same total, the back-track prefers the
    diagonal (pairing) move, which keeps items paired front to back in
    their original relative order.

    Parameters
    ----------
    n : int
        Length of the first sequence
    m : int
        Length of the second sequence
    weight : callable
        Pair score function, called once per cell

    Returns
    -------
    list of tuple of (int, int)
        Index pairs ``(i, j)`` in increasing order

    """
    if n == 0 or m == 0:
        return []

    if n * m > LARGE_ALIGNMENT_CELLS:
        logger.warning("Aligning %d x %d items; this may be slow", n, m)

    weights = [[weight(i, j) for j in range(m)] for i in range(n)]

    # best[i][j] is the best total weight for suffixes a[i:], b[j:]
    best = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row = best[i]
        below = best[i + 1]
        w_row = weights[i]
        for j in range(m - 1, -1, -1):
            score = max(below[j], row[j + 1])
            w = w_row[j]
            if w > 0 and w + below[j + 1] > score:
                score = w + below[j + 1]
            row[j] = score

    pairs: list[tuple[int, int]] = []
    i = j = 0
    while i < n and j < m:
        w = weights[i][j]
        if w > 0 and best[i][j] == w + best[i + 1][j + 1]:
            pairs.append((i, j))
            i += 1
            j += 1
        elif best[i + 1][j] >= best[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs
