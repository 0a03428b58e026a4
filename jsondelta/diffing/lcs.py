# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..values import equivalent

__all__ = ["longest_common_subsequence"]


def compare_grid(A, B, compare=equivalent):
    "Compute grid G[i][j] == compare(A[i], B[j])."
    return [[compare(a, b) for b in B] for a in A]


def llcs_grid(G):
    "Compute grid R[x][y] == llcs(A[:x], B[:y]), given G[i][j] = compare(A[i], B[j])."
    N = len(G)
    M = len(G[0]) if N else 0

    R = [[0]*(M+1) for i in range(N+1)]
    for x in range(1, N+1):
        for y in range(1, M+1):
            if G[x-1][y-1]:
                R[x][y] = R[x-1][y-1] + 1
            else:
                R[x][y] = max(R[x-1][y], R[x][y-1])
    return R


def lcs_indices(G, R):
    """Backtrack through R to find the indices of an lcs.

    Returns two lists (A_indices, B_indices) with length == llcs(A, B).
    When both directions keep the same length, B is stepped back first.
    """
    x = len(R) - 1
    y = len(R[0]) - 1
    A_indices = []
    B_indices = []
    while x > 0 and y > 0:
        if G[x-1][y-1]:
            x -= 1
            y -= 1
            A_indices.append(x)
            B_indices.append(y)
        elif R[x-1][y] > R[x][y-1]:
            x -= 1
        else:
            y -= 1
    A_indices.reverse()
    B_indices.reverse()
    return A_indices, B_indices


def longest_common_subsequence(A, B, compare=equivalent):
    """Return the elements of A forming a longest common subsequence with B.

    O(len(A)*len(B)) in time and memory.
    """
    if not A or not B:
        return []
    G = compare_grid(A, B, compare)
    R = llcs_grid(G)
    A_indices, _ = lcs_indices(G, R)
    return [A[i] for i in A_indices]
