"""
Singular value decomposition by one-sided Jacobi rotations.

Algorithm (Hestenes):
    Work on W = A (or A.T when A is wide) with at least as many rows as
    columns. Sweep over every column pair (p, q) and rotate the pair so the
    two columns become orthogonal, accumulating the same rotations into V.
    A pair counts as orthogonal when

        |w_p . w_q| <= epsilon * ||w_p|| * ||w_q||

    i.e. the cosine of the angle between them is within epsilon of 0.
    A column whose norm is at most EPSILON_64 * ||A||_F is numerically null
    and is never rotated; its left singular vector is filled in afterwards.
    Once a full sweep performs no rotation, W = U @ diag(S): the singular
    values are the column norms and U the normalized columns.

The number of sweeps is capped; pathological input (NaN, extreme
scaling) would otherwise rotate forever.

Singular values come out in column order, NOT sorted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from densetensor.core.compute.precision import EPSILON_64, ieee_semantics

# Above this, 1 + zeta**2 overflows; t falls back to its asymptote 1 / (2 zeta)
_ZETA_LIMIT = 1e150


@dataclass(frozen=True)
class JacobiSVDResult:
    """
    Result of one Jacobi SVD.

    Attributes:
        U: Left singular vectors (n x k), k = min(n, m)
        S: Singular values (k,), non-negative, unsorted
        V: Right singular vectors (m x k)
        sweeps: Number of sweeps performed
        converged: False if the sweep cap was reached first
    """
    U: NDArray[np.floating[Any]]
    S: NDArray[np.floating[Any]]
    V: NDArray[np.floating[Any]]
    sweeps: int
    converged: bool


def jacobi_svd(
    a: NDArray[np.floating[Any]],
    epsilon: float,
    max_sweeps: int,
) -> JacobiSVDResult:
    """
    Compute A = U @ diag(S) @ V.T.

    Args:
        a: Matrix (n x m), not modified
        epsilon: Orthogonality threshold on the column-pair cosine
        max_sweeps: Upper bound on full sweeps

    Returns:
        JacobiSVDResult
    """
    n, m = a.shape
    wide = n < m
    work = np.array(a.T if wide else a, dtype=np.float64)
    cols = work.shape[1]
    v = np.eye(cols)
    # Frobenius norm is invariant under the rotations
    null_norm = EPSILON_64 * np.linalg.norm(work)
    null_sq = null_norm * null_norm

    sweeps = 0
    converged = False
    while sweeps < max_sweeps:
        sweeps += 1
        rotated = False
        for p in range(cols - 1):
            for q in range(p + 1, cols):
                if _rotate_pair(work, v, p, q, epsilon, null_sq):
                    rotated = True
        if not rotated:
            converged = True
            break

    s = np.linalg.norm(work, axis=0)
    u = np.zeros_like(work)
    nonzero = s > null_norm
    u[:, nonzero] = work[:, nonzero] / s[nonzero]
    _complete_orthonormal(u, nonzero)

    if wide:
        # A.T = U' S V'^T  =>  A = V' S U'^T
        u, v = v, u
    return JacobiSVDResult(U=u, S=s, V=v, sweeps=sweeps, converged=converged)


def _rotate_pair(
    work: NDArray[np.floating[Any]],
    v: NDArray[np.floating[Any]],
    p: int,
    q: int,
    epsilon: float,
    null_sq: float,
) -> bool:
    """Orthogonalize columns p and q; returns False if already orthogonal."""
    wp = work[:, p]
    wq = work[:, q]
    with ieee_semantics():
        alpha = wp @ wp
        beta = wq @ wq
        if alpha <= null_sq or beta <= null_sq:
            return False
        gamma = wp @ wq
        if abs(gamma) <= epsilon * np.sqrt(alpha * beta):
            return False

        zeta = (beta - alpha) / (2.0 * gamma)
        if abs(zeta) > _ZETA_LIMIT:
            t = 0.5 / zeta
        else:
            t = np.copysign(1.0, zeta) / (abs(zeta) + np.sqrt(1.0 + zeta * zeta))
        c = 1.0 / np.sqrt(1.0 + t * t)
        s = c * t
    rotation = np.array([[c, s], [-s, c]])

    work[:, [p, q]] = work[:, [p, q]] @ rotation
    v[:, [p, q]] = v[:, [p, q]] @ rotation
    return True


def _complete_orthonormal(
    u: NDArray[np.floating[Any]],
    filled: NDArray[np.bool_],
) -> None:
    """
    Replace the zero columns of u with unit vectors orthogonal to the rest.

    Columns belonging to zero singular values carry no direction; they are
    filled by Gram-Schmidt over the canonical basis.
    """
    filled = filled.copy()
    rows = u.shape[0]
    for j in np.flatnonzero(~filled):
        for e in range(rows):
            candidate = np.zeros(rows)
            candidate[e] = 1.0
            basis = u[:, filled]
            # two passes of classical Gram-Schmidt
            for _ in range(2):
                candidate -= basis @ (basis.T @ candidate)
            norm = np.linalg.norm(candidate)
            if norm > 1e-8:
                u[:, j] = candidate / norm
                filled[j] = True
                break
