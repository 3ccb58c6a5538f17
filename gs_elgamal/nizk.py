"""
Groth-Sahai Proofs for Multi-Scalar Multiplication Equations
============================================================

This module implements a Groth-Sahai NIZK argument for the linear equation

    Σ_j y_j · A_j + Σ_i b_i · x_i = target        (in G1)

with public A ∈ G1^n, b ∈ Z_p^m, target ∈ G1 and secret witnesses
Y ∈ Z_p^n, X ∈ G1^m.

Common Reference String:
------------------------
    U = [[p1,    t1·p1   ],        V = [[p2,    t2·p2   ],
         [a1·p1, a1·t1·p1]]             [a2·p2, a2·t2·p2]]

    u1, u2 = columns of U (as 1×2),  v1, v2 = columns of V (as 1×2)

The scalars (a1, t1, a2, t2) are the commitment trapdoor and are discarded
as soon as U and V are built.

Embeddings:
-----------
    ι(v)    = [0 | v]                           m×2 over G1 (or G2)
    lz2(z)  = z · (V[0][1], V[1][1] + p2)       m×2 over G2
    L_t(t)  = F((0, t), lz2(1))                 2×2 over GT
    F(x, y) = [[e(x1, y1), e(x1, y2)],
               [e(x2, y1), e(x2, y2)]]

Group witnesses are committed with the zero-padding embedding ι, scalar
witnesses with the lz2 basis; the verification equation depends on exactly
this asymmetry.

Prover (R ∈ Z_p^{m×2}, S ∈ Z_p^{n×1}, T ∈ Z_p^{1×2} uniform):
---------------------------------------------------------------
    C     = ι(X) + R·U
    D     = lz2(Y) + S·v1
    Π     = Rᵗ·lz2(b) - Tᵗ·v1
    Θ     = Sᵗ·ι(A) + T·U

Verifier:
---------
    ι(A)ᵗ·D + Cᵗ·lz2(b)  ==  L_t(target) + Uᵗ·Π + F(Θ, v1)

where every product of a G1 and a G2 entry is a pairing.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .config import config
from .errors import ShapeError
from .groups import GroupType, PairingBackend
from .matrix import (
    Matrix, mat_add, mat_eq, mat_sub, pairing_matmul, pairing_outer,
    random_scalars, scalar_matmul,
)

logger = logging.getLogger(__name__)


def _derive_bases(p1, p2, rng, backend: PairingBackend) -> Tuple[Matrix, Matrix]:
    """
    Build U and V from fresh trapdoor scalars.

    Only the derived matrices leave this function; (a1, t1, a2, t2) are
    locals and are dropped on return.
    """
    a1 = backend.random_scalar(rng)
    t1 = backend.random_scalar(rng)
    a2 = backend.random_scalar(rng)
    t2 = backend.random_scalar(rng)

    a1_p1 = backend.scalar_mul(p1, a1)
    u = Matrix.from_rows(GroupType.G1, [
        [p1, backend.scalar_mul(p1, t1)],
        [a1_p1, backend.scalar_mul(a1_p1, t1)],
    ])
    a2_p2 = backend.scalar_mul(p2, a2)
    v = Matrix.from_rows(GroupType.G2, [
        [p2, backend.scalar_mul(p2, t2)],
        [a2_p2, backend.scalar_mul(a2_p2, t2)],
    ])
    return u, v


@dataclass(frozen=True)
class Crs:
    """
    Common reference string (p1, p2, U, V).

    Holds no trapdoor. Read-only once built, so one instance may be shared by
    any number of concurrent provers and verifiers.
    """

    p1: object
    p2: object
    u: Matrix
    v: Matrix
    backend: PairingBackend = field(compare=False, repr=False)

    def __post_init__(self):
        if self.u.shape != (2, 2) or self.u.kind is not GroupType.G1:
            raise ShapeError(f"U must be a 2x2 G1 matrix, got {self.u!r}")
        if self.v.shape != (2, 2) or self.v.kind is not GroupType.G2:
            raise ShapeError(f"V must be a 2x2 G2 matrix, got {self.v!r}")

    @classmethod
    def rand(cls, rng, backend: PairingBackend) -> 'Crs':
        """Sample p1 ∈ G1, p2 ∈ G2 and derive U, V from a throwaway trapdoor."""
        p1 = backend.random_element(GroupType.G1, rng)
        p2 = backend.random_element(GroupType.G2, rng)
        u, v = _derive_bases(p1, p2, rng, backend)
        logger.debug("Generated GS CRS on %s", backend.name)
        return cls(p1, p2, u, v, backend)

    def u1(self) -> Matrix:
        return self.u.column(0)

    def u2(self) -> Matrix:
        return self.u.column(1)

    def v1(self) -> Matrix:
        return self.v.column(0)

    def v2(self) -> Matrix:
        return self.v.column(1)


def iota(kind: GroupType, values: Sequence, backend: PairingBackend) -> Matrix:
    """ι(v) = [0 | v], dim = (len(v), 2)."""
    zero = backend.zero(kind)
    return Matrix(kind, (len(values), 2), (e for v in values for e in (zero, v)))


def lz2(crs: Crs, z: Sequence) -> Matrix:
    """
    Embed scalars into G2: lz2(z) = z · w with w = v2 + (0, p2).

    Row i is (z_i · V[0][1], z_i · (V[1][1] + p2)); dim = (len(z), 2).
    """
    backend = crs.backend
    w0 = crs.v[0, 1]
    w1 = backend.add(crs.v[1, 1], crs.p2)
    return Matrix(
        GroupType.G2,
        (len(z), 2),
        (e for zi in z for e in (backend.scalar_mul(w0, zi), backend.scalar_mul(w1, zi))),
    )


def l_target(crs: Crs, target) -> Matrix:
    """Lift target ∈ G1 into GT^{2×2}: F((0, target), lz2(1))."""
    backend = crs.backend
    x = Matrix(GroupType.G1, (1, 2), (backend.zero(GroupType.G1), target))
    return pairing_outer(x, lz2(crs, [backend.one_scalar()]), backend)


def commit_x(crs: Crs, r: Matrix, x: Sequence) -> Matrix:
    """Commit group witnesses: C = ι(X) + R·U (R is m×2)."""
    backend = crs.backend
    return mat_add(iota(GroupType.G1, x, backend), scalar_matmul(r, crs.u, backend), backend)


def commit_y(crs: Crs, s: Matrix, y: Sequence) -> Matrix:
    """Commit scalar witnesses: D = lz2(Y) + S·v1 (S is n×1)."""
    backend = crs.backend
    return mat_add(lz2(crs, y), scalar_matmul(s, crs.v1(), backend), backend)


def _proof_terms(crs: Crs, r: Matrix, s: Matrix, t: Matrix,
                 a: Sequence, b: Sequence) -> Tuple[Matrix, Matrix]:
    """
    Proof terms for randomness (R, S, T).

    Π = Rᵗ·lz2(b) - Tᵗ·v1      (2×2 over G2)
    Θ = Sᵗ·ι(A) + T·U          (1×2 over G1)
    """
    backend = crs.backend
    v1 = crs.v1()
    pi = mat_sub(
        scalar_matmul(r.transpose(), lz2(crs, b), backend),
        scalar_matmul(t.transpose(), v1, backend),
        backend,
    )
    theta = mat_add(
        scalar_matmul(s.transpose(), iota(GroupType.G1, a, backend), backend),
        scalar_matmul(t, crs.u, backend),
        backend,
    )
    return pi, theta


@dataclass(frozen=True)
class Proof:
    """
    GS proof (C, D, Π, Θ).

    Attributes
    ----------
    c : Matrix
        m×2 over G1, commitment to X
    d : Matrix
        n×2 over G2, commitment to Y
    pi : Matrix
        2×2 over G2
    theta : Matrix
        1×2 over G1
    """

    c: Matrix
    d: Matrix
    pi: Matrix
    theta: Matrix

    def randomize(self, rng, crs: Crs, a: Sequence, b: Sequence) -> 'Proof':
        """
        Re-randomize the proof using only the public A and b.

        C' = C + R'·U,  D' = D + S'·v1,
        Π' = Π + R'ᵗ·lz2(b) - T'ᵗ·v1,  Θ' = Θ + S'ᵗ·ι(A) + T'·U

        The result verifies for the same target and is distributed like a
        freshly generated proof.
        """
        backend = crs.backend
        m = self.c.rows
        n = self.d.rows
        if len(a) != n or len(b) != m:
            raise ShapeError(
                f"Proof commits to {n} scalar and {m} group witnesses, "
                f"got len(A)={len(a)}, len(b)={len(b)}"
            )

        r = random_scalars((m, 2), rng, backend)
        s = random_scalars((n, 1), rng, backend)
        t = random_scalars((1, 2), rng, backend)

        c = mat_add(self.c, scalar_matmul(r, crs.u, backend), backend)
        d = mat_add(self.d, scalar_matmul(s, crs.v1(), backend), backend)
        delta_pi, delta_theta = _proof_terms(crs, r, s, t, a, b)

        logger.debug("Randomized GS proof (m=%d, n=%d)", m, n)
        return Proof(
            c=c,
            d=d,
            pi=mat_add(self.pi, delta_pi, backend),
            theta=mat_add(self.theta, delta_theta, backend),
        )


def prove(rng, crs: Crs, a: Sequence, y: Sequence, x: Sequence, b: Sequence) -> Proof:
    """
    Create a GS proof for Σ y_j·A_j + Σ b_i·x_i = target.

    Parameters
    ----------
    rng : random.Random
        Source of the commitment randomness R, S, T
    crs : Crs
        Common reference string
    a : List[G1]
        Public A (length n)
    y : List[ZR]
        Secret scalar witnesses Y (length n)
    x : List[G1]
        Secret group witnesses X (length n)
    b : List[ZR]
        Public b (length n)

    Returns
    -------
    Proof

    Raises
    ------
    ShapeError
        Unless A, Y, X and b all have the same length. This is a malformed
        statement built by the caller.

    Notes
    -----
    The target is not an input: the proof is valid for whatever target the
    witnesses evaluate to. Proving witnesses that do not satisfy the intended
    target yields a proof that fails ``verify`` for that target.
    """
    n = len(y)
    m = len(x)
    if len(a) != n:
        raise ShapeError(f"len(A)={len(a)} != len(Y)={n}")
    if len(b) != m:
        raise ShapeError(f"len(b)={len(b)} != len(X)={m}")
    if m != len(a):
        raise ShapeError(f"len(X)={m} != len(A)={len(a)}")

    backend = crs.backend
    r = random_scalars((m, 2), rng, backend)
    s = random_scalars((n, 1), rng, backend)
    t = random_scalars((1, 2), rng, backend)

    c = commit_x(crs, r, x)
    d = commit_y(crs, s, y)
    pi, theta = _proof_terms(crs, r, s, t, a, b)

    logger.debug("Created GS proof (m=%d, n=%d)", m, n)
    return Proof(c=c, d=d, pi=pi, theta=theta)


def _well_formed(proof: Proof, m: int, n: int) -> bool:
    return (
        proof.c.shape == (m, 2) and proof.c.kind is GroupType.G1
        and proof.d.shape == (n, 2) and proof.d.kind is GroupType.G2
        and proof.pi.shape == (2, 2) and proof.pi.kind is GroupType.G2
        and proof.theta.shape == (1, 2) and proof.theta.kind is GroupType.G1
    )


def verify(crs: Crs, a: Sequence, b: Sequence, target, proof: Proof) -> bool:
    """
    Verify a GS proof for Σ y_j·A_j + Σ b_i·x_i = target.

    Checks
    ------
    ι(A)ᵗ·D + Cᵗ·lz2(b) == L_t(target) + Uᵗ·Π + F(Θ, v1)

    Returns
    -------
    bool
        True iff the equation holds entrywise in GT. A proof whose dimensions
        do not match (A, b) is rejected, not raised on.
    """
    backend = crs.backend
    n = len(a)
    m = len(b)
    if not _well_formed(proof, m, n):
        logger.debug("Rejecting GS proof: shape does not fit statement (m=%d, n=%d)", m, n)
        return False

    lhs = mat_add(
        pairing_matmul(iota(GroupType.G1, a, backend).transpose(), proof.d, backend),
        pairing_matmul(proof.c.transpose(), lz2(crs, b), backend),
        backend,
    )
    rhs = mat_add(
        mat_add(
            l_target(crs, target),
            pairing_matmul(crs.u.transpose(), proof.pi, backend),
            backend,
        ),
        pairing_outer(proof.theta, crs.v1(), backend),
        backend,
    )

    result = mat_eq(lhs, rhs, backend)
    logger.debug("GS proof verification (m=%d, n=%d): %s", m, n, result)
    return result


class ProvingSession:
    """
    Hands out a CRS per statement and proves against it.

    Whether one CRS may be shared by unrelated statements is a deployment
    decision, so it is an explicit setting: with ``reuse_crs`` the session
    draws one CRS and keeps it; without it, every ``prove`` call gets a new
    CRS. The CRS used is returned next to each proof so the verifier can be
    given the same one.

    Parameters
    ----------
    backend : PairingBackend
    rng : random.Random
        Source of all CRS and proof randomness for this session
    reuse_crs : bool, optional
        Defaults to ``config.reuse_crs``
    """

    def __init__(self, backend: PairingBackend, rng, reuse_crs: bool = None):
        self.backend = backend
        self.rng = rng
        self.reuse_crs = config.reuse_crs if reuse_crs is None else reuse_crs
        self._crs = None

    def crs(self) -> Crs:
        if self.reuse_crs:
            if self._crs is None:
                self._crs = Crs.rand(self.rng, self.backend)
            return self._crs
        return Crs.rand(self.rng, self.backend)

    def prove(self, a: List, y: List, x: List, b: List) -> Tuple[Crs, Proof]:
        crs = self.crs()
        return crs, prove(self.rng, crs, a, y, x, b)
