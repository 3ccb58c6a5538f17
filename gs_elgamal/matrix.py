"""
Matrices over Group Elements
============================

Small fixed-shape matrices whose entries are scalars (Z_p), group elements
(G1, G2) or pairing outputs (GT). The Groth-Sahai commitments and the
verification equation are written as products of such matrices:

    scalar_matmul:   (Z_p)^{a×k} · G^{k×b}   → G^{a×b}
    pairing_matmul:  G1^{a×k}   · G2^{k×b}   → GT^{a×b}
    pairing_outer:   G1^{1×2}   , G2^{1×2}   → GT^{2×2}

All arithmetic is delegated to a PairingBackend; there is no numeric matrix
library underneath, since the entries are not numbers.

Matrices are immutable. Shapes are checked at construction and at every
operation; a mismatch raises ShapeError.
"""

from typing import Iterable, List, Sequence, Tuple

from .errors import ShapeError
from .groups import GroupType, PairingBackend


class Matrix:
    """
    Immutable row-major matrix of algebraic elements.

    Parameters
    ----------
    kind : GroupType
        Kind of every entry
    shape : Tuple[int, int]
        (rows, cols); either may be 0
    entries : Iterable
        rows·cols elements in row-major order
    """

    __slots__ = ('kind', 'shape', 'entries')

    def __init__(self, kind: GroupType, shape: Tuple[int, int], entries: Iterable):
        rows, cols = shape
        entries = tuple(entries)
        if rows < 0 or cols < 0:
            raise ShapeError(f"Negative matrix shape {shape}")
        if len(entries) != rows * cols:
            raise ShapeError(f"{len(entries)} entries do not fill a {rows}x{cols} matrix")
        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'shape', (rows, cols))
        object.__setattr__(self, 'entries', entries)

    def __setattr__(self, name, value):
        raise AttributeError("Matrix is immutable")

    @classmethod
    def from_rows(cls, kind: GroupType, rows: Sequence[Sequence]) -> 'Matrix':
        rows = [tuple(r) for r in rows]
        cols = len(rows[0]) if rows else 0
        for r in rows:
            if len(r) != cols:
                raise ShapeError("Ragged rows")
        return cls(kind, (len(rows), cols), (e for r in rows for e in r))

    @classmethod
    def from_column(cls, kind: GroupType, values: Sequence) -> 'Matrix':
        """m-vector as an m×1 matrix."""
        return cls(kind, (len(values), 1), values)

    @classmethod
    def filled(cls, kind: GroupType, shape: Tuple[int, int], value) -> 'Matrix':
        return cls(kind, shape, [value] * (shape[0] * shape[1]))

    @classmethod
    def zeros(cls, kind: GroupType, shape: Tuple[int, int], backend: PairingBackend) -> 'Matrix':
        return cls.filled(kind, shape, backend.zero(kind))

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    def __getitem__(self, index):
        i, j = index
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError(f"Index {index} out of range for shape {self.shape}")
        return self.entries[i * self.cols + j]

    def row(self, i: int) -> Tuple:
        return self.entries[i * self.cols:(i + 1) * self.cols]

    def to_rows(self) -> List[Tuple]:
        return [self.row(i) for i in range(self.rows)]

    def column(self, j: int) -> 'Matrix':
        """Column j laid out as a 1×rows matrix."""
        return Matrix(self.kind, (1, self.rows), (self[i, j] for i in range(self.rows)))

    def transpose(self) -> 'Matrix':
        return Matrix(
            self.kind,
            (self.cols, self.rows),
            (self[i, j] for j in range(self.cols) for i in range(self.rows)),
        )

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self.kind == other.kind and self.shape == other.shape
                and all(a == b for a, b in zip(self.entries, other.entries)))

    __hash__ = None

    def __repr__(self):
        return f"Matrix({self.kind.value}, {self.rows}x{self.cols})"


def _check_same_shape(x: Matrix, y: Matrix):
    if x.shape != y.shape:
        raise ShapeError(f"Shape mismatch: {x.shape} vs {y.shape}")
    if x.kind != y.kind:
        raise ShapeError(f"Kind mismatch: {x.kind.value} vs {y.kind.value}")


def _check_inner(x: Matrix, y: Matrix):
    if x.cols != y.rows:
        raise ShapeError(f"Cannot multiply {x.rows}x{x.cols} by {y.rows}x{y.cols}")


def mat_add(x: Matrix, y: Matrix, backend: PairingBackend) -> Matrix:
    """Entrywise x + y."""
    _check_same_shape(x, y)
    return Matrix(x.kind, x.shape, (backend.add(a, b) for a, b in zip(x.entries, y.entries)))


def mat_sub(x: Matrix, y: Matrix, backend: PairingBackend) -> Matrix:
    """Entrywise x - y."""
    _check_same_shape(x, y)
    return Matrix(x.kind, x.shape, (backend.sub(a, b) for a, b in zip(x.entries, y.entries)))


def mat_eq(x: Matrix, y: Matrix, backend: PairingBackend) -> bool:
    """Entrywise equality; matrices of different shape are simply unequal."""
    if x.shape != y.shape or x.kind != y.kind:
        return False
    return all(backend.eq(a, b) for a, b in zip(x.entries, y.entries))


def scalar_matmul(s: Matrix, x: Matrix, backend: PairingBackend) -> Matrix:
    """
    Product of a scalar matrix and a group-element matrix.

    Formula:
    --------
    res[i][j] = Σ_k x[k][j] · s[i][k]
    """
    if s.kind is not GroupType.ZR:
        raise ShapeError(f"Left operand must be a Z_p matrix, got {s.kind.value}")
    _check_inner(s, x)
    entries = []
    for i in range(s.rows):
        for j in range(x.cols):
            acc = backend.zero(x.kind)
            for k in range(s.cols):
                acc = backend.add(acc, backend.scalar_mul(x[k, j], s[i, k]))
            entries.append(acc)
    return Matrix(x.kind, (s.rows, x.cols), entries)


def pairing_matmul(x: Matrix, y: Matrix, backend: PairingBackend) -> Matrix:
    """
    Product of a G1 matrix and a G2 matrix with pairing as multiplication.

    Formula:
    --------
    res[i][j] = Σ_k e(x[i][k], y[k][j])   ∈ GT
    """
    if x.kind is not GroupType.G1 or y.kind is not GroupType.G2:
        raise ShapeError(f"Expected G1 · G2, got {x.kind.value} · {y.kind.value}")
    _check_inner(x, y)
    entries = []
    for i in range(x.rows):
        for j in range(y.cols):
            acc = backend.zero(GroupType.GT)
            for k in range(x.cols):
                acc = backend.add(acc, backend.pairing(x[i, k], y[k, j]))
            entries.append(acc)
    return Matrix(GroupType.GT, (x.rows, y.cols), entries)


def pairing_outer(x: Matrix, y: Matrix, backend: PairingBackend) -> Matrix:
    """
    Map two 1×2 vectors to the 2×2 matrix of their pairings.

    ([[x1, x2]], [[y1, y2]]) → [[e(x1, y1), e(x1, y2)],
                                [e(x2, y1), e(x2, y2)]]
    """
    if x.shape != (1, 2) or y.shape != (1, 2):
        raise ShapeError(f"pairing_outer expects 1x2 operands, got {x.shape} and {y.shape}")
    return pairing_matmul(x.transpose(), y, backend)


def random_scalars(shape: Tuple[int, int], rng, backend: PairingBackend) -> Matrix:
    """Matrix of independent uniform scalars drawn from ``rng``."""
    rows, cols = shape
    return Matrix(GroupType.ZR, shape, (backend.random_scalar(rng) for _ in range(rows * cols)))
