"""
Group Initialization and Backend
================================

This module provides the group-arithmetic capability the rest of the package is
written against, and its charm-crypto implementation.

Every algorithm in this package is expressed in ADDITIVE notation over a
Type-3 bilinear group (G1, G2, GT) with scalar field Z_p:

- add(x, y), neg(x), sub(x, y)      group law in G1, G2 or GT
- scalar_mul(x, s)                  x · s for s ∈ Z_p
- zero(kind)                        identity element (0 for Z_p)
- pairing(g1, g2)                   bilinear map e: G1 × G2 → GT

charm-crypto writes groups multiplicatively, so CharmBackend maps:

    add → *,   scalar_mul → **,   neg → ** -1,   zero → group.init(kind, 1)

Randomness is never drawn from a hidden global source. Every sampling method
takes an explicit ``rng`` (anything with the ``random.Random`` interface):
``secrets.SystemRandom()`` in production, a seeded ``random.Random`` in tests.
"""

import base64
import enum
import logging
from abc import ABC, abstractmethod

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2, GT, pair

from .config import config
from .errors import DecodeError

logger = logging.getLogger(__name__)


class GroupType(enum.Enum):
    """Kind of an algebraic element."""
    ZR = 'ZR'
    G1 = 'G1'
    G2 = 'G2'
    GT = 'GT'


_CHARM_TYPES = {
    GroupType.ZR: ZR,
    GroupType.G1: G1,
    GroupType.G2: G2,
    GroupType.GT: GT,
}

# Bytes of uniform randomness fed to hash-to-curve when sampling a point
_POINT_SEED_BYTES = 32


class PairingBackend(ABC):
    """
    Abstract group/pairing capability.

    A concrete curve is a pluggable implementation of this interface; the
    ElGamal and Groth-Sahai code never touches a curve library directly.
    """

    name = None

    @abstractmethod
    def add(self, x, y):
        """Group law x + y (G1, G2 or GT)."""

    @abstractmethod
    def neg(self, x):
        """Group inverse -x (G1, G2 or GT)."""

    def sub(self, x, y):
        return self.add(x, self.neg(y))

    @abstractmethod
    def scalar_mul(self, x, s):
        """x · s for a group element x and a scalar s."""

    @abstractmethod
    def zero(self, kind: GroupType):
        """Additive identity of ``kind``."""

    @abstractmethod
    def scalar(self, value: int):
        """Embed a Python integer into Z_p."""

    def one_scalar(self):
        return self.scalar(1)

    def eq(self, x, y) -> bool:
        return x == y

    @abstractmethod
    def random_scalar(self, rng):
        """Uniform element of Z_p drawn from ``rng``."""

    @abstractmethod
    def random_element(self, kind: GroupType, rng):
        """Uniform element of G1 or G2 (or Z_p) drawn from ``rng``."""

    @abstractmethod
    def pairing(self, g1, g2):
        """Bilinear map e(g1, g2) ∈ GT."""

    @abstractmethod
    def serialize(self, x) -> bytes:
        """Canonical compressed encoding of x."""

    @abstractmethod
    def deserialize(self, data: bytes, kind: GroupType):
        """Inverse of serialize; raises DecodeError on bad input."""

    @abstractmethod
    def element_size(self, kind: GroupType) -> int:
        """Length in bytes of serialize(x) for any x of ``kind``."""

    @abstractmethod
    def identity_encoding(self, kind: GroupType) -> bytes:
        """Reserved encoding of the G1 or G2 identity, element_size(kind) bytes long."""


class CharmBackend(PairingBackend):
    """
    PairingBackend on top of a charm-crypto PairingGroup.

    Parameters
    ----------
    group : PairingGroup
        An initialized charm pairing group (e.g. PairingGroup('MNT224'))
    name : str, optional
        Curve identifier, kept for logging and transport metadata

    Notes
    -----
    Random points are produced by hashing ``rng`` output onto the curve with
    ``group.hash``, so a seeded ``rng`` makes every operation reproducible.
    """

    def __init__(self, group: PairingGroup, name: str = None):
        self.group = group
        self.name = name
        self.order = int(group.order())
        self._sizes = {}
        self._identities = {}

    def __repr__(self):
        return f"CharmBackend({self.name!r})"

    def add(self, x, y):
        return x * y

    def neg(self, x):
        return x ** -1

    def scalar_mul(self, x, s):
        return x ** s

    def zero(self, kind: GroupType):
        if kind is GroupType.ZR:
            return self.group.init(ZR, 0)
        return self.group.init(_CHARM_TYPES[kind], 1)

    def scalar(self, value: int):
        return self.group.init(ZR, value % self.order)

    def random_scalar(self, rng):
        return self.group.init(ZR, rng.randrange(self.order))

    def random_element(self, kind: GroupType, rng):
        if kind is GroupType.ZR:
            return self.random_scalar(rng)
        if kind is GroupType.GT:
            raise ValueError("GT elements are only produced by pairing")
        seed = rng.getrandbits(8 * _POINT_SEED_BYTES).to_bytes(_POINT_SEED_BYTES, 'big')
        return self.group.hash(seed, _CHARM_TYPES[kind])

    def pairing(self, g1, g2):
        # e(0, Q) = e(P, 0) = 1 in GT
        if g1 == self.zero(GroupType.G1) or g2 == self.zero(GroupType.G2):
            return self.zero(GroupType.GT)
        return pair(g1, g2)

    def serialize(self, x) -> bytes:
        return self.group.serialize(x, compression=True)

    def deserialize(self, data: bytes, kind: GroupType):
        # charm encodes elements as b"<type>:<base64>"
        prefix = b'%d:' % _CHARM_TYPES[kind]
        if not isinstance(data, (bytes, bytearray)) or not bytes(data).startswith(prefix):
            raise DecodeError(f"Not an encoded {kind.value} element")
        try:
            elem = self.group.deserialize(bytes(data), compression=True)
        except Exception as e:
            raise DecodeError(f"Malformed {kind.value} element: {e}") from e
        if elem is None:
            raise DecodeError(f"Malformed {kind.value} element")
        return elem

    def _sample(self, kind: GroupType):
        if kind is GroupType.ZR:
            return self.scalar(1)
        if kind is GroupType.GT:
            return pair(self.group.hash(b'gs-elgamal:size', G1),
                        self.group.hash(b'gs-elgamal:size', G2))
        return self.group.hash(b'gs-elgamal:size', _CHARM_TYPES[kind])

    def element_size(self, kind: GroupType) -> int:
        if kind not in self._sizes:
            self._sizes[kind] = len(self.serialize(self._sample(kind)))
        return self._sizes[kind]

    def identity_encoding(self, kind: GroupType) -> bytes:
        """
        Fixed-size stand-in for the point at infinity.

        PBC's compressed format stores only the x-coordinate and a sign byte,
        so the identity has no encoding of its own. The reserved value keeps
        the charm type prefix and fills the body with 0xff bytes: that
        x-coordinate lies outside the base field, so no real point encodes to it.
        """
        if kind not in (GroupType.G1, GroupType.G2):
            raise ValueError(f"No reserved identity encoding for {kind.value}")
        if kind not in self._identities:
            prefix, body = self.serialize(self._sample(kind)).split(b':', 1)
            raw_len = len(base64.b64decode(body))
            self._identities[kind] = prefix + b':' + base64.b64encode(b'\xff' * raw_len)
        return self._identities[kind]


def setup(group_name: str = None) -> CharmBackend:
    """
    Initialize the pairing group and wrap it in a backend.

    Parameters
    ----------
    group_name : str, optional
        The pairing curve identifier. Defaults to ``config.pairing_curve``
        ('MNT224'). If it cannot be initialized, the fallbacks in
        ``config.fallback_curves`` ('BN254', then 'SS512') are tried.

    Returns
    -------
    CharmBackend
        Backend bound to the first curve that initialized.

    Examples
    --------
    >>> import secrets
    >>> backend = setup('MNT224')
    >>> rng = secrets.SystemRandom()
    >>> g = backend.random_element(GroupType.G1, rng)
    """
    candidates = list(config.curves)
    if group_name is not None:
        candidates = [group_name] + [c for c in config.fallback_curves if c != group_name]

    last_error = None
    for name in candidates:
        try:
            backend = CharmBackend(PairingGroup(name), name)
        except Exception as e:
            logger.warning("Curve %s not available (%s), trying next", name, e)
            last_error = e
            continue
        logger.debug("Initialized pairing group %s", name)
        return backend

    raise RuntimeError(f"No pairing curve could be initialized: {last_error}")


_POINT_KINDS = (GroupType.G1, GroupType.G2)


def encode_elements(elems, kinds, backend: PairingBackend) -> bytes:
    """
    Concatenate the canonical encodings of ``elems``.

    ``kinds`` gives the kind of each element; a G1 or G2 identity is written
    as ``backend.identity_encoding(kind)``.
    """
    elems = tuple(elems)
    kinds = tuple(kinds)
    if len(elems) != len(kinds):
        raise ValueError(f"{len(elems)} elements but {len(kinds)} kinds")
    out = []
    for elem, kind in zip(elems, kinds):
        if kind in _POINT_KINDS and backend.eq(elem, backend.zero(kind)):
            out.append(backend.identity_encoding(kind))
        else:
            out.append(backend.serialize(elem))
    return b''.join(out)


def decode_elements(data: bytes, kinds, backend: PairingBackend) -> list:
    """
    Split ``data`` into consecutive fixed-size encodings of ``kinds``.

    The buffer carries no length prefix or version tag; each slice length is
    ``backend.element_size(kind)``, and the slices must cover ``data`` exactly.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise DecodeError(f"Expected bytes, got {type(data).__name__}")
    expected = sum(backend.element_size(k) for k in kinds)
    if len(data) != expected:
        raise DecodeError(f"Expected {expected} bytes, got {len(data)}")

    elems = []
    offset = 0
    for kind in kinds:
        size = backend.element_size(kind)
        chunk = bytes(data[offset:offset + size])
        if kind in _POINT_KINDS and chunk == backend.identity_encoding(kind):
            elems.append(backend.zero(kind))
        else:
            elems.append(backend.deserialize(chunk, kind))
        offset += size
    return elems
