"""
ElGamal Ciphertext
==================

A ciphertext is the pair (A, B) = (r·G, r·Y + m) ∈ G1 × G1.

Ciphertexts under the same key add componentwise, and the sum decrypts to the
sum of the plaintexts:

    (A1, B1) + (A2, B2) = (A1 + A2, B1 + B2)

Byte encoding is enc(A) ++ enc(B) with the backend's fixed G1 size.
"""

from dataclasses import dataclass, field

from .groups import GroupType, PairingBackend, decode_elements, encode_elements


@dataclass(frozen=True)
class Ciphertext:
    """ElGamal ciphertext (A, B). Equality is structural on (A, B)."""

    a: object
    b: object
    backend: PairingBackend = field(compare=False, repr=False)

    @classmethod
    def zero(cls, backend: PairingBackend) -> 'Ciphertext':
        """Encryption of the identity with r = 0; neutral for ``+``."""
        identity = backend.zero(GroupType.G1)
        return cls(identity, identity, backend)

    def __add__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented
        backend = self.backend
        return Ciphertext(backend.add(self.a, other.a), backend.add(self.b, other.b), backend)

    def __radd__(self, other):
        # lets builtin sum() start from 0
        if isinstance(other, int) and other == 0:
            return self
        return NotImplemented

    def to_bytes(self) -> bytes:
        return encode_elements((self.a, self.b), (GroupType.G1, GroupType.G1), self.backend)

    @classmethod
    def from_bytes(cls, data: bytes, backend: PairingBackend) -> 'Ciphertext':
        a, b = decode_elements(data, (GroupType.G1, GroupType.G1), backend)
        return cls(a, b, backend)
