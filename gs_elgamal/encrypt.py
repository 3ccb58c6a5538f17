"""
ElGamal Encryption Key
======================

The public half of an ElGamal key pair over G1: (G, Y) with Y = x·G.

    encrypt(m, r)        = (r·G, r·Y + m)
    rerandomize(ct, r')  = (A + r'·G, B + r'·Y)

The caller owns the randomness. ``r`` MUST be fresh and uniform for every
encryption: two ciphertexts sharing r satisfy B1 - B2 = m1 - m2, which leaks
the relation between their plaintexts. ``encrypt_random`` and
``rerandomize_random`` sample r from an explicit rng for callers that do not
need r afterwards.

Instances are created by DecryptKey (or decoded from bytes); they never hold
the secret.
"""

from dataclasses import dataclass, field

from .ciphertext import Ciphertext
from .groups import GroupType, PairingBackend, decode_elements, encode_elements


@dataclass(frozen=True)
class EncryptKey:
    """
    ElGamal public key.

    Attributes
    ----------
    generator : G1
        The group generator G
    y : G1
        Y = x·G for the paired secret x
    """

    generator: object
    y: object
    backend: PairingBackend = field(compare=False, repr=False)

    def encrypt(self, m, r) -> Ciphertext:
        """Encrypt message ``m`` ∈ G1 with randomness ``r`` ∈ Z_p: (r·G, r·Y + m)."""
        backend = self.backend
        a = backend.scalar_mul(self.generator, r)
        b = backend.add(backend.scalar_mul(self.y, r), m)
        return Ciphertext(a, b, backend)

    def encrypt_random(self, m, rng) -> Ciphertext:
        """Encrypt ``m`` with a fresh r drawn from ``rng``."""
        return self.encrypt(m, self.backend.random_scalar(rng))

    def rerandomize(self, ct: Ciphertext, r) -> Ciphertext:
        """Shift ``ct`` by an encryption of the identity: (A + r·G, B + r·Y).

        The result encrypts the same message and needs no secret key.
        """
        backend = self.backend
        a = backend.add(ct.a, backend.scalar_mul(self.generator, r))
        b = backend.add(ct.b, backend.scalar_mul(self.y, r))
        return Ciphertext(a, b, backend)

    def rerandomize_random(self, ct: Ciphertext, rng) -> Ciphertext:
        return self.rerandomize(ct, self.backend.random_scalar(rng))

    def to_bytes(self) -> bytes:
        """enc(generator) ++ enc(y)"""
        return encode_elements((self.generator, self.y), (GroupType.G1, GroupType.G1), self.backend)

    @classmethod
    def from_bytes(cls, data: bytes, backend: PairingBackend) -> 'EncryptKey':
        generator, y = decode_elements(data, (GroupType.G1, GroupType.G1), backend)
        return cls(generator, y, backend)
