"""
ElGamal Decryption Key
======================

The secret half of an ElGamal key pair: the scalar x together with the
matching EncryptKey (G, Y = x·G).

    decrypt((A, B)) = B - x·A

WARNING: decryption never fails and never reports a mismatch. A ciphertext
produced under a different key, or one that was modified in transit, decrypts
to some unrelated group element with no signal. ElGamal ciphertexts are
malleable by construction (that is what makes them homomorphic); callers that
need integrity must authenticate ciphertexts themselves.
"""

import logging
from dataclasses import dataclass

from .ciphertext import Ciphertext
from .encrypt import EncryptKey
from .errors import DecodeError
from .groups import GroupType, PairingBackend, decode_elements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecryptKey:
    """
    ElGamal secret key.

    Attributes
    ----------
    secret : ZR
        The scalar x. Sensitive: excluded from repr, never logged.
    encrypt_key : EncryptKey
        The public key (G, x·G)
    """

    secret: object
    encrypt_key: EncryptKey

    @classmethod
    def new(cls, generator, x, backend: PairingBackend) -> 'DecryptKey':
        """Create a key pair from generator ``generator`` ∈ G1 and secret ``x`` ∈ Z_p."""
        y = backend.scalar_mul(generator, x)
        return cls(x, EncryptKey(generator, y, backend))

    @classmethod
    def generate(cls, rng, backend: PairingBackend) -> 'DecryptKey':
        """Create a key pair with a random generator and a random secret from ``rng``."""
        generator = backend.random_element(GroupType.G1, rng)
        x = backend.random_scalar(rng)
        logger.debug("Generated ElGamal key pair on %s", backend.name)
        return cls.new(generator, x, backend)

    @property
    def backend(self) -> PairingBackend:
        return self.encrypt_key.backend

    @property
    def generator(self):
        return self.encrypt_key.generator

    def decrypt(self, ct: Ciphertext):
        """Return B - x·A. See the module docstring: wrong keys go undetected."""
        backend = self.backend
        return backend.sub(ct.b, backend.scalar_mul(ct.a, self.secret))

    def to_bytes(self) -> bytes:
        """enc(secret) ++ enc(EncryptKey)"""
        return self.backend.serialize(self.secret) + self.encrypt_key.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes, backend: PairingBackend) -> 'DecryptKey':
        secret, generator, y = decode_elements(
            data, (GroupType.ZR, GroupType.G1, GroupType.G1), backend)
        if not backend.eq(backend.scalar_mul(generator, secret), y):
            raise DecodeError("Public key does not match the secret")
        return cls(secret, EncryptKey(generator, y, backend))

    def __repr__(self):
        return f"DecryptKey(encrypt_key={self.encrypt_key!r})"
