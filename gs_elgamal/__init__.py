"""
ElGamal Encryption with Groth-Sahai Proofs
==========================================

Additively homomorphic ElGamal encryption over G1 of a Type-3 pairing group,
and Groth-Sahai NIZK proofs for multi-scalar multiplication equations in G1,
both implemented with charm-crypto.

Modules:
--------
- groups: Pairing backend interface, charm-crypto backend, setup()
- matrix: Matrices over Z_p, G1, G2 and GT
- ciphertext / encrypt / decrypt: ElGamal ciphertexts and key pair
- nizk: CRS, commitments, prove / verify / randomize
- serialization: base64/JSON transport encoding
- config: Environment driven defaults

Usage:
------
    import secrets
    from gs_elgamal import setup, DecryptKey, Crs, GroupType, prove, verify

    backend = setup('MNT224')
    rng = secrets.SystemRandom()

    sk = DecryptKey.generate(rng, backend)
    pk = sk.encrypt_key
    m = backend.random_element(GroupType.G1, rng)
    r = backend.random_scalar(rng)
    ct = pk.encrypt(m, r)
    assert sk.decrypt(ct) == m

    # prove B = r·Y + 1·m without revealing r or m
    crs = Crs.rand(rng, backend)
    proof = prove(rng, crs, [pk.y], [r], [m], [backend.one_scalar()])
    assert verify(crs, [pk.y], [backend.one_scalar()], ct.b, proof)
"""

__version__ = "0.2.0"

from .ciphertext import Ciphertext
from .decrypt import DecryptKey
from .encrypt import EncryptKey
from .errors import DecodeError, GsElGamalError, ShapeError
from .groups import CharmBackend, GroupType, PairingBackend, setup
from .nizk import Crs, Proof, ProvingSession, prove, verify

__all__ = [
    'Ciphertext', 'DecryptKey', 'EncryptKey',
    'DecodeError', 'GsElGamalError', 'ShapeError',
    'CharmBackend', 'GroupType', 'PairingBackend', 'setup',
    'Crs', 'Proof', 'ProvingSession', 'prove', 'verify',
]
