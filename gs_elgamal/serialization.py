"""
Transport Serialization
=======================

JSON-friendly encodings of keys, ciphertexts, CRS and proofs for sending them
over HTTP or storing them as documents. Every element becomes a base64 string
of its canonical encoding; identity elements are written as a sentinel.

A serialized CRS never contains a trapdoor: Crs does not hold one.
"""

import base64
import binascii
from typing import Any, Dict

from .ciphertext import Ciphertext
from .decrypt import DecryptKey
from .encrypt import EncryptKey
from .errors import DecodeError
from .groups import GroupType, PairingBackend
from .matrix import Matrix
from .nizk import Crs, Proof


def _identity_tag(kind: GroupType) -> str:
    return f"__IDENTITY_{kind.value}__"


def serialize_element(elem, kind: GroupType, backend: PairingBackend) -> str:
    """Serialize an element to a base64 string, with a sentinel for the identity."""
    if kind is not GroupType.ZR and backend.eq(elem, backend.zero(kind)):
        return _identity_tag(kind)
    return base64.b64encode(backend.serialize(elem)).decode('utf-8')


def deserialize_element(data: str, kind: GroupType, backend: PairingBackend):
    """Inverse of serialize_element."""
    if not isinstance(data, str):
        raise DecodeError(f"Expected base64 string for {kind.value}, got {type(data).__name__}")
    if data == _identity_tag(kind):
        return backend.zero(kind)
    try:
        raw = base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Invalid base64 for {kind.value}: {e}") from e
    return backend.deserialize(raw, kind)


def serialize_matrix(mat: Matrix, backend: PairingBackend) -> Dict[str, Any]:
    return {
        'kind': mat.kind.value,
        'shape': list(mat.shape),
        'entries': [serialize_element(e, mat.kind, backend) for e in mat.entries],
    }


def deserialize_matrix(data: Dict[str, Any], kind: GroupType, backend: PairingBackend,
                       shape=None) -> Matrix:
    """Rebuild a matrix, checking its kind and (optionally) its shape."""
    try:
        if data['kind'] != kind.value:
            raise DecodeError(f"Expected {kind.value} matrix, got {data['kind']}")
        rows, cols = (int(d) for d in data['shape'])
        entries = [deserialize_element(e, kind, backend) for e in data['entries']]
    except DecodeError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Malformed matrix: {e}") from e
    if shape is not None and (rows, cols) != tuple(shape):
        raise DecodeError(f"Expected {shape[0]}x{shape[1]} matrix, got {rows}x{cols}")
    if rows < 0 or cols < 0 or len(entries) != rows * cols:
        raise DecodeError(f"{len(entries)} entries do not fill a {rows}x{cols} matrix")
    return Matrix(kind, (rows, cols), entries)


def _field(data: Dict[str, Any], name: str):
    try:
        return data[name]
    except (KeyError, TypeError) as e:
        raise DecodeError(f"Missing field {name!r}") from e


def serialize_encrypt_key(key: EncryptKey) -> Dict[str, str]:
    """Serialize the public key for transport."""
    return {
        'generator': serialize_element(key.generator, GroupType.G1, key.backend),
        'y': serialize_element(key.y, GroupType.G1, key.backend),
    }


def deserialize_encrypt_key(data: Dict[str, str], backend: PairingBackend) -> EncryptKey:
    return EncryptKey(
        deserialize_element(_field(data, 'generator'), GroupType.G1, backend),
        deserialize_element(_field(data, 'y'), GroupType.G1, backend),
        backend,
    )


def serialize_decrypt_key(key: DecryptKey) -> Dict[str, Any]:
    """Serialize the secret key. The output is as sensitive as the key itself."""
    return {
        'secret': serialize_element(key.secret, GroupType.ZR, key.backend),
        'encrypt_key': serialize_encrypt_key(key.encrypt_key),
    }


def deserialize_decrypt_key(data: Dict[str, Any], backend: PairingBackend) -> DecryptKey:
    secret = deserialize_element(_field(data, 'secret'), GroupType.ZR, backend)
    encrypt_key = deserialize_encrypt_key(_field(data, 'encrypt_key'), backend)
    if not backend.eq(backend.scalar_mul(encrypt_key.generator, secret), encrypt_key.y):
        raise DecodeError("Public key does not match the secret")
    return DecryptKey(secret, encrypt_key)


def serialize_ciphertext(ct: Ciphertext) -> Dict[str, str]:
    return {
        'a': serialize_element(ct.a, GroupType.G1, ct.backend),
        'b': serialize_element(ct.b, GroupType.G1, ct.backend),
    }


def deserialize_ciphertext(data: Dict[str, str], backend: PairingBackend) -> Ciphertext:
    return Ciphertext(
        deserialize_element(_field(data, 'a'), GroupType.G1, backend),
        deserialize_element(_field(data, 'b'), GroupType.G1, backend),
        backend,
    )


def serialize_crs(crs: Crs) -> Dict[str, Any]:
    """Serialize the CRS for distribution to provers and verifiers."""
    backend = crs.backend
    return {
        'curve': backend.name,
        'p1': serialize_element(crs.p1, GroupType.G1, backend),
        'p2': serialize_element(crs.p2, GroupType.G2, backend),
        'u': serialize_matrix(crs.u, backend),
        'v': serialize_matrix(crs.v, backend),
    }


def deserialize_crs(data: Dict[str, Any], backend: PairingBackend) -> Crs:
    curve = _field(data, 'curve')
    if backend.name is not None and curve != backend.name:
        raise DecodeError(f"CRS is for curve {curve}, backend is {backend.name}")
    return Crs(
        p1=deserialize_element(_field(data, 'p1'), GroupType.G1, backend),
        p2=deserialize_element(_field(data, 'p2'), GroupType.G2, backend),
        u=deserialize_matrix(_field(data, 'u'), GroupType.G1, backend, shape=(2, 2)),
        v=deserialize_matrix(_field(data, 'v'), GroupType.G2, backend, shape=(2, 2)),
        backend=backend,
    )


def serialize_proof(proof: Proof, backend: PairingBackend) -> Dict[str, Any]:
    return {
        'c': serialize_matrix(proof.c, backend),
        'd': serialize_matrix(proof.d, backend),
        'pi': serialize_matrix(proof.pi, backend),
        'theta': serialize_matrix(proof.theta, backend),
    }


def deserialize_proof(data: Dict[str, Any], backend: PairingBackend) -> Proof:
    """Rebuild a proof. Dimensions against a statement are checked by verify()."""
    return Proof(
        c=deserialize_matrix(_field(data, 'c'), GroupType.G1, backend),
        d=deserialize_matrix(_field(data, 'd'), GroupType.G2, backend),
        pi=deserialize_matrix(_field(data, 'pi'), GroupType.G2, backend, shape=(2, 2)),
        theta=deserialize_matrix(_field(data, 'theta'), GroupType.G1, backend, shape=(1, 2)),
    )
