"""
Test Suite for ElGamal Encryption
=================================

Covers the key pair, encryption, decryption, rerandomization and the
homomorphic addition of ciphertexts.
"""

import random
from dataclasses import FrozenInstanceError

import pytest

from gs_elgamal import Ciphertext, DecryptKey, GroupType, setup


@pytest.fixture(scope="module")
def backend():
    """Initialize pairing group."""
    return setup('MNT224')


@pytest.fixture
def rng():
    return random.Random(0xE16A)


@pytest.fixture
def keypair(backend, rng):
    """(sk, pk) with a random generator and secret."""
    sk = DecryptKey.generate(rng, backend)
    return sk, sk.encrypt_key


def test_key_invariant(backend, rng):
    g = backend.random_element(GroupType.G1, rng)
    x = backend.random_scalar(rng)
    sk = DecryptKey.new(g, x, backend)

    assert sk.secret == x
    assert sk.generator == g
    assert sk.encrypt_key.generator == g
    assert sk.encrypt_key.y == backend.scalar_mul(g, x)


def test_encrypt_decrypt(backend, rng):
    for _ in range(10):
        sk = DecryptKey.generate(rng, backend)
        pk = sk.encrypt_key
        m = backend.random_element(GroupType.G1, rng)
        r = backend.random_scalar(rng)

        ct = pk.encrypt(m, r)
        assert sk.decrypt(ct) == m


def test_concrete_scenario(backend, rng):
    """Ciphertext is (r·G, r·Y + P) and decrypts back to P."""
    g = backend.random_element(GroupType.G1, rng)
    x = backend.random_scalar(rng)
    p = backend.random_element(GroupType.G1, rng)
    assert p != backend.zero(GroupType.G1)

    sk = DecryptKey.new(g, x, backend)
    y = sk.encrypt_key.y
    r = backend.random_scalar(rng)

    ct = sk.encrypt_key.encrypt(p, r)
    assert ct.a == backend.scalar_mul(g, r)
    assert ct.b == backend.add(backend.scalar_mul(y, r), p)
    assert backend.sub(ct.b, backend.scalar_mul(ct.a, x)) == p
    assert sk.decrypt(ct) == p

    r2 = backend.random_scalar(rng)
    ct2 = sk.encrypt_key.encrypt(p, r2)
    assert ct2 != ct
    assert sk.decrypt(ct2) == p


def test_encrypt_different_message(backend, keypair, rng):
    sk, pk = keypair
    m1 = backend.random_element(GroupType.G1, rng)
    m2 = backend.random_element(GroupType.G1, rng)
    r = backend.random_scalar(rng)

    ct1 = pk.encrypt(m1, r)
    ct2 = pk.encrypt(m2, r)
    assert ct1 != ct2


def test_reused_randomness_leaks_plaintext_difference(backend, keypair, rng):
    """Reusing r is a caller error: B1 - B2 reveals m1 - m2 without the key."""
    _, pk = keypair
    m1 = backend.random_element(GroupType.G1, rng)
    m2 = backend.random_element(GroupType.G1, rng)
    r = backend.random_scalar(rng)

    ct1 = pk.encrypt(m1, r)
    ct2 = pk.encrypt(m2, r)
    assert ct1.a == ct2.a
    assert backend.sub(ct1.b, ct2.b) == backend.sub(m1, m2)

    ct3 = pk.encrypt_random(m2, rng)
    assert ct3.a != ct1.a


def test_encrypt_random(backend, keypair, rng):
    sk, pk = keypair
    m = backend.random_element(GroupType.G1, rng)

    ct1 = pk.encrypt_random(m, rng)
    ct2 = pk.encrypt_random(m, rng)
    assert ct1 != ct2
    assert sk.decrypt(ct1) == m
    assert sk.decrypt(ct2) == m


def test_decrypt_modified_ciphertext(backend, keypair, rng):
    sk, pk = keypair
    for _ in range(5):
        m = backend.random_element(GroupType.G1, rng)
        ct = pk.encrypt(m, backend.random_scalar(rng))

        modified = Ciphertext(
            backend.add(ct.a, backend.random_element(GroupType.G1, rng)),
            backend.add(ct.b, backend.random_element(GroupType.G1, rng)),
            backend,
        )
        # no error, just a different group element
        assert sk.decrypt(modified) != m


def test_decrypt_with_wrong_key(backend, rng):
    for _ in range(5):
        sk1 = DecryptKey.generate(rng, backend)
        sk2 = DecryptKey.new(sk1.generator, backend.random_scalar(rng), backend)
        m = backend.random_element(GroupType.G1, rng)

        ct = sk1.encrypt_key.encrypt(m, backend.random_scalar(rng))
        assert sk2.decrypt(ct) != m
        assert sk1.decrypt(ct) == m


def test_homomorphic_ciphertext(backend, keypair, rng):
    sk, pk = keypair
    for _ in range(5):
        m1 = backend.random_element(GroupType.G1, rng)
        m2 = backend.random_element(GroupType.G1, rng)
        ct1 = pk.encrypt(m1, backend.random_scalar(rng))
        ct2 = pk.encrypt(m2, backend.random_scalar(rng))

        ct3 = ct1 + ct2
        assert sk.decrypt(ct3) == backend.add(m1, m2)
        assert sk.decrypt(ct3) == backend.add(sk.decrypt(ct1), sk.decrypt(ct2))
        assert ct1 + ct2 == ct2 + ct1


def test_homomorphic_sum(backend, keypair, rng):
    sk, pk = keypair
    messages = [backend.random_element(GroupType.G1, rng) for _ in range(4)]
    cts = [pk.encrypt_random(m, rng) for m in messages]

    expected = backend.zero(GroupType.G1)
    for m in messages:
        expected = backend.add(expected, m)

    assert sk.decrypt(sum(cts)) == expected
    assert sk.decrypt(sum(cts, Ciphertext.zero(backend))) == expected
    assert (cts[0] + cts[1]) + cts[2] == cts[0] + (cts[1] + cts[2])


def test_zero_ciphertext_is_neutral(backend, keypair, rng):
    sk, pk = keypair
    ct = pk.encrypt_random(backend.random_element(GroupType.G1, rng), rng)

    assert ct + Ciphertext.zero(backend) == ct
    assert sk.decrypt(Ciphertext.zero(backend)) == backend.zero(GroupType.G1)


def test_rerandomize(backend, keypair, rng):
    sk, pk = keypair
    m = backend.random_element(GroupType.G1, rng)
    ct = pk.encrypt(m, backend.random_scalar(rng))

    new_ct = pk.rerandomize(ct, backend.random_scalar(rng))
    assert new_ct != ct
    assert new_ct.a != ct.a
    assert new_ct.b != ct.b
    assert sk.decrypt(new_ct) == m

    again = pk.rerandomize_random(new_ct, rng)
    assert again != new_ct
    assert sk.decrypt(again) == m


def test_rerandomize_matches_fresh_encryption(backend, keypair, rng):
    """rerandomize(encrypt(m, r), r') == encrypt(m, r + r')."""
    _, pk = keypair
    m = backend.random_element(GroupType.G1, rng)
    r = backend.random_scalar(rng)
    r2 = backend.random_scalar(rng)

    assert pk.rerandomize(pk.encrypt(m, r), r2) == pk.encrypt(m, r + r2)
    assert pk.rerandomize(pk.encrypt(m, r), backend.scalar(0)) == pk.encrypt(m, r)


def test_values_are_immutable(backend, keypair, rng):
    sk, pk = keypair
    ct = pk.encrypt_random(backend.random_element(GroupType.G1, rng), rng)

    with pytest.raises(FrozenInstanceError):
        ct.a = ct.b
    with pytest.raises(FrozenInstanceError):
        pk.y = pk.generator
    with pytest.raises(FrozenInstanceError):
        sk.secret = backend.scalar(1)


def test_decrypt_key_repr_hides_secret(keypair):
    sk, _ = keypair
    assert 'secret' not in repr(sk)
