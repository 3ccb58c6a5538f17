"""
Test Suite for the Pairing Backend
==================================
"""

import random

import pytest

from gs_elgamal import CharmBackend, DecodeError, GroupType, PairingBackend, setup
from gs_elgamal.config import Config, config


@pytest.fixture(scope="module")
def backend():
    """Initialize pairing group."""
    return setup('MNT224')


def test_setup_returns_backend(backend):
    assert isinstance(backend, CharmBackend)
    assert isinstance(backend, PairingBackend)
    assert backend.name in ('MNT224',) + config.fallback_curves
    assert backend.order > 0


def test_sampling_is_driven_by_rng(backend):
    for kind in (GroupType.ZR, GroupType.G1, GroupType.G2):
        e1 = backend.random_element(kind, random.Random(5))
        e2 = backend.random_element(kind, random.Random(5))
        e3 = backend.random_element(kind, random.Random(6))
        assert e1 == e2
        assert e1 != e3


def test_gt_cannot_be_sampled(backend):
    with pytest.raises(ValueError):
        backend.random_element(GroupType.GT, random.Random(1))


def test_group_law(backend):
    rng = random.Random(11)
    for kind in (GroupType.G1, GroupType.G2):
        x = backend.random_element(kind, rng)
        y = backend.random_element(kind, rng)
        zero = backend.zero(kind)

        assert backend.add(x, zero) == x
        assert backend.add(x, y) == backend.add(y, x)
        assert backend.sub(x, x) == zero
        assert backend.add(x, backend.neg(x)) == zero
        assert backend.scalar_mul(x, backend.scalar(2)) == backend.add(x, x)
        assert backend.scalar_mul(x, backend.scalar(0)) == zero


def test_scalar_embedding_reduces_mod_order(backend):
    assert backend.scalar(backend.order + 3) == backend.scalar(3)
    assert backend.scalar(-1) == backend.scalar(backend.order - 1)
    assert backend.one_scalar() == backend.scalar(1)


def test_pairing_with_identity(backend):
    rng = random.Random(12)
    p = backend.random_element(GroupType.G1, rng)
    q = backend.random_element(GroupType.G2, rng)
    gt_zero = backend.zero(GroupType.GT)

    assert backend.pairing(backend.zero(GroupType.G1), q) == gt_zero
    assert backend.pairing(p, backend.zero(GroupType.G2)) == gt_zero
    assert backend.pairing(p, q) != gt_zero


def test_serialize_round_trip(backend):
    rng = random.Random(13)
    for kind in (GroupType.ZR, GroupType.G1, GroupType.G2):
        elem = backend.random_element(kind, rng)
        data = backend.serialize(elem)
        assert len(data) == backend.element_size(kind)
        assert backend.deserialize(data, kind) == elem


def test_deserialize_rejects_wrong_kind(backend):
    rng = random.Random(14)
    data = backend.serialize(backend.random_element(GroupType.G1, rng))
    with pytest.raises(DecodeError):
        backend.deserialize(data, GroupType.G2)
    with pytest.raises(DecodeError):
        backend.deserialize(data, GroupType.ZR)


def test_config_curve_order():
    cfg = Config()
    cfg.pairing_curve = 'BN254'
    assert cfg.curves == ('BN254', 'SS512')
    cfg.pairing_curve = 'MNT224'
    assert cfg.curves == ('MNT224', 'BN254', 'SS512')
