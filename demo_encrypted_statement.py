#!/usr/bin/env python3
"""
Encrypted Statement Demo
========================

Encrypts a message under ElGamal, then proves in zero knowledge that the
second ciphertext component is r·Y + m for the committed r and m, and finally
re-randomizes both the ciphertext and the proof.
"""

import logging
import secrets

from gs_elgamal import Crs, DecryptKey, GroupType, prove, setup, verify
from gs_elgamal.config import config


def main():
    logging.basicConfig(level=config.log_level)

    print("=" * 60)
    print("ElGamal + Groth-Sahai demo")
    print("=" * 60)

    # 1. Setup
    print("\n[1] Initializing pairing group...")
    backend = setup()
    rng = secrets.SystemRandom()
    print(f"✅ Curve: {backend.name}")

    # 2. Keys and encryption
    print("\n[2] Generating key pair and encrypting...")
    sk = DecryptKey.generate(rng, backend)
    pk = sk.encrypt_key
    m = backend.random_element(GroupType.G1, rng)
    r = backend.random_scalar(rng)
    ct = pk.encrypt(m, r)
    print(f"    - ciphertext: {len(ct.to_bytes())} bytes")
    print(f"    - decrypts correctly: {sk.decrypt(ct) == m}")

    # 3. Prove B = r·Y + 1·m
    print("\n[3] Proving the ciphertext is well formed...")
    crs = Crs.rand(rng, backend)
    one = backend.one_scalar()
    proof = prove(rng, crs, [pk.y], [r], [m], [one])
    print(f"    - verify: {verify(crs, [pk.y], [one], ct.b, proof)}")

    # 4. Re-randomize
    print("\n[4] Re-randomizing proof...")
    new_proof = proof.randomize(rng, crs, [pk.y], [one])
    print(f"    - proof changed: {new_proof != proof}")
    print(f"    - verify: {verify(crs, [pk.y], [one], ct.b, new_proof)}")

    new_ct = pk.rerandomize_random(ct, rng)
    print(f"    - rerandomized ciphertext decrypts correctly: {sk.decrypt(new_ct) == m}")

    # 5. Homomorphic addition
    print("\n[5] Adding ciphertexts...")
    m2 = backend.random_element(GroupType.G1, rng)
    total = ct + pk.encrypt_random(m2, rng)
    print(f"    - decrypts to m + m2: {sk.decrypt(total) == backend.add(m, m2)}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
