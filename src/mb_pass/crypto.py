"""Sealing primitives: scrypt key derivation and AES-256-GCM."""

import os
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

# scrypt KDF parameters (n is stored per file and may be lowered for tests)
SALT_LENGTH = 16
KEY_LENGTH = 32
DEFAULT_N = 1_048_576
MIN_N = 16_384
R = 8
P = 1

NONCE_LENGTH = 12


@dataclass(frozen=True)
class Sealed:
    """Nonce and ciphertext produced by one seal operation."""

    nonce: bytes
    ciphertext: bytes


def new_salt() -> bytes:
    """Return a fresh random salt."""
    return os.urandom(SALT_LENGTH)


def derive_key(password: str, salt: bytes, n: int = DEFAULT_N) -> bytes:
    """Derive the store key from the master password."""
    return Scrypt(salt=salt, length=KEY_LENGTH, n=n, r=R, p=P).derive(password.encode())


def seal(plaintext: bytes, key: bytes) -> Sealed:
    """Encrypt plaintext under a fresh nonce."""
    nonce = os.urandom(NONCE_LENGTH)
    return Sealed(nonce=nonce, ciphertext=AESGCM(key).encrypt(nonce, plaintext, None))


def unseal(sealed: Sealed, key: bytes) -> bytes:
    """Decrypt a sealed payload.

    Raises:
        InvalidTag: Wrong key or tampered data.

    """
    return AESGCM(key).decrypt(sealed.nonce, sealed.ciphertext, None)
