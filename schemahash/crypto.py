"""
schemahash - Cryptography Module

This file contains ALL cryptographic operations used by the hash schemas:
- Random salt generation
- PBKDF2 key derivation (via the 'cryptography' library)
- Single-pass salted SHA-256 / SHA-1 digests
- The digest||salt byte layout stored inside an encoded hash
- Constant-time comparison

Nothing here knows about schema strings or base64. Those live in
schema.py; picking which construction to run lives in registry.py.

Security notes:
    - Salts come from os.urandom (the OS CSPRNG, safe to call from threads)
    - PBKDF2 is slow on purpose; derive_pbkdf2_async() runs it in a worker
      thread so an event loop isn't blocked for the whole derivation
    - Digests are ALWAYS compared with hmac.compare_digest
"""

import asyncio
import hashlib
import hmac
import os
from typing import Tuple, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


# =============================================================================
# Configuration
# =============================================================================

SSHA_SALT_SIZE = 8           # {SSHA} always uses an 8-byte salt
SHA1_DIGEST_SIZE = 20
SHA256_DIGEST_SIZE = 32

# Upper bounds for schema-controlled sizes (bytes)
MAX_SALT_SIZE = 1024
MAX_HASH_SIZE = 1024

# PRF names accepted in a PBKDF2 schema (lower-case)
PBKDF2_DIGESTS = {
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512-224": hashes.SHA512_224,
    "sha512-256": hashes.SHA512_256,
    "sha3-224": hashes.SHA3_224,
    "sha3-256": hashes.SHA3_256,
    "sha3-384": hashes.SHA3_384,
    "sha3-512": hashes.SHA3_512,
    "md5": hashes.MD5,
    "sm3": hashes.SM3,
}


# =============================================================================
# Inputs
# =============================================================================

def to_bytes(password: Union[str, bytes]) -> bytes:
    """Passwords may be given as text (UTF-8 encoded here) or raw bytes."""
    if isinstance(password, str):
        return password.encode('utf-8')
    return bytes(password)


def generate_salt(size: int) -> bytes:
    """
    Generate a random salt.

    Args:
        size: Number of random bytes (0 gives an empty salt)

    Returns:
        `size` bytes from the OS CSPRNG
    """
    return os.urandom(size)


# =============================================================================
# PBKDF2
# =============================================================================

def resolve_prf(name: str) -> hashes.HashAlgorithm:
    """
    Map a schema digest name ("sha256", "SHA512", ...) to a hash instance.

    Raises:
        UnsupportedAlgorithm: If the name isn't a hash PBKDF2 can use
    """
    algorithm = PBKDF2_DIGESTS.get(name.lower())
    if algorithm is None:
        raise UnsupportedAlgorithm(f"Unsupported PBKDF2 digest: {name!r}")
    return algorithm()


def derive_pbkdf2(password: bytes, salt: bytes, iterations: int,
                  hash_size: int, digest: str) -> bytes:
    """
    Derive a key with PBKDF2-HMAC.

    Args:
        password: Password bytes
        salt: Random salt (stored next to the derived key)
        iterations: Number of PRF rounds (the cost factor)
        hash_size: Length of the derived key in bytes
        digest: PRF hash name, e.g. "sha256"

    Returns:
        `hash_size`-byte derived key
    """
    kdf = PBKDF2HMAC(
        algorithm=resolve_prf(digest),
        length=hash_size,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password)


async def derive_pbkdf2_async(password: bytes, salt: bytes, iterations: int,
                              hash_size: int, digest: str) -> bytes:
    """Same as derive_pbkdf2(), but runs in a worker thread."""
    return await asyncio.to_thread(
        derive_pbkdf2, password, salt, iterations, hash_size, digest
    )


# =============================================================================
# Salted SHA digests
# =============================================================================

def digest_ssha256(password: bytes, salt: bytes) -> bytes:
    """SHA-256(password || salt), 32 bytes."""
    h = hashlib.sha256()
    h.update(password)
    h.update(salt)
    return h.digest()


def digest_ssha(password: bytes, salt: bytes) -> bytes:
    """SHA-1(password || salt), 20 bytes. Compatible with LDAP {SSHA}."""
    h = hashlib.sha1()
    h.update(password)
    h.update(salt)
    return h.digest()


# =============================================================================
# Stored layout
# =============================================================================

def join_salted(digest: bytes, salt: bytes) -> bytes:
    """Build the stored payload: digest first, salt trailing."""
    return digest + salt


def split_salted(payload: bytes, digest_size: int) -> Tuple[bytes, bytes]:
    """
    Split a stored payload into (digest, salt).

    The caller is responsible for checking the payload length first;
    this only slices.
    """
    return payload[:digest_size], payload[digest_size:]


# =============================================================================
# Helpers
# =============================================================================

def constant_compare(a: bytes, b: bytes) -> bool:
    """
    Compare two byte strings in constant time.

    Normal comparison (a == b) returns at the first mismatch, so the time
    it takes leaks how many leading bytes matched. hmac.compare_digest
    doesn't.
    """
    return hmac.compare_digest(a, b)
