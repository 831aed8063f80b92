"""
schemahash - Algorithm Registry

The closed set of hash constructions a schema can name:

    PBKDF2/<saltSize>/<iterations>/<hashSize>/<digest>
    SSHA256/<saltSize>
    SSHA
    PLAIN

resolve() turns parsed schema parts into a typed variant object up front,
so a bad schema fails with MissingParameterError / UnknownSchemaError
before any hashing happens. Each variant supplies:

    await variant.create(password)           -> payload bytes
    await variant.verify(password, payload)  -> bool

Variants are immutable value objects; ALGORITHMS is a read-only mapping.
"""

import logging
import re
from types import MappingProxyType
from typing import Optional, Sequence, Tuple

from . import crypto
from .errors import (
    InvalidSchemaError,
    MalformedHashError,
    MissingParameterError,
    UnknownSchemaError,
)


log = logging.getLogger(__name__)

_INTEGER = re.compile(r"-?[0-9]+")


def _int_param(algorithm: str, params: Sequence[str], index: int,
               name: str, minimum: int, maximum: Optional[int] = None) -> int:
    """Read params[index] as an integer in [minimum, maximum]."""
    if index >= len(params) or not params[index]:
        raise MissingParameterError(algorithm, name)
    text = params[index]
    if not _INTEGER.fullmatch(text):
        raise MissingParameterError(algorithm, name, text)
    value = int(text)
    if value < minimum:
        raise InvalidSchemaError(
            f"{algorithm} schema parameter '{name}' must be >= {minimum}, got {value}"
        )
    if maximum is not None and value > maximum:
        raise InvalidSchemaError(
            f"{algorithm} schema parameter '{name}' must be <= {maximum}, got {value}"
        )
    return value


def _text_param(algorithm: str, params: Sequence[str], index: int, name: str) -> str:
    if index >= len(params) or not params[index]:
        raise MissingParameterError(algorithm, name)
    return params[index]


# =============================================================================
# Variants
# =============================================================================

class Algorithm:
    """Common base: value semantics over settings()."""

    name = ""

    @classmethod
    def from_params(cls, params: Sequence[str]) -> "Algorithm":
        raise NotImplementedError

    def settings(self) -> Tuple:
        return ()

    async def create(self, password: bytes) -> bytes:
        raise NotImplementedError

    async def verify(self, password: bytes, payload: bytes) -> bool:
        raise NotImplementedError

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.settings() == other.settings()

    def __hash__(self):
        return hash((self.name,) + self.settings())

    def __repr__(self):
        args = ", ".join(repr(s) for s in self.settings())
        return f"{type(self).__name__}({args})"


class SaltedAlgorithm(Algorithm):
    """
    digest(password, salt) stored as digest || salt.

    Subclasses set salt_size / digest_size and implement digest().
    """

    salt_size = 0
    digest_size = 0

    async def digest(self, password: bytes, salt: bytes) -> bytes:
        raise NotImplementedError

    async def create(self, password: bytes) -> bytes:
        salt = crypto.generate_salt(self.salt_size)
        digest = await self.digest(password, salt)
        return crypto.join_salted(digest, salt)

    async def verify(self, password: bytes, payload: bytes) -> bool:
        expected_size = self.digest_size + self.salt_size
        if len(payload) != expected_size:
            log.debug("%r payload is %d bytes, expected %d",
                      self, len(payload), expected_size)
            raise MalformedHashError(
                f"{self.name} hash payload must be {expected_size} bytes, got {len(payload)}"
            )
        expected, salt = crypto.split_salted(payload, self.digest_size)
        actual = await self.digest(password, salt)
        return crypto.constant_compare(actual, expected)


class Pbkdf2(SaltedAlgorithm):
    """PBKDF2-HMAC; the only variant whose digest suspends (worker thread)."""

    name = "PBKDF2"

    def __init__(self, salt_size: int, iterations: int, hash_size: int, digest: str):
        self.salt_size = salt_size
        self.iterations = iterations
        self.digest_size = hash_size
        self.prf = digest

    @classmethod
    def from_params(cls, params):
        return cls(
            _int_param(cls.name, params, 0, "saltSize", 0, crypto.MAX_SALT_SIZE),
            _int_param(cls.name, params, 1, "iterations", 1),
            _int_param(cls.name, params, 2, "hashSize", 1, crypto.MAX_HASH_SIZE),
            _text_param(cls.name, params, 3, "digest"),
        )

    def settings(self):
        # PRF names are matched case-insensitively
        return (self.salt_size, self.iterations, self.digest_size, self.prf.lower())

    async def digest(self, password, salt):
        return await crypto.derive_pbkdf2_async(
            password, salt, self.iterations, self.digest_size, self.prf
        )


class Ssha256(SaltedAlgorithm):
    name = "SSHA256"
    digest_size = crypto.SHA256_DIGEST_SIZE

    def __init__(self, salt_size: int):
        self.salt_size = salt_size

    @classmethod
    def from_params(cls, params):
        return cls(_int_param(cls.name, params, 0, "saltSize", 0, crypto.MAX_SALT_SIZE))

    def settings(self):
        return (self.salt_size,)

    async def digest(self, password, salt):
        return crypto.digest_ssha256(password, salt)


class Ssha(SaltedAlgorithm):
    name = "SSHA"
    salt_size = crypto.SSHA_SALT_SIZE
    digest_size = crypto.SHA1_DIGEST_SIZE

    @classmethod
    def from_params(cls, params):
        return cls()

    async def digest(self, password, salt):
        return crypto.digest_ssha(password, salt)


class Plain(Algorithm):
    """Stores the password itself. Only for migrating legacy data."""

    name = "PLAIN"

    @classmethod
    def from_params(cls, params):
        return cls()

    async def create(self, password):
        return password

    async def verify(self, password, payload):
        return crypto.constant_compare(password, payload)


# =============================================================================
# Registry
# =============================================================================

ALGORITHMS = MappingProxyType({
    algorithm.name: algorithm for algorithm in (Pbkdf2, Ssha256, Ssha, Plain)
})


def resolve(parts: Sequence[str]) -> Algorithm:
    """
    Build the typed variant for parsed schema parts.

    Raises:
        UnknownSchemaError: parts[0] isn't a registered algorithm
        MissingParameterError: A required parameter is absent / not a number
        InvalidSchemaError: A parameter is out of range
    """
    name = parts[0] if parts else ""
    algorithm = ALGORITHMS.get(name)
    if algorithm is None:
        raise UnknownSchemaError(name)
    variant = algorithm.from_params(parts[1:])
    log.debug("Resolved schema to %r", variant)
    return variant
