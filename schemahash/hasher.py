"""
schemahash - Public API

    hashed = await create("hunter2")                  # default PBKDF2 schema
    hashed = await create("hunter2", "SSHA256/16")
    ok = await verify("hunter2", hashed)

The encoded hash carries its own schema, so verify() needs nothing but
the password and the stored string.
"""

import asyncio
import logging
from typing import Union

from . import crypto, registry, schema as schema_parser


log = logging.getLogger(__name__)

# 24-byte salt, 20000 rounds, 24-byte key, HMAC-SHA256
DEFAULT_SCHEMA = "PBKDF2/24/20000/24/sha256"

Password = Union[str, bytes]


async def create(password: Password, schema: str = DEFAULT_SCHEMA) -> str:
    """
    Hash a password under the given schema.

    Args:
        password: Text (UTF-8 encoded) or bytes
        schema: e.g. "PBKDF2/24/20000/24/sha256", "SSHA256/16", "SSHA", "PLAIN"

    Returns:
        "{<schema>}<base64 payload>" with the schema string kept verbatim

    Raises:
        InvalidSchemaError: Unknown algorithm, missing or bad parameter
        UnsupportedAlgorithm: PBKDF2 digest name not available
    """
    variant = registry.resolve(schema_parser.parse(schema))
    payload = await variant.create(crypto.to_bytes(password))
    return schema_parser.encode_hash(schema, payload)


async def verify(password: Password, encoded: str) -> bool:
    """
    Check a password against an encoded hash.

    Returns:
        True if the password matches, False otherwise

    Raises:
        MalformedHashError: Missing {schema} envelope or corrupt payload
        InvalidSchemaError: Embedded schema is unknown or incomplete
    """
    parts, payload = schema_parser.decode_hash(encoded)
    variant = registry.resolve(parts)
    matched = await variant.verify(crypto.to_bytes(password), payload)
    if not matched:
        log.debug("Password mismatch for %s hash", variant.name)
    return matched


def create_sync(password: Password, schema: str = DEFAULT_SCHEMA) -> str:
    """Blocking create(). Don't call from inside a running event loop."""
    return asyncio.run(create(password, schema))


def verify_sync(password: Password, encoded: str) -> bool:
    """Blocking verify(). Don't call from inside a running event loop."""
    return asyncio.run(verify(password, encoded))


def identify(encoded: str) -> str:
    """Algorithm name of a stored hash ("PBKDF2", "SSHA", ...)."""
    parts, _ = schema_parser.decode_hash(encoded)
    return registry.resolve(parts).name


def needs_rehash(encoded: str, schema: str = DEFAULT_SCHEMA) -> bool:
    """
    Was this hash made with different settings than `schema`?

    Useful right after a successful verify(): if True, hash the password
    again with create() and store the new value.
    """
    parts, _ = schema_parser.decode_hash(encoded)
    current = registry.resolve(parts)
    wanted = registry.resolve(schema_parser.parse(schema))
    return current != wanted
