"""
schemahash - Schema Parser

Handles the textual side of a hash:

    {PBKDF2/24/20000/24/sha256}<base64(digest || salt)>
     |_______ schema _______|  |_______ payload ________|

A schema is the '/'-separated list of the algorithm name followed by its
parameters. The payload is whatever bytes the algorithm stores.

The schema ends at the FIRST '}', so a schema may never contain '}'.
"""

import base64
import binascii
from typing import List, Sequence, Tuple, Union

from .errors import InvalidSchemaError, MalformedHashError


SEPARATOR = "/"
OPEN = "{"
CLOSE = "}"


def parse(schema: str) -> List[str]:
    """Split "SSHA256/16" into ["SSHA256", "16"]."""
    return schema.split(SEPARATOR)


def serialize(parts: Sequence[str]) -> str:
    """Inverse of parse()."""
    return SEPARATOR.join(parts)


def encode_hash(schema: Union[str, Sequence[str]], payload: bytes) -> str:
    """
    Wrap a payload into the {schema}base64 envelope.

    Args:
        schema: Schema string, or already-parsed parts
        payload: digest || salt bytes (raw password bytes for PLAIN)

    Raises:
        InvalidSchemaError: If the schema contains '}' (couldn't be decoded)
    """
    if not isinstance(schema, str):
        schema = serialize(schema)
    if CLOSE in schema:
        raise InvalidSchemaError(f"Schema may not contain '{CLOSE}': {schema!r}")
    return f"{OPEN}{schema}{CLOSE}{base64.b64encode(payload).decode('ascii')}"


def decode_hash(encoded: str) -> Tuple[List[str], bytes]:
    """
    Take apart an encoded hash.

    Whitespace around the payload (a trailing newline from a file or
    database dump) is ignored; anything else outside the base64
    alphabet is rejected.

    Returns:
        (schema parts, decoded payload bytes)

    Raises:
        MalformedHashError: No leading '{', no '}', or the payload
            isn't valid base64
    """
    end = encoded.find(CLOSE)
    if not encoded.startswith(OPEN) or end == -1:
        raise MalformedHashError("Hash must have the form {schema}base64")

    try:
        payload = base64.b64decode(encoded[end + 1:].strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedHashError(f"Hash payload is not valid base64: {e}") from e

    return parse(encoded[1:end]), payload
