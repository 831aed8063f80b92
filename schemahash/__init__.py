"""
schemahash - Self-Describing Password Hashes

Hashes carry their own schema, so they can be verified later with nothing
but the password:

    {PBKDF2/24/20000/24/sha256}<base64(digest || salt)>

Supported schemas:
- PBKDF2/<saltSize>/<iterations>/<hashSize>/<digest>   (default, slow KDF)
- SSHA256/<saltSize>                                   (salted SHA-256)
- SSHA                                                 (LDAP salted SHA-1)
- PLAIN                                                (no hashing, legacy only)

Components:
- schema.py: {schema}base64 parsing and encoding
- registry.py: Algorithm variants and the name -> variant table
- crypto.py: Salts, PBKDF2, salted digests, constant-time compare
- hasher.py: create() / verify() and helpers
- cli.py: Command-line interface (uses built-in argparse)

Usage:
    python -m schemahash <password> [<schema>]
"""

from .errors import (
    HashError,
    InvalidSchemaError,
    MalformedHashError,
    MissingParameterError,
    UnknownSchemaError,
)
from .hasher import (
    DEFAULT_SCHEMA,
    create,
    create_sync,
    identify,
    needs_rehash,
    verify,
    verify_sync,
)

__version__ = "0.3.0"

__all__ = [
    "DEFAULT_SCHEMA",
    "HashError",
    "InvalidSchemaError",
    "MalformedHashError",
    "MissingParameterError",
    "UnknownSchemaError",
    "create",
    "create_sync",
    "identify",
    "needs_rehash",
    "verify",
    "verify_sync",
]
