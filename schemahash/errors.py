"""
schemahash - Error Types

Every failure the library raises on its own is a HashError:

    HashError
    ├── InvalidSchemaError      (schema string can't be used)
    │   ├── UnknownSchemaError  (algorithm identifier not recognized)
    │   └── MissingParameterError
    └── MalformedHashError      (stored hash is structurally broken)

Failures from the underlying crypto primitives (cryptography's
UnsupportedAlgorithm, for example) are NOT wrapped and reach the caller
unchanged.
"""


class HashError(Exception):
    """Base class for all schemahash errors."""


class InvalidSchemaError(HashError, ValueError):
    """Schema string is unusable (bad parameter value, forbidden characters)."""


class UnknownSchemaError(InvalidSchemaError):
    """Schema names an algorithm that isn't PBKDF2, SSHA256, SSHA or PLAIN."""

    def __init__(self, name: str):
        super().__init__(f"Unknown hash schema: {name!r}")
        self.name = name


class MissingParameterError(InvalidSchemaError):
    """A required schema parameter is absent or not a number."""

    def __init__(self, algorithm: str, parameter: str, value=None):
        if value is None:
            message = f"{algorithm} schema is missing parameter '{parameter}'"
        else:
            message = f"{algorithm} schema parameter '{parameter}' must be an integer, got {value!r}"
        super().__init__(message)
        self.algorithm = algorithm
        self.parameter = parameter


class MalformedHashError(HashError, ValueError):
    """Encoded hash lacks the {schema} envelope or has a corrupt payload."""
