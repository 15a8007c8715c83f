"""Exception hierarchy shared by the assembly engine and the API client.

WHY: Callers need to tell apart a remote API failure, a broken document,
and a programming mistake in the shape wiring. One typed hierarchy rooted
at NSError lets them catch broadly or narrowly.

HOW: Plain Exception subclasses. APIError and its children describe
what the remote side reported; MarkupError describes reader failures;
the remaining classes are raised by the engine itself.

RULES:
- Every error raised by this package derives from NSError
- APIError messages are prefixed with "API error: "
- ConfigurationError is also a TypeError (misuse of the wiring API)
"""

from __future__ import annotations


class NSError(Exception):
    """Base class for all errors raised by nationscript."""


class APIError(NSError):
    """Raised when the NationStates API reports a failure.

    WHY: The API signals failure either through an HTTP status or through
    an <ERROR> tag in an otherwise well-formed document. Both end the
    current request the same way.

    HOW: Wraps the remote message, prefixed for readability.

    RULES:
    - message holds the unprefixed remote text
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"API error: {message}")


class EntityNotFoundError(APIError):
    """Raised when a queried nation, region or card does not exist (HTTP 404)."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"Entity not found: {entity}")


class LoginError(APIError):
    """Raised when authentication for private shards fails."""


class RatelimitError(APIError):
    """Raised when the API rejected a request for exceeding the rate limit.

    RULES:
    - retry_after is the number of seconds the API asked us to wait
    """

    def __init__(self, retry_after: float) -> None:
        self.retry_after = retry_after
        super().__init__(f"Ratelimit exceeded; retry in {retry_after:g} s")


class MarkupError(NSError):
    """Raised when the streaming markup reader fails on a document."""


class ProductWithheldError(NSError):
    """Raised when an assembler is asked to deliver before it is finalized."""

    def __init__(self, assembler: str) -> None:
        super().__init__(f"{assembler} has not been finalized; product withheld")


class AssemblerFinalizedError(NSError):
    """Raised when an event reaches an assembler that is already finalized."""

    def __init__(self, assembler: str) -> None:
        super().__init__(f"{assembler} is finalized and accepts no further events")


class ConfigurationError(NSError, TypeError):
    """Raised eagerly when the wiring API receives invalid arguments."""


class FieldConflictError(NSError):
    """Raised when a dotted field path runs through an existing scalar value."""


class DumpNotFoundError(NSError):
    """Raised when a data dump is unavailable in the requested mode."""
