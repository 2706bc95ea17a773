"""
Error taxonomy shared by every modbase component.

All errors are raised synchronously to the immediate caller. Nothing in the
core retries or swallows them.
"""

from enum import Enum
from typing import Any, Optional, Union


class ModbaseError(Exception):
    """Root of all modbase errors."""


class MalformedField(ModbaseError, ValueError):
    """A metadata field could not be normalized to its canonical form."""

    def __init__(self, field: str, value: Any, detail: Optional[str] = None):
        self.field = field
        self.value = value
        message = f"Invalid {field}: {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ConfigImmutable(ModbaseError):
    """A write was attempted on a configuration key protected by policy."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Configuration key {key!r} is read-only")


class InvalidExtensionConfiguration(ModbaseError):
    """The stored extension list is not a list-like structure."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid settings in datastore at key ReplicantExtensions: {value!r}"
        )


class UnknownExtension(ModbaseError, LookupError):
    """An extension identifier has no implementation in the catalog."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No extension registered under {identifier!r}")


class DuplicateExtension(ModbaseError):
    """Two different implementations were registered under one identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Extension {identifier!r} already registered")


class FailureReason(str, Enum):
    """Standard reasons passed to fail_with()."""

    NONE = "None"
    UNKNOWN = "Unknown"
    BAD_CONFIG = "BadConfig"
    DISCONNECTED = "Disconnected"
    NOT_FOUND = "NotFound"
    UNEXPECTED_REPLY = "UnexpectedReply"
    TIMEOUT_EXPIRED = "TimeoutExpired"
    USER_INTERRUPT = "UserInterrupt"
    NO_ACCESS = "NoAccess"
    NO_TARGET = "NoTarget"
    NOT_VULNERABLE = "NotVulnerable"
    PAYLOAD_FAILED = "PayloadFailed"


class OperationFailure(ModbaseError, RuntimeError):
    """
    Terminating failure raised by a module through fail_with().

    Always surfaces to the invocation harness; never retried internally.
    """

    def __init__(self, reason: Union[FailureReason, str], message: Optional[str] = None):
        self.reason = reason.value if isinstance(reason, FailureReason) else str(reason)
        self.message = message
        super().__init__(f"{self.reason}: {message if message is not None else ''}")


__all__ = [
    "ModbaseError",
    "MalformedField",
    "ConfigImmutable",
    "InvalidExtensionConfiguration",
    "UnknownExtension",
    "DuplicateExtension",
    "FailureReason",
    "OperationFailure",
]
