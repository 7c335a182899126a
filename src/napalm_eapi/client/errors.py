"""Custom exceptions for the napalm-eapi client and interface facade."""

from __future__ import annotations

from dataclasses import dataclass, field

# JSON-RPC 2.0 reserved error codes
CODE_PARSE_ERROR: int = -32700
CODE_INVALID_REQUEST: int = -32600
CODE_METHOD_NOT_FOUND: int = -32601
CODE_INVALID_PARAMS: int = -32602
CODE_INTERNAL_ERROR: int = -32603

# Errors in the request itself rather than in one of its commands.
JSONRPC_PROTOCOL_CODES: frozenset[int] = frozenset(
    {
        CODE_PARSE_ERROR,
        CODE_INVALID_REQUEST,
        CODE_METHOD_NOT_FOUND,
        CODE_INVALID_PARAMS,
        CODE_INTERNAL_ERROR,
    }
)


class EapiError(Exception):
    """Base exception for all napalm-eapi errors."""


class EapiAuthError(EapiError):
    """Raised when the switch rejects the supplied credentials."""


class EapiRequestError(EapiError):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class EapiResponseError(EapiError):
    """Raised when the switch returns a non-2xx HTTP status code."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} for {url!r}")


class EapiParseError(EapiError):
    """Raised when a response or configuration block cannot be parsed."""


@dataclass
class EapiCommandError(EapiError):
    """Raised when eAPI answers a ``runCmds`` request with a JSON-RPC error.

    Attributes:
        code: JSON-RPC error code reported by the switch.
        message: Error message reported by the switch.
        commands: The command list that was submitted.
        errors: Per-command error strings extracted from ``error.data``.
    """

    code: int
    message: str
    commands: list[object] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(f"eAPI error code={self.code}: {self.message}")


@dataclass
class UnsupportedOperationError(EapiError):
    """Raised when an operation is not available for an interface type.

    Attributes:
        operation: Name of the requested operation (e.g. ``"create"``).
        interface: Interface name the operation was requested for.
    """

    operation: str
    interface: str

    def __post_init__(self) -> None:
        super().__init__(
            f"Operation {self.operation!r} is not supported for interface {self.interface!r}"
        )


class EapiProtocolError(EapiCommandError):
    """Raised when eAPI rejects the JSON-RPC request as a whole.

    Covers the reserved JSON-RPC codes (malformed request, unknown method,
    bad parameters, internal error); no command of the batch was run.
    """
