"""Custom exceptions for drips-sdk."""

from enum import Enum
from typing import Any


class DripsErrorCode(str, Enum):
    """Kind of failure raised by the SDK itself."""

    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNSUPPORTED_NETWORK = "UNSUPPORTED_NETWORK"


class DripsError(Exception):
    """
    Base exception for drips-sdk.

    Carries the error kind and, where one applies, the offending parameter
    name and value. Failures of the RPC node or the subgraph are never
    wrapped in this type.
    """

    def __init__(
        self,
        code: DripsErrorCode,
        message: str,
        param: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.param = param
        self.value = value


class MissingArgumentError(DripsError):
    """A required argument was not provided."""

    def __init__(self, param: str, message: str | None = None) -> None:
        super().__init__(
            DripsErrorCode.MISSING_ARGUMENT,
            message or f"'{param}' is missing",
            param=param,
        )


class InvalidArgumentError(DripsError):
    """An argument was provided but is malformed or out of range."""

    def __init__(self, message: str, param: str | None = None, value: Any = None) -> None:
        super().__init__(DripsErrorCode.INVALID_ARGUMENT, message, param=param, value=value)


class UnsupportedNetworkError(DripsError):
    """Unsupported chain ID."""

    def __init__(self, chain_id: int) -> None:
        super().__init__(
            DripsErrorCode.UNSUPPORTED_NETWORK,
            f"Chain {chain_id} is not supported",
            param="chain_id",
            value=chain_id,
        )
        self.chain_id = chain_id
