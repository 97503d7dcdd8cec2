"""
Module 02 - Schemas & Canonicalization
File: errors.py

Purpose: Error taxonomy for the sparse Merkle tree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Construction & Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Precondition Errors
    LEAF_VALUE_INVALID = "LEAF_VALUE_INVALID"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Store Errors
    STORE_READ_FAILED = "STORE_READ_FAILED"
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"

    # Persistence Errors
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    RESTORE_FAILED = "RESTORE_FAILED"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SparseMerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Lets callers pass tree failures around (or log them as JSON)
    without carrying live exception objects.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.PERSISTENCE_FAILED],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "SparseMerkleException":
        """Convert this error model to a raised exception."""
        return SparseMerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SparseMerkleException(Exception):
    """
    Base exception for all sparse Merkle tree errors.

    This exception carries structured error information and can be
    converted to/from SparseMerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "SPARSE_MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> SparseMerkleError:
        """Convert this exception to a SparseMerkleError model."""
        return SparseMerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationException(SparseMerkleException):
    """Exception raised for an invalid depth or configuration value."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )


class LeafValueException(SparseMerkleException):
    """Exception raised when a leaf value is not exactly 64 bytes."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_VALUE_INVALID,
            details=full_details,
            retryable=False,
        )


class IndexOutOfRangeException(SparseMerkleException):
    """Exception raised when a leaf index is outside [0, 2^depth)."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        depth: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if depth is not None:
            full_details["depth"] = depth
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class StoreReadException(SparseMerkleException):
    """Exception raised when the store fails to read (not the same as a missing key)."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.STORE_READ_FAILED,
            details=full_details,
            retryable=True,
        )


class StoreWriteException(SparseMerkleException):
    """Exception raised when the store fails to write."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.STORE_WRITE_FAILED,
            details=full_details,
            retryable=True,
        )


class PersistenceException(SparseMerkleException):
    """
    Exception raised when an update could not be made durable.

    The in-memory root has already advanced when this is raised;
    `details["root"]` holds it so the caller can retry the write.
    """

    def __init__(
        self,
        message: str,
        tree_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if tree_name:
            full_details["tree_name"] = tree_name
        super().__init__(
            message=message,
            code=ErrorCodes.PERSISTENCE_FAILED,
            details=full_details,
            retryable=True,
        )


class RestoreException(SparseMerkleException):
    """Exception raised when a persisted blob is malformed."""

    def __init__(
        self,
        message: str,
        tree_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if tree_name:
            full_details["tree_name"] = tree_name
        super().__init__(
            message=message,
            code=ErrorCodes.RESTORE_FAILED,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(SparseMerkleException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
