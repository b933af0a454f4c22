"""
Exception hierarchy for the legal question answering service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LegalChatException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(LegalChatException):
    """Raised when a required setting is missing. Never retried."""

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            missing: Names of the missing environment variables
            details: Additional context
        """
        details = details or {}
        if missing:
            details["missing"] = list(missing)
        super().__init__(message, details)


class ValidationError(LegalChatException):
    """Raised when input validation fails. Never retried."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class FilenameValidationError(ValidationError):
    """Raised when an uploaded filename does not carry a jurisdiction code."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            f"Invalid filename format. Expected: XX.docx (e.g., DE.docx), got: {filename}",
            field="filename",
            details={"filename": filename},
        )


class ExternalServiceError(LegalChatException):
    """Raised when an external call fails after the retry budget is spent."""

    def __init__(
        self,
        message: str,
        service: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize external service error.

        Args:
            message: Error message
            service: Collaborator that failed (search, openai, storage)
            operation: Operation that failed (search, upload, embed, ...)
            details: Additional context
        """
        details = details or {}
        if service:
            details["service"] = service
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class EmbeddingError(ExternalServiceError):
    """Raised when embedding generation fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, service="openai", operation="embed", details=details)


class ChatCompletionError(ExternalServiceError):
    """Raised when a chat completion call fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, service="openai", operation="chat", details=details)


class VectorStoreError(ExternalServiceError):
    """Raised when vector index operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (search, upload, delete, list, count)
            details: Additional context
        """
        super().__init__(message, service="search", operation=operation, details=details)


class BlobStorageError(ExternalServiceError):
    """Raised when blob storage operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, service="storage", operation=operation, details=details)


class DocumentProcessingError(LegalChatException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            filename: Name of the document that failed
            details: Additional context
        """
        details = details or {}
        if filename:
            details["filename"] = filename
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when document parsing fails. The index is left untouched."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            filename: Name of the document
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, filename, details)
