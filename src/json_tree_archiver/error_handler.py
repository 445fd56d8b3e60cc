"""Error handling implementation for the JSON Tree Archiver."""

import logging
from typing import Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ProcessingError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for JSON Tree Archiver operations.

    Validates raw input and archive settings, and turns processing
    errors into recovery suggestions for the caller.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_string(input_data)
        except Exception as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """
        Handle processing errors and provide recovery suggestions.

        Args:
            error: ProcessingError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Processing error: {error.error_type.value} - {error}")

        if error.error_type in (ErrorType.SYNTAX, ErrorType.STRUCTURE):
            return self._handle_input_error(error)
        elif error.error_type == ErrorType.DEPTH:
            return self._handle_depth_error(error)
        elif error.error_type == ErrorType.ARCHIVE:
            return self._handle_archive_error(error)
        elif error.error_type == ErrorType.FILESYSTEM:
            return self._handle_filesystem_error(error)
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                partial_results=None
            )

    def _handle_input_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle malformed input."""
        return ErrorResponse(
            can_recover=False,
            suggested_action="Fix the JSON input and convert again. "
                             "No tree was built from this input.",
            partial_results=None
        )

    def _handle_depth_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle input nested beyond the configured limit."""
        return ErrorResponse(
            can_recover=False,
            suggested_action="Reduce the nesting depth of the input or raise the max_depth limit.",
            partial_results=error.context.get('depth') if error.context else None
        )

    def _handle_archive_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle archive encoding failures."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Retry the archive step. The tree is unchanged and can be "
                             "packaged again.",
            partial_results=error.context.get('file_count') if error.context else None
        )

    def _handle_filesystem_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle filesystem-related errors."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Check file permissions, available disk space, and directory access. "
                             "Ensure the output location is writable.",
            partial_results=error.context.get('output_path') if error.context else None
        )

    def validate_archive_name(self, name: str) -> ValidationResult:
        """
        Validate archive file name.

        Args:
            name: Archive name to validate

        Returns:
            ValidationResult with validation details
        """
        result = ValidationUtils.validate_archive_name(name)
        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def validate_compression_level(self, level: int) -> ValidationResult:
        """
        Validate ZIP compression level.

        Args:
            level: Compression level to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not 0 <= level <= 9:
            errors.append(ValidationError(
                type=ErrorType.ARCHIVE,
                message="Compression level must be between 0 and 9",
                location="compression_level"
            ))
        elif level == 0:
            warnings.append("Compression level 0 stores files without compression.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
