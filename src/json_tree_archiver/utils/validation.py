"""Validation utilities for raw input and archive settings."""

import json
import re
from typing import List, Tuple
from ..types import ValidationResult, ValidationError, ErrorType

_ARCHIVE_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_\-\s]+$')


class ValidationUtils:
    """Utility class for validating raw JSON text and archive settings."""

    @staticmethod
    def validate_text_input(json_string: str) -> ValidationResult:
        """
        Check that input is non-empty text, without parsing it.

        Args:
            json_string: Raw input

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if not isinstance(json_string, str):
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"JSON input must be text, got {type(json_string).__name__}",
                location="input"
            ))
        elif not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax.

        Any JSON value is accepted at the root, scalars included.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        text_result = ValidationUtils.validate_text_input(json_string)
        if not text_result.is_valid:
            return text_result

        errors = []
        warnings = []

        try:
            json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationUtils.syntax_error(e))
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message="JSON input is nested too deeply to parse",
                location="input"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def syntax_error(error: json.JSONDecodeError) -> ValidationError:
        """Describe a JSON decode failure with its location."""
        return ValidationError(
            type=ErrorType.SYNTAX,
            message=f"Invalid JSON syntax: {error.msg}",
            location=f"line {error.lineno}, column {error.colno}"
        )

    @staticmethod
    def is_valid_json(json_string: str) -> bool:
        """Check if a string parses as JSON."""
        return ValidationUtils.validate_json_string(json_string).is_valid

    @staticmethod
    def validate_archive_name(name: str) -> ValidationResult:
        """
        Validate an archive file name.

        Letters, digits, underscores, hyphens and spaces are allowed; a
        trailing ``.zip`` is accepted and ignored.

        Args:
            name: Archive name to validate

        Returns:
            ValidationResult with validation details
        """
        errors, warnings = ValidationUtils._check_archive_name(name)
        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _check_archive_name(name: str) -> Tuple[List[ValidationError], List[str]]:
        errors: List[ValidationError] = []
        warnings: List[str] = []

        stem = name[:-4] if name.lower().endswith(".zip") else name
        if not stem.strip():
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message="Archive name cannot be empty",
                location="archive_name"
            ))
        elif not _ARCHIVE_NAME_PATTERN.match(stem):
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message="Archive name may only contain letters, digits, spaces, '_' and '-'",
                location="archive_name"
            ))
        elif stem != stem.strip():
            warnings.append("Archive name has leading or trailing whitespace")

        return errors, warnings
