"""JSON parser with validation and structure statistics."""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from .types import ErrorType, InvalidInputError, ValidationError, ValidationResult
from .utils.validation import ValidationUtils
from .naming import is_container


class JSONParser:
    """
    JSON parser with input validation and a nesting depth guard.

    Turns raw text into a JSON value for the tree builder. Any failure is
    raised as InvalidInputError so no tree is built from bad input.
    """

    def __init__(self, max_depth: int = 500,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            max_depth: Maximum accepted nesting depth of objects and arrays
            logger: Optional logger instance
        """
        self.max_depth = max_depth
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Any:
        """
        Parse JSON text.

        Args:
            json_string: JSON text to parse

        Returns:
            Parsed JSON value (any JSON type, scalars included)

        Raises:
            InvalidInputError: If the text is empty, malformed or too deeply nested
        """
        data, _ = self.parse_with_warnings(json_string)
        return data

    def parse_with_warnings(self, json_string: str) -> Tuple[Any, List[str]]:
        """
        Parse JSON text once and report what the conversion should warn about.

        Args:
            json_string: JSON text to parse

        Returns:
            Tuple of the parsed value and the processing warnings

        Raises:
            InvalidInputError: If the text is empty, malformed or too deeply nested
        """
        text_result = ValidationUtils.validate_text_input(json_string)
        if not text_result.is_valid:
            raise InvalidInputError(
                f"Invalid JSON input: {text_result.errors[0].message}",
                text_result.errors[0].type
            )

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            error = ValidationUtils.syntax_error(e)
            raise InvalidInputError(
                f"Invalid JSON input: {error.message} at {error.location}",
                context={"location": error.location}
            )
        except RecursionError:
            raise InvalidInputError(
                "JSON parsing failed: input is nested too deeply",
                ErrorType.DEPTH
            )

        depth = self.calculate_nesting_depth(data)
        if depth > self.max_depth:
            raise InvalidInputError(
                f"Nesting depth {depth} exceeds the limit of {self.max_depth}",
                ErrorType.DEPTH,
                context={"depth": depth, "max_depth": self.max_depth}
            )

        self.logger.info(f"Parsed JSON with root type {type(data).__name__}, nesting depth {depth}")
        return data, self._processing_warnings(data, depth)

    def validate_for_processing(self, data: Any) -> ValidationResult:
        """
        Check an already parsed value before building a tree from it.

        Args:
            data: Parsed data to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []

        try:
            json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Data is not JSON serializable: {str(e)}",
                location="data"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=[])

        depth = self.calculate_nesting_depth(data)
        if depth > self.max_depth:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message=f"Nesting depth {depth} exceeds the limit of {self.max_depth}",
                location="data"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=[])

        return ValidationResult(
            is_valid=True,
            errors=errors,
            warnings=self._processing_warnings(data, depth)
        )

    def _processing_warnings(self, data: Any, depth: int) -> List[str]:
        warnings = []
        if depth > 20:
            warnings.append(f"Deep nesting detected (depth: {depth}). "
                            "The archive will contain deeply nested folders.")
        if not is_container(data):
            warnings.append("Root value is a scalar; the archive will contain a single file.")
        return warnings

    def calculate_nesting_depth(self, data: Any) -> int:
        """
        Maximum nesting depth of objects and arrays.

        Walks with an explicit stack so arbitrarily deep input can be
        measured before anything recursive touches it.
        """
        max_depth = 0
        stack: List[tuple] = [(data, 0)]

        while stack:
            value, depth = stack.pop()
            max_depth = max(max_depth, depth)
            if isinstance(value, dict):
                stack.extend((child, depth + 1) for child in value.values())
            elif isinstance(value, list):
                stack.extend((child, depth + 1) for child in value)

        return max_depth

    def get_structure_statistics(self, data: Any) -> Dict[str, Any]:
        """
        Get statistics about the parsed JSON value.

        Args:
            data: Parsed data to analyze

        Returns:
            Dictionary with structure statistics
        """
        stats = {
            "root_type": type(data).__name__,
            "max_depth": self.calculate_nesting_depth(data),
            "dict_count": 0,
            "list_count": 0,
            "primitive_count": 0,
            "total_keys": 0,
            "total_items": 0,
        }

        stack = [data]
        while stack:
            value = stack.pop()
            if isinstance(value, dict):
                stats["dict_count"] += 1
                stats["total_keys"] += len(value)
                stack.extend(value.values())
            elif isinstance(value, list):
                stats["list_count"] += 1
                stats["total_items"] += len(value)
                stack.extend(value)
            else:
                stats["primitive_count"] += 1

        return stats
