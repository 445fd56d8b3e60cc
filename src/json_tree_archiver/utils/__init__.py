"""Utility functions for the JSON Tree Archiver."""

from .size_calculator import SizeCalculator
from .validation import ValidationUtils

__all__ = ["SizeCalculator", "ValidationUtils"]
