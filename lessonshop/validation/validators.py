"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Reusable field checks shared by the lesson and customer validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ValidationResult:
    """
    Result of data validation.

    Attributes:
        is_valid: Whether validation passed
        errors: List of error messages
        warnings: List of warning messages (non-fatal)
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: Optional[str]) -> 'ValidationResult':
        """
        Add an error message. ``None`` is ignored so field checks can be
        chained directly.

        Returns:
            Self for method chaining

        Examples:
            >>> result = ValidationResult(is_valid=True)
            >>> result.add_error("Error 1").add_error(None)
        """
        if message:
            self.errors.append(message)
            self.is_valid = False
        return self

    def add_warning(self, message: Optional[str]) -> 'ValidationResult':
        """
        Add a warning message. Warnings never affect validity.

        Returns:
            Self for method chaining
        """
        if message:
            self.warnings.append(message)
        return self

    @property
    def has_errors(self) -> bool:
        """Check if there are errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are warnings."""
        return len(self.warnings) > 0

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid and not self.has_warnings:
            return "Validation passed"

        parts = []

        if self.has_errors:
            parts.append(f"Errors ({len(self.errors)}):")
            for error in self.errors:
                parts.append(f"  - {error}")

        if self.has_warnings:
            parts.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                parts.append(f"  - {warning}")

        return "\n".join(parts)


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate(); the helpers below return an error
    message, or None when the value passes.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: List[str]
    ) -> List[str]:
        """
        Validate that required fields exist and are not None.

        Returns:
            List of error messages for missing fields
        """
        errors = []
        for name in required_fields:
            if name not in data or data[name] is None:
                errors.append(f"Missing required field: {name}")
        return errors

    def validate_not_blank(self, value: Any, field_name: str) -> Optional[str]:
        """Validate that a string is non-empty after trimming."""
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"
        if not value.strip():
            return f"{field_name} is required"
        return None

    def validate_pattern(
        self,
        value: str,
        pattern: str,
        field_name: str,
        description: str
    ) -> Optional[str]:
        """
        Validate a trimmed string against a full-match regex.

        Args:
            value: String to validate
            pattern: Regular expression the whole trimmed value must match
            field_name: Name of the field (for error message)
            description: What the pattern allows (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        if not re.fullmatch(pattern, value.strip()):
            return f"{field_name} may only contain {description}"
        return None

    def validate_non_negative_number(
        self,
        value: Any,
        field_name: str,
        integer: bool = False
    ) -> Optional[str]:
        """
        Validate that value is a number >= 0.

        Args:
            value: Value to validate
            field_name: Name of the field (for error message)
            integer: Require an integral value

        Returns:
            Error message if invalid, None if valid
        """
        # bool is an int subclass but never a valid quantity
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"{field_name} must be a number, got {type(value).__name__}"

        if integer and value != int(value):
            return f"{field_name} must be an integer, got {value}"

        if value < 0:
            return f"{field_name} must not be negative, got {value}"

        return None

    def validate_email_format(
        self,
        email: str,
        field_name: str = "email"
    ) -> Optional[str]:
        """
        Validate email format.

        Returns:
            Error message if invalid, None if valid
        """
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not re.match(pattern, email):
            return f"Invalid {field_name} format: {email}"
        return None
