"""
Lesson payload validator.

Checks records returned by the catalog service before they are
admitted into the catalog store.
"""

from typing import Any, Dict

from .validators import Validator, ValidationResult
from ..models.lesson import lesson_id_of


class LessonValidator(Validator):
    """
    Validator for lesson payloads.

    Validates:
    - Identifier present (``_id`` or ``id``)
    - Price is a non-negative number
    - Spaces is a non-negative integer
    - Subject and location, when present, are strings

    Examples:
        >>> validator = LessonValidator()
        >>> result = validator.validate({
        ...     "_id": "64f1c0ffee",
        ...     "subject": "Math",
        ...     "location": "London",
        ...     "price": 100,
        ...     "spaces": 5
        ... })
        >>> result.is_valid
        True
    """

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate a lesson payload.

        Args:
            data: Raw lesson record

        Returns:
            ValidationResult with errors
        """
        result = ValidationResult(is_valid=True)

        if not isinstance(data, dict):
            return result.add_error(
                f"Lesson must be an object, got {type(data).__name__}"
            )

        if lesson_id_of(data) in (None, ""):
            result.add_error("Missing required field: _id")

        for error in self.validate_required_fields(data, ["price", "spaces"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.add_error(self.validate_non_negative_number(data["price"], "price"))
        result.add_error(
            self.validate_non_negative_number(data["spaces"], "spaces", integer=True)
        )

        for name in ("subject", "location"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                result.add_error(
                    f"{name} must be a string, got {type(value).__name__}"
                )

        return result

    def validate_spaces_update(self, data: Any) -> ValidationResult:
        """
        Validate the response of an availability adjustment.

        Only ``spaces`` is required; the rest of the record is ignored.
        """
        result = ValidationResult(is_valid=True)

        if not isinstance(data, dict) or "spaces" not in data:
            return result.add_error("Response does not contain spaces")

        return result.add_error(
            self.validate_non_negative_number(data["spaces"], "spaces", integer=True)
        )
