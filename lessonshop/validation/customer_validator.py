"""
Customer form validator.

Validates the checkout form before an order may be submitted.
"""

from .validators import Validator, ValidationResult
from ..models.order import CustomerForm


class CustomerValidator(Validator):
    """
    Validator for the checkout form.

    Validates:
    - name: letters and whitespace only, non-empty after trimming
    - phone: digits, whitespace, "+" and "-" only, non-empty after trimming
    - address: non-empty after trimming

    The e-mail address is not part of validity. A malformed non-empty
    address only produces a warning.

    Examples:
        >>> validator = CustomerValidator()
        >>> form = CustomerForm(name="John Smith", phone="+1 555-1234",
        ...                     address="1 Main St")
        >>> validator.validate(form).is_valid
        True
    """

    NAME_PATTERN = r'[A-Za-z\s]+'
    PHONE_PATTERN = r'[0-9\s+-]+'

    def validate(self, data: CustomerForm) -> ValidationResult:
        """
        Validate customer form data.

        Args:
            data: Customer form as typed by the user

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult(is_valid=True)

        error = self.validate_not_blank(data.name, "name")
        if error:
            result.add_error(error)
        else:
            result.add_error(self.validate_pattern(
                data.name, self.NAME_PATTERN, "name", "letters and spaces"
            ))

        error = self.validate_not_blank(data.phone, "phone")
        if error:
            result.add_error(error)
        else:
            result.add_error(self.validate_pattern(
                data.phone, self.PHONE_PATTERN, "phone",
                "digits, spaces, '+' and '-'"
            ))

        result.add_error(self.validate_not_blank(data.address, "address"))

        email = data.email.strip()
        if email:
            result.add_warning(self.validate_email_format(email))

        return result
