"""Frozen copy of a validator's values and errors at one point in time."""

from dataclasses import dataclass
from typing import Any

from paramguard.messages import FieldErrors


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """What ``Validator.result()`` and ``validate()`` hand back.

    Truthiness follows validity, so a handler can bail out early::

        result = validate(form, rules)
        if not result:
            return render_form(form, errors=result.errors)

    ``data`` holds the raw value of every field that was checked,
    including the failing ones, for re-filling the form.

    ``errors`` only has keys for failing fields. Each entry is keyed by
    rule name, or a plain list when the validator was built with
    ``store_errors_with_rules=False``::

        {"title": {"notEmpty": "This field is required"},
         "email": {"email": "Must be a valid email address"}}
    """

    data: dict[str, Any]
    errors: dict[str, FieldErrors]

    @property
    def is_valid(self) -> bool:
        """No field has an entry in ``errors``."""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid
