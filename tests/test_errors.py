"""Tests for paramguard.errors — exception hierarchy."""

import pytest

from paramguard import Options, Validator
from paramguard.errors import InvalidConfiguration, ParamguardError


class TestHierarchy:
    def test_invalid_configuration_is_paramguard_error(self) -> None:
        assert issubclass(InvalidConfiguration, ParamguardError)

    def test_paramguard_error_is_exception(self) -> None:
        assert issubclass(ParamguardError, Exception)


class TestRaisedFromValidate:
    def test_catchable_as_base(self) -> None:
        with pytest.raises(ParamguardError):
            Validator().validate({}, {"name": {"message": "Required"}})

    def test_message(self) -> None:
        with pytest.raises(InvalidConfiguration, match="Validation rules are missing"):
            Options(rule=None)  # type: ignore[arg-type]

    def test_validation_failure_never_raises(self) -> None:
        from paramguard import not_empty

        v = Validator().validate({}, {"name": not_empty})
        assert v.is_valid is False
