"""Stateful validator — applies rules per field and accumulates the outcome.

Usage::

    validator = Validator(default_messages={"notEmpty": "Required"})
    validator.validate(form, {
        "username": not_empty & length(3, 20),
        "age": Options(between(18, 65), message="You must be 18 to 65"),
    })
    if not validator.is_valid:
        return render_form(form, errors=validator.get_errors())

Values and errors accumulate across ``validate()`` calls: a field stays
in ``errors`` until the errors are overwritten with ``set_errors()`` or
``reset()``. Call one of those between phases when validity should only
reflect the latest call.
"""

import inspect
import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

import anyio

from paramguard.config import ValidatorConfig
from paramguard.errors import InvalidConfiguration
from paramguard.messages import FieldErrors, resolve_messages
from paramguard.options import Options, RuleSpec, to_options
from paramguard.result import ValidationResult
from paramguard.rules import CheckResult, Failed
from paramguard.sources import ParameterSource, Pending

logger = logging.getLogger("paramguard.validator")

RuleSpecs: TypeAlias = Mapping[str, RuleSpec] | Iterable[tuple[str, RuleSpec]]


def _items(rules: RuleSpecs) -> Iterable[tuple[str, RuleSpec]]:
    if isinstance(rules, Mapping):
        return rules.items()
    return rules


def _to_options(param: str, spec: RuleSpec) -> Options:
    try:
        return to_options(spec)
    except InvalidConfiguration:
        logger.debug("Invalid rule specification for parameter %r", param)
        raise


class Validator:
    """Validates named parameters and keeps their values and errors.

    Args:
        store_errors_with_rules: Store each field's errors as
            ``{rule_name: message}``. When false, a plain list of messages.
        default_messages: Messages keyed by rule name, used for every
            ``validate()`` call on this validator.
    """

    __slots__ = ("_config", "_data", "_errors")

    def __init__(
        self,
        store_errors_with_rules: bool = True,
        default_messages: Mapping[str, str] | None = None,
    ) -> None:
        self._config = ValidatorConfig(
            store_errors_with_rules=store_errors_with_rules,
            default_messages=default_messages or {},
        )
        self._data: dict[str, Any] = {}
        self._errors: dict[str, FieldErrors] = {}

    @classmethod
    def from_config(cls, config: ValidatorConfig) -> "Validator":
        """Create a validator from a ``ValidatorConfig``."""
        return cls(config.store_errors_with_rules, config.default_messages)

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    # -- Validation --

    def validate(
        self,
        source: ParameterSource,
        rules: RuleSpecs,
        messages: Mapping[str, str] | None = None,
    ) -> "Validator":
        """Validate parameters from *source* with the given rules.

        Every requested parameter has its raw value recorded, valid or
        not. Failing parameters get an entry in the errors; passing ones
        are left untouched.

        Args:
            source: Anything with ``get(name)``: a dict, query params,
                form data.
            rules: Field name to a rule, an ``Options``, a dict with a
                ``rule`` key, or a list of rules.
            messages: Messages keyed by rule name for this call only.

        Returns:
            The validator itself, for chaining.

        Raises:
            InvalidConfiguration: If a field's specification has no usable
                rule. Fields before it keep their recorded state.
        """
        for param, spec in _items(rules):
            value = source.get(param)
            self._data[param] = value
            options = _to_options(param, spec)
            try:
                outcome = options.rule.check(value)
            except InvalidConfiguration:
                logger.debug("Rule for parameter %r cannot be checked here", param)
                raise
            self._apply(param, options, outcome, messages)
        return self

    async def validate_async(
        self,
        source: Pending[ParameterSource],
        rules: RuleSpecs,
        messages: Mapping[str, str] | None = None,
    ) -> "Validator":
        """Validate like ``validate()``, running field checks concurrently.

        *source* may be awaitable (``await request.form()`` is done for
        you). Async rules are only supported here. Fields are checked in
        an anyio task group; outcomes are applied afterwards in the order
        the rules were given, so the resulting state matches ``validate()``.
        """
        if inspect.isawaitable(source):
            source = await source

        planned: list[tuple[str, Options, Any]] = []
        for param, spec in _items(rules):
            value = source.get(param)
            self._data[param] = value
            planned.append((param, _to_options(param, spec), value))

        outcomes: list[CheckResult | None] = [None] * len(planned)

        async def _check(index: int, options: Options, value: Any) -> None:
            outcomes[index] = await options.rule.acheck(value)

        async with anyio.create_task_group() as tg:
            for index, (_, options, value) in enumerate(planned):
                tg.start_soon(_check, index, options, value)

        for (param, options, _), outcome in zip(planned, outcomes, strict=True):
            self._apply(param, options, outcome, messages)
        return self

    def _apply(
        self,
        param: str,
        options: Options,
        outcome: CheckResult | None,
        messages: Mapping[str, str] | None,
    ) -> None:
        if not isinstance(outcome, Failed):
            return
        logger.debug(
            "Parameter %r failed rules: %s", param, ", ".join(outcome.rule_names)
        )
        self._errors[param] = resolve_messages(
            outcome,
            default_messages=self._config.default_messages,
            messages=messages,
            field_messages=options.messages,
            message=options.message,
            with_rules=self._config.store_errors_with_rules,
        )

    # -- Errors --

    def add_error(self, param: str, message: str) -> "Validator":
        """Add an error for *param*, e.g. from a check done outside the rules."""
        errors = self._errors.setdefault(param, [])
        if isinstance(errors, dict):
            errors[_next_index(errors)] = message
        else:
            errors.append(message)
        return self

    def add_errors(self, param: str, messages: Iterable[str]) -> "Validator":
        """Add several errors for *param*."""
        for message in messages:
            self.add_error(param, message)
        return self

    def get_errors(self) -> dict[str, FieldErrors]:
        """Return a copy of every field's errors."""
        return {param: _own(errs) for param, errs in self._errors.items()}

    def set_errors(self, errors: Mapping[str, FieldErrors]) -> "Validator":
        """Replace all errors. ``set_errors({})`` makes the validator valid again."""
        self._errors = {param: _own(errs) for param, errs in errors.items()}
        return self

    def get_param_errors(self, param: str) -> FieldErrors:
        """Return the errors of *param*, or an empty list."""
        return _own(self._errors.get(param, []))

    def get_param_rule_error(self, param: str, rule: str) -> str:
        """Return the message *rule* produced for *param*, or ``""``.

        Only meaningful when errors are stored with rule names.
        """
        errors = self._errors.get(param)
        if isinstance(errors, Mapping):
            return errors.get(rule, "")
        return ""

    def set_param_errors(self, param: str, errors: FieldErrors) -> "Validator":
        self._errors[param] = _own(errors)
        return self

    def get_first_error(self, param: str) -> str:
        """Return the first error of *param*, or ``""``."""
        errors = self._errors.get(param)
        if not errors:
            return ""
        values = errors.values() if isinstance(errors, Mapping) else errors
        return next(iter(values))

    # -- Values --

    def get_value(self, param: str) -> Any:
        """Return the recorded value of *param*, or ``""`` if there is none."""
        value = self._data.get(param)
        return "" if value is None else value

    def set_values(self, values: Mapping[str, Any]) -> "Validator":
        """Merge *values* into the recorded data."""
        self._data.update(values)
        return self

    def set_data(self, data: Mapping[str, Any]) -> "Validator":
        """Replace the recorded data."""
        self._data = dict(data)
        return self

    def get_data(self) -> dict[str, Any]:
        return dict(self._data)

    # -- State --

    @property
    def is_valid(self) -> bool:
        """True if no field has errors, across every call so far."""
        return not self._errors

    def __bool__(self) -> bool:
        return self.is_valid

    def reset(self) -> "Validator":
        """Forget all recorded values and errors."""
        self._data = {}
        self._errors = {}
        return self

    def result(self) -> ValidationResult:
        """Return an immutable snapshot of the current values and errors."""
        return ValidationResult(
            data=dict(self._data),
            errors={param: _own(errs) for param, errs in self._errors.items()},
        )

    def __repr__(self) -> str:
        return f"Validator(fields={len(self._data)}, errors={len(self._errors)})"


def _own(errors: FieldErrors | Iterable[str]) -> FieldErrors:
    # Copy so later add_error() calls never mutate the caller's collection
    if isinstance(errors, Mapping):
        return dict(errors)
    return list(errors)


def _next_index(errors: Mapping[str | int, str]) -> int:
    # Appending to a rule-keyed collection uses the next free integer key
    return max((k for k in errors if isinstance(k, int)), default=-1) + 1
