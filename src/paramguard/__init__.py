"""Parameter validation — composable rules, prioritized messages.

Usage::

    from paramguard import Options, Validator, between, email, length, not_empty

    validator = Validator(default_messages={"notEmpty": "Please fill this in"})
    validator.validate(request.query, {
        "name": Options(not_empty, message="Name required"),
        "email": not_empty & email,
        "age": between(18, 65),
        "bio": {"rule": length(max=500), "messages": {"length": "Too long"}},
    })
    if not validator.is_valid:
        return render_form(errors=validator.get_errors(), data=validator.get_data())

For one-off checks, ``validate()`` runs a fresh validator and returns an
immutable ``ValidationResult``.
"""

from collections.abc import Mapping

from paramguard.config import ValidatorConfig
from paramguard.errors import InvalidConfiguration, ParamguardError
from paramguard.messages import FieldErrors, resolve_messages
from paramguard.options import Options, RuleSpec
from paramguard.result import ValidationResult
from paramguard.rules import (
    AllOf,
    AsyncPredicate,
    CheckResult,
    Failed,
    Passed,
    Predicate,
    Rule,
    all_of,
    async_rule,
    between,
    email,
    integer,
    length,
    matches,
    max_length,
    min_length,
    not_empty,
    number,
    one_of,
    required,
    rule,
    url,
)
from paramguard.sources import ParameterSource, Pending
from paramguard.validator import RuleSpecs, Validator

__all__ = [
    "AllOf",
    "AsyncPredicate",
    "CheckResult",
    "Failed",
    "FieldErrors",
    "InvalidConfiguration",
    "Options",
    "ParameterSource",
    "ParamguardError",
    "Passed",
    "Pending",
    "Predicate",
    "Rule",
    "RuleSpec",
    "RuleSpecs",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "all_of",
    "async_rule",
    "between",
    "email",
    "integer",
    "length",
    "matches",
    "max_length",
    "min_length",
    "not_empty",
    "number",
    "one_of",
    "required",
    "resolve_messages",
    "rule",
    "url",
    "validate",
]


def validate(
    source: ParameterSource,
    rules: RuleSpecs,
    messages: Mapping[str, str] | None = None,
    *,
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """Validate *source* once with a fresh validator.

    Args:
        source: Any object with ``get(name)``: a dict, query params,
            form data.
        rules: Field name to a rule, ``Options``, ``{"rule": ...}`` dict,
            or list of rules.
        messages: Messages keyed by rule name for this call.
        config: Validator configuration; defaults to ``ValidatorConfig()``.

    Returns:
        A ``ValidationResult`` with ``.data`` (raw values of every field)
        and ``.errors`` (failing fields only).

    Example::

        result = validate(form, {"title": not_empty & max_length(200)})
        if not result:
            # result.errors == {"title": {"notEmpty": "This field is required"}}
            ...
    """
    validator = Validator.from_config(config or ValidatorConfig())
    return validator.validate(source, rules, messages).result()
