"""Per-field rule specifications.

A field is validated either by a bare rule or by ``Options`` wrapping a
rule with message overrides::

    validator.validate(form, {
        "age": between(18, 65),
        "name": Options(not_empty, message="Name required"),
        "password": Options(
            not_empty & length(8),
            messages={"length": "Use at least 8 characters"},
        ),
        "title": [required, max_length(200)],
    })

Plain dicts with a ``rule`` key (or ``rules``) and lists of rules are
normalized here so the validator only ever sees ``Options``.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

from paramguard.errors import InvalidConfiguration
from paramguard.rules import AllOf, Rule

RuleSpec: TypeAlias = "Rule | Options | Mapping[str, Any] | Sequence[Rule]"


@dataclass(frozen=True, slots=True)
class Options:
    """A rule plus per-field message overrides.

    ``message`` replaces every error for the field with that one string.
    ``messages`` overrides messages for specific rule names and takes
    precedence over call-scoped and validator-wide messages.
    """

    rule: Rule
    message: str | None = None
    messages: Mapping[str, str] | None = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.rule, Rule):
            raise InvalidConfiguration("Validation rules are missing")
        if self.message is not None and not isinstance(self.message, str):
            msg = f"message must be a string, got {type(self.message).__name__}"
            raise InvalidConfiguration(msg)
        messages = {} if self.messages is None else self.messages
        if not isinstance(messages, Mapping):
            msg = f"messages must be a mapping, got {type(messages).__name__}"
            raise InvalidConfiguration(msg)
        object.__setattr__(self, "messages", MappingProxyType(dict(messages)))


def to_options(spec: Any) -> Options:
    """Normalize any accepted rule specification to ``Options``.

    Raises:
        InvalidConfiguration: If *spec* does not resolve to exactly one rule.
    """
    if isinstance(spec, Options):
        return spec
    if isinstance(spec, Rule):
        return Options(spec)
    if isinstance(spec, Mapping):
        rule = spec.get("rule", spec.get("rules"))
        if isinstance(rule, Sequence) and not isinstance(rule, str):
            rule = AllOf(*rule)
        return Options(
            rule,
            message=spec.get("message"),
            messages=spec.get("messages") or {},
        )
    if isinstance(spec, Sequence) and not isinstance(spec, str):
        return Options(AllOf(*spec))
    msg = f"Unsupported rule specification: {type(spec).__name__}"
    raise InvalidConfiguration(msg)
