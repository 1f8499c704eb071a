"""Error message resolution for a failed field.

Several sources may supply a message for the same rule. From lowest to
highest priority:

1. the rule engine's own default message
2. validator-wide ``default_messages``
3. call-scoped ``messages`` passed to ``validate()``
4. the field's ``Options.messages``

Only rules that actually failed are looked up; blank messages are
dropped. A field-level ``Options.message`` bypasses all of this and
becomes the only error for the field.
"""

from collections.abc import Mapping
from typing import TypeAlias

from paramguard.rules import Failed

FieldErrors: TypeAlias = dict[str | int, str] | list[str]


def resolve_messages(
    failure: Failed,
    *,
    default_messages: Mapping[str, str] | None = None,
    messages: Mapping[str, str] | None = None,
    field_messages: Mapping[str, str] | None = None,
    message: str | None = None,
    with_rules: bool = True,
) -> FieldErrors:
    """Return the errors to store for one failed field.

    Args:
        failure: The outcome of the field's rule check.
        default_messages: Validator-wide overrides keyed by rule name.
        messages: Overrides scoped to the current ``validate()`` call.
        field_messages: Overrides for this field only.
        message: Single override; when set, the result is ``[message]``.
        with_rules: Key the result by rule name instead of returning a list.

    Returns:
        ``{rule_name: message}`` in evaluation order when *with_rules* is
        true, otherwise the same messages as a list. May be empty when no
        source has a non-blank message for the failed rules.
    """
    if message is not None:
        return [message]

    layers = (failure.messages, default_messages, messages, field_messages)
    resolved: dict[str | int, str] = {}
    for name in failure.rule_names:
        text = ""
        for layer in layers:
            if layer and name in layer:
                text = layer[name]
        if text:
            resolved[name] = text

    if with_rules:
        return resolved
    return list(resolved.values())
