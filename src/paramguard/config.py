"""Validator configuration.

ValidatorConfig is a frozen dataclass — fixed for the validator's lifetime,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from paramguard.errors import InvalidConfiguration


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Validator configuration. Immutable after creation.

    Override what you need::

        config = ValidatorConfig(
            store_errors_with_rules=False,
            default_messages={"notEmpty": "Please fill in this field"},
        )
    """

    # Keep errors keyed by rule name ({"length": "..."}) instead of a plain list
    store_errors_with_rules: bool = True

    # Rule name -> message, consulted on every failure
    default_messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.default_messages, Mapping):
            msg = (
                "default_messages must be a mapping of rule name to message, "
                f"got {type(self.default_messages).__name__}"
            )
            raise InvalidConfiguration(msg)
        object.__setattr__(
            self, "default_messages", MappingProxyType(dict(self.default_messages))
        )
