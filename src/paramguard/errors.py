"""paramguard exception hierarchy.

Validation failures are never raised; they are recorded on the
``Validator`` as data. Exceptions are reserved for malformed
configuration, which is a programming error the caller must fix.
"""


class ParamguardError(Exception):
    """Base for all paramguard-specific errors."""


class InvalidConfiguration(ParamguardError):
    """Raised when a rule specification or validator config is unusable.

    Typically raised from ``Validator.validate()`` when a field's options
    carry no rule, or when an async rule reaches the synchronous path.
    Fields processed before the bad one keep their recorded state.
    """
