"""Built-in validation rules — composable predicates with structured failures.

Each rule carries an explicit ``name`` and returns an outcome from
``check(value)`` instead of raising::

    rule.check("") -> Failed(rule_names=("notEmpty",), messages={...})
    rule.check("x") -> Passed()

Rules compose with ``all_of()`` or the ``&`` operator. A composite runs
every sub-rule, so each failing sub-rule reports its own message::

    username = not_empty & length(3, 20) & matches(r"^[a-z0-9_]+$")

Parameterized rules are factory functions that return a rule::

    def max_length(n: int) -> Rule:
        return Predicate("maxLength", lambda v: len(v) <= n,
                         f"Must be at most {n} characters")

Custom rules use ``rule(name, predicate, message)``, or
``async_rule(...)`` when the predicate has to await something.
"""

import re
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from paramguard.errors import InvalidConfiguration

Check: TypeAlias = Callable[[str], bool]
AsyncCheck: TypeAlias = Callable[[str], Awaitable[bool]]


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Passed:
    """The value satisfied every sub-rule. Truthy."""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failed:
    """The value broke at least one sub-rule. Falsy.

    ``rule_names`` lists the failed sub-rules in evaluation order.
    ``messages`` holds the engine's default message for each of them.
    """

    rule_names: tuple[str, ...]
    messages: Mapping[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return False


PASSED = Passed()

CheckResult: TypeAlias = Passed | Failed


def _text(value: Any) -> str:
    # Missing parameters are checked as empty input
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


# ---------------------------------------------------------------------------
# Rule types
# ---------------------------------------------------------------------------


class Rule:
    """Base for every rule.

    Subclasses set ``name`` and implement ``check``. ``acheck`` is the
    awaitable counterpart used by ``Validator.validate_async()``.
    """

    __slots__ = ()

    name: str

    @property
    def rules(self) -> tuple["Rule", ...]:
        """The ordered sub-rules composing this rule (a leaf is its own)."""
        return (self,)

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(r.name for r in self.rules)

    def check(self, value: Any) -> CheckResult:
        raise NotImplementedError

    async def acheck(self, value: Any) -> CheckResult:
        return self.check(value)

    def __and__(self, other: object) -> "AllOf":
        if not isinstance(other, Rule):
            return NotImplemented
        return AllOf(self, other)


class Predicate(Rule):
    """A leaf rule: a named predicate plus the message shown when it fails."""

    __slots__ = ("message", "name", "_test")

    def __init__(self, name: str, test: Check, message: str) -> None:
        self.name = name
        self.message = message
        self._test = test

    def check(self, value: Any) -> CheckResult:
        if self._test(_text(value)):
            return PASSED
        return Failed((self.name,), {self.name: self.message})

    def __repr__(self) -> str:
        return f"Predicate({self.name!r})"


class AsyncPredicate(Rule):
    """A leaf rule whose predicate must be awaited.

    Only usable through ``Validator.validate_async()``; the synchronous
    path cannot evaluate it.
    """

    __slots__ = ("message", "name", "_test")

    def __init__(self, name: str, test: AsyncCheck, message: str) -> None:
        self.name = name
        self.message = message
        self._test = test

    def check(self, value: Any) -> CheckResult:
        msg = f"Rule {self.name!r} is asynchronous; use Validator.validate_async()"
        raise InvalidConfiguration(msg)

    async def acheck(self, value: Any) -> CheckResult:
        if await self._test(_text(value)):
            return PASSED
        return Failed((self.name,), {self.name: self.message})

    def __repr__(self) -> str:
        return f"AsyncPredicate({self.name!r})"


class AllOf(Rule):
    """A composite rule: the value must satisfy every sub-rule.

    Nested composites are flattened so ``rule_names`` stays a flat,
    ordered list of leaf names. Failed sub-rules that share a name share
    one message slot: the last one evaluated wins, so
    ``length(max=5) & length(10)`` reports a single ``length`` message.
    """

    __slots__ = ("name", "_rules")

    def __init__(self, *rules: Rule, name: str = "allOf") -> None:
        flat: list[Rule] = []
        for r in rules:
            if not isinstance(r, Rule):
                msg = f"all_of() expects Rule instances, got {type(r).__name__}"
                raise InvalidConfiguration(msg)
            flat.extend(r.rules)
        if not flat:
            raise InvalidConfiguration("all_of() needs at least one rule")
        self.name = name
        self._rules = tuple(flat)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def check(self, value: Any) -> CheckResult:
        return _combine(r.check(value) for r in self._rules)

    async def acheck(self, value: Any) -> CheckResult:
        return _combine([await r.acheck(value) for r in self._rules])

    def __repr__(self) -> str:
        return f"AllOf({', '.join(self.rule_names)})"


def _combine(outcomes: Iterable[CheckResult]) -> CheckResult:
    names: list[str] = []
    messages: dict[str, str] = {}
    for outcome in outcomes:
        if isinstance(outcome, Failed):
            names.extend(outcome.rule_names)
            messages.update(outcome.messages)
    if not names:
        return PASSED
    return Failed(tuple(names), messages)


def all_of(*rules: Rule) -> AllOf:
    """Combine *rules* into one composite rule."""
    return AllOf(*rules)


def rule(name: str, test: Check, message: str) -> Predicate:
    """Build a custom rule from a predicate returning True when valid."""
    return Predicate(name, test, message)


def async_rule(name: str, test: AsyncCheck, message: str) -> AsyncPredicate:
    """Build a custom rule from an async predicate returning True when valid."""
    return AsyncPredicate(name, test, message)


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------

not_empty = Predicate("notEmpty", lambda v: bool(v.strip()), "This field is required")

# Alias kept for forms written as ``[required, ...]``
required = not_empty


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def length(min: int | None = None, max: int | None = None) -> Predicate:  # noqa: A002
    """String length must fall within the inclusive bounds given."""
    if min is None and max is None:
        raise InvalidConfiguration("length() needs a minimum, a maximum, or both")
    if min is not None and max is not None:
        message = f"Must be between {min} and {max} characters"
    elif min is not None:
        message = f"Must be at least {min} characters"
    else:
        message = f"Must be at most {max} characters"

    def test(value: str) -> bool:
        if min is not None and len(value) < min:
            return False
        return max is None or len(value) <= max

    return Predicate("length", test, message)


def max_length(n: int) -> Predicate:
    """String must be at most *n* characters."""
    return Predicate("maxLength", lambda v: len(v) <= n, f"Must be at most {n} characters")


def min_length(n: int) -> Predicate:
    """String must be at least *n* characters."""
    return Predicate("minLength", lambda v: len(v) >= n, f"Must be at least {n} characters")


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def _as_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _is_integer(value: str) -> bool:
    try:
        int(value)
    except ValueError:
        return False
    return True


integer = Predicate("integer", _is_integer, "Must be a whole number")

number = Predicate("number", lambda v: _as_float(v) is not None, "Must be a number")


def between(min: float, max: float) -> Predicate:  # noqa: A002
    """Value must be numeric and within ``[min, max]``."""

    def test(value: str) -> bool:
        parsed = _as_float(value)
        return parsed is not None and min <= parsed <= max

    return Predicate("between", test, f"Must be between {min} and {max}")


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

email = Predicate(
    "email", lambda v: _EMAIL_RE.match(v) is not None, "Must be a valid email address"
)

# http(s) scheme plus a host
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)

url = Predicate("url", lambda v: _URL_RE.match(v) is not None, "Must be a valid URL")


def matches(pattern: str, message: str | None = None) -> Predicate:
    """Value must match the given regex pattern."""
    compiled = re.compile(pattern)
    return Predicate(
        "matches",
        lambda v: compiled.match(v) is not None,
        message or f"Must match pattern: {pattern}",
    )


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Predicate:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)
    options = ", ".join(sorted(allowed))
    return Predicate("oneOf", lambda v: v in allowed, f"Must be one of: {options}")
