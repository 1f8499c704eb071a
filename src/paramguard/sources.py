"""Parameter source protocol.

A *parameter source* is anything that hands out named values — a plain
``dict``, parsed query parameters, form data, a framework request
wrapper. The validator only ever calls ``get(name)``, so any
``Mapping[str, str]`` qualifies without adaptation.

``validate_async()`` also accepts a *pending* source: an awaitable that
resolves to one, such as ``request.form()`` in an async framework.
"""

from collections.abc import Awaitable
from typing import Any, Protocol, TypeAlias, TypeVar, runtime_checkable

# A value that will resolve to T (already resolved or awaitable)
T = TypeVar("T")
Pending: TypeAlias = T | Awaitable[T]


@runtime_checkable
class ParameterSource(Protocol):
    """Read access to named parameters. Missing names yield ``None``."""

    def get(self, key: str, /) -> Any: ...
