"""Tests for Validator.validate_async — concurrent field checks."""

import anyio
import pytest

from paramguard import (
    InvalidConfiguration,
    Options,
    Validator,
    async_rule,
    between,
    length,
    not_empty,
)

TAKEN = {"admin", "root"}


async def _available(value: str) -> bool:
    await anyio.sleep(0)
    return value not in TAKEN


available = async_rule("available", _available, "Username already taken")


class TestValidateAsync:
    @pytest.mark.asyncio
    async def test_matches_sync_outcome(self) -> None:
        data = {"age": "10", "name": ""}
        rules = {"age": between(18, 65), "name": Options(not_empty, message="Name required")}

        sync = Validator().validate(data, rules)
        concurrent = await Validator().validate_async(data, rules)

        assert concurrent.get_errors() == sync.get_errors()
        assert concurrent.get_data() == sync.get_data()

    @pytest.mark.asyncio
    async def test_async_rule(self) -> None:
        v = await Validator().validate_async(
            {"username": "admin", "other": "alice"},
            {"username": not_empty & available, "other": available},
        )
        assert v.get_param_errors("username") == {"available": "Username already taken"}
        assert "other" not in v.get_errors()

    @pytest.mark.asyncio
    async def test_awaitable_source(self) -> None:
        async def form() -> dict[str, str]:
            return {"username": "root"}

        v = await Validator().validate_async(form(), {"username": available})
        assert v.get_value("username") == "root"
        assert v.is_valid is False

    @pytest.mark.asyncio
    async def test_errors_applied_in_caller_order(self) -> None:
        async def slow_first(value: str) -> bool:
            await anyio.sleep(0.01)
            return False

        v = await Validator().validate_async(
            {},
            {
                "a": async_rule("slow", slow_first, "slow"),
                "b": not_empty,
            },
        )
        assert list(v.get_errors()) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_same_key_later_wins(self) -> None:
        v = await Validator().validate_async(
            {"name": "alice"},
            [("name", not_empty), ("name", length(1, 3))],
        )
        assert v.get_param_errors("name") == {"length": "Must be between 1 and 3 characters"}

    @pytest.mark.asyncio
    async def test_accumulates_with_sync_calls(self) -> None:
        v = Validator().validate({"a": ""}, {"a": not_empty})
        await v.validate_async({"b": "ok"}, {"b": available})
        assert set(v.get_errors()) == {"a"}
        assert v.get_data() == {"a": "", "b": "ok"}

    @pytest.mark.asyncio
    async def test_invalid_configuration(self) -> None:
        v = Validator()
        with pytest.raises(InvalidConfiguration):
            await v.validate_async({"a": "", "b": ""}, {"a": not_empty, "b": {}})
        assert v.get_data() == {"a": "", "b": ""}
        assert v.get_errors() == {}
