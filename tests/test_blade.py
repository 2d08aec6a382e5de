"""Tests for the JSONBlade facade."""

from __future__ import annotations

import pytest

from jsonblade import (
    ErrorType,
    FilterRegistry,
    JSONBlade,
    TemplateConfig,
    TemplateException,
    register_filter,
    set_template_config,
)
from jsonblade.filters import builtin_filters


class TestFilterMap:
    def test_empty_instance(self) -> None:
        assert JSONBlade().filters == {}

    def test_use_builtins_seeds_every_group(self, blade: JSONBlade) -> None:
        assert set(blade.filters) == set(builtin_filters())
        for name in ("upper", "join", "get", "gte", "isoDate", "currency", "urlEncode"):
            assert blade.has_filter(name), name

    def test_initial_filters(self) -> None:
        blade = JSONBlade(filters={"shout": lambda v: f"{v}!"})
        assert blade.has_filter("shout")
        assert blade.compile('"{{x | shout}}"', {"x": "hi"}) == "hi!"

    def test_initial_filters_win_over_builtins(self) -> None:
        blade = JSONBlade(filters={"upper": lambda v: "mine"}, use_builtins=True)
        assert blade.compile('"{{x | upper}}"', {"x": "a"}) == "mine"

    def test_register_and_unregister(self, blade: JSONBlade) -> None:
        blade.register_filter("twice", lambda v: v * 2)
        assert blade.get_filter("twice")(3) == 6
        assert blade.unregister_filter("twice") is True
        assert blade.unregister_filter("twice") is False
        assert blade.get_filter("twice") is None

    def test_filters_property_is_a_copy(self, blade: JSONBlade) -> None:
        blade.filters["injected"] = str
        assert not blade.has_filter("injected")

    def test_instances_are_isolated(self) -> None:
        first = JSONBlade(use_builtins=True)
        second = JSONBlade(use_builtins=True)
        first.register_filter("upper", lambda v: "first")
        assert second.compile('"{{x | upper}}"', {"x": "a"}) == "A"
        assert first.compile('"{{x | upper}}"', {"x": "a"}) == "first"

    def test_instance_filters_shadow_global(self) -> None:
        register_filter("tag", lambda v: "global")
        blade = JSONBlade(filters={"tag": lambda v: "local"})
        assert blade.compile('"{{x | tag}}"', {"x": 1}) == "local"

    def test_falls_back_to_global_registry(self) -> None:
        register_filter("tag", lambda v: "global")
        assert JSONBlade().compile('"{{x | tag | upper}}"', {"x": 1}) == "GLOBAL"

    def test_custom_fallback_registry(self) -> None:
        registry = FilterRegistry({"tag": lambda v: "custom"})
        blade = JSONBlade(registry=registry)
        assert blade.compile('"{{x | tag}}"', {"x": 1}) == "custom"
        assert blade.compile('"{{x | upper}}"', {"x": "a"}) == "a"


class TestFilterOverride:
    def test_global_override_wins_when_allowed(self) -> None:
        register_filter("upper", lambda v: "override")
        blade = JSONBlade(use_builtins=True)
        assert blade.compile('"{{x | upper}}"', {"x": "a"}) == "override"

    def test_builtin_wins_when_override_disallowed(self) -> None:
        register_filter("upper", lambda v: "override")
        blade = JSONBlade(use_builtins=True, config={"allow_filter_override": False})
        assert blade.compile('"{{x | upper}}"', {"x": "a"}) == "A"

    def test_override_from_custom_registry(self) -> None:
        registry = FilterRegistry({"lower": lambda v: "custom"})
        blade = JSONBlade(use_builtins=True, registry=registry)
        assert blade.compile('"{{x | lower}}"', {"x": "A"}) == "custom"
        assert blade.compile('"{{x | upper}}"', {"x": "a"}) == "A"


class TestInstanceConfig:
    def test_reads_global_config_by_default(self) -> None:
        blade = JSONBlade(use_builtins=True)
        set_template_config(throw_on_error=True)
        assert blade.get_config().throw_on_error is True
        with pytest.raises(TemplateException):
            blade.compile('"{{x | nope}}"', {"x": 1})

    def test_private_config_ignores_global_changes(self) -> None:
        blade = JSONBlade(use_builtins=True, config={"debug": True})
        set_template_config(throw_on_error=True)
        assert blade.get_config().throw_on_error is False
        assert blade.compile('"{{x | nope}}"', {"x": 1}) == "1"

    def test_private_config_starts_from_global(self) -> None:
        set_template_config(debug=True)
        blade = JSONBlade(config={"strict_mode": True})
        config = blade.get_config()
        assert config.debug is True and config.strict_mode is True

    def test_set_config_merges(self) -> None:
        blade = JSONBlade()
        blade.set_config(strict_mode=True)
        blade.set_config({"debug": True})
        config = blade.get_config()
        assert config.strict_mode is True and config.debug is True

    def test_set_config_with_full_config(self) -> None:
        blade = JSONBlade(config={"debug": True})
        blade.set_config(TemplateConfig(throw_on_error=True))
        assert blade.get_config() == TemplateConfig(throw_on_error=True)

    def test_get_config_returns_copy(self) -> None:
        blade = JSONBlade(config={})
        blade.get_config().strict_mode = True
        assert blade.get_config().strict_mode is False

    def test_strict_unknown_filter(self, strict_blade: JSONBlade) -> None:
        with pytest.raises(TemplateException) as exc_info:
            strict_blade.compile('{"v": "{{name | shout}}"}', {"name": "x"})
        assert exc_info.value.template_error.type is ErrorType.UNKNOWN_FILTER

    def test_instance_delimiters(self) -> None:
        blade = JSONBlade(use_builtins=True, config={"delimiters": {"start": "<%", "end": "%>"}})
        assert blade.compile('{"v": "<% x | upper %>"}', {"x": "a"}) == {"v": "A"}
        assert JSONBlade(use_builtins=True).compile('"<% x %>"', {}) == "<% x %>"


class TestRendering:
    def test_render_text(self, blade: JSONBlade) -> None:
        assert blade.render('{"v": {{xs | join}}}', {"xs": [1, 2]}) == '{"v": "1,2"}'

    def test_compile_with_functions(self, blade: JSONBlade) -> None:
        result = blade.compile('{"v": {{total(2, 3) | multiply(2)}}}', {}, {"total": max})
        assert result == {"v": 6}

    @pytest.mark.asyncio
    async def test_render_async(self, blade: JSONBlade) -> None:
        assert await blade.render_async('"{{x | upper}}"', {"x": "a"}) == '"A"'

    def test_repr(self) -> None:
        assert repr(JSONBlade()) == "<JSONBlade 0 filters, global config>"
        assert "private config" in repr(JSONBlade(config={}))
