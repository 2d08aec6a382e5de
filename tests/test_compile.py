"""End-to-end tests for compile_json_template and render_json_template."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from jsonblade import (
    TemplateFunction,
    compile_json_template,
    render_json_template,
    set_template_config,
)
from jsonblade.template import template_cache_info


class TestDocumentedExamples:
    def test_currency(self) -> None:
        result = compile_json_template(
            '{"price": "{{amount | currency(\'EUR\')}}"}', {"amount": 1234.56}
        )
        assert result == {"price": "1 234,56 €"}

    def test_filter_array_of_objects(self, users) -> None:
        result = compile_json_template('{"adults": {{users | filter(age, 25)}}}', {"users": users})
        assert result == {"adults": [users[0]]}

    def test_chained_set_variables(self) -> None:
        template = (
            "{{#set total = items | length}}"
            "{{#set doubled = total | multiply(2)}}"
            '{"numbers":[{{total}},{{doubled}}]}'
        )
        assert compile_json_template(template, {"items": [1, 2, 3]}) == {"numbers": [3, 6]}

    def test_filter_chain_order(self) -> None:
        result = compile_json_template(
            '{"name": "{{name | lower | capitalize}}"}', {"name": "JOHN DOE"}
        )
        assert result == {"name": "John doe"}


class TestInterpolation:
    def test_no_directives_roundtrip(self) -> None:
        template = '{"a": [1, 2, {"b": null}], "c": "text", "d": true}'
        assert compile_json_template(template, {}) == {
            "a": [1, 2, {"b": None}],
            "c": "text",
            "d": True,
        }

    def test_inside_string_is_escaped(self) -> None:
        name = 'He said "hi"\n\\o/'
        assert compile_json_template('{"msg": "{{name}}"}', {"name": name}) == {"msg": name}

    def test_inside_string_mixes_with_text(self) -> None:
        result = compile_json_template('{"greeting": "Hello {{who}}!"}', {"who": "Ada"})
        assert result == {"greeting": "Hello Ada!"}

    def test_escaped_quote_keeps_string_state(self) -> None:
        result = compile_json_template('{"a": "say \\"{{x}}\\""}', {"x": "hi"})
        assert result == {"a": 'say "hi"'}

    def test_raw_values(self) -> None:
        data = {"user": {"name": "Ada", "tags": ["x"]}, "n": 15.0, "flag": False}
        result = compile_json_template('{"u": {{user}}, "n": {{n}}, "f": {{flag}}}', data)
        assert result == {"u": data["user"], "n": 15, "f": False}
        assert isinstance(result["n"], int)

    def test_missing_values(self) -> None:
        result = compile_json_template('{"raw": {{missing}}, "text": "{{missing}}"}', {})
        assert result == {"raw": None, "text": ""}

    def test_object_inside_string_is_json_text(self) -> None:
        result = compile_json_template('{"s": "{{obj}}"}', {"obj": {"a": 1}})
        assert result == {"s": '{"a":1}'}

    def test_array_inside_string_is_joined(self) -> None:
        assert compile_json_template('{"s": "{{xs}}"}', {"xs": [1, "b"]}) == {"s": "1,b"}

    def test_nan_outside_string_is_null(self) -> None:
        assert compile_json_template('{"v": {{x}}}', {"x": float("nan")}) == {"v": None}

    def test_comments_are_removed(self) -> None:
        template = '{{!-- header --}}{"a": 1{{!-- inline "quote --}}}'
        assert compile_json_template(template, {}) == {"a": 1}

    def test_unmatched_start_delimiter_is_literal(self) -> None:
        template = '{"hint": "type {{ to open", "n": {{n}}}'
        assert compile_json_template(template, {"n": 1}) == {"hint": "type {{ to open", "n": 1}

    def test_trailing_start_delimiter_is_literal(self) -> None:
        assert compile_json_template('{"a": "{{x}} and {{"}', {"x": 1}) == {"a": "1 and {{"}

    def test_blank_template(self) -> None:
        assert compile_json_template("", {}) == ""
        assert compile_json_template("   \n", {}) == ""

    def test_non_mapping_data_is_empty_context(self) -> None:
        assert compile_json_template('{"v": {{x}}}', ["not", "a", "mapping"]) == {"v": None}

    def test_render_returns_text(self) -> None:
        assert render_json_template('{"v": "{{x | upper}}"}', {"x": "a"}) == '{"v": "A"}'


class TestConditionals:
    template = '{"r": "{{#if cond}}A{{#else}}B{{/if}}"}'

    @pytest.mark.parametrize("cond", [True, 1, -2.5, "x", [1], {"a": 1}, {}])
    def test_truthy(self, cond) -> None:
        assert compile_json_template(self.template, {"cond": cond}) == {"r": "A"}

    @pytest.mark.parametrize("cond", [False, 0, 0.0, "", [], None])
    def test_falsy(self, cond) -> None:
        assert compile_json_template(self.template, {"cond": cond}) == {"r": "B"}

    def test_missing_condition_is_falsy(self) -> None:
        assert compile_json_template(self.template, {}) == {"r": "B"}

    def test_if_without_else(self) -> None:
        template = '{"a": 1{{#if extra}}, "b": 2{{/if}}}'
        assert compile_json_template(template, {"extra": True}) == {"a": 1, "b": 2}
        assert compile_json_template(template, {"extra": False}) == {"a": 1}

    def test_unless(self) -> None:
        template = '{"a": 1{{#unless hidden}}, "b": 2{{/unless}}}'
        assert compile_json_template(template, {"hidden": False}) == {"a": 1, "b": 2}
        assert compile_json_template(template, {"hidden": "yes"}) == {"a": 1}

    def test_condition_with_filters(self) -> None:
        template = '{"group": "{{#if age | gte(18)}}adult{{#else}}minor{{/if}}"}'
        assert compile_json_template(template, {"age": 20}) == {"group": "adult"}
        assert compile_json_template(template, {"age": 12}) == {"group": "minor"}

    def test_nested_conditionals(self) -> None:
        template = '"{{#if a}}{{#if b}}ab{{#else}}a{{/if}}{{#else}}none{{/if}}"'
        assert compile_json_template(template, {"a": 1, "b": 0}) == "a"
        assert compile_json_template(template, {"a": 1, "b": 1}) == "ab"
        assert compile_json_template(template, {}) == "none"


class TestLoops:
    def test_loop_metadata(self) -> None:
        template = (
            "[{{#each items}}"
            '{"i": {{@index}}, "f": {{@first}}, "l": {{@last}}, "n": {{@length}}, "v": "{{this}}"}'
            "{{#unless @last}},{{/unless}}"
            "{{/each}}]"
        )
        result = compile_json_template(template, {"items": ["a", "b", "c"]})
        assert result == [
            {"i": 0, "f": True, "l": False, "n": 3, "v": "a"},
            {"i": 1, "f": False, "l": False, "n": 3, "v": "b"},
            {"i": 2, "f": False, "l": True, "n": 3, "v": "c"},
        ]

    def test_empty_array(self) -> None:
        template = "[{{#each items}}{{this}}{{/each}}]"
        assert compile_json_template(template, {"items": []}) == []

    @pytest.mark.parametrize("items", [None, "text", {"a": 1}, 3])
    def test_non_array_yields_nothing(self, items) -> None:
        assert compile_json_template("[{{#each items}}1{{/each}}]", {"items": items}) == []

    def test_object_items_expose_keys(self, users) -> None:
        template = '[{{#each users}}"{{name}}"{{#unless @last}},{{/unless}}{{/each}}]'
        assert compile_json_template(template, {"users": users}) == ["Alice", "Bob", "Carol"]

    def test_this_path(self, users) -> None:
        template = "[{{#each users}}{{this.age}}{{#unless @last}},{{/unless}}{{/each}}]"
        assert compile_json_template(template, {"users": users}) == [25, 30, 20]

    def test_outer_scope_is_visible(self) -> None:
        template = '[{{#each xs}}"{{this}}-{{suffix}}"{{#unless @last}},{{/unless}}{{/each}}]'
        assert compile_json_template(template, {"xs": [1, 2], "suffix": "s"}) == ["1-s", "2-s"]

    def test_item_keys_shadow_outer_scope(self) -> None:
        template = '[{{#each xs}}"{{name}}"{{/each}}]'
        assert compile_json_template(template, {"xs": [{"name": "in"}], "name": "out"}) == ["in"]

    def test_nested_loops(self) -> None:
        template = (
            "[{{#each rows}}[{{#each this}}{{this}}{{#unless @last}},{{/unless}}{{/each}}]"
            "{{#unless @last}},{{/unless}}{{/each}}]"
        )
        assert compile_json_template(template, {"rows": [[1, 2], [3]]}) == [[1, 2], [3]]

    def test_string_items_splice_verbatim(self) -> None:
        template = "[{{#each rows}}{{this}}{{#unless @last}},{{/unless}}{{/each}}]"
        rows = ['{"a":1}', '{"b":2}']
        assert compile_json_template(template, {"rows": rows}) == [{"a": 1}, {"b": 2}]

    def test_filtered_this_splices_verbatim(self) -> None:
        template = "[{{#each rows}}{{this | trim}}{{#unless @last}},{{/unless}}{{/each}}]"
        assert compile_json_template(template, {"rows": [" 1 ", " true "]}) == [1, True]

    def test_each_over_pipeline(self) -> None:
        template = "[{{#each xs | reverse}}{{this}}{{#unless @last}},{{/unless}}{{/each}}]"
        assert compile_json_template(template, {"xs": [1, 2, 3]}) == [3, 2, 1]

    def test_loop_with_conditionals(self, users) -> None:
        template = (
            "[{{#each users}}{{#if active}}\"{{name}}\"{{#else}}null{{/if}}"
            "{{#unless @last}},{{/unless}}{{/each}}]"
        )
        assert compile_json_template(template, {"users": users}) == ["Alice", None, "Carol"]


class TestSetVariables:
    def test_set_inside_string(self) -> None:
        template = '{{#set n = xs | length}}{"label": "count={{n}}"}'
        assert compile_json_template(template, {"xs": [1, 2]}) == {"label": "count=2"}

    def test_set_visible_in_loops(self) -> None:
        template = (
            "{{#set total = xs | length}}"
            '[{{#each xs}}"{{@index}}/{{total}}"{{#unless @last}},{{/unless}}{{/each}}]'
        )
        assert compile_json_template(template, {"xs": ["a", "b"]}) == ["0/2", "1/2"]

    def test_set_shadows_data(self) -> None:
        template = '{{#set name = name | upper}}{"n": "{{name}}"}'
        assert compile_json_template(template, {"name": "ada"}) == {"n": "ADA"}

    def test_set_is_hoisted(self) -> None:
        template = '{"v": {{late}}}{{#set late = x | add(1)}}'
        assert compile_json_template(template, {"x": 1}) == {"v": 2}

    def test_string_variable_splices_json(self) -> None:
        template = '{{#set payload = obj | json}}{"p": {{payload}}}'
        assert compile_json_template(template, {"obj": {"a": 1}}) == {"p": {"a": 1}}

    def test_string_variable_is_escaped_inside_strings(self) -> None:
        template = '{{#set payload = obj | json}}{"p": "{{payload}}"}'
        assert compile_json_template(template, {"obj": {"a": 1}}) == {"p": '{"a":1}'}

    def test_non_string_variable_is_serialized(self) -> None:
        template = '{{#set names = users | map(name)}}{"n": {{names}}}'
        result = compile_json_template(template, {"users": [{"name": "Ada"}]})
        assert result == {"n": ["Ada"]}

    def test_bare_variable_wins_over_item_keys(self) -> None:
        template = (
            "{{#set label = tag}}"
            '[{{#each xs}}"{{label}}|{{label | upper}}"{{#unless @last}},{{/unless}}{{/each}}]'
        )
        data = {"tag": "set", "xs": [{"label": "item"}]}
        assert compile_json_template(template, data) == ["set|ITEM"]


class TestHostFunctions:
    def test_mapping(self) -> None:
        result = compile_json_template(
            '{"id": "{{makeId(prefix)}}"}', {"prefix": "u"}, {"makeId": lambda p: f"{p}-1"}
        )
        assert result == {"id": "u-1"}

    @pytest.mark.parametrize(
        "functions",
        [
            [TemplateFunction("double", lambda n: n * 2)],
            [("double", lambda n: n * 2)],
            [{"name": "double", "func": lambda n: n * 2}],
            [SimpleNamespace(name="double", func=lambda n: n * 2)],
        ],
    )
    def test_sequence_forms(self, functions) -> None:
        assert compile_json_template('{"v": {{double(21)}}}', {}, functions) == {"v": 42}

    def test_first_definition_wins(self) -> None:
        functions = [("f", lambda: 1), ("f", lambda: 2)]
        assert compile_json_template('{"v": {{f()}}}', {}, functions) == {"v": 1}

    def test_function_result_through_filters(self) -> None:
        functions = {"names": lambda: ["b", "a"]}
        assert compile_json_template('{"v": {{names() | sort}}}', {}, functions) == {
            "v": ["a", "b"]
        }

    def test_unsupported_function_entry(self) -> None:
        with pytest.raises(TypeError):
            compile_json_template('{"v": 1}', {}, [42])


class TestConfiguration:
    def test_custom_delimiters(self) -> None:
        set_template_config(delimiters={"start": "[[", "end": "]]"})
        result = compile_json_template('{"a": "[[x | upper]]", "b": "{{y}}"}', {"x": "q"})
        assert result == {"a": "Q", "b": "{{y}}"}

    def test_explicit_config_overrides_global(self) -> None:
        set_template_config(delimiters={"start": "[[", "end": "]]"})
        result = compile_json_template('{"a": {{x}}}', {"x": 1}, config={})
        assert result == {"a": 1}

    def test_parse_cache_is_reused(self) -> None:
        compile_json_template('{"a": {{x}}}', {"x": 1})
        compile_json_template('{"a": {{x}}}', {"x": 2})
        assert template_cache_info().hits >= 1
