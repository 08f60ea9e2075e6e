# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Context as an attribute store: build, access, dynamic accessors, views."""

from __future__ import annotations

import copy
from enum import StrEnum

import pytest

from interactor.context import Context
from interactor.kernel.exceptions import InvalidArgumentException


class Key(StrEnum):
    ORDER = "order"


# ── build ─────────────────────────────────────────────────────


class TestBuild:
    def test_build_from_mapping_creates_new_context(self) -> None:
        ctx = Context.build({"a": 1})
        assert isinstance(ctx, Context)
        assert ctx.a == 1

    def test_build_returns_existing_context_unchanged(self) -> None:
        ctx = Context(a=1)
        assert Context.build(ctx) is ctx

    def test_build_sets_keyword_attributes_on_existing_context(self) -> None:
        ctx = Context(a=1)
        same = Context.build(ctx, b=2)
        assert same is ctx
        assert ctx.to_dict() == {"a": 1, "b": 2}

    def test_build_without_source_is_empty(self) -> None:
        assert Context.build().to_dict() == {}

    def test_build_combines_mapping_and_keywords(self) -> None:
        ctx = Context.build({"a": 1}, b=2)
        assert ctx.to_dict() == {"a": 1, "b": 2}

    def test_build_does_not_alias_source_mapping(self) -> None:
        source = {"a": 1}
        ctx = Context.build(source)
        ctx.a = 2
        assert source == {"a": 1}

    def test_build_coerces_keys_to_strings(self) -> None:
        ctx = Context.build({1: "one", Key.ORDER: "o-1"})
        assert ctx.get("1") == "one"
        assert ctx.order == "o-1"

    def test_build_rejects_unsupported_source(self) -> None:
        with pytest.raises(InvalidArgumentException, match="Cannot build Context from list"):
            Context.build([("a", 1)])  # type: ignore[arg-type]

    def test_build_on_subclass_returns_subclass(self) -> None:
        class AuditContext(Context):
            pass

        ctx = AuditContext.build({"a": 1})
        assert isinstance(ctx, AuditContext)
        assert AuditContext.build(ctx) is ctx

    def test_attribute_named_attributes_is_an_ordinary_attribute(self) -> None:
        ctx = Context(attributes="plain")
        assert ctx.attributes == "plain"


# ── get / set ─────────────────────────────────────────────────


class TestGetSet:
    def test_get_absent_key_returns_none(self) -> None:
        assert Context().get("missing") is None

    def test_get_absent_key_returns_default(self) -> None:
        assert Context().get("missing", "fallback") == "fallback"

    def test_set_returns_value_and_stores_it(self) -> None:
        ctx = Context()
        assert ctx.set("a", 1) == 1
        assert ctx.get("a") == 1

    def test_last_write_wins(self) -> None:
        ctx = Context(a=1)
        ctx.set("a", 2)
        ctx.a = 3
        assert ctx.get("a") == 3

    def test_keys_are_case_sensitive(self) -> None:
        ctx = Context(name="lower", Name="upper")
        assert ctx.name == "lower"
        assert ctx.Name == "upper"

    def test_item_access(self) -> None:
        ctx = Context()
        ctx["a"] = 1
        assert ctx["a"] == 1
        assert ctx["missing"] is None

    def test_contains_reports_stored_keys_even_when_none(self) -> None:
        ctx = Context(a=None)
        assert "a" in ctx
        assert "b" not in ctx


# ── dynamic accessors ─────────────────────────────────────────


class TestDynamicAccessors:
    def test_round_trip_for_arbitrary_name(self) -> None:
        ctx = Context()
        ctx.whatever = "x"
        assert ctx.whatever == "x"

    def test_absent_attribute_reads_as_none(self) -> None:
        assert Context().never_set is None

    def test_common_words_work_as_attributes(self) -> None:
        ctx = Context()
        ctx.name = "n"
        ctx.type = "t"
        ctx.id = 7
        assert (ctx.name, ctx.type, ctx.id) == ("n", "t", 7)

    def test_hasattr_is_true_for_any_public_name(self) -> None:
        ctx = Context()
        assert hasattr(ctx, "anything_at_all")
        assert hasattr(ctx, "_leading_underscore")

    def test_dunder_names_are_not_attributes(self) -> None:
        assert not hasattr(Context(), "__html__")

    def test_attribute_and_item_access_share_storage(self) -> None:
        ctx = Context()
        ctx.a = 1
        assert ctx["a"] == 1
        ctx["b"] = 2
        assert ctx.b == 2

    def test_defined_names_win_on_read_but_value_is_stored(self) -> None:
        ctx = Context()
        ctx.get = "shadowed"
        assert callable(ctx.get)
        assert ctx.get("get") == "shadowed"

    def test_delete_attribute(self) -> None:
        ctx = Context(a=1)
        del ctx.a
        assert "a" not in ctx

    def test_delete_absent_attribute_raises(self) -> None:
        with pytest.raises(AttributeError):
            del Context().missing

    def test_dir_includes_attributes(self) -> None:
        ctx = Context(order_id=42)
        assert "order_id" in dir(ctx)
        assert "rollback" in dir(ctx)

    def test_attributes_are_per_instance(self) -> None:
        first, second = Context(), Context()
        first.a = 1
        assert second.a is None


# ── views ─────────────────────────────────────────────────────


class TestViews:
    def test_to_dict_returns_copy(self) -> None:
        ctx = Context(a=1)
        data = ctx.to_dict()
        data["a"] = 2
        data["b"] = 3
        assert ctx.to_dict() == {"a": 1}

    def test_deconstruct_adds_outcome_flags(self) -> None:
        ctx = Context(user="alice")
        assert ctx.deconstruct() == {"user": "alice", "success": True, "failure": False}

    def test_deconstruct_flags_win_over_attributes(self) -> None:
        ctx = Context(success="attribute", failure="attribute")
        view = ctx.deconstruct()
        assert view["success"] is True
        assert view["failure"] is False

    def test_mapping_pattern_over_deconstruct(self) -> None:
        ctx = Context(result={"first": 1, "second": 2})
        match ctx.deconstruct():
            case {"success": True, "result": {"first": first, "second": second}}:
                matched = (first, second)
            case _:
                matched = None
        assert matched == (1, 2)

    def test_class_pattern_on_context(self) -> None:
        ctx = Context(user="alice")
        match ctx:
            case Context(success=True, user=user):
                matched = user
            case _:
                matched = None
        assert matched == "alice"

    def test_context_is_not_iterable(self) -> None:
        with pytest.raises(TypeError):
            iter(Context(a=1))

    def test_repr_lists_attributes(self) -> None:
        assert repr(Context(foo="bar", n=1)) == "<Context foo='bar' n=1>"

    def test_repr_handles_self_reference(self) -> None:
        ctx = Context()
        ctx.me = ctx
        assert "..." in repr(ctx)

    def test_copy_keeps_attributes(self) -> None:
        ctx = Context(a=1)
        clone = copy.copy(ctx)
        assert clone.a == 1
