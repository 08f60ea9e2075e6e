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
"""Tests for required context attributes and their validation hook."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from interactor import Context, Interactor, requires
from interactor.kernel.exceptions import InvalidArgumentException, MissingAttributeException
from interactor.validation.validations import VALIDATION_HOOK, ContextAttribute


class Authenticate(Interactor):
    def call(self) -> None:
        self.context.user = f"{self.context.email}:{self.context.password}"


Authenticate.requires("email", "password")


# ---------------------------------------------------------------------------
# Validation at invocation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_all_present_runs_call(self) -> None:
        ctx = Authenticate.run(email="a@example.com", password="secret")
        assert ctx.user == "a@example.com:secret"

    def test_missing_attribute_raises_and_skips_call(self) -> None:
        with pytest.raises(MissingAttributeException) as info:
            Authenticate.run(email="a@example.com")

        assert info.value.attribute == "password"
        assert str(info.value) == "Required attribute password is missing"

    def test_first_missing_in_declaration_order_is_reported(self) -> None:
        with pytest.raises(MissingAttributeException) as info:
            Authenticate.run()

        assert info.value.attribute == "email"
        assert info.value.context == {"attribute": "email", "missing": ["email", "password"]}

    def test_none_value_counts_as_missing(self) -> None:
        with pytest.raises(MissingAttributeException, match="password"):
            Authenticate.run(email="a@example.com", password=None)

    @pytest.mark.parametrize("value", ["", 0, False, []])
    def test_falsy_values_are_present(self, value: object) -> None:
        ctx = Authenticate.run(email="a@example.com", password=value)
        assert ctx.success is True

    def test_missing_attribute_does_not_fail_context(self) -> None:
        class Probe(Interactor):
            pass

        Probe.requires("token")

        ctx = Context()
        with pytest.raises(MissingAttributeException):
            Probe.run(ctx)
        assert ctx.failure is False
        assert ctx.rolled_back is True

    def test_run_or_raise_also_raises_missing_attribute(self) -> None:
        with pytest.raises(MissingAttributeException):
            Authenticate.run_or_raise(email="a@example.com")

    def test_missing_attribute_is_logged(self) -> None:
        with capture_logs() as logs:
            with pytest.raises(MissingAttributeException):
                Authenticate.run()

        warnings = [entry for entry in logs if entry["event"] == "required_attribute_missing"]
        assert warnings == [
            {
                "event": "required_attribute_missing",
                "interactor": "Authenticate",
                "attribute": "email",
                "missing": ["email", "password"],
                "log_level": "warning",
            }
        ]

    def test_no_requirements_means_no_checks(self) -> None:
        class Free(Interactor):
            pass

        assert Free.required_attributes() == ()
        assert Free.run().success is True


# ---------------------------------------------------------------------------
# Declaration
# ---------------------------------------------------------------------------


class TestDeclaration:
    def test_requires_accumulates_and_deduplicates(self) -> None:
        class Step(Interactor):
            pass

        Step.requires("a", "b")
        Step.requires("b", "c")

        assert Step.required_attributes() == ("a", "b", "c")

    def test_subclass_inherits_and_extends(self) -> None:
        class Parent(Interactor):
            pass

        Parent.requires("a")

        class Child(Parent):
            pass

        Child.requires("b")

        assert Child.required_attributes() == ("a", "b")
        assert Parent.required_attributes() == ("a",)

    def test_parent_declarations_after_subclassing_are_visible(self) -> None:
        class Parent(Interactor):
            pass

        class Child(Parent):
            pass

        Parent.requires("late")

        assert Child.required_attributes() == ("late",)

    def test_non_string_name_is_rejected(self) -> None:
        class Step(Interactor):
            pass

        with pytest.raises(InvalidArgumentException, match="must be strings"):
            Step.requires("a", 1)  # type: ignore[arg-type]

    def test_rejected_call_leaves_class_unchanged(self) -> None:
        class Step(Interactor):
            pass

        Step.requires("email")

        with pytest.raises(InvalidArgumentException):
            Step.requires("token", 1)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentException, match="would shadow"):
            Step.requires("session", "call")

        assert "token" not in Step.__dict__
        assert "session" not in Step.__dict__
        assert Step.required_attributes() == ("email",)

    def test_non_identifier_name_is_validated_without_forwarder(self) -> None:
        class Step(Interactor):
            pass

        Step.requires("api-key")

        assert Step.required_attributes() == ("api-key",)
        assert Step.run({"api-key": "k"}).success is True
        with pytest.raises(MissingAttributeException, match="api-key"):
            Step.run()


# ---------------------------------------------------------------------------
# Forwarders
# ---------------------------------------------------------------------------


class TestForwarders:
    def test_required_attribute_is_readable_on_instance(self) -> None:
        step = Authenticate(email="a@example.com", password="secret")
        assert step.email == "a@example.com"
        assert step.password == "secret"

    def test_forwarder_reads_live_context_value(self) -> None:
        step = Authenticate(email="old")
        step.context.email = "new"
        assert step.email == "new"

    def test_forwarder_is_a_context_attribute_descriptor(self) -> None:
        assert isinstance(Authenticate.__dict__["email"], ContextAttribute)

    def test_forwarder_is_read_only(self) -> None:
        step = Authenticate(email="a@example.com")
        with pytest.raises(AttributeError, match="assign context.email instead"):
            step.email = "other"  # type: ignore[misc]

    def test_reserved_context_name_is_rejected(self) -> None:
        class Step(Interactor):
            pass

        with pytest.raises(InvalidArgumentException, match="would shadow"):
            Step.requires("context")

    def test_shadowing_a_method_is_rejected(self) -> None:
        class Step(Interactor):
            def lookup(self) -> None:
                pass

        with pytest.raises(InvalidArgumentException, match="Required attribute lookup would shadow Step.lookup"):
            Step.requires("lookup")

    def test_shadowing_an_inherited_method_is_rejected(self) -> None:
        class Step(Interactor):
            pass

        with pytest.raises(InvalidArgumentException, match="would shadow Interactor.call"):
            Step.requires("call")

    def test_redeclaring_in_subclass_is_allowed(self) -> None:
        class Child(Authenticate):
            pass

        Child.requires("email")

        assert Child.required_attributes() == ("email", "password")
        assert Child(email="e").email == "e"


# ---------------------------------------------------------------------------
# Validation hook placement
# ---------------------------------------------------------------------------


class TestValidationHook:
    def test_hook_installed_first_exactly_once(self) -> None:
        class Parent(Interactor):
            pass

        Parent.before(lambda self: None)

        class Child(Parent):
            pass

        assert Child.before_hooks[0] == VALIDATION_HOOK
        assert Child.before_hooks.count(VALIDATION_HOOK) == 1

    def test_validation_runs_before_other_before_hooks(self) -> None:
        seen: list[str] = []

        class Step(Interactor):
            pass

        Step.requires("token")
        Step.before(lambda self: seen.append("before"))

        with pytest.raises(MissingAttributeException):
            Step.run()
        assert seen == []

    def test_subtype_declarations_accumulate_with_single_validation(self) -> None:
        calls: list[str] = []

        class Register(Authenticate):
            def validate_required_attributes(self) -> None:
                calls.append("validate")
                super().validate_required_attributes()

        Register.requires("name")

        assert Register.required_attributes() == ("email", "password", "name")
        with pytest.raises(MissingAttributeException, match="name"):
            Register.run(email="a@example.com", password="secret")
        assert calls == ["validate"]

    def test_validation_runs_once_per_invocation(self) -> None:
        calls: list[str] = []

        class Parent(Interactor):
            pass

        class Child(Parent):
            def validate_required_attributes(self) -> None:
                calls.append("validate")
                super().validate_required_attributes()

        Child.run()
        assert calls == ["validate"]


# ---------------------------------------------------------------------------
# @requires decorator
# ---------------------------------------------------------------------------


class TestRequiresDecorator:
    def test_decorator_declares_attributes(self) -> None:
        @requires("email")
        class Step(Interactor):
            pass

        assert Step.required_attributes() == ("email",)
        assert Step(email="x").email == "x"

    def test_decorator_rejects_plain_class(self) -> None:
        with pytest.raises(TypeError, match="only decorate interactor classes"):

            @requires("email")
            class Plain:
                pass
