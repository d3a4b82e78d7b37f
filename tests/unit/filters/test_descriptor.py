import gc

import pytest
from unittest.mock import MagicMock

from asset_filters.filters.base import GroupRestriction, Transformer
from asset_filters.filters.descriptor import FilterDescriptor
from asset_filters.transformers.registry import TransformerRegistry
from asset_filters.utils.exceptions import (
    ConstructionError,
    FilterNotFoundError,
    UnboundDelegationError,
)


class NoConstructor(Transformer):
    def filter(self, content):
        return content


class TwoArguments(Transformer):
    def __init__(self, first, second):
        self.first = first
        self.second = second

    def filter(self, content):
        return content


class PrimaryShared(Transformer):
    def filter(self, content):
        return "primary"


class SecondaryShared(Transformer):
    def filter(self, content):
        return "secondary"


class SecondaryOnly(Transformer):
    def filter(self, content):
        return "secondary-only"


@pytest.fixture
def registries():
    """Fixture providing a primary and a secondary registry."""
    primary = TransformerRegistry("primary")
    primary.register("NoConstructor", NoConstructor)
    primary.register("TwoArguments", TwoArguments)
    primary.register("Shared", PrimaryShared)

    secondary = TransformerRegistry("secondary")
    secondary.register("Shared", SecondaryShared)
    secondary.register("SecondaryOnly", SecondaryOnly)

    return [primary, secondary]


class TestConfiguration:
    """Test suite for the fluent configuration methods."""

    def test_new_descriptor_defaults(self):
        """Test that a new descriptor holds only its name."""
        descriptor = FilterDescriptor("CssMin")

        assert descriptor.name == "CssMin"
        assert descriptor.get_filter() == "CssMin"
        assert descriptor.arguments == []
        assert descriptor.environments == []
        assert descriptor.group_restriction is None
        assert descriptor.resource is None

    def test_configuration_methods_return_descriptor(self):
        """Test that every configuration method supports chaining."""
        descriptor = FilterDescriptor("CssMin")
        resource = MagicMock()

        assert descriptor.before_filtering(lambda f: None) is descriptor
        assert descriptor.set_arguments(1) is descriptor
        assert descriptor.on_environment("production") is descriptor
        assert descriptor.on_environments("staging") is descriptor
        assert descriptor.only_stylesheets() is descriptor
        assert descriptor.only_javascripts() is descriptor
        assert descriptor.set_resource(resource) is descriptor

    def test_set_arguments_concatenates_calls(self):
        """Test that arguments accumulate across calls in call order."""
        descriptor = FilterDescriptor("Replace")

        descriptor.set_arguments("a", "b").set_arguments().set_arguments("c")

        assert descriptor.arguments == ["a", "b", "c"]
        assert descriptor.get_arguments() == ["a", "b", "c"]

    def test_environments_keep_order_and_duplicates(self):
        """Test that environments are recorded in order, duplicates included."""
        descriptor = FilterDescriptor("CssMin")

        descriptor.on_environment("production")
        descriptor.on_environments("staging", "production")
        descriptor.on_environment("local")

        assert descriptor.get_environments() == [
            "production",
            "staging",
            "production",
            "local",
        ]

    def test_accessors_return_copies(self):
        """Test that mutating an accessor result leaves the descriptor alone."""
        descriptor = FilterDescriptor("CssMin").set_arguments(1).on_environment("prod")

        descriptor.arguments.append(2)
        descriptor.environments.append("dev")

        assert descriptor.arguments == [1]
        assert descriptor.environments == ["prod"]

    def test_group_restriction_last_write_wins(self):
        """Test that only the latest group restriction is kept."""
        descriptor = FilterDescriptor("CssMin")

        descriptor.only_stylesheets().only_javascripts()

        assert descriptor.get_group_restriction() is GroupRestriction.JAVASCRIPTS

        descriptor.only_stylesheets()

        assert descriptor.group_restriction is GroupRestriction.STYLESHEETS

    def test_set_resource_last_write_wins(self):
        """Test that setting the resource again replaces it."""
        first, second = MagicMock(), MagicMock()
        descriptor = FilterDescriptor("CssMin")

        descriptor.set_resource(first).set_resource(second)

        assert descriptor.get_resource() is second


class TestFireCallback:
    """Test suite for fire_callback."""

    def test_callback_receives_descriptor(self):
        """Test that the callback is called with the descriptor."""
        descriptor = FilterDescriptor("CssMin")
        callback = MagicMock()

        result = descriptor.fire_callback(callback)

        callback.assert_called_once_with(descriptor)
        assert result is descriptor

    def test_none_is_a_no_op(self):
        """Test that a missing callback leaves the descriptor unchanged."""
        descriptor = FilterDescriptor("CssMin").set_arguments(1)

        result = descriptor.fire_callback(None)

        assert result is descriptor
        assert descriptor.arguments == [1]

    def test_non_callable_is_ignored(self):
        """Test that a non-callable value is ignored."""
        descriptor = FilterDescriptor("CssMin")

        assert descriptor.fire_callback("not callable") is descriptor

    def test_callback_can_configure_descriptor(self):
        """Test that a callback may configure the descriptor in place."""
        descriptor = FilterDescriptor("Banner")

        descriptor.fire_callback(lambda f: f.set_arguments("v1").only_javascripts())

        assert descriptor.arguments == ["v1"]
        assert descriptor.group_restriction is GroupRestriction.JAVASCRIPTS


class TestClassNameResolution:
    """Test suite for get_class_name."""

    def test_primary_registry_takes_precedence(self, registries):
        """Test that a name defined in both registries resolves to the primary."""
        descriptor = FilterDescriptor("Shared", registries)

        assert descriptor.get_class_name() == "primary.Shared"

    def test_falls_back_to_secondary_registry(self, registries):
        """Test that names missing from the primary are found in the secondary."""
        descriptor = FilterDescriptor("SecondaryOnly", registries)

        assert descriptor.get_class_name() == "secondary.SecondaryOnly"

    def test_lookup_is_case_insensitive(self, registries):
        """Test that filter names resolve regardless of case."""
        descriptor = FilterDescriptor("noconstructor", registries)

        assert descriptor.get_class_name() == "primary.NoConstructor"
        assert descriptor.name == "noconstructor"

    def test_unknown_name_resolves_to_none(self, registries):
        """Test that an unknown name gives None."""
        descriptor = FilterDescriptor("Missing", registries)

        assert descriptor.get_class_name() is None

    def test_default_registries_include_bundled_transformers(self):
        """Test that the default registries know the bundled transformers."""
        assert FilterDescriptor("CssMin").get_class_name() == "core.CssMin"
        assert FilterDescriptor("UriRewrite").get_class_name() == "local.UriRewrite"
        assert FilterDescriptor("Replace").get_class_name() == "core.Replace"


class TestGetInstance:
    """Test suite for get_instance."""

    def test_unknown_name_returns_none(self, registries):
        """Test that an unresolvable filter yields None rather than failing."""
        descriptor = FilterDescriptor("Missing", registries).set_arguments(1)

        assert descriptor.get_instance() is None

    def test_unknown_name_raises_in_strict_mode(self, registries):
        """Test that strict mode raises a distinguishable error."""
        descriptor = FilterDescriptor("Missing", registries)

        with pytest.raises(FilterNotFoundError) as exc_info:
            descriptor.get_instance(strict=True)

        assert "Missing" in str(exc_info.value)
        assert "primary" in str(exc_info.value)

    def test_no_constructor_ignores_arguments(self, registries):
        """Test that a class without constructor is built without arguments."""
        descriptor = FilterDescriptor("NoConstructor", registries)
        descriptor.set_arguments("ignored", 42)

        instance = descriptor.get_instance()

        assert isinstance(instance, NoConstructor)

    def test_arguments_passed_in_order(self, registries):
        """Test that stored arguments are passed positionally, in order."""
        descriptor = FilterDescriptor("TwoArguments", registries)
        descriptor.set_arguments("a").set_arguments("b")

        instance = descriptor.get_instance()

        assert isinstance(instance, TwoArguments)
        assert instance.first == "a"
        assert instance.second == "b"

    @pytest.mark.parametrize("arguments", [("a",), ("a", "b", "c")])
    def test_argument_mismatch_raises_construction_error(self, registries, arguments):
        """Test that a wrong number of arguments fails construction."""
        descriptor = FilterDescriptor("TwoArguments", registries)
        descriptor.set_arguments(*arguments)

        with pytest.raises(ConstructionError) as exc_info:
            descriptor.get_instance()

        assert "TwoArguments" in str(exc_info.value)
        assert isinstance(exc_info.value, TypeError)

    def test_errors_inside_constructor_propagate_unchanged(self):
        """Test that exceptions raised by the constructor body are not wrapped."""

        class Failing(Transformer):
            def __init__(self, value):
                raise ValueError("bad value")

            def filter(self, content):
                return content

        registry = TransformerRegistry("test")
        registry.register("Failing", Failing)
        descriptor = FilterDescriptor("Failing", [registry]).set_arguments(1)

        with pytest.raises(ValueError, match="bad value"):
            descriptor.get_instance()

    def test_hooks_run_in_registration_order(self, registries):
        """Test that before-filtering hooks run once each, in order."""
        calls = []
        descriptor = FilterDescriptor("NoConstructor", registries)
        descriptor.before_filtering(lambda t: calls.append(("first", t)))
        descriptor.before_filtering(lambda t: calls.append(("second", t)))

        instance = descriptor.get_instance()

        assert calls == [("first", instance), ("second", instance)]

    def test_non_callable_hooks_are_skipped(self, registries):
        """Test that non-callable hooks are skipped silently."""
        hook = MagicMock()
        descriptor = FilterDescriptor("NoConstructor", registries)
        descriptor.before_filtering(None).before_filtering(hook)

        instance = descriptor.get_instance()

        hook.assert_called_once_with(instance)

    def test_hooks_can_configure_transformer(self, registries):
        """Test that a hook may modify the transformer before it is returned."""
        descriptor = FilterDescriptor("TwoArguments", registries)
        descriptor.set_arguments(1, 2)
        descriptor.before_filtering(lambda t: setattr(t, "second", 20))

        instance = descriptor.get_instance()

        assert instance.second == 20

    def test_each_call_builds_new_instance(self, registries):
        """Test that resolution is not cached."""
        hook = MagicMock()
        descriptor = FilterDescriptor("NoConstructor", registries).before_filtering(hook)

        first = descriptor.get_instance()
        second = descriptor.get_instance()

        assert first is not second
        assert hook.call_count == 2

    def test_primary_class_is_instantiated(self, registries):
        """Test that the primary registry's class is the one built."""
        instance = FilterDescriptor("Shared", registries).get_instance()

        assert instance.filter("x") == "primary"


class TestDelegation:
    """Test suite for delegating unknown calls to the resource."""

    def test_unknown_method_without_resource_raises(self):
        """Test that delegation without a resource fails."""
        descriptor = FilterDescriptor("CssMin")

        with pytest.raises(UnboundDelegationError):
            descriptor.when_production_build()

    def test_hasattr_is_false_without_resource(self):
        """Test that hasattr reports unknown attributes as missing."""
        descriptor = FilterDescriptor("CssMin")

        assert not hasattr(descriptor, "when_production_build")

    def test_unknown_method_forwards_to_resource(self):
        """Test that calls are forwarded unchanged and results returned as-is."""
        resource = MagicMock()
        resource.custom_method.return_value = "result"
        descriptor = FilterDescriptor("CssMin").set_resource(resource)

        result = descriptor.custom_method(1, "two", key="value")

        resource.custom_method.assert_called_once_with(1, "two", key="value")
        assert result == "result"

    def test_known_methods_are_not_forwarded(self):
        """Test that the descriptor's own methods are not delegated."""
        resource = MagicMock()
        descriptor = FilterDescriptor("CssMin").set_resource(resource)

        descriptor.only_stylesheets()

        resource.only_stylesheets.assert_not_called()

    def test_private_names_are_not_forwarded(self):
        """Test that underscore-prefixed names never reach the resource."""
        resource = MagicMock()
        descriptor = FilterDescriptor("CssMin").set_resource(resource)

        with pytest.raises(AttributeError):
            descriptor._missing

    def test_missing_resource_attribute_raises_attribute_error(self):
        """Test that attributes the resource lacks raise AttributeError."""

        class Plain:
            pass

        resource = Plain()
        descriptor = FilterDescriptor("CssMin").set_resource(resource)

        with pytest.raises(AttributeError):
            descriptor.missing_method()

    def test_explicit_delegate(self):
        """Test that delegate calls the named method on the resource."""
        resource = MagicMock()
        resource.apply.return_value = "next"
        descriptor = FilterDescriptor("CssMin").set_resource(resource)

        assert descriptor.delegate("apply", "JsMin") == "next"
        resource.apply.assert_called_once_with("JsMin")

    def test_explicit_delegate_without_resource_raises(self):
        """Test that delegate fails without a resource."""
        with pytest.raises(UnboundDelegationError):
            FilterDescriptor("CssMin").delegate("apply", "JsMin")


class TestResourceReference:
    """Test suite for the back reference to the resource."""

    class Owner:
        def describe(self):
            return "owner"

    def test_resource_is_held_weakly(self):
        """Test that the descriptor does not keep its resource alive."""
        resource = self.Owner()
        descriptor = FilterDescriptor("CssMin").set_resource(resource)

        assert descriptor.resource is resource
        assert descriptor.describe() == "owner"

        del resource
        gc.collect()

        assert descriptor.get_resource() is None

    def test_delegation_after_resource_collected_raises(self):
        """Test that delegation fails once the resource is gone."""
        resource = self.Owner()
        descriptor = FilterDescriptor("CssMin").set_resource(resource)

        del resource
        gc.collect()

        with pytest.raises(UnboundDelegationError):
            descriptor.describe()
