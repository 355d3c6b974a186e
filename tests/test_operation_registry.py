"""Tests for operation registration, listing and resolution."""

import pytest

from schema_transformer.models.shape import ShapeSpec
from schema_transformer.registry import (
    InvalidOperationDescriptor,
    OperationAlreadyRegistered,
    OperationDescriptor,
    OperationNotFound,
    OperationRegistry,
    RegistryFrozen,
    get_operation_registry,
    reset_operation_registry,
)
from schema_transformer.registry.operations import register_all_operations


def make_descriptor(name: str, /, **overrides) -> OperationDescriptor:
    fields = dict(
        name=name,
        description=f"{name} operation",
        input_shape=ShapeSpec.object_of(properties={"value": ShapeSpec.string()}),
        handler=lambda params: params.get("value", ""),
    )
    fields.update(overrides)
    return OperationDescriptor(**fields)


class TestRegistration:

    @pytest.fixture
    def registry(self):
        return OperationRegistry()

    def test_register_and_resolve(self, registry):
        descriptor = make_descriptor("echo")

        registry.register(descriptor)

        assert registry.resolve("echo") is descriptor
        assert registry.exists("echo")
        assert len(registry) == 1

    def test_duplicate_name_rejected(self, registry):
        registry.register(make_descriptor("echo"))

        with pytest.raises(OperationAlreadyRegistered) as exc_info:
            registry.register(make_descriptor("echo", description="another"))

        assert "echo" in str(exc_info.value)
        assert registry.resolve("echo").description == "echo operation"

    def test_resolve_is_case_sensitive(self, registry):
        registry.register(make_descriptor("echo"))

        with pytest.raises(OperationNotFound):
            registry.resolve("Echo")
        assert not registry.exists("ECHO")

    @pytest.mark.parametrize("overrides", [
        {"name": ""},
        {"description": ""},
        {"handler": None},
        {"version": "1.0"},
        {"version": "one.two.three"},
        {"input_shape": {"type": "object"}},
    ])
    def test_invalid_descriptor_rejected(self, registry, overrides):
        with pytest.raises(InvalidOperationDescriptor):
            registry.register(make_descriptor("bad", **overrides))

        assert len(registry) == 0

    def test_list_preserves_registration_order(self, registry):
        registry.register_all([make_descriptor(name) for name in ["zeta", "alpha", "mid"]])

        assert [op.name for op in registry.list()] == ["zeta", "alpha", "mid"]

    def test_list_on_empty_registry(self, registry):
        assert registry.list() == []

    def test_list_returns_a_copy(self, registry):
        registry.register(make_descriptor("echo"))

        registry.list().clear()

        assert len(registry.list()) == 1

    def test_get_operation_docs(self, registry):
        registry.register(make_descriptor("echo"))

        docs = registry.get_operation_docs("echo")

        assert docs == {
            "name": "echo",
            "description": "echo operation",
            "inputSchema": {
                "type": "object",
                "properties": {"value": {"type": "string"}},
            },
        }


class TestLifecycle:

    def test_register_after_freeze_fails(self):
        registry = OperationRegistry()
        registry.register(make_descriptor("echo"))
        registry.freeze()

        with pytest.raises(RegistryFrozen):
            registry.register(make_descriptor("late"))

        assert registry.is_frozen
        assert [op.name for op in registry.list()] == ["echo"]

    def test_freeze_is_idempotent(self):
        registry = OperationRegistry()
        registry.freeze()
        registry.freeze()

        assert registry.is_frozen

    def test_descriptor_is_immutable(self):
        descriptor = make_descriptor("echo")

        with pytest.raises(AttributeError):
            descriptor.name = "other"


class TestSingleton:

    @pytest.fixture(autouse=True)
    def fresh_singleton(self):
        reset_operation_registry()
        yield
        reset_operation_registry()

    def test_singleton_is_shared(self):
        assert get_operation_registry() is get_operation_registry()

    def test_register_all_operations_uses_singleton_by_default(self):
        register_all_operations()

        registry = get_operation_registry()
        assert [op.name for op in registry.list()] == ["generate_sql"]

    def test_register_all_operations_into_explicit_registry(self):
        registry = OperationRegistry()

        register_all_operations(registry)

        assert registry.exists("generate_sql")
        assert len(get_operation_registry()) == 0
