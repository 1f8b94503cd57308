"""Unit tests for spec registration."""

import pytest

from janusspec.errors import RegistryAlreadyRunError, RegistrySealedError
from janusspec.registry import (
    DEFAULT_REGISTRY,
    Registry,
    RegistryState,
    active_registry,
    use_registry,
)
from janusspec.registry import focused_test as register_focused
from janusspec.registry import test as register_test


def body(_tools) -> None:
    """An empty spec body."""


def test_specs_keep_registration_order(registry) -> None:
    for name in "abc":
        registry.test(name, body)
    assert [s.description for s in registry.specs] == ["a", "b", "c"]
    assert len(registry) == 3


def test_decorator_form_returns_function(registry) -> None:
    @registry.test("decorated")
    def spec_body(_tools) -> None:
        """Body."""

    assert callable(spec_body)
    assert registry.specs[0].body is spec_body


def test_focused_subset(registry) -> None:
    registry.test("a", body)
    registry.focused_test("b", body)
    registry.test("c", body)
    registry.focused_test("d", body)
    assert [s.description for s in registry.effective_specs()] == ["b", "d"]


def test_all_specs_run_without_focus(registry) -> None:
    registry.test("a", body)
    registry.test("b", body)
    assert [s.description for s in registry.effective_specs()] == ["a", "b"]


def test_sealed_registry_rejects_specs(registry) -> None:
    registry.test("a", body)
    registry.seal()
    assert registry.state is RegistryState.SEALED
    with pytest.raises(RegistrySealedError, match="'late'"):
        registry.test("late", body)


def test_sealing_twice_is_rejected(registry) -> None:
    registry.test("a", body)
    registry.seal()
    with pytest.raises(RegistryAlreadyRunError, match="1 spec"):
        registry.seal()
    assert isinstance(RegistryAlreadyRunError(0), RegistrySealedError)


def test_module_helpers_route_to_active_registry() -> None:
    outer, inner = Registry(), Registry()
    with use_registry(outer):
        register_test("outer", body)
        with use_registry(inner):
            register_focused("inner", body)
        assert active_registry() is outer

    assert active_registry() is DEFAULT_REGISTRY
    assert [s.description for s in outer.specs] == ["outer"]
    assert [(s.description, s.focused) for s in inner.specs] == [("inner", True)]
