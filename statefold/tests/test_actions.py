"""
Tests for action descriptor normalisation and resolution.
"""

from types import SimpleNamespace

import pytest

from statefold.core.actions import (
    ActionResult,
    Embedded,
    Named,
    as_descriptor,
    resolve_action_factory,
    unpack_result,
)
from statefold.core.errors import (
    InvalidActionResultError,
    InvalidActionShapeError,
    UnexpectedDescriptorError,
    UnresolvedActionFactoryError,
)


def noop(extended_state, event, action):
    return ActionResult()


def other(extended_state, event, action):
    return ActionResult(outputs=["other"])


def test_string_becomes_named():
    """A bare string is a named reference."""
    assert as_descriptor("incGreenTimer") == Named(name="incGreenTimer")


def test_callable_becomes_embedded():
    """A callable is an embedded factory named after the function."""
    d = as_descriptor(noop)
    assert isinstance(d, Embedded)
    assert d.factory is noop
    assert d.name == "noop"


def test_mapping_with_type_keeps_params():
    """Extra fields of a compound descriptor are kept as params."""
    d = as_descriptor({"type": "announce", "light": "northSouth", "colour": "red"})
    assert d == Named(name="announce", params={"light": "northSouth", "colour": "red"})


def test_mapping_exec_wins_over_type():
    """An embedded executable takes precedence over the identifier."""
    d = as_descriptor({"type": "noop", "exec": other})
    assert isinstance(d, Embedded)
    assert d.factory is other
    assert d.name == "noop"

    factory = resolve_action_factory(d, {"noop": noop})
    assert factory is other


def test_mapping_with_null_exec_is_named():
    """exec=None reads as absent."""
    assert as_descriptor({"type": "noop", "exec": None}) == Named(name="noop")


def test_mapping_with_non_callable_exec():
    """A non-callable exec is an engine contract violation."""
    with pytest.raises(UnexpectedDescriptorError) as exc:
        as_descriptor({"type": "noop", "exec": "not-callable"})
    assert exc.value.descriptor == {"type": "noop", "exec": "not-callable"}


@pytest.mark.parametrize("raw", [42, None, ["noop"], {"name": "noop"}, {"type": 3}])
def test_invalid_shapes(raw):
    """Anything else is an invalid action shape."""
    with pytest.raises(InvalidActionShapeError):
        as_descriptor(raw)


def test_descriptor_passthrough():
    """Already normalised descriptors are returned unchanged."""
    d = Named(name="x", params={"a": 1})
    assert as_descriptor(d) is d


def test_resolve_named():
    """Named descriptors are looked up by exact key."""
    assert resolve_action_factory(Named("noop"), {"noop": noop, "other": other}) is noop


def test_resolve_named_missing():
    """Missing identifiers fail with the identifier attached."""
    with pytest.raises(UnresolvedActionFactoryError) as exc:
        resolve_action_factory(Named("Noop"), {"noop": noop})
    assert exc.value.name == "Noop"
    assert exc.value.descriptor == Named("Noop")


def test_resolve_rejects_unnormalised():
    """Raw values must go through as_descriptor first."""
    with pytest.raises(UnexpectedDescriptorError):
        resolve_action_factory("noop", {"noop": noop})


def test_unpack_result_shapes():
    """Factories may return an ActionResult, a mapping or a pair."""
    assert unpack_result(ActionResult(updates=1, outputs=[2])) == (1, [2])
    assert unpack_result({"updates": 1, "outputs": [2]}) == (1, [2])
    assert unpack_result({"outputs": [2]}) == (None, [2])
    assert unpack_result((1, [2])) == (1, [2])
    assert unpack_result([1, [2]]) == (1, [2])


@pytest.mark.parametrize("result", ["ab", None, (1, [2], 3), 42])
def test_unpack_result_rejects_other_shapes(result):
    """Strings, None and pairs of the wrong length are not (updates, outputs)."""
    descriptor = Named("noop")

    with pytest.raises(InvalidActionResultError) as exc:
        unpack_result(result, descriptor)

    assert exc.value.descriptor is descriptor
    assert exc.value.result == result


def test_attribute_descriptor_with_type():
    """Objects carrying 'type' read like mappings; other attributes become params."""
    raw = SimpleNamespace(type="announce", light="ns", colour="green")
    assert as_descriptor(raw) == Named(name="announce", params={"light": "ns", "colour": "green"})


def test_attribute_descriptor_exec_wins():
    """An 'exec' attribute takes precedence over 'type'."""
    d = as_descriptor(SimpleNamespace(type="other", exec=noop))
    assert d == Embedded(factory=noop, name="other")


def test_attribute_descriptor_class_level_fields():
    """Class attributes count as well as instance ones."""
    class Reset:
        type = "reset"

    assert as_descriptor(Reset()) == Named(name="reset")


def test_attribute_descriptor_with_non_callable_exec():
    """A non-callable exec attribute is an engine contract violation."""
    raw = SimpleNamespace(type="noop", exec="not-callable")
    with pytest.raises(UnexpectedDescriptorError) as exc:
        as_descriptor(raw)
    assert exc.value.descriptor is raw
