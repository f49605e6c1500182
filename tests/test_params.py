"""Tests for weights, selectors and statistics filters."""

import pytest

from airtraffic.core.lib.params import (
    FallibleSelector,
    ProxySelector,
    ServerSelector,
    StatableFilter,
    Weight,
)


@pytest.mark.parametrize("value", [0, 1, 10, 255, 256])
def test_absolute_weight_in_range_renders_digits(value):
    assert Weight.absolute(value).render() == str(value)


@pytest.mark.parametrize("value", [257, 300, 65535])
def test_absolute_weight_caps_at_256(value):
    assert Weight.absolute(value).render() == "256"


@pytest.mark.parametrize("value", [0, 10, 99, 100])
def test_relative_weight_in_range_renders_percent(value):
    assert Weight.relative(value).render() == f"{value}%"


@pytest.mark.parametrize("value", [101, 150, 255])
def test_relative_weight_caps_at_100(value):
    assert Weight.relative(value).render() == "100%"


def test_negative_weights_clamp_to_zero():
    assert Weight.absolute(-1).render() == "0"
    assert Weight.relative(-1).render() == "0%"


@pytest.mark.parametrize("value", [1.5, "10", True, None])
def test_weight_rejects_non_integers(value):
    with pytest.raises(TypeError):
        Weight.absolute(value)


def test_weight_is_immutable_and_comparable():
    weight = Weight.relative(50)
    assert weight == Weight.relative(50)
    assert str(weight) == "50%"
    assert weight.is_relative
    assert not Weight.absolute(50).is_relative
    with pytest.raises(AttributeError):
        weight.value = "60%"


def test_identified_selectors_render_name():
    assert ProxySelector.id("be1").render() == "be1"
    assert ServerSelector.id("srv1").render() == "srv1"
    assert FallibleSelector.id("fe1").render() == "fe1"


def test_any_selectors_render_sentinels():
    assert ProxySelector.ANY.render() == "-1"
    assert ServerSelector.ANY.render() == "-1"
    assert FallibleSelector.ANY.render() == ""
    assert ProxySelector.ANY.is_any
    assert not ProxySelector.id("be1").is_any


def test_empty_identifier_is_forwarded_verbatim():
    selector = ProxySelector.id("")
    assert not selector.is_any
    assert selector.render() == ""


def test_selector_parse_inverts_render():
    for selector in (ProxySelector.id("be1"), ProxySelector.ANY):
        assert ProxySelector.parse(selector.render()) == selector
    assert ServerSelector.parse("-1") is not None
    assert ServerSelector.parse("-1").is_any
    assert FallibleSelector.parse("") == FallibleSelector.ANY
    assert FallibleSelector.parse("fe1") == FallibleSelector.id("fe1")


def test_selector_kinds_are_distinct():
    assert ProxySelector.id("x") != ServerSelector.id("x")


def test_statable_filter_values():
    assert StatableFilter.FRONTENDS.render() == "1"
    assert StatableFilter.BACKENDS.render() == "2"
    assert StatableFilter.SERVERS.render() == "4"
    assert StatableFilter.ANY.render() == "-1"
    assert len({f.render() for f in StatableFilter}) == 4


def test_statable_concrete_members_are_distinct_bits():
    concrete = [StatableFilter.FRONTENDS, StatableFilter.BACKENDS, StatableFilter.SERVERS]
    combined = 0
    for member in concrete:
        assert combined & member == 0
        combined |= member
    assert combined == 7
