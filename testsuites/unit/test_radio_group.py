import pytest

from testsuites.fakes import FakeElement
from ui_foundation import (
    DocumentScope,
    InvalidConfigurationError,
    OptionNotFoundError,
    RadioGroup,
)


def add_radios(driver, values, name="size", **flags):
    return [
        driver.add(FakeElement("input", {"type": "radio", "name": name, "value": value}, **flags))
        for value in values
    ]


def test_members_keyed_by_value(driver):
    nodes = add_radios(driver, ["A", "B", "C"])
    add_radios(driver, ["X"], name="color")
    group = RadioGroup(DocumentScope(driver), "size")

    assert group.option_values() == {"A", "B", "C"}
    assert group.count() == 3
    assert group.get("B").value == "B"
    assert group.get("B").proxy.resolve() is nodes[1]


def test_unknown_value_raises_with_available_options(driver):
    add_radios(driver, ["A", "B"])
    group = RadioGroup(DocumentScope(driver), "size", label="size_picker")

    with pytest.raises(OptionNotFoundError) as exc_info:
        group.get("Z")

    assert exc_info.value.available == ["A", "B"]
    assert "size_picker" in str(exc_info.value)


def test_select_clicks_the_matching_button(driver):
    nodes = add_radios(driver, ["A", "B", "C"])
    group = RadioGroup(DocumentScope(driver), "size")

    group.select("C")

    assert nodes[2].selected
    assert driver.actions("click") == [("click", nodes[2], None)]

    group.select("C")
    assert len(driver.actions("click")) == 1


def test_mapping_is_cached_while_members_are_fresh(driver):
    add_radios(driver, ["A", "B"])
    group = RadioGroup(DocumentScope(driver), "size")

    group.members()
    group.members()
    group.get("A")

    assert driver.find_count == 1


def test_stale_member_triggers_full_rebuild(driver):
    old = add_radios(driver, ["A", "B"])
    group = RadioGroup(DocumentScope(driver), "size")
    assert group.option_values() == {"A", "B"}

    driver.replace(old[0], FakeElement("input", {"type": "radio", "name": "size", "value": "A"}))
    add_radios(driver, ["C"])

    assert group.option_values() == {"A", "B", "C"}
    assert not any(button.is_requery_needed() for button in group.members())
    assert driver.find_count == 2


def test_empty_group_requeries_until_buttons_exist(driver):
    group = RadioGroup(DocumentScope(driver), "size")
    assert group.count() == 0

    add_radios(driver, ["A"])
    assert group.count() == 1


def test_visibility_is_a_partition_not_a_complement(driver):
    add_radios(driver, ["A"], displayed=True)
    add_radios(driver, ["B"], displayed=False)
    group = RadioGroup(DocumentScope(driver), "size")

    assert group.all_visible() is False
    assert group.all_hidden() is False


def test_visibility_when_uniform(driver):
    nodes = add_radios(driver, ["A", "B"])
    group = RadioGroup(DocumentScope(driver), "size")
    assert group.all_visible() is True
    assert group.all_hidden() is False

    for node in nodes:
        node.displayed = False
    assert group.all_visible() is False
    assert group.all_hidden() is True


def test_duplicate_values_keep_first(driver):
    first, _ = add_radios(driver, ["A", "A"])
    group = RadioGroup(DocumentScope(driver), "size")

    assert group.count() == 1
    assert group.get("A").proxy.resolve() is first


def test_missing_scope_is_rejected():
    with pytest.raises(InvalidConfigurationError):
        RadioGroup(None, "size")
