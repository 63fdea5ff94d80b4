import copy

from platsync.settings.fields import (
    ABSENT,
    EMPTY,
    Absent,
    Value,
    from_raw,
    is_present,
    merge_list,
    merge_scalar,
    to_raw,
    value_of,
)


def test_markers_are_singletons_across_copies():
    assert Absent() is ABSENT
    assert copy.deepcopy(ABSENT) is ABSENT
    assert copy.copy(EMPTY) is EMPTY


def test_absent_is_falsy_and_not_present():
    assert not ABSENT
    assert not is_present(ABSENT)
    assert is_present(EMPTY)
    assert is_present(Value(0))


def test_from_raw_distinguishes_absent_and_empty_lists():
    assert from_raw(None, is_list=True) is ABSENT
    assert from_raw([], is_list=True) is EMPTY
    assert from_raw(["1.2.3.4/32"], is_list=True) == Value(["1.2.3.4/32"])


def test_from_raw_scalar_keeps_falsy_values():
    assert from_raw(False) == Value(False)
    assert from_raw(0) == Value(0)
    assert from_raw("") == Value("")


def test_to_raw_and_value_of():
    assert to_raw(ABSENT) is None
    assert to_raw(EMPTY) == []
    assert to_raw(Value(5)) == 5
    assert value_of(EMPTY) == []
    assert value_of(ABSENT, "default") == "default"


def test_to_raw_returns_a_copy_of_lists():
    setting = Value(["a"])
    raw = to_raw(setting)
    raw.append("b")
    assert setting.value == ["a"]


def test_merge_scalar_declared_takes_remote_value():
    assert merge_scalar(Value(100), 200) == Value(200)


def test_merge_scalar_keeps_declared_when_remote_missing():
    assert merge_scalar(Value("8MB"), None) == Value("8MB")


def test_merge_scalar_undeclared_stays_absent():
    assert merge_scalar(ABSENT, 200) is ABSENT


def test_merge_scalar_populate_fills_undeclared():
    assert merge_scalar(ABSENT, 200, populate=True) == Value(200)


def test_merge_scalar_write_only_keeps_declared_value():
    assert merge_scalar(Value("hunter2"), "masked", write_only=True) == Value("hunter2")
    assert merge_scalar(ABSENT, "masked", write_only=True, populate=True) is ABSENT


def test_merge_list_undeclared_stays_absent_for_empty_remote():
    assert merge_list(ABSENT, []) is ABSENT
    assert merge_list(ABSENT, None) is ABSENT


def test_merge_list_undeclared_stays_absent_even_for_values():
    assert merge_list(ABSENT, ["1.2.3.4/32"]) is ABSENT


def test_merge_list_declared_empty_remote_is_empty():
    assert merge_list(EMPTY, []) is EMPTY
    assert merge_list(Value(["1.2.3.4/32"]), None) is EMPTY


def test_merge_list_declared_takes_remote_values():
    assert merge_list(EMPTY, ["1.2.3.4/32"]) == Value(["1.2.3.4/32"])


def test_merge_list_populate():
    assert merge_list(ABSENT, ["1.2.3.4/32"], populate=True) == Value(["1.2.3.4/32"])
    assert merge_list(ABSENT, [], populate=True) is ABSENT
