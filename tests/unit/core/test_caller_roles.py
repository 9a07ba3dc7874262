from types import SimpleNamespace

import pytest

from drakonis.core.roles import caller_roles


def test_roles_from_attribute_and_mapping():
    assert caller_roles(SimpleNamespace(roles=["admin", "author"])) == ("admin", "author")
    assert caller_roles({"id": "1", "roles": ("reader",)}) == ("reader",)


def test_duplicates_collapse_in_first_seen_order():
    assert caller_roles({"roles": ["b", "a", "b", "a"]}) == ("b", "a")


@pytest.mark.parametrize(
    "caller",
    [
        None,
        object(),
        {"id": "1"},
        {"roles": None},
        {"roles": 42},
        {"roles": "admin"},
        SimpleNamespace(roles=b"admin"),
    ],
)
def test_malformed_callers_hold_no_roles(caller):
    assert caller_roles(caller) == ()


def test_non_string_entries_are_skipped():
    assert caller_roles({"roles": ["admin", 7, None, ["x"], "admin"]}) == ("admin",)


def test_sets_and_generators_are_accepted():
    assert caller_roles({"roles": {"admin"}}) == ("admin",)
    assert caller_roles({"roles": (r for r in ["a", "b"])}) == ("a", "b")
