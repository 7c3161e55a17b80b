"""Tests for EligibilityPolicy."""

from app.domain.entities.team_member import TeamMember
from app.domain.policies.eligibility import (
    DIFFICULTY_ROLES,
    eligible_roles,
    filter_by_difficulty,
)
from app.domain.value_objects.enums import Difficulty, Role


def _member(mid: str, role: Role, active: bool = True) -> TeamMember:
    return TeamMember(id=mid, full_name=f"User {mid}", role=role, is_active=active)


def _one_of_each() -> list[TeamMember]:
    return [
        _member("emp", Role.EMPLOYEE),
        _member("dc", Role.DATA_COLLECTOR),
        _member("sen", Role.SENIOR),
        _member("mgr", Role.MANAGER),
        _member("adm", Role.ADMIN),
    ]


def test_hard_allows_only_senior_roles():
    eligible = filter_by_difficulty(_one_of_each(), Difficulty.HARD)
    assert {m.role for m in eligible} == {Role.SENIOR, Role.MANAGER, Role.ADMIN}


def test_medium_excludes_data_collector():
    eligible = filter_by_difficulty(_one_of_each(), Difficulty.MEDIUM)
    assert {m.role for m in eligible} == {
        Role.ADMIN, Role.MANAGER, Role.SENIOR, Role.EMPLOYEE,
    }


def test_easy_allows_only_employee():
    eligible = filter_by_difficulty(_one_of_each(), Difficulty.EASY)
    assert [m.id for m in eligible] == ["emp"]


def test_data_collector_never_eligible():
    for difficulty in Difficulty:
        assert Role.DATA_COLLECTOR not in eligible_roles(difficulty)


def test_table_covers_every_difficulty():
    assert set(DIFFICULTY_ROLES) == set(Difficulty)


def test_unknown_difficulty_defaults_to_employee():
    assert eligible_roles("extreme") == frozenset({Role.EMPLOYEE})
    eligible = filter_by_difficulty(_one_of_each(), "extreme")
    assert [m.id for m in eligible] == ["emp"]


def test_plain_string_difficulty_matches_enum():
    assert eligible_roles("hard") == eligible_roles(Difficulty.HARD)


def test_filter_preserves_roster_order():
    roster = [
        _member("m2", Role.MANAGER),
        _member("s1", Role.SENIOR),
        _member("a1", Role.ADMIN),
    ]
    eligible = filter_by_difficulty(roster, Difficulty.HARD)
    assert [m.id for m in eligible] == ["m2", "s1", "a1"]


def test_inactive_members_filtered_out():
    roster = [_member("s1", Role.SENIOR, active=False), _member("s2", Role.SENIOR)]
    eligible = filter_by_difficulty(roster, Difficulty.HARD)
    assert [m.id for m in eligible] == ["s2"]


def test_empty_roster():
    assert filter_by_difficulty([], Difficulty.MEDIUM) == []
