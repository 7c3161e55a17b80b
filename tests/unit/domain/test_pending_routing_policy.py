"""Tests for PendingRoutingPolicy."""

from app.domain.entities.team_member import TeamMember
from app.domain.policies.pending_routing import find_data_collector, find_reviewer
from app.domain.value_objects.enums import Role


def _member(mid: str, role: Role) -> TeamMember:
    return TeamMember(id=mid, full_name=f"User {mid}", role=role)


# ─── find_reviewer ───────────────────────────────────────────────────


def test_reviewer_prefers_senior():
    roster = [_member("m", Role.MANAGER), _member("e", Role.EMPLOYEE), _member("s", Role.SENIOR)]
    assert find_reviewer(roster).id == "s"


def test_reviewer_falls_back_to_first_manager_or_admin():
    roster = [_member("e", Role.EMPLOYEE), _member("a", Role.ADMIN), _member("m", Role.MANAGER)]
    assert find_reviewer(roster).id == "a"


def test_reviewer_falls_back_to_first_member():
    roster = [_member("dc", Role.DATA_COLLECTOR), _member("e", Role.EMPLOYEE)]
    assert find_reviewer(roster).id == "dc"


def test_reviewer_empty_roster():
    assert find_reviewer([]) is None


# ─── find_data_collector ─────────────────────────────────────────────


def test_data_collector_preferred():
    roster = [_member("s", Role.SENIOR), _member("dc", Role.DATA_COLLECTOR)]
    assert find_data_collector(roster).id == "dc"


def test_data_collector_falls_back_to_first_member():
    roster = [_member("e2", Role.EMPLOYEE), _member("s", Role.SENIOR), _member("e1", Role.EMPLOYEE)]
    assert find_data_collector(roster).id == "e2"


def test_data_collector_empty_roster():
    assert find_data_collector([]) is None
