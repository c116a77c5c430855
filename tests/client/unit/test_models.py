"""Tests for raw payload to model conversion."""

from __future__ import annotations

from portainer_mcp.client.models import (
    AccessGroup,
    RegularStack,
    Team,
    User,
    access_policies,
)


def test_access_group_collects_member_environments() -> None:
    environments = [
        {"Id": 1, "GroupId": 2},
        {"Id": 3, "GroupId": 2},
        {"Id": 4, "GroupId": 1},
    ]
    raw = {"Id": 2, "Name": "prod", "TeamAccessPolicies": {"5": {"RoleId": 3}}}

    group = AccessGroup.from_raw(raw, environments)

    assert group.environment_ids == [1, 3]
    assert group.team_accesses == {5: "standard_user"}
    assert group.user_accesses == {}


def test_unknown_role_ids_are_reported() -> None:
    assert User.from_raw({"Id": 1, "Username": "admin", "Role": 1}).role == "admin"
    assert User.from_raw({"Id": 2, "Username": "x", "Role": 42}).role == "unknown"

    group = AccessGroup.from_raw({"Id": 1, "UserAccessPolicies": {"9": {"RoleId": 99}}})
    assert group.user_accesses == {9: "unknown"}


def test_team_members_come_from_memberships() -> None:
    memberships = [
        {"UserID": 1, "TeamID": 3},
        {"UserID": 2, "TeamID": 4},
        {"UserID": 5, "TeamID": 3},
    ]

    team = Team.from_raw({"Id": 3, "Name": "ops"}, memberships)

    assert team.member_ids == [1, 5]


def test_regular_stack_timestamp_is_iso8601() -> None:
    stack = RegularStack.from_raw({"Id": 1, "Name": "web", "CreationDate": 0, "EndpointId": 2})
    assert stack.created_at == ""
    assert stack.endpoint_id == 2

    dated = RegularStack.from_raw({"Id": 1, "Name": "web", "CreationDate": 1700000000})
    assert dated.created_at == "2023-11-14T22:13:20Z"


def test_access_policies_round_trip_levels() -> None:
    assert access_policies({1: "environment_administrator", 2: "operator_user"}) == {
        "1": {"RoleId": 1},
        "2": {"RoleId": 5},
    }
