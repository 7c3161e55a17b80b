"""GetTeamWorkloadUseCase — open-task load per team member."""

from __future__ import annotations

from dataclasses import dataclass

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.team_member_repo import TeamMemberRepository
from app.domain.entities.team_member import TeamMember
from app.domain.policies.workload_scoring import CAPACITY_CEILING


@dataclass(frozen=True)
class MemberWorkload:
    member: TeamMember
    active_assignments: int

    @property
    def load_ratio(self) -> float:
        return self.active_assignments / CAPACITY_CEILING


class GetTeamWorkloadUseCase:
    def __init__(
        self,
        member_repo: TeamMemberRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._members = member_repo
        self._assignments = assignment_repo

    async def execute(self, team_id: str) -> list[MemberWorkload]:
        members = await self._members.get_active_by_team(team_id)
        if not members:
            return []
        counts = await self._assignments.count_active_by_user([m.id for m in members])
        return [
            MemberWorkload(member=m, active_assignments=counts.get(m.id, 0))
            for m in members
        ]
