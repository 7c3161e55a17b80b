"""Port interface for reading team rosters."""

from abc import ABC, abstractmethod

from app.domain.entities.team_member import TeamMember


class TeamMemberRepository(ABC):
    @abstractmethod
    async def get_active_by_team(self, team_id: str) -> list[TeamMember]:
        """Return active members of the team in a stable order.

        The order decides score ties and role fallbacks, so it must be the
        same on every call for unchanged data.
        """
        ...
