"""TeamMember entity — a person who can be given tasks."""

from dataclasses import dataclass

from app.domain.value_objects.enums import Role


@dataclass
class TeamMember:
    id: str
    full_name: str
    role: Role
    is_active: bool = True

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles
