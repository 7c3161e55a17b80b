"""Team endpoints — workload overview."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.application.use_cases.team_workload import GetTeamWorkloadUseCase
from app.infrastructure.api.dependencies import get_team_workload_uc

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("/{team_id}/workload")
async def team_workload(
    team_id: str,
    uc: GetTeamWorkloadUseCase = Depends(get_team_workload_uc),
):
    """Active members with their open assignment counts."""
    rows = await uc.execute(team_id)
    return {
        "team_id": team_id,
        "members": [
            {
                "user_id": r.member.id,
                "full_name": r.member.full_name,
                "role": r.member.role.value,
                "active_assignments": r.active_assignments,
                "load_ratio": round(r.load_ratio, 2),
            }
            for r in rows
        ],
    }
