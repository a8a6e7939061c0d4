"""Profile endpoints."""

from fastapi import APIRouter, Depends

from healthvault.api.deps import get_profile_repo, get_user_id
from healthvault.schemas.profile import ProfileResponse, ProfileUpdate
from healthvault.services.profiles import ProfileRepository

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_user_id),
    repo: ProfileRepository = Depends(get_profile_repo),
):
    """The user's profile; a blank one if nothing has been saved yet."""
    profile = await repo.get_for_user(user_id)
    return profile or ProfileResponse(user_id=user_id)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    user_id: str = Depends(get_user_id),
    repo: ProfileRepository = Depends(get_profile_repo),
):
    """Create or update the user's profile with the fields provided."""
    return await repo.upsert(user_id, data)
