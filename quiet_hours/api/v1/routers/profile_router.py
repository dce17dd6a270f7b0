from fastapi import APIRouter, Depends

from quiet_hours.api.v1.dependencies import get_current_profile
from quiet_hours.models.profile_model import Profile
from quiet_hours.schemas.profile_schema import ProfileResponse

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileResponse)
def read_my_profile(profile: Profile = Depends(get_current_profile)):
    """Current user's profile, created from the token claims on first call."""
    return profile


profile_router = router
