from fastapi import APIRouter, Depends, HTTPException

from wair.schemas.api import PhotoIn, ProfileUpdateOut
from wair.schemas.profile import Profile
from wair.routers.deps import api_error_out, get_current_user_id, get_orchestrator, get_profile_store
from wair.services.stylist import StylingOrchestrator
from wair.stores import ProfileStore
from wair.stores.demo import demo_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=Profile)
async def get_profile(
    profiles: ProfileStore = Depends(get_profile_store),
    user_id: str = Depends(get_current_user_id),
):
    return await profiles.get(user_id)


@router.post("/demo", response_model=Profile)
async def use_demo_profile(
    profiles: ProfileStore = Depends(get_profile_store),
    user_id: str = Depends(get_current_user_id),
):
    return await profiles.set(user_id, demo_profile())


@router.post("/photos", response_model=ProfileUpdateOut)
async def add_photo(
    payload: PhotoIn,
    profiles: ProfileStore = Depends(get_profile_store),
    stylist: StylingOrchestrator = Depends(get_orchestrator),
    user_id: str = Depends(get_current_user_id),
):
    """Add a photo to the gallery and refresh the inferred attributes."""
    current = await profiles.get(user_id)
    update = await stylist.analyze_profile_photo(current, payload.photo)
    saved = await profiles.set(user_id, update.profile)
    return ProfileUpdateOut(
        profile=saved,
        warning=update.warning,
        error=api_error_out(update.error) if update.error else None,
    )


@router.delete("/photos/{index}", response_model=Profile)
async def delete_photo(
    index: int,
    profiles: ProfileStore = Depends(get_profile_store),
    user_id: str = Depends(get_current_user_id),
):
    current = await profiles.get(user_id)
    if index < 0 or index >= len(current.gallery):
        raise HTTPException(status_code=404, detail="photo_not_found")
    gallery = [p for i, p in enumerate(current.gallery) if i != index]
    return await profiles.set(user_id, current.model_copy(update={"gallery": gallery}))
