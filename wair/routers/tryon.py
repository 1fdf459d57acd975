from typing import List

from fastapi import APIRouter, Depends, HTTPException

from wair.core.errors import ApiError, ImageLoadError
from wair.schemas.api import TryOnIn, TryOnOut
from wair.schemas.wardrobe import WardrobeItem
from wair.routers.deps import (
    get_current_user_id,
    get_inventory_store,
    get_orchestrator,
    get_profile_store,
    raise_api_error,
    raise_image_error,
)
from wair.services.stylist import StylingOrchestrator
from wair.stores import InventoryStore, ProfileStore

router = APIRouter(prefix="/try-on", tags=["try-on"])


@router.post("", response_model=TryOnOut)
async def try_on(
    payload: TryOnIn,
    inventory: InventoryStore = Depends(get_inventory_store),
    profiles: ProfileStore = Depends(get_profile_store),
    stylist: StylingOrchestrator = Depends(get_orchestrator),
    user_id: str = Depends(get_current_user_id),
):
    items: List[WardrobeItem] = list(payload.outfit.items) if payload.outfit else []
    for item_id in payload.item_ids:
        item = await inventory.get(user_id, item_id)
        if item is None:
            raise HTTPException(status_code=404, detail="item_not_found")
        items.append(item)
    if not items:
        raise HTTPException(status_code=400, detail="outfit_empty")

    photo = payload.photo
    if not photo:
        gallery = (await profiles.get(user_id)).gallery
        if not 0 <= payload.photo_index < len(gallery):
            raise HTTPException(status_code=400, detail="photo_required")
        photo = gallery[payload.photo_index]

    try:
        image = await stylist.try_on(items, photo)
    except ImageLoadError as e:
        raise_image_error(e)
    except ApiError as e:
        raise_api_error(e)
    return TryOnOut(image=image)
