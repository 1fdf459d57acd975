from typing import List

from fastapi import APIRouter, Depends, HTTPException

from wair.core.errors import ApiError
from wair.schemas.api import GarmentAnalysisOut, ImageIn, ResetOut
from wair.schemas.wardrobe import WardrobeInsights, WardrobeItem, WardrobeItemIn
from wair.routers.deps import (
    get_codec,
    get_current_user_id,
    get_inventory_store,
    get_orchestrator,
    raise_api_error,
)
from wair.services.images import ImageCodec
from wair.services.stylist import StylingOrchestrator
from wair.stores import InventoryStore
from wair.stores.demo import demo_wardrobe

router = APIRouter(prefix="/wardrobe", tags=["wardrobe"])


@router.get("", response_model=List[WardrobeItem])
async def list_items(
    store: InventoryStore = Depends(get_inventory_store),
    user_id: str = Depends(get_current_user_id),
):
    return await store.list(user_id)


@router.post("", response_model=WardrobeItem)
async def create_item(
    payload: WardrobeItemIn,
    store: InventoryStore = Depends(get_inventory_store),
    codec: ImageCodec = Depends(get_codec),
    user_id: str = Depends(get_current_user_id),
):
    if payload.image and payload.image.startswith("data:"):
        payload = payload.model_copy(update={"image": await codec.resize(payload.image)})
    return await store.add(user_id, WardrobeItem.from_input(payload))


@router.delete("/{item_id}")
async def delete_item(
    item_id: str,
    store: InventoryStore = Depends(get_inventory_store),
    user_id: str = Depends(get_current_user_id),
):
    if not await store.delete(user_id, item_id):
        raise HTTPException(status_code=404, detail="item_not_found")
    return {"deleted": item_id}


@router.post("/reset", response_model=ResetOut)
async def reset_wardrobe(
    store: InventoryStore = Depends(get_inventory_store),
    user_id: str = Depends(get_current_user_id),
):
    """Replace the wardrobe with the demo items."""
    removed = await store.clear(user_id)
    for item in demo_wardrobe():
        await store.add(user_id, item)
    return ResetOut(removed=removed, items=await store.list(user_id))


@router.post("/analyze", response_model=GarmentAnalysisOut)
async def analyze_item_photo(
    payload: ImageIn,
    stylist: StylingOrchestrator = Depends(get_orchestrator),
    user_id: str = Depends(get_current_user_id),
):
    try:
        image, analysis = await stylist.analyze_garment(payload.image)
    except ApiError as e:
        raise_api_error(e)
    return GarmentAnalysisOut(image=image, analysis=analysis)


@router.get("/insights", response_model=WardrobeInsights)
async def wardrobe_insights(
    store: InventoryStore = Depends(get_inventory_store),
    stylist: StylingOrchestrator = Depends(get_orchestrator),
    user_id: str = Depends(get_current_user_id),
):
    items = await store.list(user_id)
    if not items:
        raise HTTPException(status_code=400, detail="wardrobe_empty")
    try:
        return await stylist.wardrobe_insights(items)
    except ApiError as e:
        raise_api_error(e)
