"""Map the stylist's free-text item descriptions back to wardrobe records.

The model names items inconsistently ("black tee", "Black T-Shirt",
"the black top"), so matching runs through tiers from strict to loose. A
tier is only consulted when every stricter tier found nothing across the
whole inventory, so an exact hit always beats a loose one.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from wair.schemas.chat import Outfit, ResolvedOutfit
from wair.schemas.wardrobe import WardrobeItem

logger = logging.getLogger("wair.stylist")

MatchTier = Callable[[str, WardrobeItem], bool]


def match_exact_id(desc: str, item: WardrobeItem) -> bool:
    return item.id == desc


def match_search_key(desc: str, item: WardrobeItem) -> bool:
    return item.search_key == desc.lower()


def match_partial(desc: str, item: WardrobeItem) -> bool:
    d = desc.lower()
    label = item.label.lower()
    color = item.color.lower()
    return (
        d in label
        or label in d
        or item.subcategory.lower() in d
        or (color in d and item.category.lower() in d)
    )


def match_category_color(desc: str, item: WardrobeItem) -> bool:
    d = desc.lower()
    return item.category.lower() in d and item.color.lower() in d


MATCH_TIERS: List[Tuple[str, MatchTier]] = [
    ("id", match_exact_id),
    ("search_key", match_search_key),
    ("partial", match_partial),
    ("category_color", match_category_color),
]


def match_item(
    desc: str,
    inventory: Sequence[WardrobeItem],
    tiers: Sequence[Tuple[str, MatchTier]] = MATCH_TIERS,
) -> Optional[WardrobeItem]:
    # Several items can satisfy a loose tier (two black tops); inventory
    # order decides.
    for name, tier in tiers:
        for item in inventory:
            if tier(desc, item):
                logger.debug("resolve desc=%r tier=%s item=%s", desc, name, item.id)
                return item
    return None


def resolve(descriptions: Iterable[str], inventory: Sequence[WardrobeItem]) -> List[WardrobeItem]:
    """Resolve descriptions to items, dropping misses and duplicates."""
    results: List[WardrobeItem] = []
    seen: set[str] = set()
    for desc in descriptions:
        if not isinstance(desc, str) or not desc.strip():
            continue
        match = match_item(desc.strip(), inventory)
        if match is None:
            logger.info("resolve miss desc=%r", desc)
            continue
        if match.id not in seen:
            seen.add(match.id)
            results.append(match)
    return results


def resolve_outfits(outfits: Iterable[Outfit], inventory: Sequence[WardrobeItem]) -> List[ResolvedOutfit]:
    resolved: List[ResolvedOutfit] = []
    for outfit in outfits:
        items = resolve(outfit.items, inventory)
        if not items:
            logger.info("resolve dropped outfit=%r no wardrobe matches", outfit.name)
            continue
        resolved.append(
            ResolvedOutfit(
                name=outfit.name,
                occasion=outfit.occasion,
                items=items,
                reasoning=outfit.reasoning,
                styling_tip=outfit.styling_tip,
            )
        )
    return resolved


def group_by_category(items: Iterable[WardrobeItem]) -> Dict[str, List[WardrobeItem]]:
    groups: Dict[str, List[WardrobeItem]] = {}
    for item in items:
        groups.setdefault(item.category, []).append(item)
    return groups


def build_categorized_context(items: Iterable[WardrobeItem]) -> str:
    blocks = []
    for category, group in group_by_category(items).items():
        lines = "\n".join(f'  - "{i.label}" (Material: {i.material or "N/A"})' for i in group)
        blocks.append(f"{category}s:\n{lines}")
    return "\n\n".join(blocks)


def build_id_context(items: Iterable[WardrobeItem]) -> str:
    return "\n".join(f'- "{i.label}" (Category: {i.category}, ID: {i.id})' for i in items)


def build_inventory_summary(items: Iterable[WardrobeItem]) -> str:
    return ", ".join(f"{i.label} ({i.category})" for i in items)
