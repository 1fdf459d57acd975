from __future__ import annotations

import json
from typing import Iterable, List, Optional, Sequence

from wair.schemas.wardrobe import WardrobeItem

STYLIST_SYS = """You are WAIR, an expert fashion stylist AI with deep knowledge of:
- Color theory (complementary, analogous, monochromatic palettes)
- Occasion-appropriate dressing (casual, business, formal, date night, etc.)
- Body-flattering silhouettes and proportions
- Current fashion trends and timeless style principles
- Fabric combinations and seasonal appropriateness

Your goal is to create cohesive, stylish outfits that make users feel confident."""

CRITIQUE_SYS = "You are WAIR, an expert fashion stylist AI. Analyze the user's uploaded outfit photo."

GARMENT_PROMPT = """Analyze this clothing item. Return JSON: {
  "category": "Top"|"Bottom"|"Shoes"|"Outerwear"|"Accessory"|"Dress",
  "subcategory": "string (specific type like 'Denim Jacket', 'Sneakers', etc.)",
  "color": "string (main color)",
  "material": "string (fabric/material type)"
}"""

PERSON_PROMPT = """Analyze this person's appearance for a fashion app. Return JSON: {
  "gender": "Woman"|"Man"|"Non-Binary",
  "hair": "string (color and style)",
  "bodyType": "string (general build)",
  "skinTone": "string (general tone)"
}"""

OUTFIT_JSON_SHAPE = """{
  "responseText": "string (friendly greeting + brief style advice, use emoji sparingly)",
  "outfits": [
    {
      "name": "string (catchy outfit name like 'Casual Friday' or 'Weekend Brunch')",
      "occasion": "string (where to wear this)",
      "items": ["exact item description 1", "exact item description 2", "exact item description 3"],
      "reasoning": "string (explain color coordination, style balance, why it works)",
      "stylingTip": "string (one specific tip to elevate this look)"
    }
  ]
}"""


def build_critique_prompt(comment: Optional[str]) -> str:
    return f"""Analyze this outfit photo. User's comment: "{comment or 'Rate my outfit'}".

Provide:
1. Overall rating (1-10)
2. 3 specific things that work well
3. 1-2 constructive suggestions for improvement

Return JSON: {{
  "responseText": "string (formatted response with emoji and bullet points for readability)",
  "outfits": []
}}"""


def build_outfit_prompt(
    profile_context: str,
    wardrobe_context: str,
    history: Sequence[dict],
    request: str,
) -> str:
    history_text = "\n".join(f"{m['role']}: {m['content']}" for m in history)
    return f"""USER PROFILE:
{profile_context}

WARDROBE INVENTORY:
{wardrobe_context}

CONVERSATION CONTEXT:
{history_text}

USER REQUEST: "{request}"

STYLING INSTRUCTIONS:
1. ONLY use items from the wardrobe above - use EXACT descriptions (e.g., "Blue Jeans", "Black Leather Jacket")
2. Create complete outfits: top + bottom (or dress) + shoes + optional accessories
3. Apply color coordination:
   - Neutrals (black, white, grey, beige) pair with everything
   - Use the 3-color rule maximum
   - Consider complementary or analogous color schemes
4. Match formality levels across all pieces
5. Consider the occasion/context mentioned
6. Explain WHY items work together (color, style, occasion fit)

Create 1 or 2 outfit options with different vibes/styles when possible.

Return JSON:
{OUTFIT_JSON_SHAPE}"""


def build_surprise_request(item: WardrobeItem) -> str:
    return f"Build a creative outfit around my {item.color} {item.subcategory}. Make it something unexpected!"


def build_insights_prompt(inventory_summary: str) -> str:
    return f"""Analyze this wardrobe inventory.
Inventory: {inventory_summary}.
Return JSON: {{
  "style": "string (dominant style description, 2 sentences)",
  "palette": ["color1", "color2", "color3"],
  "missing": ["item1", "item2", "item3"]
}}
"missing" lists 3 specific items that would complete this wardrobe."""


def build_tryon_prompt(items: Iterable[WardrobeItem]) -> str:
    clothing = ", ".join(f"- {i.color} {i.subcategory}" for i in items)
    return (
        "Create a FULL BODY fashion photograph from head to toe. "
        "SUBJECT: The exact same person from the first reference image (same face, hair color, skin tone, body type). "
        f"CLOTHING: Dress this person in: {clothing}. "
        "REQUIREMENTS: MUST show complete full body from head to feet, standing pose facing camera, "
        "person's face and features must match reference photo exactly, professional fashion photography "
        "with studio lighting, clean white or neutral background, high fashion editorial style, "
        "show entire outfit clearly visible. Generate a single realistic photograph."
    )


def profile_context(attributes: Optional[dict]) -> str:
    return json.dumps(attributes, ensure_ascii=False) if attributes else "Unknown"


def outfit_names(names: List[str]) -> str:
    return f"Suggested outfits: {', '.join(names)}"
