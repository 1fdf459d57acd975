from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from wair.core.config import settings
from wair.core.errors import ApiError, OfflineError
from wair.schemas.chat import ChatMessage, ResolvedOutfit, StylistReply
from wair.schemas.profile import Profile, ProfileAttributes
from wair.schemas.wardrobe import GarmentAnalysis, WardrobeInsights, WardrobeItem
from wair.services import wardrobe_resolver as resolver
from wair.services.images import ImageCodec
from wair.services.llm import prompts
from wair.services.llm.image_client import GenerativeImageClient
from wair.services.llm.text_client import GenerativeTextClient
from wair.services.state import StylistState

logger = logging.getLogger("wair.stylist")

FALLBACK_MESSAGE = "I'm having trouble responding right now. Please try again in a moment."
PROFILE_ANALYSIS_WARNING = "Photo added but analysis failed. You can still use it for try-on."


@dataclass
class StylistTurn:
    text: str
    outfits: List[ResolvedOutfit] = field(default_factory=list)
    error: Optional[ApiError] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass
class ProfileUpdate:
    profile: Profile
    warning: Optional[str] = None
    error: Optional[ApiError] = None


def build_history(messages: Sequence[ChatMessage], turns: Optional[int] = None) -> List[dict]:
    turns = turns or settings.CHAT_HISTORY_TURNS
    history = []
    for msg in list(messages)[-turns:]:
        content = msg.text
        if not content and msg.outfits:
            content = prompts.outfit_names([o.name for o in msg.outfits])
        if content:
            history.append({"role": "user" if msg.role == "user" else "assistant", "content": content})
    return history


def summarize_attributes(attrs: ProfileAttributes) -> Optional[str]:
    parts = [
        f"{attrs.skin_tone} skin" if attrs.skin_tone else None,
        attrs.hair,
        f"{attrs.body_type} build" if attrs.body_type else None,
    ]
    return ", ".join(p for p in parts if p) or None


class StylingOrchestrator:
    def __init__(
        self,
        text_client: GenerativeTextClient,
        image_client: GenerativeImageClient,
        codec: ImageCodec,
        *,
        rng: Optional[random.Random] = None,
    ):
        self.text_client = text_client
        self.image_client = image_client
        self.codec = codec
        self.rng = rng or random.Random()

    def build_request(self, state: StylistState, text: str, image: Optional[str] = None) -> tuple[str, str]:
        """Return ``(prompt, system_instruction)`` for a chat turn."""
        if image:
            return prompts.build_critique_prompt(text.strip() or None), prompts.CRITIQUE_SYS
        attributes = state.profile.attributes.prompt_context() if state.profile.attributes else None
        prompt = prompts.build_outfit_prompt(
            prompts.profile_context(attributes),
            resolver.build_categorized_context(state.wardrobe),
            build_history(state.history),
            text,
        )
        return prompt, prompts.STYLIST_SYS

    async def send_message(self, state: StylistState, text: str, image: Optional[str] = None) -> StylistTurn:
        if not state.online:
            raise OfflineError("offline")
        text = text or ""
        if not text.strip() and not image:
            raise ValueError("empty_message")

        prompt, system = self.build_request(state, text, image)
        mode = "critique" if image else "outfits"
        try:
            reply = await self.text_client.generate(prompt, system, image, response_model=StylistReply)
        except ApiError as e:
            logger.warning("stylist:%s failed kind=%s err=%s", mode, e.kind, e.message)
            return StylistTurn(text=FALLBACK_MESSAGE, error=e)

        outfits = resolver.resolve_outfits(reply.outfits, state.wardrobe)
        logger.info(
            "stylist:%s proposed=%s kept=%s", mode, len(reply.outfits), len(outfits)
        )
        return StylistTurn(text=reply.response_text, outfits=outfits)

    def pick_surprise_item(self, wardrobe: Sequence[WardrobeItem]) -> WardrobeItem:
        if not wardrobe:
            raise ValueError("wardrobe_empty")
        return self.rng.choice(list(wardrobe))

    def build_surprise_request(self, wardrobe: Sequence[WardrobeItem]) -> str:
        return prompts.build_surprise_request(self.pick_surprise_item(wardrobe))

    async def surprise_me(self, state: StylistState) -> tuple[str, StylistTurn]:
        """Ask for an outfit built around one random wardrobe piece."""
        request = self.build_surprise_request(state.wardrobe)
        return request, await self.send_message(state, request)

    async def analyze_garment(self, image: str) -> tuple[str, GarmentAnalysis]:
        resized = await self.codec.resize(image)
        analysis = await self.text_client.generate(
            prompts.GARMENT_PROMPT, image=resized, response_model=GarmentAnalysis
        )
        return resized, analysis

    async def analyze_profile_photo(self, profile: Profile, photo: str) -> ProfileUpdate:
        resized = await self.codec.resize(photo, settings.IMAGE_MAX_WIDTH)
        attributes = profile.attributes
        warning = None
        error = None
        try:
            found = await self.text_client.generate(
                prompts.PERSON_PROMPT, image=resized, response_model=ProfileAttributes
            )
            attributes = found.model_copy(update={"summary": summarize_attributes(found)})
        except ApiError as e:
            logger.warning("stylist:profile analysis failed kind=%s err=%s", e.kind, e.message)
            warning = PROFILE_ANALYSIS_WARNING
            error = e
        gallery = [resized, *profile.gallery][: settings.PROFILE_GALLERY_MAX]
        return ProfileUpdate(profile=Profile(gallery=gallery, attributes=attributes), warning=warning, error=error)

    async def wardrobe_insights(self, items: Sequence[WardrobeItem]) -> WardrobeInsights:
        if not items:
            raise ValueError("wardrobe_empty")
        prompt = prompts.build_insights_prompt(resolver.build_inventory_summary(items))
        return await self.text_client.generate(prompt, response_model=WardrobeInsights)

    async def try_on(self, outfit_items: Sequence[WardrobeItem], photo: str) -> str:
        if not outfit_items:
            raise ValueError("outfit_empty")
        subject = await self.codec.to_inline(photo)
        garments = []
        for item in list(outfit_items)[: settings.TRYON_MAX_GARMENTS]:
            if item.image:
                garments.append(await self.codec.to_inline(item.image))
        prompt = prompts.build_tryon_prompt(outfit_items)
        logger.info("stylist:try_on garments=%s", len(garments))
        return await self.image_client.generate_image(prompt, [subject, *garments])
