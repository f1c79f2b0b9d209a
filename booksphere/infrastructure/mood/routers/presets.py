import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from starlette import status

from booksphere.application.mood.use_cases.mood_rule_store_use_case import MoodRuleStoreUseCase
from booksphere.application.mood.use_cases.resolve_mood_trigger_use_case import (
    ResolveMoodTriggerUseCase,
)
from booksphere.config import get_settings
from booksphere.core import container
from booksphere.domain.identity.entities.user import User
from booksphere.domain.mood.entities.preset import Preset
from booksphere.domain.mood.entities.trigger_rule import TriggerRule
from booksphere.domain.mood.services.mood_resolver import clamp_sensitivity
from booksphere.exceptions import PresetNotFoundError
from booksphere.infrastructure.common.di import inject_use_case
from booksphere.infrastructure.identity.dependencies import get_current_user
from booksphere.infrastructure.mood.schemas import (
    MoodResolutionResponse,
    MoodTriggerResponse,
    PresetResponse,
    TriggerRuleAtPositionResponse,
    TriggerRuleResponse,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(tags=["presets"])


def _rule_response(rule: TriggerRule) -> TriggerRuleResponse:
    return TriggerRuleResponse(
        id=rule.id.value,
        preset_id=rule.preset_id.value,
        mood_id=rule.mood_id.value,
        mood_name=rule.mood_name,
        trigger_condition=rule.condition.to_json(),
        music_track_id=rule.music_track_id,
        background_image_url=rule.background_image_url,
        transition_duration=rule.transition_duration_ms,
        is_active=rule.is_active,
        priority=rule.priority,
        created_at=rule.created_at,
    )


def _preset_response(preset: Preset) -> PresetResponse:
    return PresetResponse(
        id=preset.id.value,
        creator_id=preset.creator_id.value,
        book_id=preset.book_id.value,
        name=preset.name,
        description=preset.description,
        is_default=preset.is_default,
        created_at=preset.created_at,
        updated_at=preset.updated_at,
    )


@router.get(
    "/presets/{preset_id}/triggers",
    response_model=list[TriggerRuleResponse],
    status_code=status.HTTP_200_OK,
)
def get_preset_triggers(
    preset_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: MoodRuleStoreUseCase = Depends(inject_use_case(container.mood_rule_store_use_case)),
) -> list[TriggerRuleResponse]:
    """
    List a preset's active trigger rules in precedence order.

    Precedence is priority ascending, then creation order. An unknown preset
    has no rules and yields an empty list.
    """
    return [_rule_response(rule) for rule in use_case.rules_for_preset(preset_id)]


@router.get(
    "/presets/{preset_id}/triggers/position/{page}",
    response_model=TriggerRuleAtPositionResponse,
    status_code=status.HTTP_200_OK,
)
def get_trigger_for_position(
    preset_id: int,
    page: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: MoodRuleStoreUseCase = Depends(inject_use_case(container.mood_rule_store_use_case)),
) -> TriggerRuleAtPositionResponse:
    """Get the single rule in effect at an absolute page, if any."""
    rule = use_case.rule_for_position(preset_id, page)
    return TriggerRuleAtPositionResponse(
        page=page, rule=_rule_response(rule) if rule is not None else None
    )


@router.get(
    "/presets/{preset_id}/mood",
    response_model=MoodResolutionResponse,
    status_code=status.HTTP_200_OK,
)
def resolve_preset_mood(
    preset_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    chapter: int = Query(..., ge=0),
    page_fraction: float = Query(..., alias="pageFraction", ge=0),
    genre: str | None = Query(None, description="electronic, classical, lofi or custom"),
    use_case: ResolveMoodTriggerUseCase = Depends(
        inject_use_case(container.resolve_mood_trigger_use_case)
    ),
) -> MoodResolutionResponse:
    """
    Resolve the mood in effect at (chapter, pageFraction) for the caller.

    Uses the caller's stored sensitivity (or the configured default). The
    trigger is null when no breakpoint precedes the position.
    """
    genre = genre or settings.DEFAULT_MUSIC_GENRE
    sensitivity = current_user.preferences.mood_sensitivity
    if sensitivity is None:
        sensitivity = settings.DEFAULT_MOOD_SENSITIVITY

    outcome = use_case.resolve(preset_id, chapter, page_fraction, genre, sensitivity)

    trigger = None
    if outcome is not None:
        background_url = None
        if outcome.background_path:
            background_url = container.signed_url_service().generate(
                outcome.background_path, current_user.id.value
            )
        trigger = MoodTriggerResponse(
            mood_name=outcome.mood_name,
            base_tempo=outcome.base_tempo,
            tempo=outcome.tempo,
            transition_type=outcome.transition_type.value,
            background_image_url=background_url,
        )

    return MoodResolutionResponse(
        preset_id=preset_id,
        chapter=chapter,
        page_fraction=page_fraction,
        genre=genre,
        sensitivity=clamp_sensitivity(sensitivity),
        trigger=trigger,
    )


@router.get(
    "/books/{book_id}/presets/default",
    response_model=PresetResponse,
    status_code=status.HTTP_200_OK,
)
def get_default_preset(
    book_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: MoodRuleStoreUseCase = Depends(inject_use_case(container.mood_rule_store_use_case)),
) -> PresetResponse:
    """
    Get the book's default preset.

    Raises:
        PresetNotFoundError: If the book has no default preset
    """
    preset = use_case.default_preset_for_book(book_id)
    if preset is None:
        raise PresetNotFoundError(message=f"No default preset for book {book_id}")
    return _preset_response(preset)
