"""Read access to presets and their ordered trigger rules."""

from booksphere.application.mood.protocols.preset_repository import PresetRepositoryProtocol
from booksphere.application.mood.protocols.trigger_rule_repository import (
    TriggerRuleRepositoryProtocol,
)
from booksphere.domain.common.value_objects.ids import BookId, PresetId
from booksphere.domain.mood.entities.preset import Preset
from booksphere.domain.mood.entities.trigger_rule import TriggerRule
from booksphere.domain.mood.services.trigger_rule_selector import TriggerRuleSelector


class MoodRuleStoreUseCase:
    """
    Rule store contract over the trigger rule repository.

    Unknown presets are not an error here: they simply have no rules.
    """

    def __init__(
        self,
        trigger_rule_repository: TriggerRuleRepositoryProtocol,
        preset_repository: PresetRepositoryProtocol,
        trigger_rule_selector: TriggerRuleSelector,
    ) -> None:
        self.trigger_rule_repository = trigger_rule_repository
        self.preset_repository = preset_repository
        self.trigger_rule_selector = trigger_rule_selector

    def rules_for_preset(self, preset_id: int) -> list[TriggerRule]:
        """Active rules sorted by priority, then creation order."""
        rules = self.trigger_rule_repository.find_by_preset(PresetId(preset_id))
        return self.trigger_rule_selector.ordered(rules)

    def rule_for_position(self, preset_id: int, page: int) -> TriggerRule | None:
        rules = self.trigger_rule_repository.find_by_preset(PresetId(preset_id))
        return self.trigger_rule_selector.rule_for_position(rules, page)

    def default_preset_for_book(self, book_id: int) -> Preset | None:
        return self.preset_repository.find_default_for_book(BookId(book_id))
