"""Tests for TriggerRuleSelector domain service."""

from datetime import UTC, datetime, timedelta

from booksphere.domain.common.value_objects.ids import MoodId, PresetId, TriggerRuleId
from booksphere.domain.mood.entities.trigger_rule import TriggerRule
from booksphere.domain.mood.services.trigger_rule_selector import TriggerRuleSelector
from booksphere.domain.mood.value_objects.trigger_condition import PageRange, TriggerCondition

BASE_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC)


def _rule(
    id: int,
    priority: int = 1,
    page_range: tuple[int, int] | None = None,
    created_offset: int = 0,
    is_active: bool = True,
) -> TriggerRule:
    condition = TriggerCondition(page_range=PageRange(*page_range) if page_range else None)
    return TriggerRule(
        id=TriggerRuleId(id),
        preset_id=PresetId(1),
        mood_id=MoodId(id),
        condition=condition,
        priority=priority,
        is_active=is_active,
        created_at=BASE_TIME + timedelta(seconds=created_offset),
    )


class TestOrdered:
    def test_priority_then_creation_order(self) -> None:
        rules = [
            _rule(1, priority=2, created_offset=0),
            _rule(2, priority=1, created_offset=10),
            _rule(3, priority=1, created_offset=5),
        ]
        ordered = TriggerRuleSelector().ordered(rules)
        assert [rule.id.value for rule in ordered] == [3, 2, 1]

    def test_inactive_rules_are_dropped(self) -> None:
        rules = [_rule(1), _rule(2, is_active=False)]
        assert [rule.id.value for rule in TriggerRuleSelector().ordered(rules)] == [1]

    def test_empty_preset(self) -> None:
        assert TriggerRuleSelector().ordered([]) == []


class TestRuleForPosition:
    def test_first_matching_rule_in_priority_order(self) -> None:
        rules = [
            _rule(1, priority=5, page_range=(1, 100)),
            _rule(2, priority=2, page_range=(10, 20)),
        ]
        selector = TriggerRuleSelector()

        selected = selector.rule_for_position(rules, 15)
        assert selected is not None
        assert selected.id.value == 2

        selected = selector.rule_for_position(rules, 50)
        assert selected is not None
        assert selected.id.value == 1

    def test_range_ends_are_inclusive(self) -> None:
        rules = [_rule(1, page_range=(10, 20))]
        selector = TriggerRuleSelector()
        assert selector.rule_for_position(rules, 10) is not None
        assert selector.rule_for_position(rules, 20) is not None
        assert selector.rule_for_position(rules, 21) is None

    def test_no_page_scoped_rules_yields_none(self) -> None:
        rules = [_rule(1), _rule(2, priority=3)]
        assert TriggerRuleSelector().rule_for_position(rules, 7) is None

    def test_universal_rule_with_better_priority_shadows_page_rules(self) -> None:
        rules = [_rule(1, priority=1), _rule(2, priority=2, page_range=(1, 50))]
        selected = TriggerRuleSelector().rule_for_position(rules, 10)
        assert selected is not None
        assert selected.id.value == 1

    def test_universal_rule_catches_pages_outside_ranges(self) -> None:
        rules = [_rule(1, priority=1, page_range=(1, 5)), _rule(2, priority=9)]
        selected = TriggerRuleSelector().rule_for_position(rules, 99)
        assert selected is not None
        assert selected.id.value == 2

    def test_inactive_page_rule_is_ignored(self) -> None:
        rules = [
            _rule(1, priority=1, page_range=(1, 50), is_active=False),
            _rule(2, priority=2, page_range=(1, 50)),
        ]
        selected = TriggerRuleSelector().rule_for_position(rules, 10)
        assert selected is not None
        assert selected.id.value == 2
