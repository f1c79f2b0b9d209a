"""Domain service choosing among a preset's trigger rules by page."""

from collections.abc import Iterable

from booksphere.domain.mood.entities.trigger_rule import TriggerRule


class TriggerRuleSelector:
    """Orders trigger rules and picks the one that applies to an absolute page.

    Ordering: priority ascending, then creation order ascending. Inactive rules
    are dropped. A rule without a page range matches every page, so a
    universal rule with better priority shadows page-scoped ones.
    """

    def ordered(self, rules: Iterable[TriggerRule]) -> list[TriggerRule]:
        return sorted(
            (rule for rule in rules if rule.is_active),
            key=lambda rule: (
                rule.priority,
                rule.created_at.timestamp() if rule.created_at else 0.0,
                rule.id.value,
            ),
        )

    def rule_for_position(self, rules: Iterable[TriggerRule], page: int) -> TriggerRule | None:
        """
        The single rule in effect at ``page``.

        Returns None when no rule matches, or when the preset has no
        page-scoped rules at all (position queries are meaningless then).
        """
        ordered = self.ordered(rules)
        if not any(rule.condition.is_page_scoped for rule in ordered):
            return None
        for rule in ordered:
            if rule.condition.matches_page(page):
                return rule
        return None
