"""Ordering of competing carrier matches."""

from collections.abc import Iterable

from trackmatch.carriers.base import TrackingMatch


class MatchRanker:
    """Ranks matches by ambiguity score.

    Equal scores are ordered by provider key so the ranking never depends on
    the order carriers were registered in.
    """

    @staticmethod
    def sort_key(match: TrackingMatch) -> tuple[int, str]:
        return (-match.ambiguity_score, match.provider_key)

    def rank(self, matches: Iterable[TrackingMatch]) -> list[TrackingMatch]:
        """Return matches from most to least likely."""
        return sorted(matches, key=self.sort_key)

    def best(self, matches: Iterable[TrackingMatch]) -> TrackingMatch | None:
        """Return the most likely match, or None if there are none."""
        return min(matches, key=self.sort_key, default=None)
