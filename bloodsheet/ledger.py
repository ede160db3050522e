"""Normalized, validated view of a match's recorded hole scores."""

import logging

from .errors import MalformedScore
from .models import Dot, HoleScore, MatchSnapshot
from .validators import validate_score_row

logger = logging.getLogger('bloodsheet.ledger')


class ScoreLedger:
    """
    Index of usable hole scores keyed by (player, hole).

    Rows that fail validation are kept out of the index and recorded in
    ``rejected``; the player's hole then counts as not yet played. Conflicting
    duplicate rows for the same player and hole are all rejected so the view
    never depends on row order.
    """

    def __init__(self, snapshot: MatchSnapshot, strict: bool = False):
        self.snapshot = snapshot
        self.rejected: list[MalformedScore] = []
        self._scores: dict[tuple[str, int], HoleScore] = {}

        hole_numbers = {h.number for h in snapshot.holes}
        player_ids = set(snapshot.player_ids)

        candidates: dict[tuple[str, int], list[HoleScore]] = {}
        for score in snapshot.scores:
            problems = validate_score_row(score, hole_numbers, player_ids)
            if problems:
                self._reject(
                    MalformedScore(
                        f'Score for {score.player_id} on hole {score.hole_number}: '
                        + '; '.join(problems),
                        player_id=score.player_id,
                        hole_number=score.hole_number,
                    ),
                    strict,
                )
                continue
            normalized = HoleScore(
                player_id=score.player_id,
                hole_number=score.hole_number,
                gross=score.gross,
                tags=frozenset(Dot(tag) for tag in score.tags),
            )
            candidates.setdefault((score.player_id, score.hole_number), []).append(normalized)

        for key in sorted(candidates):
            rows = candidates[key]
            if len(set(rows)) > 1:
                self._reject(
                    MalformedScore(
                        f'Conflicting scores for {key[0]} on hole {key[1]}',
                        player_id=key[0],
                        hole_number=key[1],
                    ),
                    strict,
                )
                continue
            self._scores[key] = rows[0]

        logger.debug(
            f'Ledger for {snapshot.match_id}: {len(self._scores)} scores, '
            f'{len(self.rejected)} rejected'
        )

    def _reject(self, error: MalformedScore, strict: bool) -> None:
        if strict:
            raise error
        logger.warning(str(error))
        self.rejected.append(error)

    def hole_scores_for(self, player_id: str, hole_number: int) -> HoleScore | None:
        """Return the recorded score for a player on a hole, if any."""
        return self._scores.get((player_id, hole_number))

    def is_hole_complete(self, player_ids: list[str], hole_number: int) -> bool:
        """True iff every listed player has a recorded gross score on the hole."""
        return all((pid, hole_number) in self._scores for pid in player_ids)

    def holes_complete(self, player_ids: list[str]) -> list[int]:
        """Ascending hole numbers complete for all listed players."""
        return [
            hole.number
            for hole in sorted(self.snapshot.holes, key=lambda h: h.number)
            if self.is_hole_complete(player_ids, hole.number)
        ]

    def played_through(self, player_ids: list[str]) -> int:
        """Highest hole number complete for all listed players (0 if none)."""
        complete = self.holes_complete(player_ids)
        return complete[-1] if complete else 0

    def scores_with(self, dot: Dot, player_ids: list[str]) -> list[HoleScore]:
        """Recorded scores for the listed players carrying a given dot."""
        wanted = set(player_ids)
        return [
            score
            for key, score in sorted(self._scores.items())
            if key[0] in wanted and score.has(dot)
        ]
