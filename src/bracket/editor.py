"""
Winner resolution for the match editor and the bye declarer.
"""
from typing import Optional

from .errors import ValidationError
from .models import Match, COMPLETED, WINNER_KEYS, is_real_team


class EditSession:
    """
    What the operator has selected while editing one match.

    Passed explicitly into submit/bye/reset calls; nothing is kept between calls.
    """

    def __init__(self, identifier: str, winner_key: Optional[str] = None):
        if winner_key in ('', None):
            winner_key = None
        elif winner_key not in WINNER_KEYS:
            raise ValidationError(f"Winner must be one of {WINNER_KEYS}, got {winner_key!r}")
        self.identifier = identifier
        self.winner_key = winner_key

    def __eq__(self, other):
        if not isinstance(other, EditSession):
            return NotImplemented
        return (self.identifier, self.winner_key) == (other.identifier, other.winner_key)

    def __repr__(self):
        return f"EditSession(identifier={self.identifier}, winner_key={self.winner_key})"


def parse_score(value) -> int:
    """Read a score field; blank means 0."""
    if value is None or value == '':
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"Invalid score: {value!r}")
    try:
        score = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Score must be a whole number, got {value!r}") from None
    if isinstance(value, float) and value != score:
        raise ValidationError(f"Score must be a whole number, got {value!r}")
    if score < 0:
        raise ValidationError(f"Score cannot be negative, got {score}")
    return score


def edit_view(match: Match) -> dict:
    """Editable state of one match for the editor form."""
    return {
        'identifier': match.identifier,
        'title': f"{match.round_name} - Match {match.match_index + 1}",
        'round_name': match.round_name,
        'team1_name': match.team1_name,
        'team2_name': match.team2_name,
        'score1': match.score1 or 0,
        'score2': match.score2 or 0,
        'winner_key': match.winner_key(),
        'status': match.status,
    }


def resolve_winner(match: Match, score1: int, score2: int, winner_key: Optional[str] = None) -> str:
    """
    Pick the winner of a submitted result.

    1. An explicit pick wins regardless of scores.
    2. Otherwise the higher score wins.
    3. A tie with no pick, or a winner that is TBD/BYE, is rejected.
    """
    if winner_key:
        winner = match.team_name(winner_key)
    elif score1 > score2:
        winner = match.team1_name
    elif score2 > score1:
        winner = match.team2_name
    else:
        raise ValidationError("Please select a winner or enter scores.")

    if not is_real_team(winner):
        raise ValidationError("Cannot declare TBD or BYE as winner.")
    return winner


def resolve_bye_winner(match: Match, winner_key: Optional[str] = None) -> str:
    """Winner of a walkover: the pick if given, else the side that is a real team."""
    if winner_key:
        winner = match.team_name(winner_key)
    elif is_real_team(match.team1_name):
        winner = match.team1_name
    else:
        winner = match.team2_name

    if not is_real_team(winner):
        raise ValidationError("To grant a bye, at least one valid team must be present.")
    return winner


def completed_fields(winner: str, score1: int = 0, score2: int = 0) -> dict:
    return {
        'score1': score1,
        'score2': score2,
        'winner_name': winner,
        'status': COMPLETED,
    }
