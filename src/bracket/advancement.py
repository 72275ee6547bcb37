"""
Moving winners into parent matches and taking them back out.

Both directions are single hop: nothing here looks past the parent match.
"""
import logging

from .models import TBD, SCHEDULED
from .store import MatchStore
from .tree import parent_slot

logger = logging.getLogger(__name__)


def slot_field(source_match_index: int) -> str:
    """Name of the parent field fed by the match at source_match_index."""
    return f"{parent_slot(source_match_index)}_name"


def advance_winner(store: MatchStore, next_match_identifier: str, source_match_index: int, winner_name: str):
    """Write winner_name into the parent's slot, replacing whatever was there."""
    field = slot_field(source_match_index)
    store.update_match(next_match_identifier, {field: winner_name})
    logger.info(f"Advanced {winner_name} to {next_match_identifier} ({field})")


def retract_winner(store: MatchStore, next_match_identifier: str, source_match_index: int):
    """Put the parent's slot back to TBD."""
    field = slot_field(source_match_index)
    store.update_match(next_match_identifier, {field: TBD})
    logger.info(f"Retracted {next_match_identifier} ({field}) to {TBD}")


def scheduled_fields() -> dict:
    """Field values of a match that has not been played."""
    return {
        'winner_name': None,
        'status': SCHEDULED,
        'score1': 0,
        'score2': 0,
    }
