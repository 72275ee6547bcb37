"""
Single elimination bracket generation.
"""
import logging
from typing import List, Optional

from .errors import ValidationError
from .models import Match, BYE, TBD, SENTINELS, COMPLETED, SCHEDULED, is_real_team
from .tree import calculate_round_count, match_identifier, next_match_identifier

logger = logging.getLogger(__name__)

DEFAULT_SLOT_COUNT = 32


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of slots feeding it."""
    if teams_in_round == 2:
        return "Finals"
    elif teams_in_round == 4:
        return "Semi-Finals"
    elif teams_in_round == 8:
        return "Quarter-Finals"
    elif teams_in_round == 16:
        return "Round of 16"
    elif teams_in_round == 32:
        return "Round of 32"
    else:
        return f"Round of {teams_in_round}"


def get_round_names(slot_count: int) -> List[str]:
    """Ordered round labels, first round to final."""
    names = []
    teams_in_round = slot_count
    for _ in range(calculate_round_count(slot_count)):
        names.append(get_round_name(teams_in_round))
        teams_in_round //= 2
    return names


def parse_entrants(text: str) -> List[str]:
    """Split a newline-separated block of names, dropping blank lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def bye_positions(entrant_count: int, slot_count: int) -> List[int]:
    """
    Slots that hold a BYE.

    Only a field exactly two short of a full grid gets byes, at positions
    1 and slot_count - 2. Every other entrant count gets none.
    """
    if slot_count >= 4 and entrant_count == slot_count - 2:
        return [1, slot_count - 2]
    return []


def seed_slots(entrant_names: List[str], slot_count: int = DEFAULT_SLOT_COUNT) -> List[str]:
    """
    Lay entrants out on the slot grid.

    Byes are placed first, then entrants fill the remaining slots in order.
    Unfilled slots stay TBD; entrants that do not fit are dropped.
    """
    calculate_round_count(slot_count)
    for name in entrant_names:
        if name in SENTINELS:
            raise ValidationError(f"'{name}' is reserved and cannot be used as a team name.")

    slots = [TBD] * slot_count
    for position in bye_positions(len(entrant_names), slot_count):
        slots[position] = BYE

    team_idx = 0
    for i in range(slot_count):
        if slots[i] == BYE:
            continue
        if team_idx < len(entrant_names):
            slots[i] = entrant_names[team_idx]
            team_idx += 1

    if team_idx < len(entrant_names):
        dropped = entrant_names[team_idx:]
        logger.warning(f"Bracket holds {slot_count} slots; dropped {len(dropped)} entrants: {dropped}")

    return slots


def _auto_bye_winner(team1: str, team2: str) -> Optional[str]:
    if team2 == BYE and is_real_team(team1):
        return team1
    if team1 == BYE and is_real_team(team2):
        return team2
    return None


def generate_bracket(entrant_names: List[str], slot_count: int = DEFAULT_SLOT_COUNT) -> List[Match]:
    """
    Build every match of a single elimination bracket.

    Round 0 is paired from consecutive slots (2i, 2i+1). Later rounds are
    placeholders with both teams TBD; winners only reach them when a match
    is saved. A first-round match against a BYE is created completed with
    the other side as winner, but that winner is not copied into the
    parent match.

    Returns matches ordered by round, then by position within the round.
    """
    slots = seed_slots(list(entrant_names), slot_count)
    round_count = calculate_round_count(slot_count)
    round_names = get_round_names(slot_count)

    matches = []
    match_count = slot_count // 2
    for round_index in range(round_count):
        for match_index in range(match_count):
            if round_index == 0:
                team1 = slots[match_index * 2]
                team2 = slots[match_index * 2 + 1]
            else:
                team1, team2 = TBD, TBD

            winner = _auto_bye_winner(team1, team2) if round_index == 0 else None

            matches.append(Match(
                identifier=match_identifier(round_index, match_index),
                round_index=round_index,
                match_index=match_index,
                round_name=round_names[round_index],
                team1_name=team1,
                team2_name=team2,
                winner_name=winner,
                status=COMPLETED if winner else SCHEDULED,
                next_match_identifier=next_match_identifier(round_index, match_index, round_count),
            ))
        match_count //= 2

    logger.info(f"Generated {len(matches)} matches over {round_count} rounds for {len(entrant_names)} entrants")
    return matches
