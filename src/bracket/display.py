"""
Read-only views of the stored bracket: round summary and CSV export.
"""
import csv
import io
from typing import Dict, List

from .models import Match
from .tree import BracketTree

CSV_COLUMNS = ['round_name', 'identifier', 'team1_name', 'score1', 'team2_name', 'score2', 'winner_name', 'status']


def get_bracket_display(matches: List[Match], tournament_name: str = None) -> Dict:
    """
    Get bracket data formatted for UI display.
    """
    tree = BracketTree(matches)
    rounds = tree.rounds()

    matches_per_round = {}
    completed_per_round = {}
    for round_matches in rounds:
        round_name = round_matches[0].round_name
        matches_per_round[round_name] = len(round_matches)
        completed_per_round[round_name] = sum(1 for m in round_matches if m.is_completed)

    return {
        'tournament_name': tournament_name,
        'rounds': [
            {
                'round_index': round_matches[0].round_index,
                'round_name': round_matches[0].round_name,
                'matches': [m.to_dict() for m in round_matches],
            }
            for round_matches in rounds
        ],
        'slot_count': len(rounds[0]) * 2,
        'total_rounds': len(rounds),
        'total_matches': len(tree),
        'completed_matches': sum(1 for m in tree.matches if m.is_completed),
        'byes': sum(1 for m in rounds[0] if m.is_bye),
        'matches_per_round': matches_per_round,
        'completed_per_round': completed_per_round,
        'champion': tree.champion,
    }


def export_bracket_csv(matches: List[Match]) -> str:
    """All matches as CSV text, one row per match."""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_COLUMNS, extrasaction='ignore')
    writer.writeheader()
    for match in sorted(matches, key=lambda m: (m.round_index, m.match_index)):
        row = match.to_dict()
        row['winner_name'] = row['winner_name'] or ''
        writer.writerow(row)
    return output.getvalue()
