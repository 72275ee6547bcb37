"""
Bracket operations over the persisted match set.

Each operation that writes more than one match runs as a saga: an ordered
list of independent store writes. If a write fails after earlier ones have
landed, PartialUpdateError names what was done; running the same operation
again finishes it, because every step writes absolute values.
"""
import logging
from typing import Callable, List, Optional, Tuple

from . import config
from .actions import ActionLog
from .advancement import advance_winner, retract_winner, scheduled_fields
from .display import get_bracket_display, export_bracket_csv
from .editor import EditSession, parse_score, edit_view, resolve_winner, resolve_bye_winner, completed_fields
from .errors import BracketError, DataIntegrityError, PersistenceError, PartialUpdateError
from .generator import generate_bracket
from .models import Match
from .store import MatchStore
from .tree import BracketTree

logger = logging.getLogger(__name__)

Step = Tuple[str, Callable[[], object]]


def run_saga(action: str, steps: List[Step]) -> List[str]:
    """Run steps in order, stopping at the first failure."""
    completed = []
    for label, step in steps:
        try:
            step()
        except BracketError as e:
            logger.error(f"{action}: step '{label}' failed: {e}")
            if completed and isinstance(e, PersistenceError) and not isinstance(e, PartialUpdateError):
                raise PartialUpdateError(action, completed, label, e) from e
            raise
        completed.append(label)
    return completed


class BracketManager:
    def __init__(self, data_dir: str = None, settings: dict = None):
        self.data_dir = data_dir or config.DATA_DIR
        self.settings = settings if settings is not None else config.load_settings(self.data_dir)
        lock_timeout = self.settings.get('lock_timeout', 10)
        self.store = MatchStore(self.data_dir, lock_timeout)
        self.actions = ActionLog(self.data_dir, lock_timeout)

    @property
    def tournament_name(self) -> str:
        return self.settings.get('tournament_name') or config.get_default_settings()['tournament_name']

    def list_matches(self) -> List[Match]:
        matches = self.store.list_matches()
        if not matches:
            raise DataIntegrityError("No bracket found; generate a new bracket first.")
        return matches

    def tree(self) -> BracketTree:
        tree = BracketTree(self.list_matches())
        tree.validate()
        return tree

    def generate(self, entrant_names: List[str], slot_count: int = None,
                 tournament_name: Optional[str] = None) -> List[Match]:
        """Replace the live bracket with a freshly generated one."""
        if slot_count is None:
            slot_count = self.settings['slot_count']
        matches = generate_bracket(entrant_names, slot_count)

        steps = [('replace matches', lambda: self.store.replace_all(matches))]
        if tournament_name:
            steps.append(('save settings', lambda: self._save_tournament_name(tournament_name)))
        run_saga('GENERATE_BRACKET', steps)

        self.actions.record('GENERATE_BRACKET', f"{len(entrant_names)} teams, {slot_count} slots")
        return matches

    def _save_tournament_name(self, name: str):
        settings = dict(self.settings)
        settings['tournament_name'] = name
        try:
            config.save_settings(settings, self.data_dir)
        except OSError as e:
            raise PersistenceError(f'Failed to save settings: {e}') from e
        self.settings = settings

    def load_for_edit(self, identifier: str) -> dict:
        return edit_view(self.tree().match(identifier))

    def submit_result(self, session: EditSession, score1, score2) -> Match:
        """Record scores, resolve the winner and advance it one round."""
        score1 = parse_score(score1)
        score2 = parse_score(score2)
        tree = self.tree()
        match = tree.match(session.identifier)
        winner = resolve_winner(match, score1, score2, session.winner_key)
        return self._complete(tree, match, completed_fields(winner, score1, score2), 'SAVE_RESULT')

    def declare_bye(self, session: EditSession) -> Match:
        """Complete a match as a walkover with zero scores."""
        tree = self.tree()
        match = tree.match(session.identifier)
        winner = resolve_bye_winner(match, session.winner_key)
        return self._complete(tree, match, completed_fields(winner), 'DECLARE_BYE')

    def _complete(self, tree: BracketTree, match: Match, fields: dict, action: str) -> Match:
        parent = tree.parent(match.identifier)
        winner = fields['winner_name']

        steps = [(f'update {match.identifier}', lambda: self.store.update_match(match.identifier, fields))]
        if parent is not None:
            steps.append((f'advance to {parent.identifier}',
                          lambda: advance_winner(self.store, parent.identifier, match.match_index, winner)))
        run_saga(action, steps)

        logger.info(f"{action} {match.identifier}: winner {winner}")
        self.actions.record(action, f"{match.identifier}: {winner} ({fields['score1']}-{fields['score2']})")
        for key, value in fields.items():
            setattr(match, key, value)
        return match

    def reset_match(self, session: EditSession) -> Match:
        """
        Return a match to unplayed and clear the slot it fed in its parent.

        Only the parent slot is cleared; a parent that was already played
        with the retracted winner keeps its result.
        """
        tree = self.tree()
        match = tree.match(session.identifier)
        parent = tree.parent(match.identifier)
        fields = scheduled_fields()

        steps = [(f'reset {match.identifier}', lambda: self.store.update_match(match.identifier, fields))]
        if parent is not None:
            steps.append((f'clear slot in {parent.identifier}',
                          lambda: retract_winner(self.store, parent.identifier, match.match_index)))
        run_saga('RESET_MATCH', steps)

        if parent is not None and parent.is_completed:
            logger.warning(f"Reset {match.identifier} but {parent.identifier} is already completed; "
                           f"reset it separately if its result is no longer valid")
        self.actions.record('RESET_MATCH', match.identifier)
        for key, value in fields.items():
            setattr(match, key, value)
        return match

    def bracket_display(self) -> dict:
        return get_bracket_display(self.list_matches(), self.tournament_name)

    def export_csv(self) -> str:
        return export_bracket_csv(self.list_matches())
