"""
YAML-backed persistence for the match set.

Every call takes the data directory's file lock for its own duration only;
nothing here spans more than one call.
"""
import os
import logging
import tempfile
from typing import Dict, List, Optional

import yaml
from filelock import FileLock, Timeout

from .errors import PersistenceError, DataIntegrityError
from .models import Match, MUTABLE_FIELDS

logger = logging.getLogger(__name__)

MATCHES_FILENAME = 'matches.yaml'
LOCK_FILENAME = '.lock'


def write_yaml_atomic(path: str, data):
    """Dump data to a temp file beside path, then swap it into place."""
    directory = os.path.dirname(path)
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.tmp-', suffix='.yaml')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


class MatchStore:
    """The persisted collection of Match records for the live bracket."""

    def __init__(self, data_dir: str, lock_timeout: float = 10):
        self.data_dir = data_dir
        self.path = os.path.join(data_dir, MATCHES_FILENAME)
        os.makedirs(data_dir, exist_ok=True)
        self._lock = FileLock(os.path.join(data_dir, LOCK_FILENAME), timeout=lock_timeout)

    def _read(self) -> List[Match]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f'Failed to read {self.path}: {e}') from e
        if not data:
            return []
        try:
            matches = [Match.from_dict(row) for row in data.get('matches') or []]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DataIntegrityError(f'Malformed match record in {self.path}: {e}') from e
        matches.sort(key=lambda m: (m.round_index, m.match_index))
        return matches

    def _write(self, matches: List[Match]):
        try:
            write_yaml_atomic(self.path, {'matches': [m.to_dict() for m in matches]})
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f'Failed to write {self.path}: {e}') from e

    def _locked(self):
        try:
            return self._lock.acquire()
        except Timeout as e:
            raise PersistenceError(f'Timed out waiting for {self._lock.lock_file}') from e

    def list_matches(self) -> List[Match]:
        """All matches ordered by round, then position within the round."""
        with self._locked():
            return self._read()

    def replace_all(self, matches: List[Match]):
        """Discard the stored set and persist matches in its place."""
        with self._locked():
            self._write(sorted(matches, key=lambda m: (m.round_index, m.match_index)))
        logger.info(f'Replaced match set with {len(matches)} matches')

    def find_match_by_identifier(self, identifier: str) -> Optional[Match]:
        with self._locked():
            for match in self._read():
                if match.identifier == identifier:
                    return match
        return None

    def update_match(self, identifier: str, fields: Dict) -> Match:
        """Apply a partial update to one match and return the stored result."""
        unknown = set(fields) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f'Cannot update fields: {sorted(unknown)}')
        with self._locked():
            matches = self._read()
            for match in matches:
                if match.identifier == identifier:
                    for key, value in fields.items():
                        setattr(match, key, value)
                    self._write(matches)
                    return match
        raise DataIntegrityError(f'Match {identifier} not found')
