"""
Append-only log of administrative actions, kept in actions.yaml.
"""
import os
import logging
from datetime import datetime

import yaml
from filelock import FileLock, Timeout

from .store import write_yaml_atomic

logger = logging.getLogger(__name__)

ACTIONS_FILENAME = 'actions.yaml'
MAX_ACTIONS = 500


class ActionLog:
    def __init__(self, data_dir: str, lock_timeout: float = 10):
        self.path = os.path.join(data_dir, ACTIONS_FILENAME)
        self._lock = FileLock(os.path.join(data_dir, '.actions.lock'), timeout=lock_timeout)

    def load(self) -> list:
        """Logged actions, oldest first."""
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f'Failed to parse {self.path}: {e}')
            return []
        if not data:
            return []
        actions = data.get('actions') if isinstance(data, dict) else None
        if not isinstance(actions, list):
            logger.warning(f'Ignoring malformed action log {self.path}')
            return []
        return actions

    def record(self, action: str, details: str):
        """
        Append one entry. A failure to write is logged and does not
        interrupt the action being recorded.
        """
        entry = {
            'timestamp': datetime.now().isoformat(timespec='seconds'),
            'action': action,
            'details': details,
        }
        try:
            with self._lock:
                actions = self.load()
                actions.append(entry)
                write_yaml_atomic(self.path, {'actions': actions[-MAX_ACTIONS:]})
        except (OSError, yaml.YAMLError, Timeout) as e:
            logger.warning(f'Log failed for {action}: {e}')
            return None
        return entry
