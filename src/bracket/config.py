"""
Settings for the bracket manager, read from settings.yaml in the data directory.
"""
import os
import logging
import yaml

from .errors import ConfigurationError, ValidationError
from .generator import DEFAULT_SLOT_COUNT
from .tree import calculate_round_count

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DATA_DIR = os.environ.get('BRACKET_DATA_DIR', os.path.join(BASE_DIR, 'data'))

SETTINGS_FILENAME = 'settings.yaml'


def get_default_settings() -> dict:
    """Default settings for a new tournament."""
    return {
        'tournament_name': 'Active Tournament',
        'slot_count': DEFAULT_SLOT_COUNT,
        'lock_timeout': 10,
    }


def load_settings(data_dir: str = None) -> dict:
    """
    Load settings.yaml merged over the defaults.

    BRACKET_SLOT_COUNT in the environment overrides the file.
    """
    data_dir = data_dir or DATA_DIR
    settings = get_default_settings()
    path = os.path.join(data_dir, SETTINGS_FILENAME)
    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f'Failed to parse {path}: {e}')
            data = None
        if isinstance(data, dict):
            settings.update({k: v for k, v in data.items() if v is not None})

    env_slots = os.environ.get('BRACKET_SLOT_COUNT')
    if env_slots:
        settings['slot_count'] = env_slots

    try:
        settings['slot_count'] = int(settings['slot_count'])
        settings['lock_timeout'] = float(settings['lock_timeout'])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'Invalid settings value: {e}') from e
    try:
        calculate_round_count(settings['slot_count'])
    except ValidationError as e:
        raise ConfigurationError(f'Invalid slot_count setting: {e}') from e
    return settings


def save_settings(settings: dict, data_dir: str = None):
    """Save settings to YAML file."""
    data_dir = data_dir or DATA_DIR
    os.makedirs(data_dir, exist_ok=True)
    with open(os.path.join(data_dir, SETTINGS_FILENAME), 'w', encoding='utf-8') as f:
        yaml.dump(settings, f, default_flow_style=False)
