"""
Shared pytest fixtures for bracket manager tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket.config import get_default_settings
from bracket.service import BracketManager

TEAM_NAMES = [
    "Power Puff", "Rushers", "Fantoms", "Golden Girls", "Real Zeher",
    "Black Panthers", "Supernovas", "Dominators", "Thunder", "Lightning",
    "Storm", "Cyclones", "Tornadoes", "Hurricanes", "Typhoons",
    "Vikings", "Spartans", "Trojans", "Gladiators", "Warriors",
    "Ninjas", "Samurais", "Knights", "Titans", "Olympians",
    "Avengers", "Guardians", "Defenders", "X-Force", "Legends",
]


@pytest.fixture(autouse=True)
def clear_slot_override(monkeypatch):
    """Keep a developer's BRACKET_SLOT_COUNT from leaking into tests."""
    monkeypatch.delenv('BRACKET_SLOT_COUNT', raising=False)


@pytest.fixture
def thirty_teams():
    """The 30-team field that triggers the fixed bye rule."""
    return list(TEAM_NAMES)


@pytest.fixture
def thirty_two_teams():
    """A full 32-team field."""
    return TEAM_NAMES + ["Phoenix", "Dragons"]


@pytest.fixture
def data_dir(tmp_path):
    """Empty data directory for one test."""
    path = tmp_path / "data"
    path.mkdir()
    return str(path)


@pytest.fixture
def manager(data_dir):
    """Bracket manager with default settings and no stored bracket."""
    return BracketManager(data_dir, settings=get_default_settings())


@pytest.fixture
def full_bracket(manager, thirty_two_teams):
    """Manager holding a freshly generated 32-team bracket."""
    manager.generate(thirty_two_teams)
    return manager


@pytest.fixture
def client(data_dir, monkeypatch):
    """Flask test client bound to the temporary data directory."""
    import app as app_module
    monkeypatch.setattr(app_module, 'DATA_DIR', data_dir)
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as client:
        yield client
