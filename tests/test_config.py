"""
Tests for settings loading.
"""
import pytest
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket.config import get_default_settings, load_settings, save_settings
from bracket.errors import ConfigurationError


class TestLoadSettings:

    def test_defaults_when_missing(self, data_dir):
        settings = load_settings(data_dir)
        assert settings['slot_count'] == 32
        assert settings['tournament_name'] == 'Active Tournament'
        assert settings['lock_timeout'] == 10

    def test_file_values_override_defaults(self, data_dir):
        save_settings({'tournament_name': 'Cricket', 'slot_count': 16}, data_dir)
        settings = load_settings(data_dir)
        assert settings['tournament_name'] == 'Cricket'
        assert settings['slot_count'] == 16
        assert settings['lock_timeout'] == 10

    def test_null_values_fall_back(self, data_dir):
        with open(os.path.join(data_dir, 'settings.yaml'), 'w') as f:
            f.write("tournament_name:\nslot_count:\n")
        assert load_settings(data_dir) == load_settings(os.path.join(data_dir, 'missing'))

    def test_env_overrides_slot_count(self, data_dir, monkeypatch):
        save_settings({'slot_count': 16}, data_dir)
        monkeypatch.setenv('BRACKET_SLOT_COUNT', '8')
        assert load_settings(data_dir)['slot_count'] == 8

    def test_corrupt_file_uses_defaults(self, data_dir):
        with open(os.path.join(data_dir, 'settings.yaml'), 'w') as f:
            f.write("slot_count: [16\n")
        assert load_settings(data_dir)['slot_count'] == 32

    @pytest.mark.parametrize("slot_count", [12, 'many', 0])
    def test_invalid_slot_count(self, data_dir, slot_count):
        save_settings({'slot_count': slot_count}, data_dir)
        with pytest.raises(ConfigurationError):
            load_settings(data_dir)

    def test_save_round_trip(self, data_dir):
        settings = get_default_settings()
        settings['tournament_name'] = 'Kabaddi'
        save_settings(settings, data_dir)
        with open(os.path.join(data_dir, 'settings.yaml')) as f:
            assert yaml.safe_load(f)['tournament_name'] == 'Kabaddi'

    def test_invalid_env_slot_count(self, data_dir, monkeypatch):
        monkeypatch.setenv('BRACKET_SLOT_COUNT', '24')
        with pytest.raises(ConfigurationError):
            load_settings(data_dir)
