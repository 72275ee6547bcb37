"""
Tests for the command line entry point.
"""
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from main import load_teams, main


class TestLoadTeams:

    def test_plain_list(self, tmp_path):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text(yaml.dump(["Thunder", "Storm", " ", None]))
        assert load_teams(str(teams_file)) == ["Thunder", "Storm"]

    def test_grouped_mapping(self, tmp_path):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text(yaml.dump({'Juniors': ["Thunder", "Storm"], 'Seniors': ["Vikings"]}))
        assert load_teams(str(teams_file)) == ["Thunder", "Storm", "Vikings"]

    def test_empty_file(self, tmp_path):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text("")
        assert load_teams(str(teams_file)) == []


class TestMain:

    def test_generate_and_show(self, tmp_path, data_dir, thirty_teams, capsys):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text(yaml.dump(thirty_teams))

        assert main(['--data-dir', data_dir, 'generate', str(teams_file), '--name', 'Football']) == 0
        out = capsys.readouterr().out
        assert "# Football" in out
        assert "## Round of 32" in out
        assert f"R1-M1: {thirty_teams[0]} vs BYE" in out
        assert "## Finals" in out

        assert main(['--data-dir', data_dir, 'show']) == 0
        assert "R5-M1: TBD vs TBD" in capsys.readouterr().out

    def test_show_without_bracket(self, data_dir, capsys):
        assert main(['--data-dir', data_dir, 'show']) == 2
        assert "generate" in capsys.readouterr().err

    def test_generate_without_teams(self, tmp_path, data_dir, capsys):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text("")
        assert main(['--data-dir', data_dir, 'generate', str(teams_file)]) == 1

    def test_missing_teams_file(self, tmp_path, data_dir, capsys):
        assert main(['--data-dir', data_dir, 'generate', str(tmp_path / "nope.yaml")]) == 1
