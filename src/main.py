# Command line entry point for generating and inspecting the bracket

import argparse
import os
import sys
import yaml
from bracket import config
from bracket.errors import BracketError, DataIntegrityError
from bracket.service import BracketManager


def load_teams(file_path):
    """
    Read team names from YAML: either a plain list, or a mapping of
    group name -> list of names (flattened in file order).
    """
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if not data:
        return []
    if isinstance(data, dict):
        teams = []
        for team_names in data.values():
            teams.extend(team_names or [])
    else:
        teams = data
    return [str(name).strip() for name in teams if name is not None and str(name).strip()]


def print_bracket(manager):
    display = manager.bracket_display()
    print(f"# {display['tournament_name']}")
    for round_data in display['rounds']:
        print()
        print(f"## {round_data['round_name']}")
        for match in round_data['matches']:
            line = f"{match['identifier']}: {match['team1_name']} vs {match['team2_name']}"
            if match['status'] == 'completed':
                line += f"  [{match['score1']}-{match['score2']}, winner: {match['winner_name']}]"
            print(line)
    if display['champion']:
        print()
        print(f"Champion: {display['champion']}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Single elimination bracket manager')
    parser.add_argument('--data-dir', default=config.DATA_DIR, help='Directory holding matches.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    generate = subparsers.add_parser('generate', help='Replace the bracket with one built from a teams file')
    generate.add_argument('teams_file', nargs='?', help='YAML file with team names')
    generate.add_argument('--name', help='Tournament name')
    generate.add_argument('--slots', type=int, help='Number of bracket slots (power of two)')

    subparsers.add_parser('show', help='Print the stored bracket')

    args = parser.parse_args(argv)
    try:
        manager = BracketManager(args.data_dir)
        if args.command == 'generate':
            teams_file = args.teams_file or os.path.join(args.data_dir, 'teams.yaml')
            teams = load_teams(teams_file)
            if not teams:
                print(f"No teams loaded. Check {teams_file}", file=sys.stderr)
                return 1
            manager.generate(teams, slot_count=args.slots, tournament_name=args.name)
        print_bracket(manager)
    except DataIntegrityError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Run 'generate' to set up a new bracket.", file=sys.stderr)
        return 2
    except (BracketError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
