# Command-line view of the pools and the resolved bracket

import argparse
import os

from bracket.resolver import get_bracket_display
from bracket.store import TournamentStore


def format_side(team, label):
    return team.team_name if team else f"({label})"


def print_bracket(store):
    bracket = get_bracket_display(store.list_teams(), store.list_winners())

    for pool_name, teams in bracket['pools'].items():
        print(f"# Pool {pool_name} ({len(teams)}/4)")
        for i, team in enumerate(teams, start=1):
            paid = '' if team.paid else ' [unpaid]'
            print(f"  {i}. {team.team_name} - {team.player1_pseudo} / {team.player2_pseudo}{paid}")
        print()

    for round_name, matches in bracket['rounds'].items():
        print(f"# {round_name}")
        for match in matches:
            team1 = format_side(match['team1'], match['labels'][0])
            team2 = format_side(match['team2'], match['labels'][1])
            line = f"  {match['match_id']}: {team1} vs {team2}"
            if match['winner']:
                line += f" -> {match['winner'].team_name}"
            print(line)
        print()

    champion = bracket['champion']
    print(f"Champion: {champion.team_name if champion else 'TBD'}")


def main():
    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)

    parser = argparse.ArgumentParser(description='Print tournament pools and bracket.')
    parser.add_argument('--data-dir',
                        default=os.environ.get('TOURNAMENT_DATA_DIR', os.path.join(base_dir, 'data')),
                        help='Directory holding registrations.yaml and winners.yaml')
    args = parser.parse_args()

    print_bracket(TournamentStore(args.data_dir))


if __name__ == '__main__':
    main()
