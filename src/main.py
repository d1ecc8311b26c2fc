# Command-line standings report for the tennis league

import argparse
import os
import sys
from league.ranking import rank
from league.reference import load_tournaments
from league.repositories import ResultRepository, ScheduleRepository, RosterRepository
from league.store import YamlStore

COLUMNS = [
    ('#', 3), ('Player', 24), ('Pts', 4), ('PJ', 4), ('G', 4), ('E', 4), ('P', 4),
    ('Dif', 5), ('Prog', 5), ('Pend', 5), ('Pintas', 6),
]


def format_standings(division, standings):
    """Render a division's standings as text lines."""
    lines = [f"Division: {division}"]
    header = ' '.join(name.ljust(width) for name, width in COLUMNS)
    lines.append(header)
    lines.append('-' * len(header))
    if not standings:
        lines.append('  No players registered.')
        return lines
    for position, stats in enumerate(standings, start=1):
        values = [
            position, stats.name, stats.points, stats.matches_played, stats.matches_won,
            stats.matches_drawn, stats.matches_lost, stats.sets_difference,
            stats.matches_scheduled, stats.matches_pending, stats.pints,
        ]
        lines.append(' '.join(str(v).ljust(width) for v, (_, width) in zip(values, COLUMNS)))
    return lines


def main(argv=None):
    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)

    parser = argparse.ArgumentParser(description='Print league standings')
    parser.add_argument('--data-dir', default=os.environ.get('LEAGUE_DATA_DIR', os.path.join(base_dir, 'data')))
    parser.add_argument('--tournament', required=True)
    parser.add_argument('--division', help='Only this division (default: all divisions of the tournament)')
    args = parser.parse_args(argv)

    catalogue = load_tournaments(args.data_dir)
    if args.tournament not in catalogue:
        print(f"Unknown tournament: {args.tournament}", file=sys.stderr)
        return 1
    divisions = [args.division] if args.division else catalogue[args.tournament]

    store = YamlStore(args.data_dir)
    results = ResultRepository(store)
    schedule = ScheduleRepository(store)
    roster = RosterRepository(store)

    print(f"--- {args.tournament} ---")
    for division in divisions:
        print()
        for line in format_standings(division, rank(division, args.tournament, results, schedule, roster)):
            print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
