"""A commandline tool for quick evaluation and inspection of elections.

Evaluates an election record given as a JSON file (or from standard input),
or loads elections from the configured storage, and shows the winner.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import List, Optional

import rankvote.persist
import rankvote.report
import rankvote.convert
import rankvote.evaluate.condorcet
from rankvote.config import Settings
from rankvote.election import Election
from rankvote.lifecycle import ElectionManager
from rankvote.report import DEFAULT_VOTING_WINDOW_MS
from rankvote.system import SYSTEMS, VotingSystem

argparser = argparse.ArgumentParser(
    prog='rankvote',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the election record from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the election record from standard input',
)
argparser.add_argument(
    '-e', '--election-id',
    help='load the election with this id from the configured storage',
)
argparser.add_argument(
    '-l', '--list',
    action='store_true',
    dest='list_elections',
    help='list the elections in the configured storage',
)
argparser.add_argument(
    '-s', '--system',
    default='condorcet_irv',
    choices=sorted(SYSTEMS.keys()),
    help='voting system to evaluate the election with',
)
argparser.add_argument(
    '-m', '--matrix',
    action='store_true',
    help='show the pairwise preference matrix',
)
argparser.add_argument(
    '--env-file',
    help='read storage settings from this .env file',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages or other info',
)


def main(input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         election_id: Optional[str] = None,
         list_elections: bool = False,
         system: str = 'condorcet_irv',
         matrix: bool = False,
         env_file: Optional[str] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> int:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if list_elections or election_id:
        settings = Settings.from_env(env_file)
        manager = ElectionManager.from_settings(settings)
        if list_elections:
            show_listing(
                manager.get_all_elections(),
                manager.clock(),
                settings.voting_window_ms,
            )
            return 0
        election = manager.get_election(election_id)
        if election is None:
            warnings.warn(f'election {election_id} not found, terminating')
            return 1
    else:
        if use_stdin:
            input_file = sys.stdin
        election = load_election(input_file)
    run_system(SYSTEMS[system], election, with_matrix=matrix)
    return 0


def load_election(input_file: io.TextIOBase) -> Election:
    """Load an election record from the given JSON file."""
    try:
        record = json.load(input_file)
    except json.JSONDecodeError as e:
        raise ValueError(f'invalid election JSON: {e}') from e
    return rankvote.persist.from_dict(Election, record)


def show_listing(elections: List[Election],
                 now: int,
                 voting_window_ms: int = DEFAULT_VOTING_WINDOW_MS,
                 ) -> None:
    rows = rankvote.report.summaries(elections, now, voting_window_ms)
    if not rows:
        print('No elections')
        return
    for row in rows:
        print(
            row['id'].ljust(10),
            row['status'].ljust(12),
            row['name'],
            f"({row['nominationCount']} nominations)",
            f"won by {row['winnerName']}" if row['winnerName'] else '',
        )


def show_matrix(election: Election) -> None:
    wins = rankvote.convert.pairwise_matrix(
        election.candidates, election.votes
    )
    labels = {
        cand: rankvote.report.candidate_label(election, cand)
        for cand in election.candidates
    }
    n_just_chars = max((len(label) for label in labels.values()), default=0)
    beats = rankvote.evaluate.condorcet.beat_counts(wins)
    print('Pairwise wins (row over column):')
    for upper in election.candidates:
        cells = [
            str(wins[upper][lower]).rjust(4) if lower != upper else '   -'
            for lower in election.candidates
        ]
        print(
            labels[upper].ljust(n_just_chars),
            ''.join(cells),
            f'   beats {beats[upper]}',
        )


def run_system(system: VotingSystem,
               election: Election,
               with_matrix: bool = False,
               ) -> None:
    print()
    print(f'Running a {system.name} evaluation of {election.name}')
    print(f'Received {len(election.votes)} votes'
          f' for {len(election.nominations)} candidates')
    print()
    result = system.evaluate(election.candidates, election.votes)
    if with_matrix:
        show_matrix(election)
        print()
    print('Election result:')
    if not result:
        print('Nobody elected')
        return
    label = rankvote.report.candidate_label(election, result.winner)
    print('Elected', ' ', label, f'({result.method})')
    if result.tie_broken:
        print(f'Tie broken by the earliest first preference'
              f' at {result.winner_vote_time}')


if __name__ == '__main__':
    args = argparser.parse_args()
    if not (args.input_file or args.use_stdin
            or args.election_id or args.list_elections):
        argparser.print_usage()
    else:
        sys.exit(main(**vars(args)))
