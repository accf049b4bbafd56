'''Read models derived from elections for presentation to clients.

Until an election is explicitly finalized or cancelled, its phase follows
the clock: nomination before the voting start, voting during the voting
window, completed after it.
'''

from typing import Any, Dict, List, Optional

import rankvote.convert
import rankvote.persist
import rankvote.evaluate.condorcet
from rankvote.config import DEFAULT_VOTING_WINDOW_SECONDS
from rankvote.election import BallotVisibility, Election, ElectionStatus

DEFAULT_VOTING_WINDOW_MS = DEFAULT_VOTING_WINDOW_SECONDS * 1000


def voting_ends_at(election: Election,
                   voting_window_ms: int = DEFAULT_VOTING_WINDOW_MS,
                   ) -> int:
    return election.vote_start_time + voting_window_ms


def effective_status(election: Election,
                     now: int,
                     voting_window_ms: int = DEFAULT_VOTING_WINDOW_MS,
                     ) -> ElectionStatus:
    '''Return the phase of the election at the given time.

    Terminal stored states are final; otherwise the phase is derived from
    the voting start time and the length of the voting window.
    '''
    if election.state.is_terminal:
        return election.state
    if now >= voting_ends_at(election, voting_window_ms):
        return ElectionStatus.COMPLETED
    if now >= election.vote_start_time:
        return ElectionStatus.VOTING
    return ElectionStatus.NOMINATION


def current_winner(election: Election,
                   status: ElectionStatus,
                   ) -> Optional[str]:
    '''Return the winner id of a completed election.

    An election completed by the clock but never finalized has no stored
    winner; its Condorcet winner is reported instead, if there is one.
    '''
    if status != ElectionStatus.COMPLETED:
        return election.winner
    if election.winner:
        return election.winner
    return rankvote.evaluate.condorcet.determine_condorcet_winner(
        election.candidates, election.votes
    )


def candidate_label(election: Election, nomination_id: str) -> str:
    nomination = election.nomination(nomination_id)
    return nomination.restaurant_name if nomination else 'Unknown'


def summary(election: Election,
            now: int,
            voting_window_ms: int = DEFAULT_VOTING_WINDOW_MS,
            ) -> Dict[str, Any]:
    '''Summarize the election for a listing.'''
    status = effective_status(election, now, voting_window_ms)
    winner_name = None
    if status == ElectionStatus.COMPLETED:
        winner_id = current_winner(election, status)
        if winner_id:
            winner_name = candidate_label(election, winner_id)
    return {
        'id': election.id,
        'name': election.name,
        'adminName': election.admin_name,
        'ballotVisibility': election.ballot_visibility.value,
        'voteStartTime': election.vote_start_time,
        'status': status.value,
        'nominationCount': len(election.nominations),
        'winnerName': winner_name,
    }


def summaries(elections: List[Election],
              now: int,
              voting_window_ms: int = DEFAULT_VOTING_WINDOW_MS,
              ) -> List[Dict[str, Any]]:
    '''Summarize the elections for a listing, newest first.'''
    return [
        summary(election, now, voting_window_ms)
        for election in sorted(
            elections, key=lambda e: e.created_at, reverse=True
        )
    ]


def public_view(election: Election,
                now: int,
                voting_window_ms: int = DEFAULT_VOTING_WINDOW_MS,
                ) -> Dict[str, Any]:
    '''Present the election to its participants.

    The group codeword is never included. Once the election is completed,
    the rankings of secret ballots are blanked out, while open ballots are
    listed with candidate labels along with the pairwise matrix.
    '''
    status = effective_status(election, now, voting_window_ms)
    view = rankvote.persist.to_dict(election)
    del view['groupCodeword']
    completed = status == ElectionStatus.COMPLETED
    is_open = election.ballot_visibility == BallotVisibility.OPEN
    if completed and not is_open:
        for vote in view['votes']:
            vote['rankings'] = []
    ballots = None
    matrix = None
    if completed and is_open:
        ballots = [
            {
                'voterName': vote.voter_name,
                'rankings': [
                    {
                        'nominationId': nom_id,
                        'restaurantName': candidate_label(election, nom_id),
                    }
                    for nom_id in vote.rankings
                ],
            }
            for vote in election.votes
        ]
        matrix = rankvote.convert.pairwise_matrix(
            election.candidates, election.votes
        )
    view.update({
        'status': status.value,
        'winner': current_winner(election, status),
        'ballots': ballots,
        'matrix': matrix,
        'votingEndsAt': voting_ends_at(election, voting_window_ms),
    })
    return view
