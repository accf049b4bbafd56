"""Rankvote - ranked-choice group elections.

Rankvote runs small group decisions (such as where to go for dinner) from
nomination through ranked voting to a deterministic winner.

An election proceeds as follows:

-   The admin creates an election (:class:`lifecycle.ElectionManager`),
    participants join it and nominate candidates (the ``candidate`` module).
-   Participants rank the nominated candidates on their ballots (the
    ``vote`` module); a repeated vote replaces the previous one.
-   When the election is finalized, the winner is determined by the
    ``evaluate`` subpackage: the Condorcet winner if there is one, otherwise
    instant runoff with a deterministic tie-break by the time of the
    earliest first-preference vote.

Elections are stored as whole JSON records by one of the backends of the
``store`` subpackage, selected by the configuration in the ``config``
module, and expire two hours after their creation.
"""

from rankvote.candidate import Nomination    # noqa: F401
from rankvote.vote import Vote    # noqa: F401
from rankvote.election import (    # noqa: F401
    BallotVisibility, Election, ElectionError, ElectionNotFoundError,
    ElectionStatus, WinnerMethod,
)
from rankvote.lifecycle import ElectionManager, RetentionPolicy    # noqa: F401
