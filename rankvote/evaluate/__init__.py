'''Evaluate the results of the elections.

All evaluators here are single-winner evaluators over ranked ballots. They
take the list of candidates (nomination ids) standing in the election and the
ballots, and return an :class:`core.ElectionResult` naming the winner and
the method that found them.

-   :mod:`condorcet` finds a candidate beating all others head-to-head.
-   :mod:`sequential` runs instant-runoff elimination, breaking ties by the
    time of the earliest first-preference votes (see :mod:`auxiliary`).

None of the evaluators validate vote correctness; ballot entries that do
not refer to a candidate are ignored.
'''

from rankvote.evaluate.core import *    # noqa
