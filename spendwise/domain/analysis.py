"""Analysis invocation lifecycle.

Idle -> Analyzing -> Ready, with Ready -> Analyzing for re-analysis and an
optional Analyzing -> Idle cancel. The collection is snapshotted when the run
starts; results are computed only from that snapshot, so mutations made while
a run is pending are never observed by it.
"""

from collections.abc import Iterable
from typing import Literal

from spendwise.domain.insights import AnalysisResult, analyze
from spendwise.domain.models import Transaction

AnalysisState = Literal["idle", "analyzing", "ready"]


class InvalidTransitionError(Exception):
    """Raised when an analysis transition is not allowed from the current state."""


class AnalysisSession:
    """Holds the state and latest result of savings analysis."""

    def __init__(self) -> None:
        self.state: AnalysisState = "idle"
        self.result: AnalysisResult | None = None
        self._snapshot: tuple[Transaction, ...] = ()
        self._run = 0

    def start(self, transactions: Iterable[Transaction]) -> int | None:
        """Begin a run on a snapshot of the given transactions.

        Args:
            transactions: Current transaction collection.

        Returns:
            Token identifying the run, or None if a run is already in flight.
        """
        if self.state == "analyzing":
            return None
        self._snapshot = tuple(transactions)
        self._run += 1
        self.state = "analyzing"
        return self._run

    def complete(self, token: int) -> AnalysisResult | None:
        """Finish a run and publish its result.

        Args:
            token: Token returned by start().

        Returns:
            The new result, or None if the run was cancelled or superseded.

        Raises:
            InvalidTransitionError: If no run was ever started.
        """
        if self._run == 0:
            raise InvalidTransitionError("cannot complete analysis before it has started")
        if self.state != "analyzing" or token != self._run:
            return None

        self.result = analyze(self._snapshot)
        self._snapshot = ()
        self.state = "ready"
        return self.result

    def cancel(self) -> None:
        """Abandon the in-flight run; its result is dropped if it arrives later.

        Raises:
            InvalidTransitionError: If no run is in flight.
        """
        if self.state != "analyzing":
            raise InvalidTransitionError(f"cannot cancel analysis in state '{self.state}'")
        self._snapshot = ()
        self.result = None
        self.state = "idle"
