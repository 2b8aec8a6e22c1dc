"""Shared Rich display functions for operation results.

Provides the result model and table builder used by the commands that
change files: add, update, commit, tag and rm.
"""

from dataclasses import dataclass
from enum import Enum

from rich.table import Table

from cvsctl.utils.formatting import console


class Outcome(Enum):
    """What happened when an operation ran for one target.

    Attributes:
        APPLIED: cvs reported the change.
        NO_CHANGE: cvs ran but reported nothing to do.
        NOT_ATTEMPTED: The target was malformed; cvs never ran.
        FAILED: cvs exited with an error.
    """

    APPLIED = "applied"
    NO_CHANGE = "no-change"
    NOT_ATTEMPTED = "not-attempted"
    FAILED = "failed"


_OUTCOME_MARKUP: dict[Outcome, str] = {
    Outcome.APPLIED: "[success]applied[/]",
    Outcome.NO_CHANGE: "[muted]no change[/]",
    Outcome.NOT_ATTEMPTED: "[warning]not attempted[/]",
    Outcome.FAILED: "[error]failed[/]",
}


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Result of running one operation on one target.

    Attributes:
        target: File path or directory the operation ran on.
        outcome: What happened.
        detail: Error text for failures, empty otherwise.
    """

    target: str
    outcome: Outcome
    detail: str = ""

    @property
    def failed(self) -> bool:
        """Check if the operation failed or was not attempted."""
        return self.outcome in (Outcome.FAILED, Outcome.NOT_ATTEMPTED)

    @classmethod
    def from_applied(cls, target: str, applied: bool) -> "OperationResult":
        """Create a result from a parsed boolean outcome."""
        return cls(target=target, outcome=Outcome.APPLIED if applied else Outcome.NO_CHANGE)


def create_results_table(title: str, results: list[OperationResult]) -> Table:
    """Create a Rich table displaying operation results.

    Args:
        title: Table title, normally the operation name.
        results: Results to display, one row each.

    Returns:
        Rich Table with Target, Result, and Detail columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Target", no_wrap=True)
    table.add_column("Result", width=14)
    table.add_column("Detail", style="muted")

    for result in results:
        table.add_row(result.target, _OUTCOME_MARKUP[result.outcome], result.detail)

    return table


def print_results_summary(results: list[OperationResult]) -> None:
    """Print a one-line summary of operation results."""
    applied = sum(1 for r in results if r.outcome == Outcome.APPLIED)
    unchanged = sum(1 for r in results if r.outcome == Outcome.NO_CHANGE)
    failed = sum(1 for r in results if r.failed)
    console.print(f"\n[dim]{applied} applied, {unchanged} unchanged, {failed} failed[/]")
