"""Report aggregation — pure summation of phase tallies."""

from __future__ import annotations

from collections.abc import Iterable

from devstrap.core.models import OverallReport, TallyResult


def aggregate(
    tallies: Iterable[TallyResult],
    verification: TallyResult | None = None,
) -> OverallReport:
    """Sum *tallies* into an :class:`OverallReport`.

    Verification counts are carried alongside, not added into the
    install totals.  An empty *tallies* yields ``0`` / ``0``.
    """
    phases = tuple(tallies)
    total = sum(phases, TallyResult())
    return OverallReport(
        success_count=total.success_count,
        failure_count=total.failure_count,
        phases=phases,
        verification=verification,
    )
