"""Tests for the tier runner (core/tier_runner.py).

Coverage:
* Every entry yields exactly one outcome (tally invariant).
* Failures do not stop the loop; nothing is retried.
* Inter-attempt delay between entries only.
* Each outcome is reported by name as it happens.
"""

from __future__ import annotations

import pytest

from devstrap.core.catalog import CHOCOLATEY
from devstrap.core.installer import Installer
from devstrap.core.models import LATEST, CommandResult, Tier
from devstrap.core.tier_runner import TierRunner


def _tier(*names: str) -> Tier:
    return Tier.from_mapping("primary", {name: LATEST for name in names})


def _runner_for(fake, reporter, sleep, delay: float = 0.5) -> TierRunner:
    return TierRunner(Installer(CHOCOLATEY, fake), reporter, delay=delay, sleep=sleep)


class TestTally:
    def test_two_succeed_one_fails(self, make_runner, reporter, sleep) -> None:
        fake = make_runner({"choco install broken": CommandResult(1, stderr="not found")})
        tally = _runner_for(fake, reporter, sleep).run_tier(_tier("git", "broken", "curl"))

        assert (tally.success_count, tally.failure_count) == (2, 1)
        assert tally.phase == "primary"

    @pytest.mark.parametrize("size", [0, 1, 4, 9])
    def test_counts_sum_to_tier_size(self, make_runner, reporter, sleep, size: int) -> None:
        names = [f"pkg{i}" for i in range(size)]
        fake = make_runner({"choco install pkg1": RuntimeError("boom")})
        tally = _runner_for(fake, reporter, sleep).run_tier(_tier(*names))

        assert tally.success_count + tally.failure_count == size
        assert len(fake.calls) == size

    def test_all_failures_still_complete(self, make_runner, reporter, sleep) -> None:
        fake = make_runner(default=CommandResult(1, stderr="offline"))
        tally = _runner_for(fake, reporter, sleep).run_tier(_tier("a", "b", "c"))

        assert (tally.success_count, tally.failure_count) == (0, 3)

    def test_no_retries(self, make_runner, reporter, sleep) -> None:
        fake = make_runner({"choco install flaky": CommandResult(1)})
        _runner_for(fake, reporter, sleep).run_tier(_tier("flaky"))

        assert len(fake.calls_starting_with("choco install flaky")) == 1


class TestDelay:
    def test_sleeps_between_attempts_only(self, runner, reporter, sleep) -> None:
        _runner_for(runner, reporter, sleep, delay=0.5).run_tier(_tier("a", "b", "c"))
        assert sleep.calls == [0.5, 0.5]

    def test_zero_delay_never_sleeps(self, runner, reporter, sleep) -> None:
        _runner_for(runner, reporter, sleep, delay=0).run_tier(_tier("a", "b"))
        assert sleep.calls == []


class TestReporting:
    def test_reports_each_outcome_by_name(self, make_runner, reporter, sleep) -> None:
        fake = make_runner({"choco install broken": CommandResult(1, stderr="checksum mismatch")})
        _runner_for(fake, reporter, sleep).run_tier(_tier("git", "broken"))

        assert reporter.messages("success") == ["git installed"]
        assert reporter.messages("error") == ["broken failed: checksum mismatch"]

    def test_environment_forwarded_to_every_attempt(
        self, runner, reporter, sleep, env_view,
    ) -> None:
        _runner_for(runner, reporter, sleep).run_tier(_tier("a", "b"), env_view)
        assert runner.environments == [env_view, env_view]
