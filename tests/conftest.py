"""
Shared fixtures for explister tests.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import pytest

from explister.listing.record import ListRecord
from explister.params.value import Value
from explister.project.checkpoint import Checkpoint, MetricGoal, PrimaryMetric
from explister.project.experiment import Experiment
from explister.project.repository import RepositoryError


NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_checkpoint(
    id: str = "c0ffee1234567890",
    step: int = 0,
    metrics: Optional[Dict[str, Any]] = None,
    primary: Optional[str] = None,
    goal: MetricGoal = MetricGoal.MINIMIZE,
    created: Optional[datetime] = None,
) -> Checkpoint:
    return Checkpoint(
        id=id,
        created=created or NOW - timedelta(minutes=10) + timedelta(seconds=step),
        step=step,
        metrics={k: Value.from_python(v) for k, v in (metrics or {}).items()},
        primary_metric=PrimaryMetric(primary, goal) if primary else None,
    )


def make_record(
    id: str = "abcdef1234567",
    params: Optional[Dict[str, Any]] = None,
    created: Optional[datetime] = None,
    latest: Optional[Checkpoint] = None,
    best: Optional[Checkpoint] = None,
    running: bool = False,
    host: str = "10.1.1.1",
    user: str = "andreas",
    command: str = "train.py",
) -> ListRecord:
    return ListRecord(
        id=id,
        created=created or NOW - timedelta(minutes=5),
        params={k: Value.from_python(v) for k, v in (params or {}).items()},
        command=command,
        num_checkpoints=len({c.id for c in (latest, best) if c is not None}),
        latest_checkpoint=latest,
        best_checkpoint=best,
        user=user,
        host=host,
        running=running,
    )


def make_experiment(
    id: str,
    created: datetime,
    params: Optional[Dict[str, Any]] = None,
    checkpoints=None,
    **kwargs,
) -> Experiment:
    return Experiment(
        id=id,
        created=created,
        params={k: Value.from_python(v) for k, v in (params or {}).items()},
        checkpoints=list(checkpoints or []),
        **kwargs,
    )


class FakeSource:
    """In-memory experiment source with configurable run state."""

    def __init__(self, experiments, running=None, fail_running_for=None):
        self.experiments = list(experiments)
        self.running = set(running or [])
        self.fail_running_for = fail_running_for
        self.running_queries = []

    def list_experiments(self):
        return list(self.experiments)

    def experiment_is_running(self, experiment_id):
        self.running_queries.append(experiment_id)
        if experiment_id == self.fail_running_for:
            raise RepositoryError(f"heartbeat unreadable for {experiment_id}")
        return experiment_id in self.running


@pytest.fixture
def now():
    return NOW


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI reconfigures the package logger; restore it between tests."""
    logger = logging.getLogger("explister")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
