"""
Experiment tracker data as seen by the lister.

Provides:
- Checkpoint / PrimaryMetric: metrics saved at a training step
- Experiment: a training run with its checkpoints
- ExperimentRepository: JSON-backed storage with heartbeat run-state
"""

from explister.project.checkpoint import (
    Checkpoint,
    MetricGoal,
    PrimaryMetric,
)

from explister.project.experiment import Experiment

from explister.project.repository import (
    ExperimentRepository,
    RepositoryError,
    DEFAULT_HEARTBEAT_TIMEOUT,
)

__all__ = [
    # Model
    "Checkpoint",
    "MetricGoal",
    "PrimaryMetric",
    "Experiment",
    # Storage
    "ExperimentRepository",
    "RepositoryError",
    "DEFAULT_HEARTBEAT_TIMEOUT",
]
