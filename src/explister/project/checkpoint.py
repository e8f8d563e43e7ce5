"""
Checkpoints recorded during an experiment.

A checkpoint captures the metrics at a training step. It may name one of
those metrics as its primary metric, together with a goal (maximize or
minimize) that decides which checkpoint of an experiment is the "best" one.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from explister.params.value import ParamType, Value
from explister.utils.timefmt import format_timestamp, parse_timestamp, utcnow

SHORT_ID_LENGTH = 7


class MetricGoal(str, Enum):
    """Direction in which a primary metric improves."""

    MAXIMIZE = "maximize"
    """Higher is better (e.g. accuracy)."""

    MINIMIZE = "minimize"
    """Lower is better (e.g. loss)."""


@dataclass(frozen=True)
class PrimaryMetric:
    """The metric used to rank checkpoints within an experiment."""

    name: str
    goal: MetricGoal = MetricGoal.MINIMIZE

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "goal": self.goal.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrimaryMetric":
        if not data.get("name"):
            raise ValueError("primary_metric requires a name")
        return cls(name=data["name"], goal=MetricGoal(data.get("goal", MetricGoal.MINIMIZE.value)))


@dataclass
class Checkpoint:
    """
    Metrics and metadata saved at one training step.

    Attributes:
        id: Unique identifier (usually a hex digest).
        created: When the checkpoint was saved.
        step: Training step (or epoch) number.
        metrics: Metric name -> value.
        primary_metric: Metric used to choose the best checkpoint, if any.
        path: Path of saved files, relative to the project.
        message: Free-form note.
    """

    id: str
    created: datetime = field(default_factory=utcnow)
    step: int = 0
    metrics: Dict[str, Value] = field(default_factory=dict)
    primary_metric: Optional[PrimaryMetric] = None
    path: Optional[str] = None
    message: Optional[str] = None

    def short_id(self) -> str:
        return self.id[:SHORT_ID_LENGTH]

    def primary_metric_value(self) -> Optional[float]:
        """
        Numeric value of the primary metric.

        Returns None if there is no primary metric, the metric was not
        recorded, or its value is not a number (NaN included).
        """
        if self.primary_metric is None:
            return None
        value = self.metrics.get(self.primary_metric.name)
        if value is None or value.type not in (ParamType.INT, ParamType.FLOAT):
            return None
        if math.isnan(value.raw):
            return None
        return float(value.raw)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "created": format_timestamp(self.created),
            "step": self.step,
            "metrics": {k: v.to_json() for k, v in self.metrics.items()},
            "primary_metric": self.primary_metric.to_dict() if self.primary_metric else None,
            "path": self.path,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Checkpoint":
        """
        Create from a dictionary.

        Raises:
            KeyError: If a required field (id, created) is missing.
            ValueError: If a field has an invalid value.
        """
        primary = data.get("primary_metric")
        return cls(
            id=str(data["id"]),
            created=parse_timestamp(data["created"]),
            step=int(data.get("step") or 0),
            metrics={k: Value.from_python(v) for k, v in (data.get("metrics") or {}).items()},
            primary_metric=PrimaryMetric.from_dict(primary) if primary else None,
            path=data.get("path"),
            message=data.get("message"),
        )
