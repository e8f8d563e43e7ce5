"""
Experiments as stored by the tracker.

An Experiment is one training run: the params it was started with, where
and by whom it ran, and the checkpoints it has saved so far.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from explister.params.value import Value
from explister.project.checkpoint import Checkpoint, MetricGoal
from explister.utils.timefmt import format_timestamp, parse_timestamp, utcnow


@dataclass
class Experiment:
    """
    A tracked training run.

    Attributes:
        id: Unique identifier.
        created: Start time.
        params: Hyperparameters and other user-supplied values.
        command: Command line that started the run.
        host: Machine the run executed on.
        user: User who started the run.
        config: Full project configuration at start time.
        checkpoints: Checkpoints in the order they were recorded.
    """

    id: str
    created: datetime = field(default_factory=utcnow)
    params: Dict[str, Value] = field(default_factory=dict)
    command: str = ""
    host: str = ""
    user: str = ""
    config: Dict[str, Any] = field(default_factory=dict)
    checkpoints: List[Checkpoint] = field(default_factory=list)

    def latest_checkpoint(self) -> Optional[Checkpoint]:
        """
        Checkpoint with the highest step.

        Ties go to the later checkpoint (by creation time, then by order).
        """
        latest = None
        for checkpoint in self.checkpoints:
            if latest is None or (checkpoint.step, checkpoint.created) >= (latest.step, latest.created):
                latest = checkpoint
        return latest

    def best_checkpoint(self) -> Optional[Checkpoint]:
        """
        Checkpoint with the best primary metric value.

        Only checkpoints that define a primary metric and recorded a numeric
        value for it are considered. On ties the earliest one wins.
        Returns None if no checkpoint qualifies.
        """
        best = None
        best_value = None
        for checkpoint in sorted(self.checkpoints, key=lambda c: c.step):
            value = checkpoint.primary_metric_value()
            if value is None:
                continue
            if best is None:
                is_better = True
            elif checkpoint.primary_metric.goal == MetricGoal.MAXIMIZE:
                is_better = value > best_value
            else:
                is_better = value < best_value
            if is_better:
                best = checkpoint
                best_value = value
        return best

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "created": format_timestamp(self.created),
            "params": {k: v.to_json() for k, v in self.params.items()},
            "command": self.command,
            "host": self.host,
            "user": self.user,
            "config": self.config,
            "checkpoints": [c.to_dict() for c in self.checkpoints],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experiment":
        """
        Create from a dictionary.

        Raises:
            KeyError: If a required field (id, created) is missing.
            ValueError: If a field has an invalid value.
        """
        return cls(
            id=str(data["id"]),
            created=parse_timestamp(data["created"]),
            params={k: Value.from_python(v) for k, v in (data.get("params") or {}).items()},
            command=data.get("command") or "",
            host=data.get("host") or "",
            user=data.get("user") or "",
            config=data.get("config") or {},
            checkpoints=[Checkpoint.from_dict(c) for c in (data.get("checkpoints") or [])],
        )
