"""
List records and field resolution.

A ListRecord is the transient, per-invocation view of one experiment that
filters, sorters and renderers work on. Fields are looked up by name
through ``get_value``, which consults these sources in a fixed order
(first match wins):

1. Virtual fields computed from the record:
   started, step, user, host, command, status
2. Metrics recorded on the best checkpoint
3. Experiment params

A param that shares its name with a virtual field (say, a param called
``status``) is therefore never visible through ``get_value``. Filters and
sort keys rely on this order being stable.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from explister.params.value import ParamType, Value
from explister.project.checkpoint import Checkpoint

STATUS_RUNNING = "running"
STATUS_STOPPED = "stopped"


@dataclass
class ListRecord:
    """
    One experiment as shown in a listing.

    Field order is the order used for JSON output.
    """

    id: str
    created: datetime
    params: Dict[str, Value] = field(default_factory=dict)
    command: str = ""
    num_checkpoints: int = 0
    latest_checkpoint: Optional[Checkpoint] = None
    best_checkpoint: Optional[Checkpoint] = None
    user: str = ""
    host: str = ""
    running: bool = False

    config: Dict[str, Any] = field(default_factory=dict, repr=False)
    """Full experiment config. Never included in output."""

    @property
    def status(self) -> str:
        return STATUS_RUNNING if self.running else STATUS_STOPPED

    def get_value(self, name: str) -> Optional[Value]:
        """
        Resolve a field by name.

        Returns:
            The value, or None if no source defines the name.
        """
        for _, resolver in FIELD_RESOLVERS:
            value = resolver(self, name)
            if value is not None:
                return value
        return None


# =============================================================================
# Field Resolution
# =============================================================================


def _started(record: ListRecord) -> Value:
    # Fractional epoch seconds so that it can be compared numerically
    return Value(ParamType.FLOAT, record.created.timestamp())


def _step(record: ListRecord) -> Value:
    if record.latest_checkpoint is None:
        return Value(ParamType.INT, 0)
    return Value(ParamType.INT, record.latest_checkpoint.step)


VIRTUAL_FIELDS: Dict[str, Callable[[ListRecord], Value]] = {
    "started": _started,
    "step": _step,
    "user": lambda r: Value(ParamType.STRING, r.user),
    "host": lambda r: Value(ParamType.STRING, r.host),
    "command": lambda r: Value(ParamType.STRING, r.command),
    "status": lambda r: Value(ParamType.STRING, r.status),
}


def resolve_virtual_field(record: ListRecord, name: str) -> Optional[Value]:
    compute = VIRTUAL_FIELDS.get(name)
    if compute is None:
        return None
    return compute(record)


def resolve_best_checkpoint_metric(record: ListRecord, name: str) -> Optional[Value]:
    if record.best_checkpoint is None:
        return None
    return record.best_checkpoint.metrics.get(name)


def resolve_param(record: ListRecord, name: str) -> Optional[Value]:
    return record.params.get(name)


FIELD_RESOLVERS: Tuple[Tuple[str, Callable[[ListRecord, str], Optional[Value]]], ...] = (
    ("virtual", resolve_virtual_field),
    ("best_checkpoint_metric", resolve_best_checkpoint_metric),
    ("param", resolve_param),
)
"""Field sources in precedence order."""
