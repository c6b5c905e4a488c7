"""pyoptimious - Async Python client caching a remote parameter set."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyoptimious")
except PackageNotFoundError:
    __version__ = "0+local"
from pyoptimious._scheduler import AsyncioScheduler, ScheduledTask, Scheduler
from pyoptimious._transport import HttpTransport, Transport, TransportResponse
from pyoptimious.client import OptimiousClient
from pyoptimious.config import OptimiousConfig
from pyoptimious.exceptions import (
    FetchError,
    HttpStatusError,
    InitializationError,
    MalformedResponseError,
    NetworkError,
    NotInitializedError,
    OptimiousConfigError,
    OptimiousError,
    ParameterNotFoundError,
)
from pyoptimious.models import ChangeType, ParameterChange, ParameterMap, ParameterValue
from pyoptimious.poller import ClientState, Poller
from pyoptimious.state.diff import apply_changes, compute_diff
from pyoptimious.subscriptions import ChangeListener, SubscriptionRegistry

__all__ = [
    "__version__",
    "AsyncioScheduler",
    "ChangeListener",
    "ChangeType",
    "ClientState",
    "FetchError",
    "HttpStatusError",
    "HttpTransport",
    "InitializationError",
    "MalformedResponseError",
    "NetworkError",
    "NotInitializedError",
    "OptimiousClient",
    "OptimiousConfig",
    "OptimiousConfigError",
    "OptimiousError",
    "ParameterChange",
    "ParameterMap",
    "ParameterNotFoundError",
    "ParameterValue",
    "Poller",
    "ScheduledTask",
    "Scheduler",
    "SubscriptionRegistry",
    "Transport",
    "TransportResponse",
    "apply_changes",
    "compute_diff",
]
