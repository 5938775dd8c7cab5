"""pytally - Minimal unidirectional-data-flow store for a bounded tally."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytally")
except PackageNotFoundError:
    __version__ = "0+local"
from pytally.config import TallyConfig
from pytally.exceptions import TallyConfigError, TallyError
from pytally.state.actions import Action, ActionType
from pytally.state.reducer import TallyState, make_reducer, tally_reducer
from pytally.state.store import Store, Subscription, create_store

__all__ = [
    "__version__",
    "Action",
    "ActionType",
    "Store",
    "Subscription",
    "TallyConfig",
    "TallyConfigError",
    "TallyError",
    "TallyState",
    "create_store",
    "make_reducer",
    "tally_reducer",
]
