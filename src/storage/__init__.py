from .errors import (
    InvalidSetNameError,
    MalformedRecordError,
    PersistenceError,
    SetNotFoundError,
)
from .records import timer_from_record, timer_to_record, timers_from_records, timers_to_records
from .sets import DEFAULT_SETS_DIR, SetStore
from .state import (
    DEFAULT_STATE_FILE,
    StateStore,
    configuration_from_dict,
    configuration_to_dict,
)

__all__ = [
    "DEFAULT_SETS_DIR",
    "DEFAULT_STATE_FILE",
    "InvalidSetNameError",
    "MalformedRecordError",
    "PersistenceError",
    "SetNotFoundError",
    "SetStore",
    "StateStore",
    "configuration_from_dict",
    "configuration_to_dict",
    "timer_from_record",
    "timer_to_record",
    "timers_from_records",
    "timers_to_records",
]
