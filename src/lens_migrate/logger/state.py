"""Logger state shared by the logging modules.

One module-level instance tracks whether the ``lens_migrate`` root logger
has been wired to its queue listener. Tests reset it via
``clear_logger_state()``.
"""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import queue
    from logging.handlers import QueueListener


class _LoggerState:
    """Container for logger state (avoids module-level mutable globals).

    Attributes:
        lock: Guards root logger initialization
        root_initialized: Whether the root logger has handlers
        output_level: Last ``outputLevel`` setting applied, if any
        queue_listener: Background thread writing queued records
        log_queue: Queue shared by the QueueHandler and the listener

    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.root_initialized = False
        self.output_level: str | None = None
        self.queue_listener: QueueListener | None = None
        self.log_queue: queue.Queue | None = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Get the global logger state singleton."""
    return _state
