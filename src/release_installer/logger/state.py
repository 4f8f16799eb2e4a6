"""Logger state shared by the release_installer logging package.

A single module-level instance keeps track of the QueueListener so the
root logger is configured exactly once per process.
"""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import queue
    from logging.handlers import QueueListener


class _LoggerState:
    """Container for logger state (avoids module-level mutable globals).

    Attributes:
        lock: Thread lock for one-time root initialization
        root_initialized: Whether the root logger has been set up
        config_applied: Whether settings.conf levels have been applied
        queue_listener: Background thread processing log records
        log_queue: Queue shared by every QueueHandler

    """

    def __init__(self) -> None:
        """Initialize logger state."""
        self.lock = threading.Lock()
        self.root_initialized = False
        self.config_applied = False
        self.queue_listener: QueueListener | None = None
        self.log_queue: queue.Queue | None = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Return the process-wide logger state."""
    return _state
