# --- Host Notification Sinks ---
# The swarm never talks to the host directly; it reports through whichever
# sink it was handed at construction time.
from abc import ABC, abstractmethod
from pathlib import Path

from PSO_CORE import CONFIG
from PSO_CORE.Logs.logger import log_info, log_warning, log_error, log_debug

module_name = Path(__file__).stem

_LEVEL_TO_LOGGER = {
    "debug": log_debug,
    "info": log_info,
    "warning": log_warning,
    "error": log_error,
}


class Notifier(ABC):
    @abstractmethod
    def notify(self, message: str, level: str = "info"):
        pass


class LogNotifier(Notifier):
    """Default sink: writes notifications to the console logger."""

    def notify(self, message, level="info"):
        _LEVEL_TO_LOGGER.get(level, log_info)(message, module_name)


class CallbackNotifier(Notifier):
    """Forwards every notification to a host-supplied callable(message, level)."""

    def __init__(self, callback):
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        self.callback = callback

    def notify(self, message, level="info"):
        self.callback(message, level)


class RecordingNotifier(Notifier):
    """Keeps (level, message) pairs in memory."""

    def __init__(self):
        self.records = []

    def notify(self, message, level="info"):
        self.records.append((level, message))

    def messages(self, level=None):
        return [m for lvl, m in self.records if level is None or lvl == level]


def greet(notifier: Notifier = None):
    """Sends the greeting to the host."""
    (notifier or LogNotifier()).notify(CONFIG.GREETING)
