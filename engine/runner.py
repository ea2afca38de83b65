"""
runner.py — Background Runs
============================
controller.start() blocks until the algorithm returns.  A web request
cannot wait that long, so BackgroundRun moves the call onto a daemon
thread and keeps whatever it raised for later inspection.

    run = BackgroundRun(controller)
    run.launch()
    …
    run.join(timeout=1.0)
    run.error            # exception of a failed run, else None
"""

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class BackgroundRun:

    def __init__(self, controller, name: str = "run"):
        self.controller = controller
        self.name = name
        self.error: Optional[BaseException] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def launch(self) -> bool:
        """Start the controller on a new thread.  False if the previous one is still going."""
        if self.is_alive:
            return False
        self.error = None
        self._thread = threading.Thread(target=self._target, name=f"{self.name}-worker", daemon=True)
        self._thread.start()
        return True

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker; True once it has exited."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _target(self) -> None:
        try:
            self.controller.start()
        except Exception as exc:
            # already logged with traceback by the controller
            logger.warning("Background %s ended with %s: %s", self.name, type(exc).__name__, exc)
            self.error = exc
