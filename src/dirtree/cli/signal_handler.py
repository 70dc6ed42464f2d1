"""Signal handling for the dirtree CLI.

Interruptions are recorded rather than acted on immediately, so the writer can stop
at a line boundary and the process can exit with the conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Optional

# SIGPIPE only exists on Unix-like systems
HAS_SIGPIPE = hasattr(signal, "SIGPIPE")


class SignalHandler:
    """Records SIGPIPE and SIGINT so output can stop cleanly.

    Each handler fires once: after recording the signal it restores the handler that
    was installed before, so a second Ctrl+C behaves as the user expects.

    Attributes:
        sigpipe_received: Event set when the reader of our output went away.
        sigint_received: Event set when the user interrupted the program.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler = signal.getsignal(signal.SIGPIPE) if HAS_SIGPIPE else None
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        signal.signal(signal.SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    @property
    def interrupted(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Conventional exit status for the received signal, or None."""
        if self.sigpipe_received.is_set():
            return 141
        if self.sigint_received.is_set():
            return 130
        return None


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE (where available) and SIGINT handlers."""
    if HAS_SIGPIPE:
        signal.signal(signal.SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    This keeps the interpreter from reporting a broken pipe while flushing stdout
    at shutdown.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
