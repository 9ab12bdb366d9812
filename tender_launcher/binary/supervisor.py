"""
Delegated process supervision.

Runs the resolved tender binary with the launcher's own stdin, stdout and
stderr, waits for it, and reports how it ended as a tagged outcome so that
"exited non-zero" and "never ran" cannot be confused.
"""

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from tender_launcher.core.exceptions import SignalTerminationError, StartupError

logger = logging.getLogger(__name__)

_FORWARDED_SIGNALS = ("SIGINT", "SIGTERM", "SIGHUP")


class ProcessOutcome:
    """Base class for the ways a delegated process can end."""

    def raise_for_failure(self) -> int:
        """
        Return the child's exit code, or raise if it never produced one.

        Raises:
            StartupError: The binary could not be started
            SignalTerminationError: The binary was killed by a signal
        """
        raise NotImplementedError


@dataclass(frozen=True)
class ExitCode(ProcessOutcome):
    """Child exited normally with this code."""

    code: int

    def raise_for_failure(self) -> int:
        return self.code


@dataclass(frozen=True)
class TerminatedBySignal(ProcessOutcome):
    """Child was killed by a signal."""

    signal_name: str

    def raise_for_failure(self) -> int:
        raise SignalTerminationError(self.signal_name)


@dataclass(frozen=True)
class FailedToStart(ProcessOutcome):
    """Child could not be spawned."""

    path: str
    cause: OSError

    def raise_for_failure(self) -> int:
        raise StartupError(self.path, self.cause)


def signal_name(signum: int) -> str:
    """
    Get the symbolic name of a signal number.

    Example:
        >>> signal_name(9)
        'SIGKILL'
    """
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"SIG{signum}"


def outcome_from_returncode(returncode: Optional[int]) -> ProcessOutcome:
    """
    Translate a subprocess return code into an outcome.

    Negative codes mean the child was killed by that signal (POSIX).
    A missing code is treated as failure (1), never as success.
    """
    if returncode is None:
        return ExitCode(1)
    if returncode < 0:
        return TerminatedBySignal(signal_name(-returncode))
    return ExitCode(returncode)


def run_binary(
    path: Union[str, Path],
    args: Sequence[str],
    popen: Callable[..., subprocess.Popen] = subprocess.Popen,
) -> ProcessOutcome:
    """
    Run the binary with inherited standard streams and wait for it.

    Args:
        path: Executable to run
        args: Arguments forwarded verbatim
        popen: Process factory (injected by tests)

    Returns:
        ExitCode, TerminatedBySignal or FailedToStart

    Example:
        >>> outcome = run_binary("/usr/bin/true", [])
        >>> outcome
        ExitCode(code=0)
    """
    command: List[str] = [str(path), *args]
    logger.debug(f"Running: {command}")

    try:
        process = popen(command)
    except OSError as e:
        logger.debug(f"Failed to start {path}: {e}")
        return FailedToStart(str(path), e)

    previous = _install_forwarding(process)
    try:
        returncode = process.wait()
    finally:
        _restore_handlers(previous)

    outcome = outcome_from_returncode(returncode)
    logger.debug(f"Child finished: {outcome}")
    return outcome


def _install_forwarding(process: subprocess.Popen) -> Dict[int, object]:
    """
    Forward termination signals to the child while it runs.

    A terminal Ctrl-C reaches the child twice: once from the terminal
    and once forwarded.
    """
    previous: Dict[int, object] = {}
    if os.name == "nt":
        return previous

    def forward(signum, _frame=None):
        try:
            process.send_signal(signum)
        except OSError as e:
            logger.debug(f"Could not forward {signal_name(signum)}: {e}")

    try:
        for name in _FORWARDED_SIGNALS:
            signum = getattr(signal, name, None)
            if signum is not None:
                previous[signum] = signal.signal(signum, forward)
    except ValueError:
        # Not on the main thread; leave handlers alone.
        _restore_handlers(previous)
        return {}

    return previous


def _restore_handlers(previous: Dict[int, object]) -> None:
    for signum, handler in previous.items():
        # None means the handler was installed outside Python.
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


__all__ = [
    "ProcessOutcome",
    "ExitCode",
    "TerminatedBySignal",
    "FailedToStart",
    "outcome_from_returncode",
    "run_binary",
    "signal_name",
]
