"""
Tests for delegated process supervision.

Real child processes are spawned with the running Python interpreter so the
tests do not depend on any tender binary.
"""

import signal
import subprocess
import sys
from unittest.mock import Mock, patch

import pytest

from tender_launcher.binary.supervisor import (
    ExitCode,
    FailedToStart,
    TerminatedBySignal,
    outcome_from_returncode,
    run_binary,
    signal_name,
)
from tender_launcher.core.exceptions import SignalTerminationError, StartupError

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")


def _python(code: str):
    return sys.executable, ["-c", code]


class TestOutcomeFromReturncode:
    """Test return code translation."""

    @pytest.mark.parametrize("code", [0, 1, 2, 127, 255])
    def test_exit_codes(self, code):
        """Test non-negative codes are passed through exactly."""
        assert outcome_from_returncode(code) == ExitCode(code)

    def test_negative_is_signal(self):
        """Test negative codes become TerminatedBySignal."""
        assert outcome_from_returncode(-signal.SIGTERM) == TerminatedBySignal("SIGTERM")

    def test_missing_code_is_failure(self):
        """Test a missing code never reports success."""
        assert outcome_from_returncode(None) == ExitCode(1)

    def test_unknown_signal_number(self):
        """Test unnamed signals still get a readable name."""
        assert signal_name(250) == "SIG250"


class TestRaiseForFailure:
    """Test ProcessOutcome.raise_for_failure()."""

    def test_exit_code_returned(self):
        """Test ExitCode returns its code."""
        assert ExitCode(3).raise_for_failure() == 3

    def test_signal_raises(self):
        """Test signal termination raises with the signal name."""
        with pytest.raises(SignalTerminationError, match="SIGKILL") as exc_info:
            TerminatedBySignal("SIGKILL").raise_for_failure()

        assert exc_info.value.signal_name == "SIGKILL"

    def test_failed_start_raises(self):
        """Test startup failure raises StartupError."""
        cause = PermissionError(13, "Permission denied")

        with pytest.raises(StartupError, match="Permission denied") as exc_info:
            FailedToStart("/bin/tender", cause).raise_for_failure()

        assert exc_info.value.cause is cause


class TestRunBinary:
    """Test run_binary with real child processes."""

    @pytest.mark.parametrize("code", [0, 1, 127])
    def test_exact_exit_code(self, code):
        """Test the child's exit code is returned unchanged."""
        path, args = _python(f"import sys; sys.exit({code})")

        assert run_binary(path, args) == ExitCode(code)

    def test_arguments_forwarded_verbatim(self, tmp_path):
        """Test arguments reach the child unchanged."""
        out_file = tmp_path / "argv.txt"
        path, args = _python(
            "import sys; open(sys.argv[1], 'w').write('\\n'.join(sys.argv[2:]))"
        )

        outcome = run_binary(path, args + [str(out_file), "add", "--name", "a b", ""])

        assert outcome == ExitCode(0)
        assert out_file.read_text().split("\n") == ["add", "--name", "a b", ""]

    def test_streams_inherited(self):
        """Test no pipes are set up for the child's standard streams."""
        process = Mock()
        process.wait.return_value = 0
        popen = Mock(return_value=process)

        run_binary("/opt/tender", ["ls"], popen=popen)

        popen.assert_called_once_with(["/opt/tender", "ls"])

    @posix_only
    def test_killed_by_signal(self):
        """Test a signal death is reported as TerminatedBySignal, not a code."""
        path, args = _python("import os, signal; os.kill(os.getpid(), signal.SIGKILL)")

        outcome = run_binary(path, args)

        assert outcome == TerminatedBySignal("SIGKILL")

    def test_missing_executable(self, tmp_path):
        """Test a missing binary is a startup failure."""
        outcome = run_binary(tmp_path / "missing", [])

        assert isinstance(outcome, FailedToStart)
        assert isinstance(outcome.cause, OSError)

    @posix_only
    def test_not_executable(self, tmp_path):
        """Test a binary without the exec bit is a startup failure."""
        binary = tmp_path / "tender"
        binary.write_text("#!/bin/sh\nexit 0\n")
        binary.chmod(0o644)

        outcome = run_binary(binary, [])

        assert isinstance(outcome, FailedToStart)
        assert isinstance(outcome.cause, PermissionError)

    @posix_only
    def test_signal_handlers_restored(self):
        """Test launcher signal handlers are restored after the child exits."""
        before = signal.getsignal(signal.SIGTERM)
        path, args = _python("pass")

        run_binary(path, args)

        assert signal.getsignal(signal.SIGTERM) is before

    @posix_only
    def test_sigterm_forwarded_to_child(self):
        """Test SIGTERM received while waiting is sent to the child."""
        process = Mock(spec=subprocess.Popen)

        def wait():
            handler = signal.getsignal(signal.SIGTERM)
            handler(signal.SIGTERM, None)
            return -signal.SIGTERM

        process.wait.side_effect = wait

        outcome = run_binary("/opt/tender", [], popen=Mock(return_value=process))

        process.send_signal.assert_called_once_with(signal.SIGTERM)
        assert outcome == TerminatedBySignal("SIGTERM")

    @posix_only
    def test_sigint_to_launcher_forwarded_to_child(self):
        """Test SIGINT sent to the launcher pid reaches the child."""
        process = Mock(spec=subprocess.Popen)

        def wait():
            handler = signal.getsignal(signal.SIGINT)
            handler(signal.SIGINT, None)
            return -signal.SIGINT

        process.wait.side_effect = wait

        outcome = run_binary("/opt/tender", [], popen=Mock(return_value=process))

        process.send_signal.assert_called_once_with(signal.SIGINT)
        assert outcome == TerminatedBySignal("SIGINT")

    @posix_only
    def test_sigint_handler_restored(self):
        """Test the launcher's SIGINT handler is back after the child exits."""
        before = signal.getsignal(signal.SIGINT)
        path, args = _python("pass")

        run_binary(path, args)

        assert signal.getsignal(signal.SIGINT) is before

    @posix_only
    def test_foreign_handler_restored_as_default(self):
        """Test a handler Python cannot see is restored as SIG_DFL."""
        process = Mock(spec=subprocess.Popen)
        process.wait.return_value = 0
        real_signal = signal.signal
        installed = []

        def fake_signal(signum, handler):
            installed.append((signum, handler))
            real_signal(signum, handler)
            return None

        with patch.object(signal, "signal", side_effect=fake_signal):
            run_binary("/opt/tender", [], popen=Mock(return_value=process))

        restored = dict(installed[len(installed) // 2:])
        assert restored[signal.SIGTERM] is signal.SIG_DFL
        real_signal(signal.SIGINT, signal.default_int_handler)
