"""
Process runner for mvn2src.

This module runs external commands (Maven, the decompiler) and captures their
output. stdout and stderr are drained by two reader threads so that a child
writing a lot to both streams never blocks on a full pipe.
"""

import logging
import shutil
import subprocess
import threading
import time

from mvn2src.utils.models import ProcessResult


# How long reader threads get to flush buffered output once the child is gone
READER_GRACE_PERIOD = 1.0

logger = logging.getLogger(__name__)


class ProcessTimeoutError(TimeoutError):
    """Raised when a command does not finish within its timeout."""

    def __init__(self, command, timeout, stdout='', stderr=''):
        super().__init__(f"Command timed out after {timeout} seconds: {' '.join(command)}")
        self.command = list(command)
        self.timeout = timeout
        self.stdout = stdout
        self.stderr = stderr


def _drain(stream, sink):
    """Read ``stream`` line by line into ``sink`` until EOF."""
    try:
        for line in iter(stream.readline, ''):
            sink.append(line)
    except (OSError, ValueError) as e:
        logger.error(f"Error reading process output: {e}")
    finally:
        try:
            stream.close()
        except OSError:
            pass


def _join_readers(readers):
    """Give all readers one shared grace period to finish."""
    deadline = time.monotonic() + READER_GRACE_PERIOD
    for reader in readers:
        reader.join(max(0.0, deadline - time.monotonic()))


def execute(command, working_dir=None, timeout=None):
    """
    Run a command and wait for it to finish.

    Args:
        command (list): The command and its arguments.
        working_dir (Path, optional): Working directory. Defaults to the current one.
        timeout (float, optional): Timeout in seconds. None waits forever.

    Returns:
        ProcessResult: Exit code and captured output.

    Raises:
        OSError: If the command cannot be started.
        ProcessTimeoutError: If the command exceeds ``timeout``; the child is killed.
    """
    command = [str(part) for part in command]
    logger.debug(f"Executing command: {' '.join(command)}")

    process = subprocess.Popen(
        command,
        cwd=str(working_dir) if working_dir is not None else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding='utf-8',
        errors='replace'
    )

    stdout_lines = []
    stderr_lines = []
    readers = [
        threading.Thread(target=_drain, args=(process.stdout, stdout_lines), daemon=True),
        threading.Thread(target=_drain, args=(process.stderr, stderr_lines), daemon=True),
    ]
    for reader in readers:
        reader.start()

    try:
        exit_code = process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()
        _join_readers(readers)
        logger.warning(f"Command timed out after {timeout} seconds: {' '.join(command)}")
        raise ProcessTimeoutError(command, timeout, ''.join(stdout_lines), ''.join(stderr_lines))

    _join_readers(readers)

    return ProcessResult(
        exit_code=exit_code,
        stdout=''.join(stdout_lines),
        stderr=''.join(stderr_lines),
        timed_out=False
    )


def find_command_path(command):
    """
    Resolve a command name to its full path on PATH.

    Returns:
        str: The full path, or the bare command name if it cannot be resolved.
    """
    return shutil.which(command) or command
