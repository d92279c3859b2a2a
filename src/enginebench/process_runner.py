#!/usr/bin/env python3
"""
External process execution for subprocess-based engines.

Runs a command with a hard timeout, capturing stdout and stderr separately so
that metric lines from one stream are never interleaved with the other.
"""

import os
import shutil
import signal
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path

import psutil

from . import constants

TIMEOUT_EXIT_CODE = -1
COMMAND_NOT_FOUND_EXIT_CODE = 127

_POSIX = os.name == "posix"


@dataclass(frozen=True)
class CommandResult:
    """Raw outcome of one external process invocation."""

    exit_code: int
    stdout: str
    stderr: str
    # Peak resident memory of this invocation's process tree
    peak_memory_mb: int = 0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def timed_out(self) -> bool:
        return self.exit_code == TIMEOUT_EXIT_CODE

    @property
    def combined_output(self) -> str:
        """stdout followed by stderr, for engines that log metrics to stderr."""
        if not self.stderr:
            return self.stdout
        if not self.stdout or self.stdout.endswith("\n"):
            return self.stdout + self.stderr
        return f"{self.stdout}\n{self.stderr}"


def execute_command(
    command: list[str],
    timeout_seconds: float = constants.INFERENCE_TIMEOUT_SECONDS,
    working_dir: str | Path | None = None,
) -> CommandResult:
    """
    Run ``command`` and block until it exits or ``timeout_seconds`` elapse.

    On timeout the whole process group is killed and reaped, and a synthetic
    result with TIMEOUT_EXIT_CODE is returned. No retries are attempted.
    """
    try:
        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            cwd=str(working_dir) if working_dir is not None else None,
            text=True,
            errors="replace",
            start_new_session=_POSIX,
        )
    except OSError as e:
        return CommandResult(COMMAND_NOT_FOUND_EXIT_CODE, "", f"Failed to start {command[0]}: {e}")

    sampler = PeakMemorySampler(process.pid)
    sampler.start()
    try:
        stdout, stderr = process.communicate(timeout=timeout_seconds)
    except subprocess.TimeoutExpired:
        sampler.stop()
        _kill_process_tree(process)
        return CommandResult(TIMEOUT_EXIT_CODE, "", f"Command timed out after {timeout_seconds:g}s")
    peak_memory_mb = sampler.stop()

    return CommandResult(process.returncode, stdout or "", stderr or "", peak_memory_mb)


class PeakMemorySampler(threading.Thread):
    """
    Tracks the peak resident memory of one process and its descendants.

    Polls every ``interval`` seconds until stop() is called. Only the watched
    process tree is counted, so earlier or concurrent children never leak
    into the figure.
    """

    def __init__(self, pid: int, interval: float = constants.MEMORY_SAMPLE_INTERVAL_SECONDS):
        super().__init__(daemon=True)
        self.pid = pid
        self.interval = interval
        self.peak_bytes = 0
        self._stopped = threading.Event()

    def run(self) -> None:
        try:
            root = psutil.Process(self.pid)
        except psutil.Error:
            return
        while True:
            self.peak_bytes = max(self.peak_bytes, _tree_rss_bytes(root))
            if self._stopped.wait(self.interval):
                return

    def stop(self) -> int:
        """Stop sampling and return the peak in MB."""
        self._stopped.set()
        self.join()
        return int(self.peak_bytes / (1024 * 1024))


def _tree_rss_bytes(root: psutil.Process) -> int:
    try:
        processes = [root, *root.children(recursive=True)]
    except psutil.Error:
        return 0

    total = 0
    for process in processes:
        try:
            total += process.memory_info().rss
        except psutil.Error:
            # exited between listing and sampling
            continue
    return total


def _kill_process_tree(process: subprocess.Popen) -> None:
    """Kill the child and everything in its session, then reap it."""
    if _POSIX:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        process.kill()

    try:
        process.communicate(timeout=constants.PROBE_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        # A grandchild outside the group still holds the pipes open.
        process.kill()
        process.wait()


def find_executable(name: str) -> str | None:
    """Resolve ``name`` through the search path, like ``which``."""
    return shutil.which(name)


def is_executable_file(path: str | Path) -> bool:
    candidate = Path(path)
    return candidate.is_file() and os.access(candidate, os.X_OK)


def kill_processes_matching(pattern: str) -> int:
    """
    Best-effort SIGTERM of processes whose command line contains ``pattern``.

    Unrelated processes sharing the pattern are hit as well. The harness itself
    and its parent are never signalled. Returns the number of processes signalled.
    """
    if find_executable("pgrep") is None:
        print(f"   {constants.Emojis.WARNING}  pgrep not available, skipping process cleanup for '{pattern}'")
        return 0

    result = execute_command(["pgrep", "-f", pattern], timeout_seconds=constants.PROBE_TIMEOUT_SECONDS)
    if not result.succeeded:
        # pgrep exits 1 when nothing matched
        return 0

    protected = {os.getpid(), os.getppid()}
    signalled = 0
    for token in result.stdout.split():
        if not token.isdigit() or int(token) in protected:
            continue
        try:
            os.kill(int(token), signal.SIGTERM)
            signalled += 1
        except (ProcessLookupError, PermissionError):
            continue
    return signalled
