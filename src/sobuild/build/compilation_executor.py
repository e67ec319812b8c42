"""Compiler and linker process execution.

This module runs the external compiler once per stale unit and once more to
link the shared library.

Design:
    - Every child is spawned with subprocess and waited on before continuing
    - Child output goes straight to the terminal
    - Non-zero exit or death by signal (a core dump implies one) is fatal
    - An optional per-process timeout kills the child's process tree and is
      reported as SubprocessTimeout, distinct from a failed exit
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence

import psutil

from .errors import SubprocessError, SubprocessTimeout
from .flag_builder import FlagBuilder
from .source_registry import SourceRegistry, SourceUnit

logger = logging.getLogger(__name__)


@dataclass
class ProcessStatus:
    """Combined exit status of a finished child process."""

    argv: List[str]
    returncode: int

    @property
    def signal(self) -> Optional[int]:
        """Terminating signal number, or None if the child exited."""
        if self.returncode < 0:
            return -self.returncode
        return None

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ProcessOrchestrator:
    """Spawns compile and link children one at a time and blocks on each."""

    def __init__(self, flag_builder: FlagBuilder, timeout: Optional[float] = None):
        """Initialize process orchestrator.

        Args:
            flag_builder: Builder producing compile and link argument vectors
            timeout: Seconds a single child may run (None waits forever)
        """
        self.flag_builder = flag_builder
        self.timeout = timeout

    def run(self, argv: Sequence[str]) -> ProcessStatus:
        """Run one external process to completion.

        Args:
            argv: Argument vector, executable first (looked up on PATH)

        Returns:
            ProcessStatus of the successful child

        Raises:
            SubprocessError: If the child cannot be spawned, exits non-zero
                or is killed by a signal
            SubprocessTimeout: If the child outlives the configured timeout
        """
        argv = [str(arg) for arg in argv]
        logger.debug(f"exec: {' '.join(argv)}")

        try:
            proc = subprocess.Popen(argv)
        except OSError as e:
            raise SubprocessError(f"{argv[0]}: {e.strerror or e}", argv=argv) from e

        try:
            returncode = proc.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            self._terminate_tree(proc)
            raise SubprocessTimeout(
                f"{argv[0]} timed out after {self.timeout}s",
                argv=argv,
                timeout=self.timeout,
            )
        except KeyboardInterrupt:
            self._terminate_tree(proc)
            raise

        status = ProcessStatus(argv=argv, returncode=returncode)
        if not status.success:
            if status.signal is not None:
                detail = f"killed by signal {status.signal}"
            else:
                detail = f"exit status {status.returncode}"
            raise SubprocessError(
                f"subprocess trouble, check output ({argv[0]}: {detail})",
                argv=argv,
                returncode=returncode,
            )
        return status

    def compile(self, unit: SourceUnit) -> ProcessStatus:
        """Compile one unit into its object file."""
        return self.run(self.flag_builder.compile_command(unit))

    def link(self, registry: SourceRegistry) -> ProcessStatus:
        """Link every registered object into the shared library."""
        return self.run(self.flag_builder.link_command(registry))

    @staticmethod
    def _terminate_tree(proc: subprocess.Popen) -> None:
        """Terminate a child and everything it spawned (cc1, as, ld, ...)."""
        try:
            root = psutil.Process(proc.pid)
            procs = root.children(recursive=True) + [root]
        except psutil.NoSuchProcess:
            procs = []

        for child in procs:
            try:
                child.terminate()
            except psutil.NoSuchProcess:
                pass

        _gone, alive = psutil.wait_procs(procs, timeout=3)
        for child in alive:
            try:
                child.kill()
                logger.warning(f"Force killed stubborn process {child.pid}")
            except psutil.NoSuchProcess:
                pass

        # Reap the direct child
        try:
            proc.wait(timeout=1)
        except subprocess.TimeoutExpired:
            logger.warning(f"Process {proc.pid} did not exit after kill")
