#!/usr/bin/env python3
"""
Vulkan Check - Probe Invoker

Runs vulkaninfo once per adapter index and collects the JSON report it
writes. This is the only module that touches processes or the file system.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .config import DetectorConfig

logger = logging.getLogger(__name__)


class ProbeStatus(Enum):
    """Result kinds of a single probe."""

    ARTIFACT = "artifact"
    NO_SUCH_ADAPTER = "no_such_adapter"
    TOOL_UNAVAILABLE = "tool_unavailable"
    ARTIFACT_MISSING = "artifact_missing"


@dataclass
class ProbeOutcome:
    """Outcome of probing one adapter index."""

    status: ProbeStatus
    index: int
    raw: Optional[str] = None    # JSON report text, only for ARTIFACT
    error: Optional[OSError] = None

    @property
    def has_artifact(self) -> bool:
        return self.status is ProbeStatus.ARTIFACT


class ProbeInvoker:
    """Runs the probing tool for one adapter index at a time."""

    def __init__(self, config: Optional[DetectorConfig] = None):
        self.config = config or DetectorConfig()

    def probe(self, index: int) -> ProbeOutcome:
        """
        Probe adapter ``index``.

        The tool sometimes exits non-zero after writing a valid report, so
        the report file decides success, not the exit status.
        """
        path = self.config.artifact_path(index)
        path.unlink(missing_ok=True)

        command = [self.config.tool, f"--json={index}", "--output", str(path)]
        try:
            output, returncode = self._run(command, path)
        except OSError as e:
            logger.error(f"Running {self.config.tool} on GPU{index} failed: {e}")
            return ProbeOutcome(ProbeStatus.TOOL_UNAVAILABLE, index, error=e)

        if self._is_no_such_adapter(output, returncode):
            logger.debug(f"GPU{index} doesn't exist, moving on")
            return ProbeOutcome(ProbeStatus.NO_SUCH_ADAPTER, index)

        if not self._artifact_present(path):
            logger.debug(f"No report for GPU{index} after the first attempt, retrying with redirected output")
            try:
                output, returncode = self._run(
                    [self.config.tool, f"--json={index}"], path, redirect=True
                )
            except OSError as e:
                logger.error(f"Running {self.config.tool} on GPU{index} failed: {e}")
                return ProbeOutcome(ProbeStatus.TOOL_UNAVAILABLE, index, error=e)

            if self._is_no_such_adapter(output, returncode):
                logger.debug(f"GPU{index} doesn't exist, moving on")
                return ProbeOutcome(ProbeStatus.NO_SUCH_ADAPTER, index)

            if not self._artifact_present(path):
                return ProbeOutcome(ProbeStatus.ARTIFACT_MISSING, index)

        raw = path.read_text(encoding="utf-8", errors="replace")
        return ProbeOutcome(ProbeStatus.ARTIFACT, index, raw=raw)

    def discard(self, index: int) -> None:
        """Delete the report file for ``index`` if one exists."""
        path = self.config.artifact_path(index)
        if path.exists():
            logger.debug(f"Removing {path.name}...")
        path.unlink(missing_ok=True)

    def _is_no_such_adapter(self, output: str, returncode: Optional[int]) -> bool:
        return returncode not in (0, None) and self.config.no_adapter_marker in output

    def _artifact_present(self, path: Path) -> bool:
        return path.is_file() and path.stat().st_size > 0

    def _run(
        self,
        command: List[str],
        report: Path,
        redirect: bool = False,
    ) -> Tuple[str, Optional[int]]:
        """
        Run ``command`` with a bounded wait.

        Returns the combined stdout/stderr text and the exit status. When
        ``redirect`` is set, stdout goes into ``report`` and is read back
        after the run.
        A timed-out run returns ("", None) and leaves no report behind.

        Raises:
            OSError: If the tool cannot be started.
        """
        try:
            if not redirect:
                result = subprocess.run(
                    command,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    errors="replace",
                    cwd=self.config.work_dir,
                    timeout=self.config.timeout,
                )
                return result.stdout or "", result.returncode

            with open(report, "w", encoding="utf-8") as f:
                result = subprocess.run(
                    command,
                    stdout=f,
                    stderr=subprocess.PIPE,
                    text=True,
                    errors="replace",
                    cwd=self.config.work_dir,
                    timeout=self.config.timeout,
                )
            output = (result.stderr or "") + report.read_text(encoding="utf-8", errors="replace")
            return output, result.returncode

        except subprocess.TimeoutExpired:
            logger.warning(
                f"{command[0]} did not finish within {self.config.timeout}s, ignoring its output"
            )
            report.unlink(missing_ok=True)
            return "", None
