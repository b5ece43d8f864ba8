#!/usr/bin/env python3
"""
Vulkan Check - Adapter Enumerator

Probes adapter indices 0, 1, 2, ... until vulkaninfo reports that the
index does not exist. A failure on GPU0 means the machine has no usable
Vulkan adapter; a failure on a later index just ends the list.
"""

import logging
from dataclasses import dataclass
from typing import List

from common.exceptions import ArtifactMissingError, ToolUnavailableError
from common.logging_config import AdapterLogContext

from .probe import ProbeInvoker, ProbeStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawArtifact:
    """JSON report text produced for one adapter index."""

    index: int
    text: str


def enumerate_adapters(invoker: ProbeInvoker, max_adapters: int = 16) -> List[RawArtifact]:
    """
    Collect one raw report per adapter.

    Every report file is deleted right after it is read, whatever the outcome.

    Raises:
        ToolUnavailableError: If the tool cannot be started for GPU0.
        ArtifactMissingError: If no report is produced for GPU0.
    """
    artifacts: List[RawArtifact] = []

    for index in range(max_adapters):
        with AdapterLogContext(index):
            logger.debug(f"Running {invoker.config.tool} on GPU{index}...")
            try:
                outcome = invoker.probe(index)
            finally:
                invoker.discard(index)

            if outcome.has_artifact:
                artifacts.append(RawArtifact(index=index, text=outcome.raw))
                continue

            if outcome.status is ProbeStatus.NO_SUCH_ADAPTER:
                break

            if index == 0:
                if outcome.status is ProbeStatus.TOOL_UNAVAILABLE:
                    raise ToolUnavailableError(invoker.config.tool, index, cause=outcome.error)
                raise ArtifactMissingError(str(invoker.config.artifact_path(index)), index)

            logger.warning(
                f"Probing GPU{index} ended with {outcome.status.value}, "
                f"keeping the {len(artifacts)} adapter(s) found so far"
            )
            break
    else:
        logger.warning(f"Stopped probing after {max_adapters} adapters")

    logger.debug(f"Found {len(artifacts)} adapter report(s)")
    return artifacts
