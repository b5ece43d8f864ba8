#!/usr/bin/env python3
"""
Vulkan Check - Detection routine

Runs Enumerator -> Parser -> Classifier -> Aggregator once and returns a
MachineSummary. Failures that leave nothing to go on (vulkaninfo missing,
no report for GPU0, a report that is not JSON) return the all-zero summary
after a blocking notice. A report in an unknown shape only costs that one
adapter, which is then assumed to be an old Intel iGPU.
"""

import logging
from typing import Callable, List, Optional, Tuple

from common.decorators import timed
from common.dialogs import show_notice
from common.exceptions import ArtifactUnreadableError, DetectionError
from common.logging_config import AdapterLogContext

from .aggregator import MachineSummary, aggregate
from .classifier import AdapterClassification, classify, pessimistic_classification
from .config import DetectorConfig
from .enumerator import RawArtifact, enumerate_adapters
from .probe import ProbeInvoker
from .schema import SchemaShape, parse_artifact

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

NOTICE_TITLE = "Vulkan check"

DRIVER_HINT = (
    "Make sure your drivers are up-to-date - don't rely on Windows Update drivers, either."
)

NO_VULKAN_NOTICE = (
    "The vulkaninfo check failed. This usually means your GPU does not support Vulkan. "
    f"{DRIVER_HINT} DXVK is not available."
)

UNREADABLE_NOTICE = (
    f"Failed to read the json. {DRIVER_HINT}\n\n"
    "The app will proceed assuming you have no support for DXVK, but that may not be the case."
)

UNRECOGNIZED_NOTICE = (
    f"Failed to read the json. {DRIVER_HINT}\n\n"
    "The app will proceed assuming you have an Intel iGPU with outdated drivers, "
    "but that may not be the case."
)


class VulkanChecker:
    """One-shot DXVK capability detection for every GPU on the machine."""

    def __init__(
        self,
        config: Optional[DetectorConfig] = None,
        invoker: Optional[ProbeInvoker] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.config = config or DetectorConfig()
        self.invoker = invoker or ProbeInvoker(self.config)
        self.notifier = notifier or show_notice

    @timed
    def check(self) -> MachineSummary:
        """Detect DXVK support for all adapters."""
        try:
            artifacts = enumerate_adapters(self.invoker, self.config.max_adapters)
            logger.debug("Analyzing the vulkaninfo report of every GPU...")
            classifications = [
                classify_artifact(artifact, self.notifier) for artifact in artifacts
            ]
        except DetectionError as e:
            logger.error(f"Vulkan detection failed: {e}")
            if isinstance(e, ArtifactUnreadableError):
                self.notifier(NOTICE_TITLE, UNREADABLE_NOTICE)
            else:
                self.notifier(NOTICE_TITLE, NO_VULKAN_NOTICE)
            return MachineSummary.failed()

        return aggregate(classifications)


def check_vulkan(
    config: Optional[DetectorConfig] = None,
    notifier: Optional[Notifier] = None,
) -> Tuple[int, int, bool, bool, bool, bool]:
    """
    Run a detection and return the setup tool's tuple:
    (dGPU tier, iGPU tier, iGPU only, dGPU only, Intel iGPU, NVIDIA).
    """
    return VulkanChecker(config=config, notifier=notifier).check().as_tuple()


def classify_reports(reports: List[str]) -> MachineSummary:
    """Classify already captured vulkaninfo JSON reports, in adapter order.

    Raises:
        ArtifactUnreadableError: If a report is not valid JSON.
    """
    return aggregate(
        classify_artifact(RawArtifact(index=index, text=text))
        for index, text in enumerate(reports)
    )


def classify_artifact(
    artifact: RawArtifact,
    notifier: Optional[Notifier] = None,
) -> AdapterClassification:
    """
    Parse and classify one report.

    An unrecognized report yields the pessimistic Intel iGPU classification
    and, when ``notifier`` is given, a notice.

    Raises:
        ArtifactUnreadableError: If the report is not valid JSON.
    """
    with AdapterLogContext(artifact.index):
        parsed = parse_artifact(artifact)

        if parsed.shape is SchemaShape.UNRECOGNIZED:
            logger.error(
                f"Failed to read the report for GPU{artifact.index} ({parsed.reason}). "
                "Assuming an Intel iGPU with outdated drivers."
            )
            if notifier is not None:
                notifier(NOTICE_TITLE, UNRECOGNIZED_NOTICE)
            return pessimistic_classification()

        return classify(parsed.record)
