#!/usr/bin/env python3
"""
Vulkan Check - Result Aggregator

Folds per-adapter classifications into one machine-wide summary.
"""

import logging
from dataclasses import asdict, dataclass, replace
from typing import Iterable, Tuple

from .classifier import AdapterClassification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MachineSummary:
    """Best DXVK tier per GPU class plus vendor flags.

    The default value (no adapters seen) is the identity of the fold.
    """

    discrete_tier: int = 0
    integrated_tier: int = 0
    integrated_only: bool = True
    discrete_only: bool = True
    has_intel_integrated: bool = False
    has_nvidia: bool = False

    @classmethod
    def failed(cls) -> "MachineSummary":
        """All-zero result meaning detection failed or found no Vulkan adapter."""
        return cls(integrated_only=False, discrete_only=False)

    @property
    def is_failure(self) -> bool:
        return self == MachineSummary.failed()

    def as_tuple(self) -> Tuple[int, int, bool, bool, bool, bool]:
        """(discrete tier, integrated tier, iGPU only, dGPU only, Intel iGPU, NVIDIA)."""
        return (
            self.discrete_tier,
            self.integrated_tier,
            self.integrated_only,
            self.discrete_only,
            self.has_intel_integrated,
            self.has_nvidia,
        )

    def to_dict(self) -> dict:
        return asdict(self)


def fold(summary: MachineSummary, classification: AdapterClassification) -> MachineSummary:
    """
    Add one adapter to ``summary``.

    Only a strictly higher tier replaces the current best for a class, so
    the first adapter seen at a tier keeps its vendor attribution.
    """
    tier = int(classification.tier)

    if classification.is_discrete:
        if tier > summary.discrete_tier:
            summary = replace(summary, discrete_tier=tier, integrated_only=False)
    elif tier > summary.integrated_tier:
        # Unknown device types count as integrated
        summary = replace(
            summary,
            integrated_tier=tier,
            discrete_only=False,
            has_intel_integrated=summary.has_intel_integrated or classification.is_intel_integrated,
        )

    if classification.is_nvidia:
        summary = replace(summary, has_nvidia=True)

    return summary


def aggregate(classifications: Iterable[AdapterClassification]) -> MachineSummary:
    """Fold all classifications, left to right, into a MachineSummary."""
    summary = MachineSummary()
    for classification in classifications:
        summary = fold(summary, classification)
    logger.debug(f"Machine summary: {summary}")
    return summary
