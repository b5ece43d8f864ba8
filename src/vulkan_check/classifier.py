#!/usr/bin/env python3
"""
Vulkan Check - Capability Classifier

Decides which DXVK tier an adapter supports:

- tier 2 (DXVK 2.x) needs VK_EXT_robustness2 and VK_EXT_transform_feedback
  plus the robustBufferAccess2 and nullDescriptor features,
- tier 1 (legacy DXVK 1.x) needs Vulkan 1.1 or 1.2,
- tier 0 otherwise.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum

from .schema import LEGACY_INTEL_MARKER, DeviceType, NormalizedAdapterRecord, SchemaShape

logger = logging.getLogger(__name__)


class DxvkTier(IntEnum):
    """DXVK support level."""

    NONE = 0
    LEGACY = 1
    MODERN = 2


@dataclass(frozen=True)
class AdapterClassification:
    """Tier and vendor flags for one adapter."""

    tier: DxvkTier
    is_discrete: bool = False
    is_intel_integrated: bool = False
    is_nvidia: bool = False


def pessimistic_classification() -> AdapterClassification:
    """Stand-in for an adapter whose report could not be understood.

    Assumes an Intel iGPU with outdated drivers that only runs legacy DXVK.
    """
    return AdapterClassification(tier=DxvkTier.LEGACY, is_intel_integrated=True)


def supports_modern(record: NormalizedAdapterRecord) -> bool:
    return (
        record.has_robustness2_ext
        and record.has_transform_feedback_ext
        and record.robust_buffer_access2
        and record.null_descriptor
    )


def supports_legacy(record: NormalizedAdapterRecord) -> bool:
    return record.version.major == 1 and 1 <= record.version.minor < 3


def tier_for(record: NormalizedAdapterRecord) -> DxvkTier:
    if supports_modern(record):
        return DxvkTier.MODERN
    if supports_legacy(record):
        return DxvkTier.LEGACY
    return DxvkTier.NONE


def classify(record: NormalizedAdapterRecord) -> AdapterClassification:
    """Classify a normalized adapter record."""
    tier = tier_for(record)
    name = record.device_name

    if record.shape is SchemaShape.LEGACY:
        is_intel = LEGACY_INTEL_MARKER in name
    else:
        is_intel = "Intel" in name

    classification = AdapterClassification(
        tier=tier,
        is_discrete=record.device_type is DeviceType.DISCRETE,
        is_intel_integrated=is_intel,
        is_nvidia="nvidia" in name.lower(),
    )

    if tier is DxvkTier.MODERN:
        logger.info(f"{name} supports DXVK 2.x, yay!")
    elif tier is DxvkTier.LEGACY:
        logger.info(f"{name} supports Legacy DXVK 1.x.")
    else:
        logger.info(f"{name} doesn't support DXVK or has outdated drivers.")
    if classification.is_nvidia:
        logger.info(f"{name} is an NVIDIA GPU.")

    return classification
