#!/usr/bin/env python3
"""
Vulkan Check - Schema Parser

vulkaninfo's JSON output comes in two incompatible shapes:

- the full capability report, with everything under a top-level
  "capabilities" object, and
- a minimal legacy report seen on older Intel iGPU drivers, with
  "VkPhysicalDeviceProperties" at the top level and the API version as a
  dotted string under "comments".

Both are normalized into a NormalizedAdapterRecord so nothing downstream
needs to know which shape the driver produced.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from common.exceptions import ArtifactUnreadableError

from .enumerator import RawArtifact
from .version import VulkanVersion, decode_version, parse_version_string

logger = logging.getLogger(__name__)

ROBUSTNESS2_EXT = "VK_EXT_robustness2"
TRANSFORM_FEEDBACK_EXT = "VK_EXT_transform_feedback"
ROBUSTNESS2_FEATURES = "VkPhysicalDeviceRobustness2FeaturesEXT"

# Legacy reports only come from old Intel iGPU drivers
LEGACY_INTEL_MARKER = "HD Graphics"


class SchemaShape(Enum):
    """Which report shape an artifact matched."""

    FULL = "full"
    LEGACY = "legacy"
    UNRECOGNIZED = "unrecognized"


class DeviceType(Enum):
    """Physical device type as far as tiering cares."""

    DISCRETE = "discrete"
    INTEGRATED = "integrated"
    UNKNOWN = "unknown"

    @classmethod
    def from_vulkan(cls, value: Any) -> "DeviceType":
        return {
            "VK_PHYSICAL_DEVICE_TYPE_DISCRETE_GPU": cls.DISCRETE,
            "VK_PHYSICAL_DEVICE_TYPE_INTEGRATED_GPU": cls.INTEGRATED,
        }.get(value, cls.UNKNOWN)


@dataclass(frozen=True)
class NormalizedAdapterRecord:
    """Shape-independent view of one adapter."""

    device_name: str
    version: VulkanVersion
    device_type: DeviceType
    has_robustness2_ext: bool = False
    has_transform_feedback_ext: bool = False
    robust_buffer_access2: bool = False
    null_descriptor: bool = False
    shape: SchemaShape = SchemaShape.FULL


@dataclass(frozen=True)
class ParsedArtifact:
    """Parser result: a record for FULL/LEGACY, a reason for UNRECOGNIZED."""

    index: int
    shape: SchemaShape
    record: Optional[NormalizedAdapterRecord] = None
    reason: str = ""


class _Malformed(Exception):
    """A recognized shape with fields of the wrong kind."""


def parse_artifact(artifact: RawArtifact) -> ParsedArtifact:
    """
    Parse one raw report.

    Raises:
        ArtifactUnreadableError: If the report is not valid JSON.
    """
    try:
        root = json.loads(artifact.text)
    except json.JSONDecodeError as e:
        raise ArtifactUnreadableError(artifact.index, str(e), cause=e) from e

    if not isinstance(root, dict):
        return _unrecognized(artifact.index, "top-level JSON value is not an object")

    try:
        if isinstance(root.get("capabilities"), dict):
            record = _parse_full(root["capabilities"])
        elif isinstance(root.get("VkPhysicalDeviceProperties"), dict):
            logger.debug(
                f"GPU{artifact.index} has no capabilities section, "
                "likely an Intel iGPU. Reading the legacy report..."
            )
            record = _parse_legacy(root)
        else:
            return _unrecognized(artifact.index, "neither capabilities nor VkPhysicalDeviceProperties present")
    except _Malformed as e:
        return _unrecognized(artifact.index, str(e))

    logger.info(f"{record.device_name}'s supported Vulkan version is: {record.version}")
    return ParsedArtifact(index=artifact.index, shape=record.shape, record=record)


def _unrecognized(index: int, reason: str) -> ParsedArtifact:
    logger.debug(f"GPU{index} report not recognized: {reason}")
    return ParsedArtifact(index=index, shape=SchemaShape.UNRECOGNIZED, reason=reason)


def _object(parent: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = parent.get(key)
    if not isinstance(value, dict):
        raise _Malformed(f"'{key}' is missing or not an object")
    return value


def _device_name(properties: Dict[str, Any]) -> str:
    name = properties.get("deviceName")
    if not isinstance(name, str):
        raise _Malformed("'deviceName' is missing or not a string")
    return name


def _parse_full(capabilities: Dict[str, Any]) -> NormalizedAdapterRecord:
    properties = _object(_object(_object(capabilities, "device"), "properties"), "VkPhysicalDeviceProperties")
    name = _device_name(properties)

    api_version = properties.get("apiVersion")
    if isinstance(api_version, int) and not isinstance(api_version, bool):
        version = decode_version(api_version)
    elif isinstance(api_version, str):
        # Newer vulkaninfo builds print "1.3.250" instead of the packed integer
        try:
            version = parse_version_string(api_version)
        except ValueError as e:
            raise _Malformed(str(e)) from e
    else:
        raise _Malformed("'apiVersion' is missing or not a number")

    extensions = capabilities.get("extensions")
    if not isinstance(extensions, dict):
        extensions = {}
    features = capabilities.get("features")
    robustness2 = features.get(ROBUSTNESS2_FEATURES) if isinstance(features, dict) else None
    if not isinstance(robustness2, dict):
        robustness2 = {}

    return NormalizedAdapterRecord(
        device_name=name,
        version=version,
        device_type=DeviceType.from_vulkan(properties.get("deviceType")),
        has_robustness2_ext=ROBUSTNESS2_EXT in extensions,
        has_transform_feedback_ext=TRANSFORM_FEEDBACK_EXT in extensions,
        robust_buffer_access2=robustness2.get("robustBufferAccess2") is True,
        null_descriptor=robustness2.get("nullDescriptor") is True,
        shape=SchemaShape.FULL,
    )


def _parse_legacy(root: Dict[str, Any]) -> NormalizedAdapterRecord:
    name = _device_name(root["VkPhysicalDeviceProperties"])

    version_value = _object(root, "comments").get("vulkanApiVersion")
    if isinstance(version_value, bool) or not isinstance(version_value, (str, int, float)):
        raise _Malformed("'comments.vulkanApiVersion' is missing or not a version")
    try:
        version = parse_version_string(str(version_value))
    except ValueError as e:
        raise _Malformed(str(e)) from e

    if LEGACY_INTEL_MARKER in name:
        device_type = DeviceType.INTEGRATED
    else:
        device_type = DeviceType.UNKNOWN

    return NormalizedAdapterRecord(
        device_name=name,
        version=version,
        device_type=device_type,
        shape=SchemaShape.LEGACY,
    )
