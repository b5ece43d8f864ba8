"""Vulkan Check - DXVK capability detection.

Probes every GPU with vulkaninfo and reports:
- the best DXVK tier of discrete and integrated GPUs
- whether the machine is iGPU-only, dGPU-only or mixed
- whether an Intel iGPU or an NVIDIA GPU is present
"""

from .version import VulkanVersion, decode_version, parse_version_string
from .config import DetectorConfig
from .probe import ProbeInvoker, ProbeOutcome, ProbeStatus
from .enumerator import RawArtifact, enumerate_adapters
from .schema import (
    DeviceType, NormalizedAdapterRecord, ParsedArtifact, SchemaShape, parse_artifact,
)
from .classifier import AdapterClassification, DxvkTier, classify, pessimistic_classification
from .aggregator import MachineSummary, aggregate, fold
from .checker import VulkanChecker, check_vulkan, classify_artifact, classify_reports

__all__ = [
    # Version decoding
    "VulkanVersion",
    "decode_version",
    "parse_version_string",
    # Probing
    "DetectorConfig",
    "ProbeInvoker",
    "ProbeOutcome",
    "ProbeStatus",
    "RawArtifact",
    "enumerate_adapters",
    # Parsing
    "DeviceType",
    "NormalizedAdapterRecord",
    "ParsedArtifact",
    "SchemaShape",
    "parse_artifact",
    # Classification
    "AdapterClassification",
    "DxvkTier",
    "classify",
    "pessimistic_classification",
    "MachineSummary",
    "aggregate",
    "fold",
    # Detection
    "VulkanChecker",
    "check_vulkan",
    "classify_artifact",
    "classify_reports",
]

__version__ = "0.1.0"
