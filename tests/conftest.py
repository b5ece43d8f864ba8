"""
Pytest configuration and shared fixtures for vulkan-check tests.

Provides vulkaninfo report builders and doubles for the probing tool.
"""

import json
import os
import shutil
import pytest
from unittest.mock import MagicMock, patch
from pathlib import Path
from typing import Dict, List, Optional
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def _pack(major: int, minor: int, patch_level: int = 0) -> int:
    return (major << 22) | (minor << 12) | patch_level


def full_report(
    name: str = "NVIDIA GeForce RTX 3070",
    version: tuple = (1, 3),
    device_type: str = "VK_PHYSICAL_DEVICE_TYPE_DISCRETE_GPU",
    robustness2: bool = True,
    transform_feedback: bool = True,
    robust_buffer_access2: bool = True,
    null_descriptor: bool = True,
) -> Dict:
    """Build a report in vulkaninfo's full capability shape."""
    extensions = {}
    if robustness2:
        extensions["VK_EXT_robustness2"] = 1
    if transform_feedback:
        extensions["VK_EXT_transform_feedback"] = 1

    return {
        "$schema": "https://schema.khronos.org/vulkan/profiles-0.8-latest.json",
        "capabilities": {
            "device": {
                "properties": {
                    "VkPhysicalDeviceProperties": {
                        "deviceName": name,
                        "apiVersion": _pack(*version, 250),
                        "deviceType": device_type,
                    }
                }
            },
            "extensions": extensions,
            "features": {
                "VkPhysicalDeviceRobustness2FeaturesEXT": {
                    "robustBufferAccess2": robust_buffer_access2,
                    "nullDescriptor": null_descriptor,
                }
            },
        },
    }


def legacy_report(name: str = "Intel(R) HD Graphics 630", version: str = "1.1") -> Dict:
    """Build a report in the minimal shape old Intel drivers produce."""
    return {
        "comments": {
            "desc": "JSON configuration file describing GPU 0.",
            "vulkanApiVersion": version,
        },
        "VkPhysicalDeviceProperties": {
            "deviceName": name,
            "apiVersion": 4198400,
        },
    }


class FakeInvoker:
    """Scripted stand-in for ProbeInvoker.

    ``outcomes`` are returned in order; ``discarded`` records every
    index handed to discard().
    """

    def __init__(self, outcomes: List, config=None):
        from vulkan_check.config import DetectorConfig

        self.config = config or DetectorConfig()
        self._outcomes = list(outcomes)
        self.probed: List[int] = []
        self.discarded: List[int] = []

    def probe(self, index: int):
        self.probed.append(index)
        return self._outcomes[index]

    def discard(self, index: int) -> None:
        self.discarded.append(index)


def artifact(index: int, report: Optional[Dict] = None, text: Optional[str] = None):
    from vulkan_check.probe import ProbeOutcome, ProbeStatus

    if text is None:
        text = json.dumps(report if report is not None else full_report())
    return ProbeOutcome(ProbeStatus.ARTIFACT, index, raw=text)


def outcome(status_name: str, index: int):
    from vulkan_check.probe import ProbeOutcome, ProbeStatus

    return ProbeOutcome(ProbeStatus[status_name], index)


# ============ Fixtures ============

@pytest.fixture
def notifier() -> MagicMock:
    """Recording notifier standing in for the blocking dialog."""
    return MagicMock()


@pytest.fixture
def config(tmp_path: Path):
    """Detector config writing reports into a temporary directory."""
    from vulkan_check.config import DetectorConfig

    return DetectorConfig(work_dir=tmp_path, timeout=1.0)


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for tests."""
    with patch('subprocess.run') as mock_run:
        mock_run.return_value = MagicMock(
            returncode=0,
            stdout="",
            stderr="",
        )
        yield mock_run


@pytest.fixture
def restore_logging():
    """Keep root logger handlers intact across setup_logging() calls."""
    import logging

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ============ Marker Configuration ============

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "unit: fast unit tests with no external deps"
    )
    config.addinivalue_line(
        "markers", "integration: tests that run a fake probing tool"
    )
    config.addinivalue_line(
        "markers", "hardware: hardware-dependent tests"
    )


def pytest_collection_modifyitems(config, items):
    """Skip tests based on environment."""
    skip_hw = pytest.mark.skip(reason="Hardware tests disabled in CI")
    skip_tool = pytest.mark.skip(reason="vulkaninfo not installed")

    for item in items:
        if "hardware" in item.keywords:
            if os.environ.get("CI"):
                item.add_marker(skip_hw)
            elif shutil.which("vulkaninfo") is None:
                item.add_marker(skip_tool)
