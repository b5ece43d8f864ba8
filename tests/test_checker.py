"""
Tests for Vulkan Check - Detection routine

End-to-end scenarios with a scripted probing tool.
"""

import json
from unittest.mock import patch

import pytest

from vulkan_check.aggregator import MachineSummary
from vulkan_check.checker import (
    NO_VULKAN_NOTICE, UNREADABLE_NOTICE, UNRECOGNIZED_NOTICE,
    VulkanChecker, check_vulkan, classify_artifact, classify_reports,
)
from vulkan_check.classifier import DxvkTier
from vulkan_check.enumerator import RawArtifact

from conftest import FakeInvoker, artifact, full_report, legacy_report, outcome


def _check(outcomes, notifier):
    return VulkanChecker(invoker=FakeInvoker(outcomes), notifier=notifier).check()


class TestScenarios:
    """Whole-machine detection scenarios."""

    def test_single_discrete_nvidia(self, notifier):
        summary = _check([
            artifact(0, full_report(name="NVIDIA GeForce RTX 3070", version=(1, 3))),
            outcome("NO_SUCH_ADAPTER", 1),
        ], notifier)

        assert summary == MachineSummary(
            discrete_tier=2,
            integrated_tier=0,
            integrated_only=False,
            discrete_only=True,
            has_intel_integrated=False,
            has_nvidia=True,
        )
        notifier.assert_not_called()

    def test_single_legacy_intel_igpu(self, notifier):
        summary = _check([
            artifact(0, legacy_report("Intel(R) HD Graphics 630", "1.1")),
            outcome("NO_SUCH_ADAPTER", 1),
        ], notifier)

        assert summary == MachineSummary(
            discrete_tier=0,
            integrated_tier=1,
            integrated_only=True,
            discrete_only=False,
            has_intel_integrated=True,
            has_nvidia=False,
        )

    def test_laptop_with_intel_and_nvidia(self, notifier):
        summary = _check([
            artifact(0, full_report(
                name="Intel(R) UHD Graphics 630",
                version=(1, 2),
                device_type="VK_PHYSICAL_DEVICE_TYPE_INTEGRATED_GPU",
                robustness2=False,
            )),
            artifact(1, full_report(name="NVIDIA GeForce GTX 1650", version=(1, 3))),
            outcome("NO_SUCH_ADAPTER", 2),
        ], notifier)

        assert summary.as_tuple() == (2, 1, False, False, True, True)

    def test_tool_unavailable_at_first_adapter(self, notifier):
        summary = _check([outcome("TOOL_UNAVAILABLE", 0)], notifier)

        assert summary.as_tuple() == (0, 0, False, False, False, False)
        assert summary.is_failure
        notifier.assert_called_once()
        assert notifier.call_args[0][1] == NO_VULKAN_NOTICE

    def test_missing_report_at_first_adapter(self, notifier):
        summary = _check([outcome("ARTIFACT_MISSING", 0)], notifier)

        assert summary.is_failure
        notifier.assert_called_once()

    def test_missing_report_at_later_adapter_keeps_earlier(self, notifier):
        summary = _check([
            artifact(0, full_report()),
            outcome("ARTIFACT_MISSING", 1),
        ], notifier)

        assert summary.discrete_tier == 2
        notifier.assert_not_called()

    def test_unreadable_report_fails_everything(self, notifier):
        summary = _check([
            artifact(0, full_report()),
            artifact(1, text="{broken"),
            outcome("NO_SUCH_ADAPTER", 2),
        ], notifier)

        assert summary.is_failure
        notifier.assert_called_once()
        assert notifier.call_args[0][1] == UNREADABLE_NOTICE

    def test_unrecognized_report_assumes_old_intel_igpu(self, notifier):
        summary = _check([
            artifact(0, {"something": "else"}),
            outcome("NO_SUCH_ADAPTER", 1),
        ], notifier)

        assert summary.as_tuple() == (0, 1, True, False, True, False)
        notifier.assert_called_once()
        assert notifier.call_args[0][1] == UNRECOGNIZED_NOTICE

    def test_unrecognized_report_does_not_hide_other_adapters(self, notifier):
        summary = _check([
            artifact(0, {"something": "else"}),
            artifact(1, full_report(name="AMD Radeon RX 6600")),
            outcome("NO_SUCH_ADAPTER", 2),
        ], notifier)

        assert summary.as_tuple() == (2, 1, False, False, True, False)

    def test_no_adapters(self, notifier):
        summary = _check([outcome("NO_SUCH_ADAPTER", 0)], notifier)

        assert summary == MachineSummary()
        notifier.assert_not_called()

    def test_default_notifier_is_dialog(self):
        with patch("vulkan_check.checker.show_notice") as show_notice:
            checker = VulkanChecker(invoker=FakeInvoker([outcome("TOOL_UNAVAILABLE", 0)]))
            checker.check()

        show_notice.assert_called_once()


class TestCheckVulkan:
    """Tests for the tuple-returning entry point."""

    def test_tool_missing_returns_zero_tuple(self, config, notifier, mock_subprocess):
        mock_subprocess.side_effect = FileNotFoundError("vulkaninfo")

        result = check_vulkan(config=config, notifier=notifier)

        assert result == (0, 0, False, False, False, False)
        notifier.assert_called_once()

    def test_reports_are_removed(self, config, notifier, mock_subprocess):
        from pathlib import Path
        from unittest.mock import MagicMock

        def run(command, **kwargs):
            index = int(command[1].split("=")[1])
            if index == 0:
                Path(command[-1]).write_text(json.dumps(full_report()))
                return MagicMock(returncode=0, stdout="", stderr="")
            return MagicMock(returncode=1, stdout="The selected gpu (1) is not a valid GPU index.", stderr="")
        mock_subprocess.side_effect = run

        result = check_vulkan(config=config, notifier=notifier)

        assert result == (2, 0, False, True, False, True)
        assert list(config.work_dir.iterdir()) == []


class TestClassifyReports:
    """Tests for classifying saved reports."""

    def test_saved_reports(self):
        summary = classify_reports([
            json.dumps(legacy_report()),
            json.dumps(full_report(name="NVIDIA GeForce GTX 970")),
        ])

        assert summary.as_tuple() == (2, 1, False, False, True, True)

    def test_unrecognized_without_notifier(self):
        result = classify_artifact(RawArtifact(index=0, text="{}"))

        assert result.tier is DxvkTier.LEGACY
        assert result.is_intel_integrated
