#!/usr/bin/env python3
"""
Vulkan Check - Command Line Interface

Runs one detection and prints the result.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from common.exceptions import ArtifactUnreadableError
from common.logging_config import setup_logging

from .aggregator import MachineSummary
from .checker import VulkanChecker, classify_reports
from .config import DetectorConfig

TIER_LABELS = {
    0: "no DXVK",
    1: "Legacy DXVK 1.x",
    2: "DXVK 2.x",
}


def print_summary(summary: MachineSummary) -> None:
    """Print a human-readable summary of the detection."""
    print("=== Vulkan Check ===\n")

    if summary.is_failure:
        print("❌ No Vulkan-capable GPU detected, DXVK is not available")
        return

    if summary.discrete_tier == 0 and summary.integrated_tier == 0:
        print("⚠️  No Vulkan adapter with DXVK support found")
        return

    if summary.integrated_only:
        layout = "💻 Integrated GPU only"
    elif summary.discrete_only:
        layout = "🎮 Discrete GPU only"
    else:
        layout = "🖥️  Integrated + discrete GPUs"
    print(layout)
    print(f"  Discrete GPU:   {TIER_LABELS[summary.discrete_tier]}")
    print(f"  Integrated GPU: {TIER_LABELS[summary.integrated_tier]}")
    if summary.has_intel_integrated:
        print("  Intel iGPU present")
    if summary.has_nvidia:
        print("  NVIDIA GPU present")


def build_parser() -> argparse.ArgumentParser:
    defaults = DetectorConfig()
    parser = argparse.ArgumentParser(
        description="Detect DXVK support of every GPU using vulkaninfo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vulkan-check                          # Probe all GPUs
  vulkan-check --json                   # Print the summary as JSON
  vulkan-check --tuple                  # Print the setup tool's tuple
  vulkan-check --report data0.json      # Classify saved vulkaninfo reports
        """
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    output.add_argument("--tuple", action="store_true", help="Output the six-value result tuple")

    parser.add_argument("--report", type=Path, nargs="+", metavar="FILE",
                        help="Classify saved vulkaninfo JSON reports instead of probing")
    parser.add_argument("--tool", default=defaults.tool, help="Probing tool binary")
    parser.add_argument("--timeout", type=float, default=defaults.timeout,
                        help="Seconds to wait for each vulkaninfo run")
    parser.add_argument("--work-dir", type=Path, default=None,
                        help="Directory for temporary reports (default: current directory)")
    parser.add_argument("--max-adapters", type=int, default=defaults.max_adapters,
                        help="Highest number of GPU indices to probe")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", type=Path, help="Also log to this file")
    parser.add_argument("--json-logs", action="store_true", help="Write the log file as JSON lines")
    return parser


def main(argv=None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
        json_logs=args.json_logs,
    )

    if args.report:
        try:
            summary = classify_reports([path.read_text(encoding="utf-8") for path in args.report])
        except (OSError, ArtifactUnreadableError) as e:
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)
    else:
        config = DetectorConfig(
            tool=args.tool,
            timeout=args.timeout,
            max_adapters=args.max_adapters,
        )
        if args.work_dir is not None:
            config.work_dir = args.work_dir
        summary = VulkanChecker(config).check()

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    elif args.tuple:
        print(" ".join(str(v) for v in summary.as_tuple()))
    else:
        print_summary(summary)

    sys.exit(1 if summary.is_failure else 0)


if __name__ == "__main__":
    main()
