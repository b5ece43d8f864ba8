#!/usr/bin/env python3
"""
Vulkan Check - Version Decoding

Vulkan packs its API version into a single 32-bit integer:
bits 31-22 hold the major version, bits 21-12 the minor version.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class VulkanVersion:
    """Major/minor Vulkan API version."""

    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def decode_version(packed: int) -> VulkanVersion:
    """Decode a packed Vulkan API version integer."""
    packed &= 0xFFFFFFFF
    return VulkanVersion(major=packed >> 22, minor=(packed >> 12) & 0x3FF)


def parse_version_string(text: str) -> VulkanVersion:
    """
    Parse a dotted version string such as "1.1" or "1.1.70".

    Raises:
        ValueError: If the first two components are not integers.
    """
    parts = str(text).strip().split(".")
    if len(parts) < 2:
        raise ValueError(f"Not a dotted version string: {text!r}")
    return VulkanVersion(major=int(parts[0]), minor=int(parts[1]))
