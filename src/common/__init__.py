"""
Vulkan Check Common Utilities

Shared error types, logging, notices and decorators.
"""

from .dialogs import show_notice
from .exceptions import (
    VulkanCheckError, DetectionError, ToolUnavailableError,
    ArtifactMissingError, ArtifactUnreadableError,
)
from .decorators import timed
from .logging_config import setup_logging, AdapterLogContext

__all__ = [
    # Dialogs
    "show_notice",
    # Exceptions
    "VulkanCheckError", "DetectionError", "ToolUnavailableError",
    "ArtifactMissingError", "ArtifactUnreadableError",
    # Decorators
    "timed",
    # Logging
    "setup_logging", "AdapterLogContext",
]
