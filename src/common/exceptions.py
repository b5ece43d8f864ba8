"""
Vulkan Check Exception Hierarchy

Provides clear, actionable error messages with structured information
for logging, user feedback, and programmatic error handling.
"""

from typing import Optional, Dict, Any


class VulkanCheckError(Exception):
    """
    Base exception for all vulkan-check errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context as key-value pairs
        cause: Original exception that caused this error
        recoverable: Whether the error is recoverable
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable

    def __str__(self):
        s = f"[{self.code}] {self.message}"
        if self.details:
            s += f" (details: {self.details})"
        if self.cause:
            s += f" caused by: {self.cause}"
        return s

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# Detection errors
# =============================================================================

class DetectionError(VulkanCheckError):
    """Base for errors that abort a whole detection run."""
    pass


class ToolUnavailableError(DetectionError):
    """The probing tool could not be started."""
    def __init__(self, tool: str, index: int, cause: Optional[Exception] = None):
        super().__init__(
            f"Could not run '{tool}' for GPU{index}",
            code="TOOL_UNAVAILABLE",
            details={"tool": tool, "index": index},
            cause=cause,
            recoverable=False,
        )


class ArtifactMissingError(DetectionError):
    """The probing tool ran twice without writing its JSON report."""
    def __init__(self, path: str, index: int):
        super().__init__(
            f"No JSON report was written for GPU{index}",
            code="ARTIFACT_MISSING",
            details={"path": path, "index": index},
            recoverable=False,
        )


class ArtifactUnreadableError(DetectionError):
    """The JSON report is not valid JSON."""
    def __init__(self, index: int, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to read the JSON report for GPU{index}: {reason}",
            code="ARTIFACT_UNREADABLE",
            details={"index": index, "reason": reason},
            cause=cause,
            recoverable=False,
        )
