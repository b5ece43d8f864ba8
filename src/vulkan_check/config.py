"""
Vulkan Check - Detector configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class DetectorConfig:
    """Settings for one detection run."""

    tool: str = "vulkaninfo"                    # Probing tool binary
    timeout: float = 10.0                       # Seconds to wait per invocation
    work_dir: Path = field(default_factory=Path.cwd)
    artifact_template: str = "data{index}.json"
    no_adapter_marker: str = "The selected gpu"  # Printed by vulkaninfo for a bad --json index
    max_adapters: int = 16

    def artifact_path(self, index: int) -> Path:
        """Return the JSON report path for an adapter index."""
        return Path(self.work_dir) / self.artifact_template.format(index=index)
