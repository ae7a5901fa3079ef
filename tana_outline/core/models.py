"""Data classes for configuration and results."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .exceptions import InvalidPathError


@dataclass
class ConversionSettings:
    """Input and output locations for a conversion run."""
    json_path: Path
    output_dir: Path

    def __post_init__(self):
        self.json_path = Path(self.json_path)
        self.output_dir = Path(self.output_dir)

    def check_input(self):
        """Ensure the export is an existing, readable .json file."""
        if not self.json_path.exists():
            raise InvalidPathError(f"File not found: {self.json_path}")

        if not self.json_path.is_file() or self.json_path.suffix != '.json':
            raise InvalidPathError("Input file must be '.json'")

        if not os.access(self.json_path, os.R_OK):
            raise InvalidPathError(f"Permission denied: {self.json_path}")

    def check_output(self):
        """Ensure the output is an extension-less path to a missing or empty directory."""
        if self.output_dir.suffix:
            raise InvalidPathError("Output must be an empty directory")

        if self.output_dir.exists():
            if not self.output_dir.is_dir() or any(self.output_dir.iterdir()):
                raise InvalidPathError("Output must be an empty directory")

    def validate(self):
        """Run all path checks. Raises InvalidPathError on the first failure."""
        self.check_input()
        self.check_output()


@dataclass
class ConversionProgress:
    """Progress update sent to the CLI or GUI."""
    phase: str  # e.g., "Loading", "Building nodes", "Writing"
    current: int = 0
    total: int = 0
    message: str = ""


@dataclass
class ConversionResult:
    """Final result of conversion."""
    success: bool
    nodes_count: int = 0
    blocks_count: int = 0
    pages_written: int = 0
    elapsed_seconds: float = 0.0
    error_message: str = ""
    page_files: List[str] = field(default_factory=list)  # names of the written pages
