"""
Tana to Outline Converter

Converts a Tana JSON export to a folder of outline pages.
- Tagged nodes and nodes with fields -> one <title>.md page each
- Other nodes -> nested bullets inside the page that contains them
- Inline references -> [[links]]
- Fields and descriptions -> a "Metadata" bullet
"""

import time
from typing import Callable, Optional

from .block_builder import BlockBuilder
from .exceptions import ConversionError
from .models import ConversionSettings, ConversionProgress, ConversionResult
from .node_builder import NodeBuilder


class TanaToOutline:
    def __init__(
        self,
        settings: ConversionSettings,
        progress_callback: Optional[Callable[[ConversionProgress], None]] = None
    ):
        self.settings = settings
        self.progress_callback = progress_callback

        self.json_path = settings.json_path
        self.output_dir = settings.output_dir

        self.node_builder = NodeBuilder(progress_callback)
        self.block_builder = BlockBuilder(self.node_builder, progress_callback)

    def report_progress(self, phase: str, current: int = 0, total: int = 0, message: str = ""):
        """Send progress update to CLI or GUI."""
        if self.progress_callback:
            self.progress_callback(ConversionProgress(phase, current, total, message))

    def run(self) -> ConversionResult:
        """Main export process with progress reporting."""
        start = time.perf_counter()

        try:
            # Phase 0: Check paths before touching the graph
            self.report_progress("Validating", message="Checking input and output paths...")
            self.settings.validate()

            # Phase 1: Entity graph
            self.node_builder.load(self.json_path)
            self.node_builder.build_all()

            # Phase 2: Page graph
            self.block_builder.build_all()

            # Phase 3: Pages
            pages_written = self.block_builder.write_pages(self.output_dir)

            elapsed = time.perf_counter() - start
            self.report_progress("Complete", pages_written, pages_written, "Conversion complete!")

            return ConversionResult(
                success=True,
                nodes_count=len(self.node_builder.store),
                blocks_count=len(self.block_builder.store),
                pages_written=pages_written,
                elapsed_seconds=elapsed,
                page_files=[path.name for path in self.block_builder.written],
            )

        except ConversionError as e:
            return ConversionResult(success=False, error_message=str(e))
        except Exception as e:
            return ConversionResult(success=False, error_message=f"Unexpected error: {str(e)}")
