#!/usr/bin/env python3
"""Command line entry point for Tana to Outline Converter."""

import argparse
import sys
from pathlib import Path

from tana_outline.core.converter import TanaToOutline
from tana_outline.core.models import ConversionSettings, ConversionProgress


def print_progress(progress: ConversionProgress):
    """Print a progress update to stderr."""
    print(f"[{progress.phase}] {progress.message}", file=sys.stderr)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Convert a Tana JSON export to outline pages")
    parser.add_argument("input", type=Path, help="Tana export file (.json)")
    parser.add_argument("output", type=Path, help="Empty or missing output directory")
    args = parser.parse_args(argv)

    settings = ConversionSettings(json_path=args.input, output_dir=args.output)
    result = TanaToOutline(settings, progress_callback=print_progress).run()

    if not result.success:
        print(f"Error: {result.error_message}", file=sys.stderr)
        sys.exit(1)

    print(f"Finish in {result.elapsed_seconds:.3f}s")
    return 0


if __name__ == "__main__":
    main()
