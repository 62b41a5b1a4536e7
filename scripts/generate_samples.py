#!/usr/bin/env python3
"""Generate the sample DMI icons."""

from pathlib import Path
import sys

# Add src to path for running directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dmi_tools.assets import SheetWriter, create_all_samples


def main():
    """Write every sample icon."""
    output_dir = Path(__file__).parent.parent / "assets" / "icons"
    print(f"Generating sample icons in {output_dir}")

    writer = SheetWriter(output_dir)
    samples = create_all_samples()
    for name, metadata in samples.items():
        path = writer.generate(metadata, name)
        print(f"  - {name}: {path} ({len(metadata)} states, {metadata.total_cells} cells)")


if __name__ == "__main__":
    main()
