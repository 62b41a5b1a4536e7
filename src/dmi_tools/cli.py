"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from dmi_tools.assets import SAMPLE_DESCRIPTIONS, SheetWriter, create_sample_metadata
from dmi_tools.duplicates import all_same, find_duplicate_states, iter_icon_paths
from dmi_tools.errors import DMIError
from dmi_tools.renderer import IconFile, IconRenderer, RenderConfig
from dmi_tools.types import StateReference

logger = logging.getLogger(__name__)


def _load(path: Path, config: RenderConfig) -> IconFile:
    return IconFile.from_file(path, allow_missing_description=config.allow_missing_description)


def cmd_info(args: argparse.Namespace, config: RenderConfig) -> int:
    icon = _load(args.file, config)
    header = icon.metadata.header
    print(f"{args.file}: version {header.version}, cells {header.cell_width}x{header.cell_height}")
    for ref, offset, state in icon.metadata.entries():
        print(
            f"  [{ref.occurrence}] {state.name!r}: dirs={state.directions.cardinality} "
            f"frames={state.frame_count} offset={offset}"
        )
    return 0


def cmd_render(args: argparse.Namespace, config: RenderConfig) -> int:
    icon = _load(args.file, config)
    ref = StateReference(args.occurrence, args.state)
    job = IconRenderer(icon, config).prepare_render(ref)

    output: Optional[Path] = args.output
    default_name = f"{args.file.stem}-{args.state}-{args.occurrence}{job.render_type.suffix}"
    if output is None:
        output = Path(default_name)
    elif output.is_dir():
        output = output / default_name

    job.render(output)
    print(f"Rendered {ref} as {job.render_type.value} to {output}")
    return 0


def cmd_duplicates(args: argparse.Namespace, config: RenderConfig) -> int:
    for path in iter_icon_paths(args.paths):
        try:
            icon = _load(path, config)
        except DMIError as e:
            logger.error("Skipping %s: %s", path, e)
            continue
        duplicates = find_duplicate_states(icon)
        if not duplicates:
            continue
        print(path)
        for name, occurrences in duplicates.items():
            star = "*" if all_same(icon, occurrences) else " "
            print(f"  {star} {len(occurrences)}x {name}")
    return 0


def cmd_sample(args: argparse.Namespace, config: RenderConfig) -> int:
    metadata = create_sample_metadata(args.name)
    writer = SheetWriter(args.output_dir)
    path = writer.generate(metadata, args.name)
    print(f"Generated sample {args.name!r} at {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dmi-tools",
        description="Inspect and render DMI sprite sheets",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--allow-missing-description",
        action="store_true",
        help="Treat images without a description as a single plain cell",
    )
    parser.add_argument(
        "--no-loop",
        action="store_true",
        help="Play rendered animations once instead of looping",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="List the states of an icon file")
    info.add_argument("file", type=Path)
    info.set_defaults(func=cmd_info)

    render = sub.add_parser("render", help="Render one state to PNG or GIF")
    render.add_argument("file", type=Path)
    render.add_argument("state", help="State name")
    render.add_argument(
        "--occurrence",
        type=int,
        default=0,
        help="Which state of that name to render",
    )
    render.add_argument("-o", "--output", type=Path, help="Output file or directory")
    render.set_defaults(func=cmd_render)

    duplicates = sub.add_parser("duplicates", help="Report states sharing a name")
    duplicates.add_argument("paths", type=Path, nargs="+")
    duplicates.set_defaults(func=cmd_duplicates)

    sample = sub.add_parser("sample", help="Write a sample icon file")
    sample.add_argument("name", choices=sorted(SAMPLE_DESCRIPTIONS))
    sample.add_argument("output_dir", type=Path)
    sample.set_defaults(func=cmd_sample)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = RenderConfig(
        loop=not args.no_loop,
        allow_missing_description=args.allow_missing_description,
    )
    try:
        return args.func(args, config)
    except DMIError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
