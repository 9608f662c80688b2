"""
Merge an ECU log into a VBO file.

The two logs are synced on the highest speed of the last lap, which both
loggers record. The merged file carries every VBO channel, every ECU channel
(prefixed with "ecu_") and the derived throttle analytics channels.

Usage:
    python3 merge_logs.py "ECU Logs/session.csv" "VBO/session.vbo"
    python3 merge_logs.py ecu.csv session.vbo --output merged.vbo
    python3 merge_logs.py ecu.csv session.vbo --smoothing-passes 20 -v
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from vbo_merge import TelemetryError, __version__
from vbo_merge.constants import NUMBER_OF_SMOOTHING_CYCLES
from vbo_merge.session import default_output_path, merge_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vbo-merger",
        description="Merge an ECU log into a VBO file, synced on last-lap top speed",
    )
    parser.add_argument(
        "ecu_file",
        type=str,
        help="Path to the ECU log (CSV)"
    )
    parser.add_argument(
        "vbo_file",
        type=str,
        help="Path to the VBO file"
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: <vbo-file> with '-ecu.vbo' suffix)"
    )
    parser.add_argument(
        "--smoothing-passes",
        type=int,
        default=NUMBER_OF_SMOOTHING_CYCLES,
        help=f"Rolling-average passes on oil pressure (default: {NUMBER_OF_SMOOTHING_CYCLES})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print debug logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"vbo-merger version {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print(f"vbo-merger version {__version__}")

    ecu_file = Path(args.ecu_file)
    vbo_file = Path(args.vbo_file)
    for path in (ecu_file, vbo_file):
        if not path.exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return 1

    output_file = Path(args.output) if args.output else default_output_path(vbo_file)
    print(f"Merging {ecu_file} \nwith {vbo_file} \ninto {output_file}\n...")

    try:
        merge_files(ecu_file, vbo_file, output_file, smoothing_passes=args.smoothing_passes)
    except (TelemetryError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
