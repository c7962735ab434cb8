"""
1) Load the character records from a JSON file.
2) Normalize name references to ids.
3) Infer relationships, assign generations and lay out the chart.
4) Validate the relation graph for cycles and impossible dates.
5) Write the laid-out nodes and edges as JSON and, optionally, Graphviz.
"""

import argparse
from dataclasses import replace
import logging
from pathlib import Path

from bloodline_chart.config import LayoutConfig, load_config
from bloodline_chart.export import write_dot, write_json
from bloodline_chart.models import UnreachableCharactersError
from bloodline_chart.parsing import load_characters
from bloodline_chart.pipeline import build_chart
from bloodline_chart.validation import validate_graph

MAX_WARNINGS_SHOWN = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bloodline-chart",
        description="Lay out a character family chart from a JSON character list.",
    )
    parser.add_argument("characters", type=Path, help="JSON file with the character list")
    parser.add_argument("--config", type=Path, help="JSON file with layout overrides")
    parser.add_argument("--json", type=Path, dest="json_path", help="Where to write nodes and edges")
    parser.add_argument("--dot", type=Path, dest="dot_path", help="Where to write DOT (or .png/.svg/.pdf)")
    parser.add_argument("--strict", action="store_true", help="Fail when characters are unreachable")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config) if args.config else LayoutConfig()
    if args.strict:
        config = replace(config, strict=True)

    json_path = args.json_path or args.characters.with_name(args.characters.stem + "_chart.json")

    print(f"Loading characters: {args.characters}")
    characters = load_characters(args.characters)
    print(f"  Found {len(characters)} characters")

    print("Laying out chart...")
    try:
        result = build_chart(characters, config)
    except UnreachableCharactersError as e:
        print(f"  Layout rejected: {e}")
        return 1
    print(f"  Chart has {len(result.nodes)} nodes and {len(result.edges)} edges")
    if result.unreachable:
        print(f"  {len(result.unreachable)} characters placed from fallback roots: {result.unreachable}")

    print("Validating chart...")
    warnings = validate_graph(result.graph)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:MAX_WARNINGS_SHOWN]:
            print(f"    - {w}")
        if len(warnings) > MAX_WARNINGS_SHOWN:
            print(f"    ... and {len(warnings) - MAX_WARNINGS_SHOWN} more")
    else:
        print("  No validation issues found")

    print(f"Writing chart to: {json_path}")
    write_json(result, json_path)
    if args.dot_path:
        print(f"Writing graph to: {args.dot_path}")
        write_dot(result, args.dot_path)

    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
