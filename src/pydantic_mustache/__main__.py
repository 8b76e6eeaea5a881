"""Command-line front end: render a template file with YAML or JSON data.

Examples:
    python -m pydantic_mustache data.yml template.mustache
    cat data.yml | python -m pydantic_mustache template.mustache
    python -m pydantic_mustache --layout wrapper.mustache data.yml template.mustache
    python -m pydantic_mustache --override over.yml data.yml template.mustache
"""

import argparse
import logging
from pathlib import Path
import sys
from typing import Any
from typing import TextIO

import yaml

from pydantic_mustache.api import render_file
from pydantic_mustache.api import render_file_in_layout
from pydantic_mustache.core.errors import MustacheError
from pydantic_mustache.core.render_config import RenderConfig
from pydantic_mustache.project_info import get_project_info


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    info = get_project_info()
    parser = argparse.ArgumentParser(
        prog="mustache",
        description="Render a Mustache template with YAML or JSON data.",
    )
    parser.add_argument("data", nargs="?", help="data file (default: stdin)")
    parser.add_argument("template", help="template file")
    parser.add_argument("--layout", type=Path, help="location of layout file")
    parser.add_argument(
        "--override", type=Path, help="data file whose top-level keys win"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail on variables missing from the data",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {info.version}"
    )
    return parser


def load_data(stream: TextIO) -> Any:
    """Decode YAML (or JSON) data from stream."""
    return yaml.safe_load(stream)


def load_data_file(path: Path) -> Any:
    """Decode YAML (or JSON) data from a file."""
    with path.open(encoding="utf-8") as f:
        return load_data(f)


def merge_override(data: Any, override: Any) -> Any:
    """Replace top-level keys of data with those of override.

    Raises:
        TypeError: When either document is not a mapping

    """
    if not isinstance(data, dict) or not isinstance(override, dict):
        msg = "--override requires both data documents to be mappings"
        raise TypeError(msg)
    return {**data, **override}


def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> None:
    """Render the template named by args to stdout."""
    if args.data is None:
        data = load_data(stdin)
    else:
        data = load_data_file(Path(args.data))
    if args.override is not None:
        data = merge_override(data, load_data_file(args.override))

    config = RenderConfig(allow_missing=not args.strict)
    if args.layout is not None:
        output = render_file_in_layout(args.template, args.layout, data, config=config)
    else:
        output = render_file(args.template, data, config=config)
    stdout.write(output)


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        run(args, sys.stdin, sys.stdout)
    except (MustacheError, OSError, TypeError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
