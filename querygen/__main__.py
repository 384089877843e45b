"""Entry point: python -m querygen

Reads appsettings.json, asks for confirmation, generates the query class.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .errors import GeneratorError
from .loader import load_config, load_schema_file
from .logging import configure_logging
from .pipeline import run
from .schema_parser import StaticSchemaSource

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="querygen", description="Generate a GraphQL query class from a schema.",
    )
    parser.add_argument("--config", type=Path, help="settings file (default: ./appsettings.json)")
    parser.add_argument("--schema-file", type=Path, help="static JSON schema description")
    parser.add_argument("-y", "--yes", action="store_true", help="skip the confirmation prompt")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    print("Generate GraphQL Queries")
    if not args.yes:
        try:
            response = input()
        except EOFError:
            response = ""
        if response != "Y":
            print("Exiting Program...")
            return 0

    print("----------------------------------------------")
    print("Generating GraphQL Class(es)...")
    try:
        config = load_config(args.config)
        source = None
        if args.schema_file is not None:
            source = StaticSchemaSource(load_schema_file(args.schema_file))
        result = run(config, source)
    except GeneratorError as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    for entity in result.resolution.unmatched:
        print(f"Skipped {entity.name}: no accessor exposes it")
    if result.output_error:
        return 1
    print(f"Generated {result.output_path} ({len(result.module.cls.methods)} queries)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
