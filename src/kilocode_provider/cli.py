"""
cli.py — ``kilocode-provider`` command for inspecting the plugin's output.

  kilocode-provider models [--live] [--json]   list the model catalog
  kilocode-provider config [--live]            print the provider entry
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from kilocode_provider.catalog import AVAILABLE_MODELS, ModelCatalog
from kilocode_provider.config import initialize_env, settings
from kilocode_provider.errors import ExitCode
from kilocode_provider.models import AvailableModels
from kilocode_provider.plugin import configure_kilocode_provider


def _load_models(live: bool) -> AvailableModels:
    if not live:
        return AVAILABLE_MODELS
    return asyncio.run(ModelCatalog().get_available_models())


def _cmd_models(args: argparse.Namespace) -> int:
    models = _load_models(args.live)
    if args.json:
        print(json.dumps({mid: info.model_dump() for mid, info in models.items()}, indent=2))
        return ExitCode.SUCCESS

    print(f"--- Models ({len(models)} total) ---")
    for mid in sorted(models):
        print(f"{mid}: {models[mid].name}")
    return ExitCode.SUCCESS


def _cmd_config(args: argparse.Namespace) -> int:
    models = _load_models(True) if args.live else None
    config: dict = {}
    check = configure_kilocode_provider(config, models)
    if not check.ok:
        return ExitCode.MISSING_CREDENTIAL
    print(json.dumps(config, indent=2))
    return ExitCode.SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kilocode-provider",
        description="Inspect the Kilo Code provider catalog and configuration.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    models = sub.add_parser("models", help="List available models")
    models.add_argument("--live", action="store_true", help="Fetch the catalog from OpenRouter")
    models.add_argument("--json", action="store_true", help="Print as JSON")
    models.set_defaults(func=_cmd_models)

    config = sub.add_parser("config", help="Print the provider configuration entry")
    config.add_argument("--live", action="store_true", help="Register the fetched catalog")
    config.set_defaults(func=_cmd_config)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    initialize_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    args = build_parser().parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
