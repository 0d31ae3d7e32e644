#!/usr/bin/env python3
"""CLI entry point for sorting values with an LLM."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from typing import List, Optional, Sequence

from vibesort.config import SorterSettings
from vibesort.errors import VibesortError
from vibesort.sorter import Vibesort


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vibesort",
        description="Sort values by asking an OpenAI-compatible chat completion API",
    )
    parser.add_argument("items", nargs="+", help="Values to sort")
    parser.add_argument(
        "--strings",
        action="store_true",
        help="Treat items as strings (default: integers)",
    )
    parser.add_argument("--model", help="Model identifier (overrides VIBESORT_MODEL)")
    parser.add_argument("--base-url", help="API base URL (overrides VIBESORT_BASE_URL)")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (overrides VIBESORT_TIMEOUT_SECONDS)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def apply_overrides(args: argparse.Namespace, settings: SorterSettings) -> SorterSettings:
    overrides = {}
    if args.model:
        overrides["model"] = args.model
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout
    return dataclasses.replace(settings, **overrides)


def _parse_integers(raw: Sequence[str]) -> Optional[List[int]]:
    values = []
    for item in raw:
        try:
            values.append(int(item))
        except ValueError:
            print(f"[error] '{item}' is not an integer. Use --strings to sort text.")
            return None
    return values


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )

    integers: Optional[List[int]] = None
    if not args.strings:
        integers = _parse_integers(args.items)
        if integers is None:
            return 1

    try:
        settings = apply_overrides(args, SorterSettings.from_env())
    except (RuntimeError, ValueError) as exc:
        print(f"[error] {exc}")
        return 2
    sorter = Vibesort.from_settings(settings)

    try:
        if integers is not None:
            result: List[object] = list(sorter.sort(integers))
        else:
            result = list(sorter.sort_strings(args.items))
    except VibesortError as exc:
        print(f"[error] {exc}")
        return 2
    finally:
        sorter.close()
    print(json.dumps(result, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
