#!/usr/bin/env python3
"""Watch a parameters endpoint and print every change batch.

Usage
-----
::

    export OPTIMIOUS_FETCH_URL="https://config.example.com/parameters.json"
    python scripts/watch_parameters.py --interval 10

Options::

    --url URL            Endpoint to poll (default: $OPTIMIOUS_FETCH_URL)
    --interval SECS      Seconds between polls (default: 30)
    --skip-if-busy       Skip a poll while the previous fetch is in flight
    --json               Print change batches as JSON lines
    --verbose / -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyoptimious import ChangeType, OptimiousClient, OptimiousConfig, OptimiousError, ParameterChange  # noqa: E402

_NO_COLOR = bool(os.environ.get("NO_COLOR"))

RED = "" if _NO_COLOR else "\033[31m"
GREEN = "" if _NO_COLOR else "\033[32m"
YELLOW = "" if _NO_COLOR else "\033[33m"
DIM = "" if _NO_COLOR else "\033[2m"
RESET = "" if _NO_COLOR else "\033[0m"

_COLOURS = {
    ChangeType.ADDED: GREEN,
    ChangeType.UPDATED: YELLOW,
    ChangeType.DELETED: RED,
}


def _format_change(change: ParameterChange) -> str:
    colour = _COLOURS[change.type]
    if change.type is ChangeType.ADDED:
        detail = f"= {change.new_value!r}"
    elif change.type is ChangeType.DELETED:
        detail = f"(was {change.old_value!r})"
    else:
        detail = f"{change.old_value!r} → {change.new_value!r}"
    return f"  {colour}{change.type.value:<8}{RESET} {change.name} {detail}"


def _print_batch(changes: Sequence[ParameterChange], *, json_mode: bool) -> None:
    if json_mode:
        payload: list[dict[str, Any]] = [c.model_dump(by_alias=True, exclude_none=True, mode="json") for c in changes]
        print(json.dumps(payload), flush=True)
        return
    print(f"{DIM}{len(changes)} change(s){RESET}")
    for change in changes:
        print(_format_change(change))


async def run() -> None:
    parser = argparse.ArgumentParser(description="Print changes of a remote parameter set")
    parser.add_argument("--url", help="Endpoint to poll (default: $OPTIMIOUS_FETCH_URL)")
    parser.add_argument("--interval", type=float, help="Seconds between polls")
    parser.add_argument("--skip-if-busy", action="store_true", help="Skip a poll while the previous one is running")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Print change batches as JSON lines")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    if args.url:
        overrides["fetch_url"] = args.url
    if args.interval is not None:
        overrides["interval_seconds"] = args.interval
    if args.skip_if_busy:
        overrides["skip_if_busy"] = True
    cfg = OptimiousConfig.from_env(**overrides)

    async with OptimiousClient(cfg) as client:
        await client.init()
        snapshot = client.get_params()
        if args.json_mode:
            print(json.dumps(snapshot), flush=True)
        else:
            print(f"{len(snapshot)} parameter(s) from {cfg.fetch_url}")
            for name, value in snapshot.items():
                print(f"  {name} = {value!r}")

        client.subscribe(lambda changes: _print_batch(changes, json_mode=args.json_mode))
        await asyncio.Event().wait()


def main() -> None:
    try:
        asyncio.run(run())
    except OptimiousError as exc:
        print(f"{RED}Error: {exc}{RESET}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print(f"\n{DIM}Done.{RESET}")


if __name__ == "__main__":
    main()
