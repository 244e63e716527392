#!/usr/bin/env python3
"""Print the contents of an incursions cache file.

Usage
-----
::

    python scripts/show_cache.py                       # uses INCURSIONS_CACHE_PATH or ./incursions_cache.json
    python scripts/show_cache.py path/to/cache.json
    python scripts/show_cache.py --json

Options::

    --json               Output the validated cache as JSON
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyincursions import CacheConfig, IncursionsCacheEntry, IncursionsCacheStore  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _fmt_ms(value_ms: int) -> str:
    return datetime.fromtimestamp(value_ms / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def _section(title: str) -> str:
    return f"\n{'═' * 60}\n  {title}\n{'═' * 60}"


def _entry_lines(entry: IncursionsCacheEntry) -> list[str]:
    info = entry.incursion_info
    return [
        f"  {info.constellation_name} ({info.constellation_id})",
        f"    state     : {info.state}  influence {info.influence_percent}%",
        f"    hq        : {info.headquarter_system}",
        f"    staging   : {info.staging_system}",
        f"    created   : {_fmt_ms(entry.created_at)}",
        f"    updated   : {_fmt_ms(entry.updated_at)}",
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description="Show an incursions cache file.")
    parser.add_argument("path", nargs="?", help="Cache file (default: INCURSIONS_CACHE_PATH or incursions_cache.json)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = CacheConfig.from_env(path=Path(args.path)) if args.path else CacheConfig.from_env()
    store = IncursionsCacheStore.from_config(config)

    if args.json_mode:
        print(json.dumps(store.snapshot().to_json_dict(), indent=2, ensure_ascii=False))
        return

    out: list[str] = [_section(f"incursions cache: {store.path}")]
    out.append(f"  no-incursion message : {store.get_no_incursion_message_id() or '-'}")

    current = store.get_current_incursions()
    out.append(_section(f"current incursions ({len(current)})"))
    for entry in current:
        out.extend(_entry_lines(entry))

    last = store.get_last_incursion()
    out.append(_section("last incursion"))
    out.extend(_entry_lines(last) if last is not None else ["  -"])

    timestamps = store.get_state_change_timestamps()
    out.append(_section("state changes"))
    for constellation_id, states in sorted(timestamps.items()):
        changes = ", ".join(f"{state}={ts}" for state, ts in states.items())
        out.append(f"  {constellation_id}: {changes}")

    print("\n".join(out))


if __name__ == "__main__":
    main()
