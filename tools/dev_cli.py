from __future__ import annotations

import argparse
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from daterange_picker.picker.presets import PresetName, UnknownPresetError, resolve_preset
from daterange_picker.utils.dates import parse_local_date


def _reference_now(raw: str | None) -> datetime:
    if not raw:
        return datetime.now()
    return parse_local_date(raw).replace(hour=12)


def _format_range(name: str, now: datetime) -> str:
    resolved = resolve_preset(name, now)
    end = resolved.end.isoformat(sep=" ", timespec="milliseconds") if resolved.end else "-"
    return f"{name:<10} {resolved.start.isoformat(sep=' ', timespec='milliseconds')}  {end}"


def _cmd_presets(args: argparse.Namespace) -> int:
    now = _reference_now(args.now)
    for name in PresetName:
        print(_format_range(name.value, now))
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    try:
        print(_format_range(args.name, _reference_now(args.now)))
    except UnknownPresetError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    return 0


def _cmd_run_app(_: argparse.Namespace) -> int:
    cmd = [
        "streamlit",
        "run",
        str(REPO_ROOT / "src/daterange_picker/ui/streamlit/app.py"),
    ]
    return subprocess.call(cmd, cwd=str(REPO_ROOT))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Date range picker developer CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sp_presets = subparsers.add_parser("presets", help="Print every preset range")
    sp_presets.add_argument("--now", default="", help="Reference date (YYYY-MM-DD).")
    sp_presets.set_defaults(func=_cmd_presets)

    sp_resolve = subparsers.add_parser("resolve", help="Print one preset range")
    sp_resolve.add_argument("name", help="Preset name, e.g. last7 or lastMonth.")
    sp_resolve.add_argument("--now", default="", help="Reference date (YYYY-MM-DD).")
    sp_resolve.set_defaults(func=_cmd_resolve)

    sp_run = subparsers.add_parser("run-app", help="Run the Streamlit demo")
    sp_run.set_defaults(func=_cmd_run_app)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
