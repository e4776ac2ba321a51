"""Command line access to scoped config files."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .api import build_store
from .config import ScopedConfigSettings
from .errors import PreconditionError, ScopedConfigError
from .logging_utils import configure_logging
from .store import MISSING, ScopedStore, parse_bool, parse_float, parse_int

_GETTERS = {
    "str": (ScopedStore.get_str, str),
    "int": (ScopedStore.get_int, parse_int),
    "float": (ScopedStore.get_float, parse_float),
    "bool": (ScopedStore.get_bool, parse_bool),
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scoped-config", description="Read scoped config files")
    parser.add_argument("--settings", help="Path to TOML settings file")
    parser.add_argument("--strict", action="store_true", help="Reject duplicate scopes and keys")
    parser.add_argument("--max-size", type=int, help="Largest accepted config file in bytes")
    parser.add_argument("--log-level", help="Override the logging level")

    commands = parser.add_subparsers(dest="command", required=True)

    scopes = commands.add_parser("scopes", help="List scope names")
    scopes.add_argument("files", nargs="+")

    get = commands.add_parser("get", help="Print one value")
    get.add_argument("files", nargs="+")
    get.add_argument("--scope", required=True)
    get.add_argument("--key", required=True)
    get.add_argument("--type", choices=sorted(_GETTERS), default="str")
    get.add_argument("--default", help="Value printed when the scope or key is missing")

    show = commands.add_parser("show", help="Print all scopes as JSON")
    show.add_argument("files", nargs="+")

    dump = commands.add_parser("dump", help="Merge files and write them as one config")
    dump.add_argument("files", nargs="+")
    dump.add_argument("--output", required=True)

    check = commands.add_parser("check", help="Parse files and report errors")
    check.add_argument("files", nargs="+")
    return parser


def _load_settings(args: argparse.Namespace) -> ScopedConfigSettings:
    settings = ScopedConfigSettings.from_toml(args.settings) if args.settings else ScopedConfigSettings()
    if args.log_level:
        settings.logging.level = args.log_level
    if args.strict:
        settings.reader.strict = True
    return settings


def _run(args: argparse.Namespace, store: ScopedStore) -> None:
    if args.max_size is not None:
        store.set_size_limit(args.max_size)
    for path in args.files:
        store.read(path)

    if args.command == "scopes":
        for name in store.scopes():
            print(name)
    elif args.command == "get":
        getter, convert = _GETTERS[args.type]
        default = MISSING
        if args.default is not None:
            try:
                default = convert(args.default)
            except ValueError as exc:
                raise PreconditionError(f"--default {args.default!r} is not a valid {args.type}") from exc
        print(getter(store, args.scope, args.key, default))
    elif args.command == "show":
        print(store.snapshot().model_dump_json(indent=2))
    elif args.command == "dump":
        store.dump(args.output)
    elif args.command == "check":
        print("ok")


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = _load_settings(args)
    except (OSError, ValueError) as exc:
        print(f"error: invalid settings: {exc}", file=sys.stderr)
        return 1
    configure_logging(settings.logging)
    logger = logging.getLogger(__name__)

    try:
        _run(args, build_store(settings))
    except ScopedConfigError as exc:
        logger.debug("command_failed", extra={"command": args.command, "error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
