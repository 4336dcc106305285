# ingest_cli.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from reaxml.inputs.settings import load_settings
from reaxml.schemas.models import ParsedResult
from reaxml.tools.feed_parser import parse_file

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def _positive_workers(val: str) -> int:
    try:
        n = int(val)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid worker count: {val!r}") from e
    if not 1 <= n <= 64:
        raise argparse.ArgumentTypeError(f"worker count must be in 1..64, got {n}")
    return n


def _preview(text: str, width: int = 80) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= width else flat[: width - 1] + "…"


def _print_result(result: ParsedResult, *, pretty: bool) -> None:
    print(result.summary())

    for outcome in result.listings:
        print(f"  listing: {outcome.listing.summary()}")
    for fragment in result.unhandled:
        print(f"  unhandled: {_preview(fragment)}")
    for error in result.errors:
        print(f"  error: {error.exception_message}")
        print(f"         data: {_preview(error.invalid_data)}")

    if pretty and result.listings:
        from pprint import pprint

        for outcome in result.listings:
            pprint(outcome.listing.model_dump(mode="json", exclude_none=True), indent=2, width=120, compact=True)


def _exit_code(result: ParsedResult) -> int:
    if not result.errors:
        return EXIT_OK
    if result.is_fatal:
        return EXIT_FATAL
    return EXIT_PARTIAL


def main(argv: Sequence[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="REA XML feed ingest")
    p.add_argument("--file", type=str, required=True, help="Path to an REA XML document")
    p.add_argument("--clean-bad-chars", action="store_true", help="Strip characters XML forbids instead of failing")
    p.add_argument("--keep-source", type=int, choices=(0, 1), default=1, help="Keep raw XML on each listing outcome")
    p.add_argument("--workers", type=_positive_workers, default=None, help="Thread fan-out for listing build")
    p.add_argument("--pretty", type=int, choices=(0, 1), default=0)
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="(%Y-%m-%d %H:%M:%S)",
    )

    overrides: dict[str, object] = {"keep_source_data": bool(args.keep_source)}
    if args.clean_bad_chars:
        overrides["are_bad_characters_removed"] = True
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    settings = load_settings(**overrides)

    result = parse_file(args.file, settings=settings)
    _print_result(result, pretty=bool(args.pretty))
    return _exit_code(result)


if __name__ == "__main__":
    raise SystemExit(main())
