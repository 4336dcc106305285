# reaxml/tools/feed_parser.py
"""
REA XML feed → ParsedResult (listings, unhandled fragments, errors).

Pipeline (deterministic, in-memory):
  1) core.sanitize.sanitize(text, enabled)       → optional removal of forbidden characters
  2) core.parse.parse_tree(text)                 → lxml element tree        (fatal on failure)
  3) core.parse.dispatch(root)                   → batch or single listing  (fatal on unknown root)
  4) core.parse.process_candidate(el) per child  → listing | fragment | per-item error
  5) core.parse.ResultAggregator                 → frozen ParsedResult in document order

Fatal errors short-circuit after step 3 with exactly one error and nothing
else. No exception leaves `parse` for malformed input.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

from lxml import etree

from reaxml.core.parse import FATAL_ERRORS, ResultAggregator, dispatch, parse_tree, process_candidate
from reaxml.core.parse.classify import ElementOutcome
from reaxml.core.sanitize import sanitize
from reaxml.inputs.settings import Settings
from reaxml.schemas.models import ParsedResult

logger = logging.getLogger(__name__)

PathLike = str | Path

# ----------------------------
# Public API
# ----------------------------


def parse(
    xml_text: str,
    are_bad_characters_removed: bool | None = None,
    *,
    settings: Settings | None = None,
) -> ParsedResult:
    """
    Parse a complete REA XML document.

    `are_bad_characters_removed=True` strips characters XML 1.0 forbids before
    parsing; otherwise their presence is a fatal document error. When the
    argument is omitted, `settings.are_bad_characters_removed` decides.

    The environment is never read here; callers wanting `REAXML_*` overrides
    pass `settings=load_settings()`.
    """
    cfg = settings if settings is not None else Settings()
    clean = cfg.are_bad_characters_removed if are_bad_characters_removed is None else are_bad_characters_removed

    text = sanitize(xml_text or "", clean)
    try:
        mode = dispatch(parse_tree(text))
    except FATAL_ERRORS as exc:
        logger.warning("REA XML document rejected: %s", exc)
        return ParsedResult.fatal(exc.to_parse_error())

    candidates = list(mode.candidates())
    outcomes = _process_all(candidates, keep_source=cfg.keep_source_data, max_workers=cfg.max_workers)
    result = ResultAggregator().extend(outcomes).build()

    logger.info(
        "Parsed REA XML: %d listing(s), %d unhandled, %d error(s)",
        len(result.listings),
        len(result.unhandled),
        len(result.errors),
    )
    return result


def parse_file(
    path: PathLike,
    are_bad_characters_removed: bool | None = None,
    *,
    settings: Settings | None = None,
) -> ParsedResult:
    """Read a UTF-8 feed from disk (BOM tolerated) and parse it."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse(text, are_bad_characters_removed, settings=settings)


# ----------------------------
# Internals
# ----------------------------


def _process_all(candidates: list[etree._Element], *, keep_source: bool, max_workers: int) -> list[ElementOutcome]:
    work = partial(process_candidate, keep_source=keep_source)
    if max_workers <= 1 or len(candidates) < 2:
        return [work(el) for el in candidates]

    # Executor.map yields in submission order, i.e. document order.
    with ThreadPoolExecutor(max_workers=min(max_workers, len(candidates))) as pool:
        return list(pool.map(work, candidates))
