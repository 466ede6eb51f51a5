"""Bulk checking of specification items against the files they describe."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from specker.errors import ParseError, SpecError, TargetNotFound, TargetUnreadable
from specker.matcher import match_item
from specker.models import CheckFailure, CheckResult, Options, SpecDocument, SpecItem
from specker.walker import walk_spec_dir

logger = logging.getLogger(__name__)


def _reason(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)


def check_item(
    item: SpecItem,
    target: Path,
    variables: Mapping[str, str],
    options: Options,
) -> SpecError | None:
    """Match one item against ``target``. Returns the error, or None on success."""
    logger.debug("Checking %s", target)
    try:
        with open(target, encoding="utf-8") as f:
            match_item(item, f, variables, options)
    except FileNotFoundError:
        return TargetNotFound(str(target))
    except (OSError, UnicodeDecodeError) as e:
        return TargetUnreadable(str(target), _reason(e))
    except SpecError as e:
        return e
    return None


def check_document(
    document: SpecDocument,
    root: Path,
    variables: Mapping[str, str],
    options: Options,
    param: str = "file",
    jobs: int = 1,
) -> CheckResult:
    """Check every item of ``document`` that names a target via ``param``.

    Items are independent, so with ``jobs > 1`` they are matched in a thread
    pool. Failures are reported in document order either way.
    """
    targets = list(document.iter_item_values(param))
    spec_file = document.source_file or "<string>"

    if jobs > 1 and len(targets) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            futs = [
                pool.submit(check_item, item, root / value, variables, options)
                for item, value in targets
            ]
            errors = [fut.result() for fut in futs]
    else:
        errors = [
            check_item(item, root / value, variables, options)
            for item, value in targets
        ]

    result = CheckResult(checked=len(targets))
    for (item, value), error in zip(targets, errors):
        if error is not None:
            result.failures.append(CheckFailure(
                spec_file=spec_file,
                item_line=item.line_number,
                target=value,
                error=error,
            ))
    return result


def check_spec_dir(
    spec_dir: Path,
    options: Options,
    extension: str = "txt",
    variables: Mapping[str, str] | None = None,
    root: Path | None = None,
    param: str = "file",
    jobs: int = 1,
) -> CheckResult:
    """Parse and check every spec file below ``spec_dir``.

    Target paths are resolved against ``root`` (default: ``spec_dir``). A file
    that fails to parse or cannot be read is reported as a failure and the
    remaining files are still checked.
    """
    variables = variables or {}
    root = root or spec_dir
    combined = CheckResult()

    def record(path: Path, error: Exception) -> None:
        logger.debug("Cannot load spec %s: %s", path, error)
        if isinstance(error, ParseError):
            failure_error: SpecError = error
            line = error.line_number
        else:
            failure_error = TargetUnreadable(str(path), _reason(error))
            line = 0
        combined.failures.append(CheckFailure(
            spec_file=str(path), item_line=line, target="", error=failure_error,
        ))

    for spec in walk_spec_dir(spec_dir, extension, options, on_error=record):
        result = check_document(spec.document, root, variables, options, param, jobs)
        combined.checked += result.checked
        combined.failures.extend(result.failures)

    logger.info(
        "Checked %d item(s), %d failure(s)", combined.checked, len(combined.failures)
    )
    return combined
