"""Render collected probe errors into a single `errors.txt` entry."""

from __future__ import annotations

import traceback
from typing import List, Optional

from analyzer.core.models import ERRORS_ENTRY_NAME, OutputRecord
from analyzer.core.store import ResultStore

ERROR_DELIMITER = "\n\n----------\n\n"


def format_error(err: BaseException) -> str:
    """Full message plus traceback and the `__cause__`/`__context__` chain."""
    return "".join(traceback.format_exception(type(err), err, err.__traceback__)).rstrip("\n")


def render_errors(errors: List[BaseException]) -> str:
    return "".join(format_error(err) + ERROR_DELIMITER for err in errors)


def compile_errors(store: ResultStore) -> Optional[OutputRecord]:
    """
    Append one `errors.txt` output record describing every stored error, in arrival order.

    Returns the new record, or None when no probe failed (nothing is added in that case).
    The error list itself is left untouched.
    """
    errors = store.errors()
    if not errors:
        return None
    return store.add_output(ERRORS_ENTRY_NAME, render_errors(errors).encode("utf-8"))


__all__ = ["ERROR_DELIMITER", "format_error", "render_errors", "compile_errors"]
