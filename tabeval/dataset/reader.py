"""Dataset loading: raw file read and delimited-text parse."""

from __future__ import annotations

import asyncio
import csv
import io
import logging
import warnings
from pathlib import Path

import pandas as pd

from ..core import RawRecord
from ..errors import DatasetIOError, ParseError

logger = logging.getLogger(__name__)


async def read_dataset_file(path: str | Path) -> str:
    """Read the dataset file as UTF-8 text in a worker thread.

    Raises:
        DatasetIOError: If the file cannot be opened or decoded.
    """
    path = Path(path)
    try:
        content = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except OSError as e:
        raise DatasetIOError(str(path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise DatasetIOError(str(path), f"not UTF-8 text ({e.reason})") from e

    logger.debug("Read %d characters from %s", len(content), path)
    return content


def check_field_counts(content: str, delimiter: str = ",") -> None:
    """Reject data rows whose field count differs from the header's.

    pandas pads short rows with empty strings, which cannot be told apart
    from empty fields once the frame is built, so the count is taken on
    the tokenized rows.

    Raises:
        ParseError: On the first data row with a different field count.
    """
    reader = csv.reader(io.StringIO(content), delimiter=delimiter)
    tokenized = (fields for fields in reader if fields)
    header = next(tokenized, None)
    if header is None:
        return
    for row, fields in enumerate(tokenized):
        if len(fields) != len(header):
            raise ParseError(f"expected {len(header)} fields, got {len(fields)}", row=row)


def parse_records(content: str, delimiter: str = ",") -> tuple[tuple[str, ...], list[RawRecord]]:
    """Parse delimited text with a header row into string records.

    Every field stays a string; blank lines are skipped. Column order is the
    order of the header.

    Returns:
        Tuple of (header, rows).

    Raises:
        ParseError: If there is no header, or a row has a different number of
            fields than the header.
    """
    check_field_counts(content, delimiter)

    with warnings.catch_warnings():
        warnings.simplefilter("error", pd.errors.ParserWarning)
        try:
            data = pd.read_csv(
                io.StringIO(content),
                sep=delimiter,
                dtype=str,
                index_col=False,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            raise ParseError("no header row") from None
        except (pd.errors.ParserError, pd.errors.ParserWarning) as e:
            raise ParseError(str(e)) from e

    header = tuple(str(c) for c in data.columns)
    rows: list[RawRecord] = [tuple(r) for r in data.itertuples(index=False, name=None)]

    logger.info("Parsed %d rows, %d columns", len(rows), len(header))
    return header, rows
