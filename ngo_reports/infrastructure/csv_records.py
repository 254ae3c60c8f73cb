"""Turn uploaded CSV text into an ordered list of header-keyed records."""

from __future__ import annotations

import csv
from io import StringIO

import pandas as pd

from ngo_reports.domain.exceptions import JobFatalError


def parse_csv_records(text: str) -> list[dict[str, str]]:
    """Parse ``text`` using its first line as the header row.

    Header names and cell values are trimmed, missing trailing cells become
    empty strings and lines without any value are skipped. A row with more
    fields than the header is a fatal parse error. When a header repeats, the
    record keeps the value of its last column. Text without a header yields
    no records.
    """

    try:
        # The header is read as a plain row so pandas neither infers an index
        # column from longer data rows nor renames duplicate headers.
        dataframe = pd.read_csv(
            StringIO(text),
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines="error",
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, csv.Error, ValueError) as exc:
        raise JobFatalError(f"Invalid CSV format: {exc}") from exc

    dataframe = dataframe.fillna("").astype(str)
    dataframe = dataframe.apply(lambda column: column.str.strip())
    headers = list(dataframe.iloc[0])
    rows = dataframe.iloc[1:]
    rows = rows.loc[~(rows == "").all(axis=1)]
    return [
        dict(zip(headers, values))
        for values in rows.itertuples(index=False, name=None)
    ]


__all__ = ["parse_csv_records"]
