# sheet_source.py
import io
import logging

import certifi
import pandas as pd

from config import SyncConfig
from errors import ConfigurationError, RemoteAPIError, SourceReadError
from http_client import send

logger = logging.getLogger(__name__)

SHEETS_BASE = "https://docs.google.com/spreadsheets/d"


def export_url(config: SyncConfig) -> str:
    # the plain CSV export is lossless; gviz/tq guesses column types and can blank cells
    return f"{SHEETS_BASE}/{config.sheet_file_id}/export?format=csv&gid={config.sheet_gid}"


def _missing(value) -> bool:
    return not isinstance(value, str) and pd.isna(value)


def parse_grid(text: str) -> list[list]:
    """
    CSV export -> list of rows.
    Every cell comes back as text ('' for an empty cell); cells missing from a
    short row become None, and a blank line stays a row. An empty export gives [].
    """
    if not text.strip():
        return []
    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as e:
        raise SourceReadError(f"Could not parse the sheet export: {e}") from e
    return [[None if _missing(v) else v for v in row]
            for row in df.itertuples(index=False, name=None)]


def fetch_grid(config: SyncConfig) -> list[list]:
    if not config.sheet_file_id:
        raise ConfigurationError("SHEET_FILE_ID is not set; there is no spreadsheet to read.")

    sheet = f"{config.sheet_name} (gid={config.sheet_gid})"
    r = send("GET", export_url(config), timeout=config.timeout, verify=certifi.where())

    if r.status_code in (400, 404):
        raise SourceReadError(f"Sheet not found: {sheet} ({r.status_code})")
    if r.status_code != 200:
        raise RemoteAPIError(r.status_code, (r.text or "")[:300], what="Google Sheets")
    # a private or missing spreadsheet answers with a login/error page, not CSV
    if "text/html" in r.headers.get("Content-Type", "").lower():
        raise SourceReadError(f"Sheet {sheet} is not readable (got an HTML page instead of CSV)")

    grid = parse_grid(r.content.decode("utf-8-sig"))
    logger.info("Read %d rows from sheet %s", len(grid), sheet)
    return grid
