# csv_encoder.py
import base64
import math
from typing import Iterable, Sequence

# a field containing any of these gets quote-wrapped
SPECIAL_CHARS = ('"', ",", "\n")


def _is_absent(cell) -> bool:
    if cell is None:
        return True
    return isinstance(cell, float) and math.isnan(cell)


def escape_field(cell) -> str:
    """
    Render one cell as a CSV field:
    - None / NaN -> ''
    - everything else via str()
    - wrapped in double quotes (inner quotes doubled) if it contains '"', ',' or a newline
    """
    value = "" if _is_absent(cell) else str(cell)
    if any(ch in value for ch in SPECIAL_CHARS):
        return '"' + value.replace('"', '""') + '"'
    return value


def grid_to_csv(grid: Iterable[Sequence]) -> str:
    # rows may have different widths; nothing is padded or filtered
    return "\n".join(",".join(escape_field(cell) for cell in row) for row in grid)


def encode_payload(csv_text: str) -> str:
    """Base64 of the UTF-8 bytes, as the contents API expects in 'content'."""
    return base64.b64encode(csv_text.encode("utf-8")).decode("ascii")


def encode_grid(grid: Iterable[Sequence]) -> str:
    return encode_payload(grid_to_csv(grid))
