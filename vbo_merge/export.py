"""
Export Functions for VBO/ECU Log Merging

This module serializes a merged channel table back into the VBO text format.
"""

import io
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .channels import ChannelTable
from .constants import (
    VBO_COLUMN_NAMES_SECTION,
    VBO_COMMENTS_SECTION,
    VBO_DATA_SECTION,
    VBO_HEADER_SECTION,
    VBO_MERGED_COMMENT,
    VBO_SPEED_COLUMN_NAME,
    VBO_SPEED_HEADER,
)


def column_name(header: str) -> str:
    """
    Convert a header into a VBO column name.

    The speed channel is called "velocity" in the column names section; every
    other header has its whitespace runs replaced by "-".
    """
    if header == VBO_SPEED_HEADER:
        return VBO_SPEED_COLUMN_NAME
    return re.sub(r"\s+", "-", header)


def format_vbo(table: ChannelTable, created: Optional[datetime] = None) -> str:
    """
    Render a channel table as VBO text.

    Headers are written in alphabetical order and data columns follow the
    same order.

    Args:
        table: Merged channel table.
        created: Creation timestamp for the first line. Defaults to now.

    Returns:
        The complete VBO file content.
    """
    created = created or datetime.now()
    headers = sorted(table)

    buffer = io.StringIO()
    buffer.write(f"File created on {created:%Y/%m/%d} at {created:%H:%M:%S}\n")
    buffer.write("\n")
    buffer.write(f"{VBO_HEADER_SECTION}\n")
    for header in headers:
        buffer.write(f"{header}\n")

    buffer.write("\n")
    buffer.write(f"{VBO_COMMENTS_SECTION}\n")
    buffer.write(f"{VBO_MERGED_COMMENT}\n")
    buffer.write("\n")
    buffer.write(f"{VBO_COLUMN_NAMES_SECTION}\n")
    buffer.write(" ".join(column_name(h) for h in headers) + "\n")

    buffer.write("\n")
    buffer.write(f"{VBO_DATA_SECTION}\n")
    if headers and table.sample_count:
        table.to_frame(headers).to_csv(
            buffer, sep=" ", header=False, index=False, lineterminator="\n"
        )

    return buffer.getvalue()


def write_vbo(table: ChannelTable, file_path: Union[str, Path],
              created: Optional[datetime] = None) -> Path:
    """Write a channel table to a VBO file and return its path."""
    path = Path(file_path)
    content = format_vbo(table, created)
    with path.open("w", encoding="utf-8") as file:
        file.write(content)
    return path
