"""Tab-separated inventory table used as the fzf input stream.

Each row holds eight fields in a fixed order, padded to fixed widths so the
table lines up in the picker. The same line format is handed to the preview
command and to the window launcher, so every stage can rebuild the
:class:`InstanceRecord` from a single line.
"""

from __future__ import annotations

from collections.abc import Iterable

from awsssh.constants import ABSENT_SENTINEL
from awsssh.core.errors import TableFormatError
from awsssh.core.models import InstanceRecord

FIELD_SEPARATOR = "\t"

HEADER_COLUMNS = (
    "Name",
    "Instance ID",
    "Private IP",
    "Public IP",
    "Status",
    "AMI",
    "Type",
    "Public DNS Name",
)

COLUMN_WIDTHS = (30, 20, 15, 15, 15, 20, 10, 0)

SEARCHABLE_COLUMNS = 5
"""Leading columns fzf matches against; the rest only show in the preview."""

_FIELD_NAMES = (
    "name",
    "instance_id",
    "private_ip",
    "public_ip",
    "status",
    "image_id",
    "instance_type",
    "public_dns",
)


def _clean(value: str | None) -> str:
    if value is None or value == ABSENT_SENTINEL:
        return ""
    return str(value).replace("\t", " ").replace("\r", " ").replace("\n", " ")


def _join(values: Iterable[str]) -> str:
    cells = []
    for value, width in zip(values, COLUMN_WIDTHS):
        cells.append(value.ljust(width) if width else value)
    return FIELD_SEPARATOR.join(cells)


def format_header() -> str:
    return _join(HEADER_COLUMNS)


def is_header(line: str) -> bool:
    """Return True if ``line`` is the table header."""
    fields = [cell.strip() for cell in line.rstrip("\r\n").split(FIELD_SEPARATOR)]
    return tuple(fields) == HEADER_COLUMNS


def encode_record(record: InstanceRecord) -> str:
    """Render a record as one padded, tab-separated line.

    Parameters
    ----------
    record : InstanceRecord
        Record to render

    Returns
    -------
    str
        Line without trailing newline
    """
    return _join(_clean(getattr(record, field)) for field in _FIELD_NAMES)


def decode_record(line: str) -> InstanceRecord:
    """Parse a line produced by :func:`encode_record`.

    Parameters
    ----------
    line : str
        Table row, with or without trailing newline

    Returns
    -------
    InstanceRecord
        Record with padding stripped and blank fields mapped to None

    Raises
    ------
    TableFormatError
        If the line is the header, has the wrong number of fields or no
        instance id
    """
    fields = [cell.strip() for cell in line.rstrip("\r\n").split(FIELD_SEPARATOR)]

    if len(fields) != len(_FIELD_NAMES):
        raise TableFormatError(
            f"Expected {len(_FIELD_NAMES)} tab-separated fields, got {len(fields)}: {line!r}"
        )

    if tuple(fields) == HEADER_COLUMNS:
        raise TableFormatError("Header line is not an instance row")

    values: dict[str, str | None] = {
        field: (value if value and value != ABSENT_SENTINEL else None)
        for field, value in zip(_FIELD_NAMES, fields)
    }

    if not values["instance_id"]:
        raise TableFormatError(f"Row has no instance id: {line!r}")

    return InstanceRecord(
        name=values["name"] or "",
        instance_id=values["instance_id"],
        private_ip=values["private_ip"],
        public_ip=values["public_ip"],
        status=values["status"] or "",
        image_id=values["image_id"],
        instance_type=values["instance_type"],
        public_dns=values["public_dns"],
    )


def encode_table(records: Iterable[InstanceRecord]) -> str:
    """Render the header followed by one line per record."""
    lines = [format_header()]
    lines.extend(encode_record(record) for record in records)
    return "\n".join(lines) + "\n"


def render_preview(line: str) -> str:
    """Render a table row as labeled lines for the detail pane.

    Parameters
    ----------
    line : str
        Raw row as fzf hands it to the preview command

    Returns
    -------
    str
        One ``Label: value`` line per column
    """
    fields = [cell.strip() for cell in line.rstrip("\r\n").split(FIELD_SEPARATOR)]
    fields += [""] * (len(HEADER_COLUMNS) - len(fields))

    return "\n".join(
        f"{label}: {value}" for label, value in zip(HEADER_COLUMNS, fields)
    )


__all__ = [
    "COLUMN_WIDTHS",
    "FIELD_SEPARATOR",
    "HEADER_COLUMNS",
    "SEARCHABLE_COLUMNS",
    "decode_record",
    "encode_record",
    "encode_table",
    "format_header",
    "is_header",
    "render_preview",
]
