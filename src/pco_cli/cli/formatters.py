"""
Output formatters for CLI commands.

Records are flattened to dictionaries, filtered by the include/exclude
property options and rendered as a rich table, JSON or CSV.
"""

import csv
import io
import json
import logging
from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data found."
TABLE_RENDER_WIDTH = 240


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


@dataclass
class FormatterOptions:
    """Options shared by every output format."""

    include_properties: List[str] = field(default_factory=list)
    exclude_properties: List[str] = field(default_factory=list)
    include_null_values: bool = False
    max_column_width: int = 50
    indent: bool = True
    output_file: Optional[Path] = None


def _to_dict(item: Any) -> Dict[str, Any]:
    if is_dataclass(item) and not isinstance(item, type):
        return asdict(item)
    if isinstance(item, dict):
        return dict(item)
    if hasattr(item, "model_dump"):
        return item.model_dump()
    return {"value": item}


def to_records(items: Iterable[Any], options: Optional[FormatterOptions] = None) -> List[Dict[str, Any]]:
    """
    Convert records to filtered dictionaries.

    ``include_properties`` keeps only the named keys, in that order.
    ``exclude_properties`` then drops keys. None values are dropped unless
    ``include_null_values`` is set.
    """
    options = options or FormatterOptions()
    include = [name.lower() for name in options.include_properties]
    exclude = {name.lower() for name in options.exclude_properties}

    records = []
    for item in items:
        data = _to_dict(item)
        if include:
            lookup = {key.lower(): key for key in data}
            data = {lookup[name]: data[lookup[name]] for name in include if name in lookup}
        if exclude:
            data = {key: value for key, value in data.items() if key.lower() not in exclude}
        if not options.include_null_values:
            data = {key: value for key, value in data.items() if value is not None}
        records.append(data)
    return records


def _columns(records: List[Dict[str, Any]]) -> List[str]:
    columns: List[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)
    return columns


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    return str(value)


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ";".join(_scalar_text(part) for part in value)
    if isinstance(value, dict):
        return json.dumps(value, default=_json_default)
    return str(value)


class OutputFormatter:
    """Base formatter: handles empty input and writing to a file."""

    format_name = ""

    def format(self, data: Union[Any, List[Any]], options: Optional[FormatterOptions] = None) -> str:
        """
        Render one record or a list of records.

        Args:
            data: A record or a list of records
            options: Formatting options

        Returns:
            The rendered text, or a confirmation line when written to a file
        """
        options = options or FormatterOptions()
        single = not isinstance(data, (list, tuple))
        items = [] if data is None else ([data] if single else list(data))
        records = to_records(items, options)

        if not records:
            return NO_DATA_MESSAGE

        content = self.render(records, single, options)

        if options.output_file:
            path = Path(options.output_file)
            path.write_text(content, encoding="utf-8")
            logger.info(f"Wrote {len(records)} records to {path}")
            return f"{self.format_name.upper()} output written to {path}"
        return content

    def render(self, records: List[Dict[str, Any]], single: bool, options: FormatterOptions) -> str:
        raise NotImplementedError


class JsonFormatter(OutputFormatter):
    format_name = "json"

    def render(self, records: List[Dict[str, Any]], single: bool, options: FormatterOptions) -> str:
        payload: Any = records[0] if single else records
        return json.dumps(payload, indent=2 if options.indent else None, default=_json_default)


class CsvFormatter(OutputFormatter):
    format_name = "csv"

    def render(self, records: List[Dict[str, Any]], single: bool, options: FormatterOptions) -> str:
        columns = _columns(records)
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(columns)
        for record in records:
            writer.writerow([_scalar_text(record.get(column)) for column in columns])
        return buffer.getvalue()


class TableFormatter(OutputFormatter):
    format_name = "table"

    def render(self, records: List[Dict[str, Any]], single: bool, options: FormatterOptions) -> str:
        if single:
            table = Table(show_header=True, header_style="bold magenta")
            table.add_column("Property", style="cyan", no_wrap=True)
            table.add_column("Value")
            for key, value in records[0].items():
                table.add_row(key, self._cell(value, options))
        else:
            columns = _columns(records)
            table = Table(show_header=True, header_style="bold magenta")
            for column in columns:
                table.add_column(column, overflow="fold")
            for record in records:
                table.add_row(*(self._cell(record.get(column), options) for column in columns))

        buffer = io.StringIO()
        console = Console(file=buffer, width=TABLE_RENDER_WIDTH, force_terminal=False, color_system=None)
        console.print(table)
        return buffer.getvalue()

    @staticmethod
    def _cell(value: Any, options: FormatterOptions) -> str:
        text = _scalar_text(value)
        limit = options.max_column_width
        if limit > 3 and len(text) > limit:
            text = text[: limit - 3] + "..."
        return escape(text)


_FORMATTERS = {
    OutputFormat.TABLE: TableFormatter,
    OutputFormat.JSON: JsonFormatter,
    OutputFormat.CSV: CsvFormatter,
}


def get_formatter(output_format: Union[OutputFormat, str]) -> OutputFormatter:
    """
    Get the formatter for a format name.

    Raises:
        ValueError: For unknown formats
    """
    try:
        fmt = output_format if isinstance(output_format, OutputFormat) else OutputFormat(str(output_format).lower())
    except ValueError:
        valid = ", ".join(f.value for f in OutputFormat)
        raise ValueError(f"Unknown output format '{output_format}'. Valid formats: {valid}") from None
    return _FORMATTERS[fmt]()
