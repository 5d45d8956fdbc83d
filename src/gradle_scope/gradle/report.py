"""Parse the CSV dependency report written by the injected task.

Each row is ``"<name>","<path>","<dependent>,<dependent>,..."`` with no
header. The third field is split on commas as-is, so a module without
dependents gets ``[""]``.
"""

import csv
from pathlib import Path
from typing import Union

from ..exceptions import ReportParseError
from ..logging_config import get_logger
from ..models import Module

logger = get_logger(__name__)

REPORT_FIELDS = 3


def parse_report(path: Union[str, Path]) -> list[Module]:
    """Read modules from the report, in row order.

    Blank lines are skipped.

    Raises:
        ReportParseError: If the file cannot be opened, is not valid CSV, or a
            row does not have exactly three fields
    """
    path = Path(path)
    modules: list[Module] = []

    try:
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.reader(f, strict=True)
            try:
                for row in reader:
                    if not row:
                        continue
                    if len(row) != REPORT_FIELDS:
                        raise ReportParseError(
                            path,
                            f"expected {REPORT_FIELDS} fields, got {len(row)}",
                            line=reader.line_num,
                        )
                    name, module_path, dependents = row
                    modules.append(
                        Module(name=name, path=module_path, dependents=dependents.split(","))
                    )
            except csv.Error as e:
                raise ReportParseError(path, f"Malformed CSV: {e}", line=reader.line_num) from e
    except OSError as e:
        raise ReportParseError(path, f"Cannot read report: {e}") from e
    except UnicodeDecodeError as e:
        raise ReportParseError(path, f"Encoding error: {e}") from e

    logger.debug("Parsed %d module(s) from %s", len(modules), path)
    return modules
