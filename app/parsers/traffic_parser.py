"""
Delimited traffic log parser for gateway and endpoint logs.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple
from app.parsers.base import BaseParser
from app.models.base import TrafficFlow, TrafficAction, FlowOrigin

logger = logging.getLogger(__name__)

DELIMITER = ","
DEFAULT_IP = "0.0.0.0"
DEFAULT_PROTOCOL = "TCP"

# Header substrings that bind a column to a flow field. A field binds to the
# first header, left to right, containing any of its substrings.
COLUMN_MATCHERS: List[Tuple[str, Tuple[str, ...]]] = [
    ("timestamp", ("time",)),
    ("source_ip", ("source", "src")),
    ("dest_ip", ("dest", "dst")),
    ("dest_port", ("port",)),
    ("protocol", ("proto",)),
    ("action", ("action",)),
]

# Checked in order, first substring hit wins.
LOG_ACTION_KEYWORDS = [
    (("allow", "permit"), TrafficAction.ALLOW),
    (("deny", "block"), TrafficAction.DENY),
    (("drop",), TrafficAction.DROP),
]

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def resolve_columns(header: Sequence[str]) -> Dict[str, int]:
    """
    Bind flow fields to header column indexes.

    Args:
        header: Header cell names

    Returns:
        Mapping of field name to column index; unresolved fields are absent
    """
    lowered = [h.strip().lower() for h in header]
    columns: Dict[str, int] = {}
    for field, substrings in COLUMN_MATCHERS:
        for index, name in enumerate(lowered):
            if any(s in name for s in substrings):
                columns[field] = index
                break
    return columns


def map_log_action(action_text: str) -> TrafficAction:
    """Map free-form log action text to a TrafficAction."""
    lowered = (action_text or "").lower()
    for keywords, action in LOG_ACTION_KEYWORDS:
        if any(k in lowered for k in keywords):
            return action
    return TrafficAction.UNKNOWN


def parse_port(port_text: str) -> int:
    """Parse the leading integer of a port cell, 0 when absent or negative."""
    match = _LEADING_INT.match(port_text or "")
    if not match:
        return 0
    return max(int(match.group()), 0)


class TrafficLogParser(BaseParser):
    """Parser for comma-separated traffic logs with a header row."""

    def __init__(self, origin: FlowOrigin):
        self.origin = FlowOrigin(origin)

    def parse(self, text: str) -> List[TrafficFlow]:
        """
        Parse a traffic log into TrafficFlow objects.

        Rows missing a source or destination value are dropped. Missing
        columns and empty cells fall back to field defaults.

        Args:
            text: Raw log text, header first

        Returns:
            List of TrafficFlow objects in row order
        """
        flows: List[TrafficFlow] = []
        lines = (text or "").lstrip("\ufeff").splitlines()
        if len(lines) < 2:
            logger.info(f"No data rows in {self.origin.value} log")
            return flows

        columns = resolve_columns(lines[0].split(DELIMITER))
        missing = [field for field, _ in COLUMN_MATCHERS if field not in columns]
        if missing:
            logger.warning(f"{self.origin.value} log header has no column for: {', '.join(missing)}")

        dropped = 0
        for line_number, line in enumerate(lines[1:], start=2):
            line = line.strip()
            if not line:
                continue
            cells = [c.strip() for c in line.split(DELIMITER)]
            flow = self._build_flow(cells, columns)
            if flow is None:
                dropped += 1
                logger.debug(f"Dropping row {line_number}: missing source or destination")
                continue
            flows.append(flow)

        logger.info(f"Parsed {len(flows)} {self.origin.value} flows ({dropped} rows dropped)")
        return flows

    def _build_flow(self, cells: List[str], columns: Dict[str, int]) -> Optional[TrafficFlow]:
        """Build one flow from a split row, or None if the row is incomplete."""
        source_ip = self._cell(cells, columns, "source_ip")
        dest_ip = self._cell(cells, columns, "dest_ip")
        if ("source_ip" in columns and not source_ip) or ("dest_ip" in columns and not dest_ip):
            return None

        action = map_log_action(self._cell(cells, columns, "action"))
        # Endpoint activity is assumed permitted unless the log says otherwise.
        if self.origin == FlowOrigin.ENDPOINT and action == TrafficAction.UNKNOWN:
            action = TrafficAction.ALLOW

        return TrafficFlow(
            timestamp=self._cell(cells, columns, "timestamp") or datetime.now(timezone.utc).isoformat(),
            source_ip=source_ip or DEFAULT_IP,
            dest_ip=dest_ip or DEFAULT_IP,
            dest_port=parse_port(self._cell(cells, columns, "dest_port")),
            protocol=self._cell(cells, columns, "protocol") or DEFAULT_PROTOCOL,
            action=action,
            origin=self.origin,
        )

    def _cell(self, cells: List[str], columns: Dict[str, int], field: str) -> str:
        index = columns.get(field)
        if index is None or index >= len(cells):
            return ""
        return cells[index]


def parse_traffic_csv(text: str, origin: FlowOrigin) -> List[TrafficFlow]:
    """Parse delimited traffic log text observed at the given origin."""
    return TrafficLogParser(origin).parse(text)
