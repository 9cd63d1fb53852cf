"""
Lenient parsing of the labeled text blocks returned by the model.

The model is asked for one `Label: value` pair per line but is free to drift
from that format, so nothing here raises on odd input: unparseable lines are
skipped and missing fields are simply absent.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.constants.prompts import CARE_LABELS
from app.schemas.scan import ScanResult

DEFAULT_TITLE = "Scan Result"
UNKNOWN_PLANT = "Unknown plant"


def parse_fields(summary) -> Dict[str, str]:
    """Map each `Label: value` line to label -> value; later lines win."""
    fields: Dict[str, str] = {}
    if not isinstance(summary, str):
        return fields

    for raw in summary.splitlines():
        line = raw.strip()
        idx = line.find(":")
        if idx <= 0:
            continue
        key = line[:idx].strip()
        value = line[idx + 1:].strip()
        if key and value:
            fields[key] = value
    return fields


def split_tips(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [part.strip() for part in text.split(";") if part.strip()]


def tips_from_summary(summary: str) -> List[str]:
    return split_tips(parse_fields(summary).get("Tips"))


def display_title(result: ScanResult, fields: Optional[Dict[str, str]] = None, default: str = DEFAULT_TITLE) -> str:
    if result.plant_name:
        return result.plant_name
    if fields is None:
        fields = parse_fields(result.summary)
    return fields.get("Name") or default


def compose_share_text(result: ScanResult) -> str:
    """
    Plain-text rendering used when sharing a result: the title, each care
    field that is present, then the tips as a dashed list.
    """
    fields = parse_fields(result.summary)
    lines = [display_title(result, fields)]
    for key in CARE_LABELS:
        value = fields.get(key)
        if value:
            lines.append(f"{key}: {value}")

    tips = split_tips(fields.get("Tips"))
    if tips:
        lines.append("")
        lines.append("Tips:")
        lines.extend(f"- {tip}" for tip in tips)
    return "\n".join(lines).strip()


def format_relative_time(dt: datetime, now: Optional[datetime] = None) -> str:
    """'12m ago' within the hour, '5h ago' within the day, else YYYY-MM-DD."""
    if now is None:
        now = datetime.now(dt.tzinfo) if dt.tzinfo else datetime.now()
    elif (now.tzinfo is None) != (dt.tzinfo is None):
        # Mixed naive/aware values; treat naive as UTC
        now = now.replace(tzinfo=timezone.utc) if now.tzinfo is None else now
        dt = dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt

    minutes = max(0, int((now - dt).total_seconds() / 60))
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 24 * 60:
        return f"{minutes // 60}h ago"
    return dt.strftime("%Y-%m-%d")
