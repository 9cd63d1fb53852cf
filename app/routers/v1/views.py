from typing import Any, Dict

from app.schemas.scan import ScanResult
from app.services.parser import (
    UNKNOWN_PLANT,
    display_title,
    format_relative_time,
    parse_fields,
    split_tips,
)


def result_view(index: int, result: ScanResult, default_title: str = UNKNOWN_PLANT) -> Dict[str, Any]:
    fields = parse_fields(result.summary)
    return {
        "index": index,
        "title": display_title(result, fields, default=default_title),
        "fields": fields,
        "tips": split_tips(fields.get("Tips")),
        "relative_time": format_relative_time(result.timestamp),
        "record": result.to_json(),
    }
