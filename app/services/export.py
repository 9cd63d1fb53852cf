import json
import logging
import tempfile
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from app.schemas.scan import ScanResult

logger = logging.getLogger(__name__)


def render_export(items: Iterable[ScanResult]) -> str:
    return json.dumps([item.to_json() for item in items], indent=2, ensure_ascii=False)


def export_history(items: Iterable[ScanResult], directory: Optional[Union[str, Path]] = None) -> Path:
    """Writes the history as a pretty-printed JSON array and returns the file path."""
    target_dir = Path(directory) if directory else Path(tempfile.gettempdir())
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"plant_history_{int(time.time() * 1000)}.json"
    path.write_text(render_export(items), encoding="utf-8")
    logger.info(f"Exported history to {path}")
    return path


def load_export(path: Union[str, Path]) -> List[ScanResult]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [ScanResult.from_json(entry) for entry in data]
