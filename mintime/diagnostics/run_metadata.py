import json
import time
import uuid
from pathlib import Path
from typing import Any, Dict

# A unique identifier for this Python process/run. Used to name artifacts.
RUN_ID: str = f"{int(time.time())}-{uuid.uuid4().hex[:8]}"


def ensure_runs_dir(folder: str = "runs") -> Path:
    """Create the artifacts folder if needed and return it."""
    out_dir = Path(folder)
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def log_run_metadata(meta: Dict[str, Any], folder: str = "runs") -> str:
    """Write run metadata JSON next to solver logs.

    Returns the path to the JSON file for convenience.
    """
    out_path = ensure_runs_dir(folder) / f"{RUN_ID}.json"
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2, default=str)
    return str(out_path)
