"""JSON file helpers shared by the settings layers and global state.

Both kinds of document are top-level JSON objects read and written with
orjson. A missing file reads as an empty document.
"""

from pathlib import Path
from typing import Any

import orjson

from lens_migrate.exceptions import StoreAccessError
from lens_migrate.logger import get_logger

logger = get_logger(__name__)


def load_json_file(file_path: Path) -> dict[str, Any]:
    """Load a JSON object from disk.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON object, or an empty dict if the file does not exist

    Raises:
        StoreAccessError: If the file cannot be read, is not valid JSON,
            or does not hold a JSON object

    """
    if not file_path.exists():
        return {}

    try:
        with file_path.open("rb") as f:
            content = f.read()
    except OSError as e:
        raise StoreAccessError(str(e), str(file_path)) from e

    if not content.strip():
        return {}

    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        msg = f"invalid JSON: {e}"
        raise StoreAccessError(msg, str(file_path)) from e

    if not isinstance(data, dict):
        msg = f"expected a JSON object, got {type(data).__name__}"
        raise StoreAccessError(msg, str(file_path))
    return data


def save_json_file(file_path: Path, data: dict[str, Any]) -> None:
    """Save a JSON object with indentation.

    Args:
        file_path: Path to save JSON file
        data: Data to save

    Raises:
        StoreAccessError: If the data cannot be encoded or written

    """
    try:
        payload = orjson.dumps(data, option=orjson.OPT_INDENT_2)
    except orjson.JSONEncodeError as e:
        msg = f"value is not JSON serializable: {e}"
        raise StoreAccessError(msg, str(file_path)) from e

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with file_path.open("wb") as f:
            f.write(payload)
    except OSError as e:
        raise StoreAccessError(str(e), str(file_path)) from e

    logger.debug("Saved JSON to %s", file_path)
