import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Optional


def ensure_parent_dir(path: Path | str) -> None:
    """
    Ensure the parent directory of a file path exists.
    """
    ensure_dir(os.path.dirname(path))


def ensure_dir(directory: str) -> None:
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def write_json(path: str | Path, data: Any) -> None:
    """
    Write JSON to `path` through a temporary file and os.replace.

    Readers see either the previous document or the complete new one, never a
    truncated file. This matters for the token file, which the API reads on
    every request.
    """
    target_path = Path(path)
    ensure_parent_dir(target_path)

    fd, tmp_name = tempfile.mkstemp(
        dir=str(target_path.parent),
        prefix=target_path.name,
        suffix=".tmp",
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target_path)
    except Exception:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def read_json(
    path: str | Path,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """
    Read a JSON file, returning `default` when it is missing or corrupted.

    `on_error` is called with the decode error for corrupted files so callers
    can log it.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except json.JSONDecodeError as e:
        if on_error:
            on_error(e)
        return default


def remove_file(path: str | Path) -> bool:
    """
    Delete a file if present. Returns True when something was removed.
    """
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    return True
