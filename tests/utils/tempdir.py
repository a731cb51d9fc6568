from contextlib import contextmanager
from pathlib import Path
import shutil
import uuid


@contextmanager
def managed_temp_dir(prefix: str, root: str = "tests/tmp"):
    """Yield a fresh scratch directory under ``root`` and remove it afterwards."""
    tmp_path = Path(root) / f"{prefix}_{uuid.uuid4().hex}"
    tmp_path.mkdir(parents=True, exist_ok=True)
    try:
        yield tmp_path
    finally:
        shutil.rmtree(tmp_path, ignore_errors=True)
