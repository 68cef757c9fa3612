from __future__ import annotations
import shutil, logging, enum, os, time
from pathlib import Path

from .errors import SourceFileMissing

logger = logging.getLogger(__name__)


class SyncResult(enum.Enum):
    COPIED = "copied"
    REPLACED = "replaced"
    SKIPPED = "skipped"


def _copy_atomic(src: Path, dst: Path) -> None:
    # copy to tmp then rename; an interrupted copy never leaves a partial dst
    dst.parent.mkdir(parents=True, exist_ok=True)
    tmp = dst.with_name(f".{dst.name}.tmp-{time.time_ns()}")
    try:
        shutil.copy2(src, tmp)
        os.replace(tmp, dst)
    finally:
        if tmp.exists():
            tmp.unlink()


def copy_if_newer(src: Path, dst: Path) -> SyncResult:
    """
    Copy src over dst when dst is missing or strictly older than src (mtime).
    No content comparison: equal files with a newer source mtime are copied again.
    """
    src, dst = Path(src), Path(dst)
    logger.info(f"Updating {dst} with {src}.")
    if not src.is_file():
        raise SourceFileMissing(src)
    if not dst.is_file():
        logger.info(f"{dst} does not exist. Just doing a normal copy ...")
        _copy_atomic(src, dst)
        return SyncResult.COPIED
    if src.stat().st_mtime_ns > dst.stat().st_mtime_ns:
        logger.info(f"{dst} is older than {src}. Just doing a replacement.")
        _copy_atomic(src, dst)
        return SyncResult.REPLACED
    logger.info(f"{dst} is not older than {src}. No replacement occurred.")
    return SyncResult.SKIPPED


def ensure_directory(path: Path) -> bool:
    """ Create path with its parents. Returns False if it already existed. """
    path = Path(path)
    if path.is_dir():
        logger.debug(f"{path} exists. There is no need for creation.")
        return False
    logger.info(f"{path} does not exist. Creating {path} ...")
    path.mkdir(parents=True, exist_ok=True)
    return True


def clean_directory(path: Path) -> int:
    """
    Remove every entry inside path (dotfiles included), keeping path itself.
    Returns the number of top-level entries removed.
    """
    path = Path(path)
    if not path.is_dir():
        return 0
    removed = 0
    for entry in sorted(path.iterdir()):
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1
    return removed
