"""
Backups of the docs root.

A backup is a zip archive holding the store directory (`data/`, including any
SQLite journal files) and the attachments tree, with entry names relative to the
docs root:

    data/PupTrail.db
    attachments/animal_photos/biscuit.jpg
    ...

The backups directory itself is never included.
"""

import logging
import zipfile
from datetime import datetime
from pathlib import Path

from puptrail.config.settings import Settings
from puptrail.database.paths import ensure_directories
from puptrail.exceptions import StoreAccessError

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "PupTrail_backup_"
ARCHIVED_DIRS = ("data", "attachments")


def _add_directory(archive: zipfile.ZipFile, source: Path, prefix: str) -> int:
    added = 0
    for file in sorted(source.rglob("*")):
        if not file.is_file():
            continue
        entry = f"{prefix}/{file.relative_to(source).as_posix()}"
        try:
            archive.write(file, entry)
            added += 1
        except OSError as exc:
            # one unreadable attachment should not void the whole backup
            logger.warning("backup.file_skipped", extra={"file": str(file), "cause": str(exc)})
    return added


def create_backup(settings: Settings, destination: str | Path | None = None) -> Path:
    """
    Write a backup archive and return its path.

    Args:
        settings: resolved settings (locates the docs root)
        destination: archive path; defaults to
            `<BACKUPS_DIR>/PupTrail_backup_<YYYYmmddHHMMSS>.zip`

    Raises:
        StoreAccessError: the store file does not exist or the archive cannot be written
    """
    ensure_directories(settings)
    if not settings.STORE_PATH.is_file():
        raise StoreAccessError("Database file not found.", path=str(settings.STORE_PATH))

    if destination is None:
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        destination = settings.BACKUPS_DIR / f"{BACKUP_PREFIX}{stamp}.zip"
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(destination, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            added = 0
            for name in ARCHIVED_DIRS:
                source = settings.DOCS_ROOT / name
                if source.is_dir():
                    added += _add_directory(archive, source, name)
    except OSError as exc:
        raise StoreAccessError(f"Failed to write backup: {exc}", path=str(destination)) from exc

    logger.info("backup.created", extra={"path": str(destination), "files": added})
    return destination


def is_valid_backup(path: str | Path) -> bool:
    """
    True when the archive contains a store: `data/PupTrail.db`, or, for archives
    made by older versions, a root-level `PupTrail.db` or any `.db` under `data/`.
    """
    try:
        with zipfile.ZipFile(path) as archive:
            names = [n.replace("\\", "/") for n in archive.namelist()]
    except (zipfile.BadZipFile, OSError):
        return False

    if "data/PupTrail.db" in names or "PupTrail.db" in names:
        return True
    return any(n.startswith("data/") and n.lower().endswith(".db") for n in names)


def list_backups(settings: Settings) -> list[Path]:
    """Backup archives in the backups directory, newest first."""
    if not settings.BACKUPS_DIR.is_dir():
        return []
    archives = [p for p in settings.BACKUPS_DIR.glob("*.zip") if p.is_file()]
    return sorted(archives, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)
