"""
Store location policy.

All persisted state lives under one per-installation docs root (`Settings.DATA_DIR`):

    <DATA_DIR>/
    ├── data/PupTrail.db     # the store, fixed file name
    ├── attachments/         # receipts, invoices, photos (paths stored relative to DATA_DIR)
    ├── backups/
    └── logs/

Directory creation is check-then-create with `exist_ok=True`, so repeated or racing
invocations of the same process are harmless.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path, PurePosixPath

from puptrail.config.settings import Settings
from puptrail.exceptions import StoreAccessError

logger = logging.getLogger(__name__)


def ensure_directories(settings: Settings) -> None:
    """Create the docs root and its standard sub-directories if they are missing."""
    for directory in (
        settings.DOCS_ROOT,
        settings.STORE_DIR,
        settings.ATTACHMENTS_DIR,
        settings.BACKUPS_DIR,
        settings.LOGS_DIR,
    ):
        directory.mkdir(parents=True, exist_ok=True)


def resolve_store_path(settings: Settings) -> Path:
    """
    Return the store file path, creating its directory first.

    The file itself is created by SQLite on first connect.
    """
    settings.STORE_DIR.mkdir(parents=True, exist_ok=True)
    return settings.STORE_PATH


def attachment_dir(settings: Settings, subfolder: str = "") -> Path:
    """Resolve (and create) a folder under attachments, e.g. `animal_photos` or `group_images`."""
    target = settings.ATTACHMENTS_DIR / subfolder if subfolder else settings.ATTACHMENTS_DIR
    target.mkdir(parents=True, exist_ok=True)
    return target


def save_attachment(settings: Settings, source: str | Path, subfolder: str = "") -> str:
    """
    Copy `source` into the attachments directory and return the path to store in the
    database, relative to the docs root and always with forward slashes.

    An existing file with the same name is never overwritten; a timestamp suffix is
    appended instead.
    """
    source = Path(source)
    if not source.is_file():
        raise StoreAccessError(f"Attachment source not found: {source}", path=str(source))

    target_dir = attachment_dir(settings, subfolder)
    target = target_dir / source.name
    if target.exists():
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        target = target_dir / f"{source.stem}_{stamp}{source.suffix}"

    try:
        shutil.copy2(source, target)
    except OSError as exc:
        raise StoreAccessError(f"Failed to save attachment: {exc}", path=str(target)) from exc

    relative = PurePosixPath("attachments", *Path(subfolder).parts, target.name)
    logger.info("attachment.saved", extra={"path": str(relative)})
    return str(relative)


def resolve_attachment_path(settings: Settings, stored: str | None) -> Path | None:
    """
    Turn a stored attachment path back into an absolute path. Absolute paths (from
    older records) are returned unchanged; empty values resolve to None.
    """
    if not stored or not stored.strip():
        return None

    candidate = Path(stored)
    if candidate.is_absolute():
        return candidate

    normalized = stored.replace("\\", "/").lstrip("/")
    return settings.DOCS_ROOT.joinpath(*PurePosixPath(normalized).parts)
