"""Zip archive reading and extraction.

Thin layer over :mod:`zipfile` that maps failures onto zipview error kinds:
missing archive -> ``ArchiveNotFound``, unreadable container ->
``ArchiveReadError``, unknown entry -> ``EntryNotFound``.
"""

from __future__ import annotations

import contextlib
import datetime
import logging
import shutil
import tempfile
import zipfile
from collections.abc import Iterator
from dataclasses import asdict, dataclass
from pathlib import Path

from .errors import ArchiveNotFound, ArchiveReadError, EntryNotFound

logger = logging.getLogger(__name__)

_METHOD_LABELS: dict[int, str] = {
    zipfile.ZIP_STORED: "store",
    zipfile.ZIP_DEFLATED: "deflate",
    zipfile.ZIP_BZIP2: "bzip2",
    zipfile.ZIP_LZMA: "lzma",
}


@dataclass(frozen=True)
class EntryMetadata:
    """Directory-record facts about one archive entry."""

    name: str
    compressed_size: int
    uncompressed_size: int
    method: str
    crc32: str
    is_directory: bool
    last_modified: str | None = None

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        if data["last_modified"] is None:
            del data["last_modified"]
        return data


def method_label(code: int) -> str:
    return _METHOD_LABELS.get(code, str(code))


def _last_modified(info: zipfile.ZipInfo) -> str | None:
    try:
        return datetime.datetime(*info.date_time).isoformat()
    except (TypeError, ValueError):
        return None


@contextlib.contextmanager
def open_archive(archive_path: str | Path) -> Iterator[zipfile.ZipFile]:
    """Open ``archive_path`` read-only, translating errors to viewer errors."""
    path = Path(archive_path)
    if not path.exists():
        raise ArchiveNotFound("zip file not found", str(path))
    try:
        archive = zipfile.ZipFile(path)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as exc:
        raise ArchiveReadError("zip processing failed", str(exc)) from exc
    with archive:
        yield archive


def list_entry_names(archive_path: str | Path) -> list[str]:
    """Entry names in central-directory order."""
    with open_archive(archive_path) as archive:
        return archive.namelist()


def read_entry_metadata(archive_path: str | Path) -> list[EntryMetadata]:
    with open_archive(archive_path) as archive:
        return [
            EntryMetadata(
                name=info.filename,
                compressed_size=info.compress_size,
                uncompressed_size=info.file_size,
                method=method_label(info.compress_type),
                crc32=f"{info.CRC & 0xFFFFFFFF:08x}",
                is_directory=info.is_dir(),
                last_modified=_last_modified(info),
            )
            for info in archive.infolist()
        ]


def _get_info(archive: zipfile.ZipFile, name: str) -> zipfile.ZipInfo:
    try:
        return archive.getinfo(name)
    except KeyError as exc:
        raise EntryNotFound("entry not found", name) from exc


def read_entry_text(archive_path: str | Path, name: str) -> str:
    """Read one entry and decode it as UTF-8 (invalid bytes replaced)."""
    with open_archive(archive_path) as archive:
        info = _get_info(archive, name)
        try:
            data = archive.read(info)
        except (zipfile.BadZipFile, NotImplementedError, RuntimeError, OSError) as exc:
            raise ArchiveReadError(f"cannot read {name}", str(exc)) from exc
    return data.decode("utf-8-sig", errors="replace")


def extract_entry(archive_path: str | Path, name: str, dest_path: str | Path) -> Path:
    """Write entry ``name`` to ``dest_path``; directory entries become directories.

    Raises ``OSError`` for write failures and ``ArchiveReadError`` when the
    entry data cannot be decoded.
    """
    dest = Path(dest_path)
    with open_archive(archive_path) as archive:
        info = _get_info(archive, name)
        if info.is_dir():
            dest.mkdir(parents=True, exist_ok=True)
            return dest
        dest.parent.mkdir(parents=True, exist_ok=True)
        try:
            with archive.open(info) as source, dest.open("wb") as target:
                shutil.copyfileobj(source, target)
        except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as exc:
            raise ArchiveReadError(f"cannot extract {name}", str(exc)) from exc
    logger.debug("extracted %s from %s to %s", name, archive_path, dest)
    return dest


def extract_to_temp(
    archive_path: str | Path,
    name: str,
    prefix: str = "zipview",
) -> tuple[Path, Path]:
    """Extract ``name`` into a fresh scratch directory; return ``(dir, file)``."""
    scratch = Path(tempfile.mkdtemp(prefix=f"{prefix}-"))
    target = scratch / (Path(name.rstrip("/")).name or "entry")
    try:
        extract_entry(archive_path, name, target)
    except BaseException:
        cleanup_temp(scratch)
        raise
    return scratch, target


def cleanup_temp(path: str | Path) -> None:
    """Remove a scratch directory; failures are logged and otherwise ignored."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("could not remove scratch dir %s: %s", path, exc)
