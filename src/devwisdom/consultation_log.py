"""Consultation log: append-only JSONL files rotated by date.

Layout of a log directory::

    consultations.jsonl              current file, one JSON object per line
    consultations-2024-01-01.jsonl   rotated files, frozen once renamed

Every write runs check-rotate-append-flush under one lock, and every read
runs scan-and-filter under the same lock, so a log instance can be shared
between threads. Records are never rewritten or deleted once appended.
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, TextIO

from .errors import ConsultationLogError
from .rpc.types import loads_strict
from .wisdom.types import Consultation

logger = logging.getLogger(__name__)

CURRENT_FILE_NAME = "consultations.jsonl"
_ROTATED_PATTERN = re.compile(r"^consultations-(\d{4}-\d{2}-\d{2})\.jsonl$")


def _local_now() -> datetime:
    return datetime.now().astimezone()


def rotated_file_name(day: str) -> str:
    return f"consultations-{day}.jsonl"


def _window_start(now: datetime, days: int) -> datetime | None:
    """Start of a ``days``-long window ending at ``now``.

    Windows reaching past the earliest representable date start there, so
    every record qualifies. Windows starting past the latest representable
    date return None: no record can qualify.
    """
    try:
        return now - timedelta(days=days)
    except OverflowError:
        if days > 0:
            return datetime.min.replace(tzinfo=timezone.utc)
        return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive timestamps are taken as local time. Returns None when unparseable.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value).astimezone()
    except (ValueError, OverflowError):
        return None


class ConsultationLog:
    """Thread-safe consultation log with date-based rotation.

    The instance remembers the date its current file belongs to. The first
    append on a later date renames the current file to
    ``consultations-<remembered date>.jsonl`` and starts a fresh one.

    Args:
        log_dir: Directory holding the log files; created if missing.
        clock: Returns the current aware datetime. Injected by tests.

    Raises:
        ConsultationLogError: If the directory or current file cannot be
            created.
    """

    def __init__(self, log_dir: Path | str, *, clock: Callable[[], datetime] = _local_now) -> None:
        self.log_dir = Path(log_dir)
        self.file_path = self.log_dir / CURRENT_FILE_NAME
        self._clock = clock
        self._lock = threading.Lock()
        self._file: TextIO | None = None

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConsultationLogError(
                f"failed to create consultation log directory {str(self.log_dir)!r}: {exc}",
                operation="mkdir",
                path=str(self.log_dir),
            ) from exc

        today = self._today()
        self._rotate_stale_file(today)
        self._current_date = today
        self._file = self._open_current()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def current_date(self) -> str:
        return self._current_date

    def append(self, record: Consultation | dict[str, Any]) -> None:
        """Append one record as a JSON line and sync it to disk.

        Raises:
            ConsultationLogError: If rotation, encoding, write or sync fails.
        """
        payload = record.to_dict() if isinstance(record, Consultation) else dict(record)
        try:
            line = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise ConsultationLogError(
                f"failed to encode consultation: {exc}", operation="encode"
            ) from exc

        with self._lock:
            self._rotate_if_needed_locked()
            if self._file is None:
                self._file = self._open_current()
            try:
                self._file.write(line + "\n")
                self._file.flush()
                os.fsync(self._file.fileno())
            except (OSError, ValueError) as exc:
                raise ConsultationLogError(
                    f"failed to write consultation to {str(self.file_path)!r}: {exc}",
                    operation="append",
                    path=str(self.file_path),
                ) from exc

    def rotate_if_needed(self) -> bool:
        """Rotate when the date has changed. Returns True if a rotation ran."""
        with self._lock:
            return self._rotate_if_needed_locked()

    def read(self, days: int) -> list[Consultation]:
        """Records from the last ``days`` days.

        Scans the current file, then rotated files (by name) whose date is on
        or after the cutoff date. Lines that fail to parse, or whose
        timestamp does not parse, are skipped. Results are pooled in file
        order, then append order within each file; they are not re-sorted.

        Raises:
            ConsultationLogError: If the current file exists but cannot be read.
        """
        with self._lock:
            cutoff = _window_start(self._clock().astimezone(), days)
            if cutoff is None:
                return []
            cutoff_day = cutoff.date()

            records = self._read_file(self.file_path, cutoff)

            try:
                names = sorted(entry.name for entry in os.scandir(self.log_dir) if entry.is_file())
            except OSError as exc:
                logger.warning("Cannot list consultation log directory %s: %s", self.log_dir, exc)
                return records

            for name in names:
                match = _ROTATED_PATTERN.match(name)
                if match is None:
                    continue
                try:
                    file_day = date.fromisoformat(match.group(1))
                except ValueError:
                    continue
                if file_day < cutoff_day:
                    continue
                try:
                    records.extend(self._read_file(self.log_dir / name, cutoff))
                except ConsultationLogError as exc:
                    logger.warning("Skipping unreadable rotated log %s: %s", name, exc.message)
            return records

    def close(self) -> None:
        """Close the current file handle. Safe to call more than once."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "ConsultationLog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Rotation (callers hold the lock, except during construction)
    # -------------------------------------------------------------------------

    def _today(self) -> str:
        return self._clock().strftime("%Y-%m-%d")

    def _rotate_stale_file(self, today: str) -> None:
        """Rotate a current file left over from an earlier day, by its mtime."""
        try:
            mtime = self.file_path.stat().st_mtime
        except FileNotFoundError:
            return
        except OSError as exc:
            raise ConsultationLogError(
                f"failed to inspect log file {str(self.file_path)!r}: {exc}",
                operation="stat",
                path=str(self.file_path),
            ) from exc

        file_day = datetime.fromtimestamp(mtime).strftime("%Y-%m-%d")
        if file_day != today:
            self._rename_current(file_day)

    def _rotate_if_needed_locked(self) -> bool:
        today = self._today()
        if self._current_date == today:
            return False

        if self._file is not None:
            try:
                self._file.close()
            except OSError as exc:
                logger.warning("Error closing consultation log before rotation: %s", exc)
            self._file = None

        self._rename_current(self._current_date)
        self._file = self._open_current()
        self._current_date = today
        return True

    def _rename_current(self, day: str) -> None:
        """Rename the current file to its dated name.

        A rotation that already happened is not an error: if the target
        exists the current file is kept as is, and if the source is gone a
        fresh current file is opened afterwards. Any other rename failure is
        logged and the current file stays in place, so appends continue into
        it until a later rotation succeeds; a record is never dropped
        because a rename failed.
        """
        target = self.log_dir / rotated_file_name(day)
        if target.exists():
            logger.warning(
                "Rotated log %s already exists; keeping %s as the current file",
                target.name,
                self.file_path.name,
            )
            return
        try:
            self.file_path.rename(target)
        except FileNotFoundError:
            logger.debug("No current log file to rotate for %s", day)
            return
        except OSError as exc:
            logger.warning("Failed to rotate %s to %s: %s", self.file_path, target, exc)
            return
        logger.info("Rotated consultation log to %s", target.name)

    def _open_current(self) -> TextIO:
        try:
            return self.file_path.open("a", encoding="utf-8")
        except OSError as exc:
            raise ConsultationLogError(
                f"failed to open log file {str(self.file_path)!r}: {exc}",
                operation="open",
                path=str(self.file_path),
            ) from exc

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def _read_file(self, path: Path, cutoff: datetime) -> list[Consultation]:
        records: list[Consultation] = []
        try:
            fh = path.open("r", encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return records
        except OSError as exc:
            raise ConsultationLogError(
                f"failed to open log file {str(path)!r}: {exc}", operation="read", path=str(path)
            ) from exc

        with fh:
            for raw in fh:
                line = raw.strip()
                if not line:
                    continue
                try:
                    data = loads_strict(line)
                except ValueError:
                    continue
                if not isinstance(data, dict):
                    continue
                timestamp = parse_timestamp(data.get("timestamp"))
                if timestamp is None:
                    continue
                if timestamp >= cutoff:
                    records.append(Consultation.from_dict(data))
        return records
