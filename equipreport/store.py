# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import io
import os
import pickle
import tempfile
from datetime import date, datetime
from operator import attrgetter
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple, Union

from loguru import logger

from equipreport.configmanager import ConfigManager
from equipreport.errors import EmptyCollection, ExportIOError, ReportError, StorageIOError
from equipreport.output import text_writer
from equipreport.reporttypes import HardwareReport, Report, ReportKind, Severity, SoftwareReport
from equipreport.validators import parse_report_kind

REPORT_TYPES = (HardwareReport, SoftwareReport)

_by_date = attrgetter("reportDate")


class ReportStore:
    """
    Holds every incident report, keeps the storage file in sync and answers queries.

    The collection is read once when the store is created and is authoritative from then
    on. Each addition rewrites the whole storage file; a failed write is logged and kept
    in `last_error` but the report stays in memory, so memory and disk can disagree until
    the next successful save.

    Attributes:
        data_file: Path of the storage file holding the pickled report list.
        output_dir: Directory where export files are created.
        load_error: The StorageIOError raised while reading an unreadable storage file at
            start-up, or None when the file was read or simply did not exist yet.
        last_error: The StorageIOError from the most recent failed save, or None.
    """

    data_file: Path
    output_dir: Path
    load_error: Optional[ReportError] = None
    last_error: Optional[ReportError] = None

    def __init__(
        self,
        data_file: Optional[Union[str, Path]] = None,
        output_dir: Optional[Union[str, Path]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        config = ConfigManager()
        self.data_file = Path(data_file) if data_file else config.get_storage_file_path()
        self.output_dir = Path(output_dir) if output_dir else config.get_export_dir_path()
        self._clock = clock
        self._reports: List[Report] = []
        self._load()

    @staticmethod
    def serialize(reports: List[Report]) -> bytes:
        """Serializes the report list for the storage file.

        Args:
            reports (List[Report]): The reports, in insertion order.

        Returns:
            bytes: A binary representation of the list, variant of each report included.
        """
        return pickle.dumps(list(reports))

    @staticmethod
    def deserialize(data: bytes) -> List[Report]:
        """Rebuilds the report list from the storage file contents.

        Args:
            data (bytes): The raw storage file contents.

        Returns:
            List[Report]: The reports in the order they were saved.

        Raises:
            StorageIOError: If the data is not a pickled list of reports.
        """
        # a damaged pickle can fail with almost any error, e.g. OverflowError on a bad FRAME length
        try:
            reports = pickle.loads(data)
        except Exception as err:  # pylint: disable=broad-except
            raise StorageIOError(f"Could not read stored reports - {err}") from err
        if not isinstance(reports, list) or not all(isinstance(r, REPORT_TYPES) for r in reports):
            raise StorageIOError("Storage file does not contain a list of reports")
        return reports

    def _load(self) -> None:
        if not self.data_file.exists():
            logger.debug(f"No storage file at {self.data_file}, starting with no reports")
            return
        try:
            with open(self.data_file, "rb") as f:
                self._reports = self.deserialize(f.read())
        except OSError as err:
            self.load_error = StorageIOError(f"Could not open {self.data_file} - {err}")
        except StorageIOError as err:
            self.load_error = err
        if self.load_error:
            logger.error(f"Error loading reports: {self.load_error}")
            self._reports = []
        else:
            logger.debug(f"Loaded {len(self._reports)} reports from {self.data_file}")

    def _save(self) -> bool:
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            _write_atomically(self.data_file, self.serialize(self._reports), binary=True)
        except OSError as err:
            self.last_error = StorageIOError(f"Could not save reports to {self.data_file} - {err}")
            logger.error(f"Error saving reports: {self.last_error}")
            return False
        self.last_error = None
        logger.debug(f"Saved {len(self._reports)} reports to {self.data_file}")
        return True

    @property
    def reports(self) -> Tuple[Report, ...]:
        return tuple(self._reports)

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self) -> Iterator[Report]:
        return iter(self.reports)

    def add_report(self, report: Report) -> bool:
        """Appends a report and rewrites the storage file.

        The report is expected to be validated already. Returns False if the save failed;
        the report is kept in memory either way.
        """
        self._reports.append(report)
        logger.info(f"Added {report.kind.value} report for {report.equipmentId}")
        return self._save()

    def list_equipment_id_and_severity(self) -> List[str]:
        return [
            f"{r.equipmentId} ({r.severity.display}, {r.reportDate.isoformat()})"
            for r in sorted(self._reports, key=_by_date)
        ]

    def list_severity_levels_present(self) -> List[Severity]:
        return sorted({r.severity for r in self._reports})

    def get_date_range(self) -> Tuple[date, date]:
        if not self._reports:
            raise EmptyCollection("There are no reports registered")
        dates = [r.reportDate for r in self._reports]
        return min(dates), max(dates)

    def query_by_equipment_id(self, equipment_id: str) -> List[Report]:
        wanted = equipment_id.casefold()
        return self._sorted(r for r in self._reports if r.equipmentId.casefold() == wanted)

    def query_by_severity(self, severity: Severity) -> List[Report]:
        return self._sorted(r for r in self._reports if r.severity is severity)

    def query_by_date_from(self, from_date: date) -> List[Report]:
        return self._sorted(r for r in self._reports if r.reportDate >= from_date)

    def query_by_kind(self, kind: ReportKind) -> List[Report]:
        return self._sorted(r for r in self._reports if r.kind is kind)

    @staticmethod
    def _sorted(reports) -> List[Report]:
        # sorted() is stable, ties keep insertion order
        return sorted(reports, key=_by_date)

    def generate_report_file(self, kind: Union[str, ReportKind]) -> Optional[Path]:
        """Writes every report of one kind to a new timestamped text file.

        Args:
            kind (Union[str, ReportKind]): "Hardware" or "Software" (case and surrounding
                whitespace ignored), or the ReportKind itself.

        Returns:
            Optional[Path]: The created file, or None when there was nothing to export.

        Raises:
            InvalidReportKind: If kind names neither variant.
            ExportIOError: If the file could not be written. No partial file is left behind.
        """
        if not isinstance(kind, ReportKind):
            kind = parse_report_kind(kind).unwrap()

        selected = self.query_by_kind(kind)
        if not selected:
            logger.info(f"No {kind.value} reports, nothing to export")
            return None

        outpath = self._unique_export_path(kind)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            buffer = io.StringIO()
            text_writer.write_reports(selected, buffer)
            _write_atomically(outpath, buffer.getvalue())
        except OSError as err:
            raise ExportIOError(f"Could not create report file {outpath} - {err}") from err
        logger.info(f"Report generated at {outpath}")
        return outpath

    def _unique_export_path(self, kind: ReportKind) -> Path:
        base = self.output_dir / text_writer.export_file_name(kind, self._clock())
        outpath = base
        counter = 1
        # several exports within the same second
        while outpath.exists():
            counter += 1
            outpath = base.with_name(f"{base.stem}__{counter}{base.suffix}")
        return outpath


def _write_atomically(path: Path, data: Union[str, bytes], binary: bool = False) -> None:
    """Writes data to a temporary file next to path, then renames it into place."""
    fd, tmpname = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        # mkstemp always creates 0600; give the file what a plain open() would under the umask
        os.chmod(tmpname, 0o666 & ~_current_umask())
        if binary:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
        else:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
        os.replace(tmpname, path)
    except BaseException:
        if os.path.exists(tmpname):
            os.unlink(tmpname)
        raise


def _current_umask() -> int:
    # os.umask can only be read by setting it
    umask = os.umask(0o022)
    os.umask(umask)
    return umask
