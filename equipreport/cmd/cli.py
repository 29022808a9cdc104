from pathlib import Path
from typing import Optional, TypeVar

import click
from loguru import logger

from equipreport.errors import ReportError, Validation
from equipreport.output import json_writer, text_writer
from equipreport.reporttypes import HardwareReport, SoftwareReport
from equipreport.store import ReportStore
from equipreport.validators import (
    parse_date,
    parse_serial_number,
    parse_severity,
    validate_software_version,
)

T = TypeVar("T")


class StoreHandle:
    """
    Carries the storage settings given on the command line and opens the ReportStore
    the first time a command needs it, so every command in one invocation shares a store.
    """

    def __init__(self, data_file: Optional[Path] = None, output_dir: Optional[Path] = None):
        self.data_file = data_file
        self.output_dir = output_dir
        self._store: Optional[ReportStore] = None

    @property
    def store(self) -> ReportStore:
        if self._store is None:
            self._store = ReportStore(data_file=self.data_file, output_dir=self.output_dir)
            if self._store.load_error:
                click.echo(f"Warning: {self._store.load_error}", err=True)
        return self._store


pass_store_handle = click.make_pass_decorator(StoreHandle, ensure=True)


def require(validation: Validation[T]) -> T:
    if not validation.ok:
        raise click.ClickException(validation.error.message)
    return validation.value


def non_empty(ctx, param, value: str) -> str:  # pylint: disable=unused-argument
    value = value.strip()
    if not value:
        raise click.BadParameter("must not be empty")
    return value


def save_report(store: ReportStore, report) -> None:
    if not store.add_report(report):
        raise click.ClickException(f"Report was not saved: {store.last_error}")
    click.echo(f"{report.kind.value} report saved.")


@click.option(
    "--id", "equipment_id", required=True, callback=non_empty, help="Equipment identifier"
)
@click.option("--description", required=True, help="Incident description")
@click.option("--severity", required=True, help="Alto/Medio/Bajo (or High/Medium/Low)")
@click.option("--date", "report_date", required=True, help="Report date, YYYY-MM-DD")
@click.option("--component", required=True, help="Component type, e.g. Disk")
@click.option("--serial", required=True, help="Serial number (positive integer)")
@click.option("--replace/--no-replace", default=False, help="Whether the component must be replaced")
@click.command("add-hardware")
@pass_store_handle
def handle_add_hardware(
    handle, equipment_id, description, severity, report_date, component, serial, replace
):
    "Add a hardware incident report"
    report = HardwareReport(
        equipmentId=equipment_id,
        description=description.strip(),
        severity=require(parse_severity(severity)),
        reportDate=require(parse_date(report_date)),
        componentType=component.strip(),
        serialNumber=require(parse_serial_number(serial)),
        needsReplacement=replace,
    )
    save_report(handle.store, report)


@click.option(
    "--id", "equipment_id", required=True, callback=non_empty, help="Equipment identifier"
)
@click.option("--description", required=True, help="Incident description")
@click.option("--severity", required=True, help="Alto/Medio/Bajo (or High/Medium/Low)")
@click.option("--date", "report_date", required=True, help="Report date, YYYY-MM-DD")
@click.option("--os", "operating_system", required=True, help="Operating system, e.g. Windows 10")
@click.option("--name", "software_name", required=True, help="Software name")
@click.option("--version", required=True, help="Software version, A.B.C")
@click.command("add-software")
@pass_store_handle
def handle_add_software(
    handle, equipment_id, description, severity, report_date, operating_system, software_name, version
):
    "Add a software incident report"
    report = SoftwareReport(
        equipmentId=equipment_id,
        description=description.strip(),
        severity=require(parse_severity(severity)),
        reportDate=require(parse_date(report_date)),
        operatingSystem=operating_system.strip(),
        softwareName=software_name.strip(),
        version=require(validate_software_version(version)),
    )
    save_report(handle.store, report)


@click.command("list")
@pass_store_handle
def handle_list(handle):
    "List equipment ids with severity and date, oldest first"
    lines = handle.store.list_equipment_id_and_severity()
    if not lines:
        click.echo("No reports.")
        return
    for line in lines:
        click.echo(line)


@click.command("severities")
@pass_store_handle
def handle_severities(handle):
    "List the severity levels used by stored reports"
    for severity in handle.store.list_severity_levels_present():
        click.echo(severity.display)


@click.command("range")
@pass_store_handle
def handle_range(handle):
    "Show the earliest and latest report dates"
    try:
        earliest, latest = handle.store.get_date_range()
    except ReportError as err:
        raise click.ClickException(err.message) from err
    click.echo(f"Earliest date: {earliest.isoformat()}")
    click.echo(f"Latest date: {latest.isoformat()}")


@click.option("--id", "equipment_id", default=None, help="Equipment id (case-insensitive)")
@click.option("--severity", default=None, help="Alto/Medio/Bajo (or High/Medium/Low)")
@click.option("--from", "from_date", default=None, help="Reports dated on or after YYYY-MM-DD")
@click.command("find")
@pass_store_handle
def handle_find(handle, equipment_id, severity, from_date):
    "Find reports by equipment id, severity or starting date"
    given = [v for v in (equipment_id, severity, from_date) if v is not None]
    if len(given) != 1:
        raise click.UsageError("Give exactly one of --id, --severity or --from")

    store = handle.store
    if equipment_id is not None:
        found = store.query_by_equipment_id(equipment_id.strip())
    elif severity is not None:
        found = store.query_by_severity(require(parse_severity(severity)))
    else:
        found = store.query_by_date_from(require(parse_date(from_date)))

    if not found:
        logger.warning("No reports match the given parameters.")
        click.echo("No reports found.")
        return
    for report in found:
        click.echo(text_writer.format_report_line(report))


@click.argument("kind", required=True)
@click.command("export")
@pass_store_handle
def handle_export(handle, kind):
    "Write all Hardware or Software reports to a timestamped text file"
    try:
        outpath = handle.store.generate_report_file(kind)
    except ReportError as err:
        raise click.ClickException(err.message) from err
    if outpath is None:
        click.echo(f"No {kind.strip().capitalize()} reports to export.")
    else:
        click.echo(f"Report generated at: {outpath}")


@click.argument("outfile", type=click.File("w", encoding="utf-8"), default="-")
@click.command("dump")
@pass_store_handle
def handle_dump(handle, outfile):
    "Dump every stored report as JSON"
    json_writer.write_reports(handle.store.reports, outfile)
