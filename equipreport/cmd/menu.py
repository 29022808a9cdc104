from typing import Callable, Dict, Iterable

import click
from loguru import logger

from equipreport.cmd.cli import pass_store_handle
from equipreport.errors import ExportIOError, ReportError
from equipreport.output.text_writer import format_report_line
from equipreport.reporttypes import HardwareReport, Report, SoftwareReport
from equipreport.store import ReportStore
from equipreport.validators import (
    parse_date,
    parse_serial_number,
    parse_severity,
    parse_yes_no,
    validate_software_version,
)

MENU_OPTIONS = [
    "Create hardware report",
    "Create software report",
    "Query reports by equipment id",
    "Query reports by severity",
    "Query reports from a date",
    "Generate report file (txt)",
    "Exit",
]


def ask(label: str) -> str:
    return click.prompt(label, default="", show_default=False, prompt_suffix=": ").strip()


def ask_required(label: str) -> str:
    answer = ask(label)
    while not answer:
        click.echo(f"{label} cannot be empty.")
        answer = ask(label)
    return answer


def show_reports(reports: Iterable[Report]) -> None:
    for report in reports:
        click.echo(f"  - {format_report_line(report)}")


def create_hardware_report(store: ReportStore) -> None:
    equipment_id = ask_required("Equipment id")
    description = ask("Incident description (hardware)")
    severity = parse_severity(ask("Severity (Alto/Medio/Bajo)")).unwrap()
    report_date = parse_date(ask("Report date (YYYY-MM-DD)")).unwrap()
    component = ask("Component type (e.g. Motherboard, Disk)")
    serial = parse_serial_number(ask("Serial number (positive integer)")).unwrap()
    replace = parse_yes_no(ask("Needs replacement? (Si/No)"))
    report = HardwareReport(
        equipmentId=equipment_id,
        description=description,
        severity=severity,
        reportDate=report_date,
        componentType=component,
        serialNumber=serial,
        needsReplacement=replace,
    )
    announce_saved(store, report)


def create_software_report(store: ReportStore) -> None:
    equipment_id = ask_required("Equipment id")
    description = ask("Incident description (software)")
    severity = parse_severity(ask("Severity (Alto/Medio/Bajo)")).unwrap()
    report_date = parse_date(ask("Report date (YYYY-MM-DD)")).unwrap()
    operating_system = ask("Operating system (e.g. Windows 10)")
    software_name = ask("Software name")
    version = validate_software_version(ask("Version (A.B.C)")).unwrap()
    report = SoftwareReport(
        equipmentId=equipment_id,
        description=description,
        severity=severity,
        reportDate=report_date,
        operatingSystem=operating_system,
        softwareName=software_name,
        version=version,
    )
    announce_saved(store, report)


def announce_saved(store: ReportStore, report: Report) -> None:
    if store.add_report(report):
        click.echo(f"{report.kind.value} report saved.")
    else:
        click.echo(f"Report kept for this session but not saved: {store.last_error}")


def query_by_equipment_id(store: ReportStore) -> None:
    summary = store.list_equipment_id_and_severity()
    if not summary:
        click.echo("No reports.")
        return
    click.echo("Reports (id (severity, date)):")
    for line in summary:
        click.echo(line)
    equipment_id = ask("Equipment id to query")
    found = store.query_by_equipment_id(equipment_id)
    if not found:
        click.echo(f"No reports found for {equipment_id}")
        return
    click.echo(f"Results for {equipment_id}:")
    show_reports(found)


def query_by_severity(store: ReportStore) -> None:
    levels = store.list_severity_levels_present()
    if not levels:
        click.echo("No reports.")
        return
    click.echo("Severities registered:")
    for level in levels:
        click.echo(f"  - {level.display}")
    severity = parse_severity(ask("Severity to query (Alto/Medio/Bajo)")).unwrap()
    found = store.query_by_severity(severity)
    if not found:
        click.echo(f"No reports with severity {severity.display}")
        return
    click.echo(f"Results for severity {severity.display}:")
    show_reports(found)


def query_by_date_from(store: ReportStore) -> None:
    earliest, latest = store.get_date_range()
    click.echo(f"Earliest date: {earliest.isoformat()}")
    click.echo(f"Latest date: {latest.isoformat()}")
    from_date = parse_date(ask("From date (YYYY-MM-DD)")).unwrap()
    found = store.query_by_date_from(from_date)
    if not found:
        click.echo(f"No reports since {from_date.isoformat()}")
        return
    click.echo(f"Results since {from_date.isoformat()}:")
    show_reports(found)


def generate_report_file(store: ReportStore) -> None:
    kind = ask("Report type to generate (Hardware/Software)")
    outpath = store.generate_report_file(kind)
    if outpath is None:
        click.echo(f"No {kind.capitalize()} reports to export.")
    else:
        click.echo(f"Report generated at: {outpath}")


ACTIONS: Dict[str, Callable[[ReportStore], None]] = {
    "1": create_hardware_report,
    "2": create_software_report,
    "3": query_by_equipment_id,
    "4": query_by_severity,
    "5": query_by_date_from,
    "6": generate_report_file,
}
EXIT_OPTION = str(len(MENU_OPTIONS))


def print_menu() -> None:
    click.echo("\nChoose an option:")
    for number, label in enumerate(MENU_OPTIONS, start=1):
        click.echo(f"{number}. {label}")


def run_menu(store: ReportStore) -> None:
    """Runs the numbered menu until the user picks Exit.

    Any ReportError raised by an action is printed and the menu is shown again; nothing
    the user types ends the loop except the Exit option (or end of input).
    """
    click.echo("=== Equipment Incident Reports ===")
    while True:
        print_menu()
        option = ask("Option")
        if option == EXIT_OPTION:
            click.echo("Exiting...")
            return
        action = ACTIONS.get(option)
        if action is None:
            click.echo(f"Invalid option. Enter 1-{EXIT_OPTION}.")
            continue
        try:
            action(store)
        except ExportIOError as err:
            logger.error(f"Export failed: {err}")
            click.echo(f"Error creating file: {err.message}")
        except ReportError as err:
            click.echo(f"Error: {err.message}")


@click.command("menu")
@pass_store_handle
def menu(handle):
    """Interactive menu to create, query and export reports."""
    run_menu(handle.store)
