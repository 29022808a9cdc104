# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from datetime import date

import pytest
from click.testing import CliRunner

from equipreport.cmd.cli import StoreHandle
from equipreport.cmd.menu import menu
from equipreport.reporttypes import HardwareReport, SoftwareReport
from equipreport.store import ReportStore

NEW_HARDWARE = ["1", "EQ1", "Disco dañado", "Alto", "2025-05-18", "Disk", "12345", "Si"]
NEW_SOFTWARE = ["2", "EQ2", "Error instalando", "Bajo", "2025-05-20", "Windows 10", "Office", "2.3.1"]
EXIT = ["7"]


@pytest.fixture(name="run")
def fixture_run(tmp_path):
    data_file = tmp_path / "databaseReports.dat"
    output_dir = tmp_path / "reports"

    def _run(*answers):
        lines = [line for group in answers for line in group]
        handle = StoreHandle(data_file=data_file, output_dir=output_dir)
        return CliRunner().invoke(menu, [], obj=handle, input="\n".join(lines) + "\n")

    _run.data_file = data_file
    _run.output_dir = output_dir
    return _run


def stored(run):
    return list(ReportStore(data_file=run.data_file, output_dir=run.output_dir))


def test_exit(run):
    result = run(EXIT)
    assert result.exit_code == 0
    assert "Exiting..." in result.output


def test_create_reports(run):
    result = run(NEW_HARDWARE, NEW_SOFTWARE, EXIT)
    assert result.exit_code == 0, result.output
    assert "Hardware report saved." in result.output
    assert "Software report saved." in result.output
    reports = stored(run)
    assert isinstance(reports[0], HardwareReport)
    assert reports[0].reportDate == date(2025, 5, 18)
    assert reports[0].needsReplacement
    assert isinstance(reports[1], SoftwareReport)
    assert reports[1].operatingSystem == "Windows 10"


def test_validation_error_returns_to_menu(run):
    bad_severity = ["1", "EQ1", "Disco", "Urgente"]
    bad_serial = ["1", "EQ1", "Disco", "Alto", "2025-05-18", "Disk", "-5"]
    bad_version = ["2", "EQ2", "Fallo", "Bajo", "2025-05-20", "Linux", "vim", "9.0"]
    result = run(bad_severity, bad_serial, bad_version, EXIT)
    assert result.exit_code == 0
    assert result.output.count("Error: ") == 3
    assert "Exiting..." in result.output
    assert stored(run) == []


def test_invalid_option(run):
    result = run(["9"], EXIT)
    assert "Invalid option. Enter 1-7." in result.output


def test_queries(run):
    result = run(
        NEW_HARDWARE,
        NEW_SOFTWARE,
        ["3", "eq1"],
        ["4", "bajo"],
        ["5", "2025-05-19"],
        EXIT,
    )
    assert result.exit_code == 0, result.output
    assert "EQ1 (Alto, 2025-05-18)" in result.output
    assert "Results for eq1:" in result.output
    assert "  - EQ1 - Disco dañado - Alto - 2025-05-18 - Disk - 12345 - Si" in result.output
    assert "Results for severity Bajo:" in result.output
    assert "Earliest date: 2025-05-18" in result.output
    assert "Latest date: 2025-05-20" in result.output
    assert "Results since 2025-05-19:" in result.output
    assert "  - EQ2 - Error instalando - Bajo - 2025-05-20 - Windows 10 - Office - 2.3.1" in result.output


def test_queries_without_reports(run):
    result = run(["3"], ["4"], ["5"], EXIT)
    assert result.exit_code == 0
    assert result.output.count("No reports.") == 2
    assert "Error: There are no reports registered" in result.output


def test_generate_report_file(run):
    result = run(NEW_HARDWARE, ["6", "Software"], ["6", "Hardware"], ["6", "Firmware"], EXIT)
    assert result.exit_code == 0, result.output
    assert "No Software reports to export." in result.output
    assert "Report generated at:" in result.output
    assert "Error: Invalid report type" in result.output
    exported = list(run.output_dir.glob("Reporte_Hardware_*.txt"))
    assert len(exported) == 1


def test_save_failure_keeps_menu_running(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    handle = StoreHandle(
        data_file=blocker / "databaseReports.dat", output_dir=tmp_path / "reports"
    )
    lines = NEW_HARDWARE + ["3", "EQ1"] + EXIT
    result = CliRunner().invoke(menu, [], obj=handle, input="\n".join(lines) + "\n")
    assert result.exit_code == 0, result.output
    assert "Report kept for this session but not saved:" in result.output
    assert "Hardware report saved." not in result.output
    # still queryable for the rest of the session
    assert "Results for EQ1:" in result.output
    assert "Exiting..." in result.output


def test_empty_equipment_id_is_asked_again(run):
    answers = ["1", "", "   ", *NEW_HARDWARE[1:]]
    result = run(answers, EXIT)
    assert result.exit_code == 0, result.output
    assert result.output.count("Equipment id cannot be empty.") == 2
    assert [r.equipmentId for r in stored(run)] == ["EQ1"]
