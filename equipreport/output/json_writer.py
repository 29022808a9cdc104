# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import json
from typing import Any, Dict, Iterable

from equipreport.reporttypes import Report


def report_to_dict(report: Report) -> Dict[str, Any]:
    # variant tag first so the dump is readable without knowing the field sets
    entry: Dict[str, Any] = {"kind": report.kind.value}
    entry.update(report.to_dict(encode_json=True))
    return entry


def write_reports(reports: Iterable[Report], outfile) -> None:
    json.dump(
        {"reports": [report_to_dict(r) for r in reports]},
        outfile,
        indent=2,
        ensure_ascii=False,
    )
    outfile.write("\n")
