# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JUnit XML reports for probe runs."""

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from imagematrix.common.enums import CheckStatus
from imagematrix.probe.models import CheckResult

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _xml_safe(text: str) -> str:
    """Drop terminal colour codes and characters XML 1.0 cannot carry."""
    return _XML_ILLEGAL.sub("", _ANSI_ESCAPE.sub("", text))


def write_junit_report(
    path: Path,
    suite_name: str,
    checks: list[CheckResult],
    error: str | None = None,
) -> Path:
    """Write one <testsuite> with a <testcase> per check.

    An internal error is recorded as a suite-level <error> test case so that
    report consumers see the failure even when no check ran.
    """
    failures = sum(1 for c in checks if c.status == CheckStatus.FAILED)
    skipped = sum(1 for c in checks if c.status == CheckStatus.SKIPPED)
    errors = 1 if error else 0

    suite = ET.Element(
        "testsuite",
        {
            "name": suite_name,
            "tests": str(len(checks) + errors),
            "failures": str(failures),
            "errors": str(errors),
            "skipped": str(skipped),
            "time": f"{sum(c.duration_seconds for c in checks):.3f}",
        },
    )
    for check in checks:
        case = ET.SubElement(
            suite,
            "testcase",
            {
                "classname": suite_name,
                "name": check.name,
                "time": f"{check.duration_seconds:.3f}",
            },
        )
        if check.status == CheckStatus.FAILED:
            failure = ET.SubElement(case, "failure", {"message": _xml_safe(check.message)})
            failure.text = _xml_safe(check.output)
        elif check.status == CheckStatus.SKIPPED:
            ET.SubElement(case, "skipped", {"message": _xml_safe(check.message)})
        if check.output:
            ET.SubElement(case, "system-out").text = _xml_safe(check.output)

    if error:
        case = ET.SubElement(suite, "testcase", {"classname": suite_name, "name": "probe setup"})
        ET.SubElement(case, "error", {"message": _xml_safe(error)})

    root = ET.Element("testsuites")
    root.append(suite)
    tree = ET.ElementTree(root)
    ET.indent(tree)
    path.parent.mkdir(parents=True, exist_ok=True)
    tree.write(path, encoding="utf-8", xml_declaration=True)
    return path
