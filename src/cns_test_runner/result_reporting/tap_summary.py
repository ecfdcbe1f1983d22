"""Count assertions in a captured TAP stream."""

from __future__ import annotations

import re

from .report_models import TapCounts

_ASSERTION_PATTERN = re.compile(r"^(not )?ok\b(.*)$")
_DIRECTIVE_PATTERN = re.compile(r"#\s*(skip|todo)\b", re.IGNORECASE)
_PLAN_PATTERN = re.compile(r"^1\.\.(\d+)")
_TESTS_COMMENT_PATTERN = re.compile(r"^#\s*tests\s+(\d+)")
_PASS_COMMENT_PATTERN = re.compile(r"^#\s*pass\s+(\d+)")


def parse_tap_counts(text: str) -> TapCounts:
    """Count top-level assertions against the plan.

    `ok` lines and lines carrying a SKIP or TODO directive count as passed. Planned
    assertions that never reported count as failed. Streams without any assertion
    lines fall back to the `# tests N` / `# pass N` trailer some harnesses print.
    """
    assertions = 0
    passed = 0
    planned = 0
    comment_tests: int | None = None
    comment_pass: int | None = None

    for line in text.splitlines():
        assertion = _ASSERTION_PATTERN.match(line)
        if assertion:
            assertions += 1
            if assertion.group(1) is None or _DIRECTIVE_PATTERN.search(assertion.group(2)):
                passed += 1
            continue
        plan = _PLAN_PATTERN.match(line)
        if plan:
            planned = int(plan.group(1))
            continue
        tests_comment = _TESTS_COMMENT_PATTERN.match(line)
        if tests_comment:
            comment_tests = int(tests_comment.group(1))
            continue
        pass_comment = _PASS_COMMENT_PATTERN.match(line)
        if pass_comment:
            comment_pass = int(pass_comment.group(1))

    if assertions == 0:
        total = comment_tests if comment_tests is not None else planned
        return TapCounts(total=total, passed=min(comment_pass or 0, total))
    return TapCounts(total=max(planned, assertions), passed=passed)
