#!/usr/bin/env python3
"""
Evaluation Runner for Gradient Regression

Runs the test suite and generates a structured JSON report under
evaluation/reports/<date>/<time>/report.json.
"""

import json
import os
import sys
import uuid
import subprocess
from datetime import datetime
from pathlib import Path

TASK_TITLE = "Gradient Descent Linear Regression"
PROJECT_ROOT = Path(__file__).resolve().parent.parent
REPORT_FILE = Path("/tmp/gradient_regression_pytest_report.json")


def generate_run_id():
    """Generate a unique run ID."""
    return str(uuid.uuid4())


def format_timestamp(dt):
    return dt.isoformat()


def get_environment_info():
    """Get Python version and platform information."""
    return {
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "platform": f"{sys.platform}-{os.uname().machine if hasattr(os, 'uname') else 'unknown'}"
    }


def run_pytest():
    """Run pytest and capture output and return code."""
    try:
        result = subprocess.run(
            [
                sys.executable, "-m", "pytest",
                "tests/",
                "-v",
                "--tb=short",
                "--json-report",
                f"--json-report-file={REPORT_FILE}"
            ],
            capture_output=True,
            text=True,
            cwd=PROJECT_ROOT
        )
    except OSError as e:
        return {
            "passed": False,
            "return_code": 1,
            "output": f"Error running tests: {e}"
        }, str(e)

    test_details = {
        "passed": result.returncode == 0,
        "return_code": result.returncode,
        "output": result.stdout[-1000:]
    }

    if REPORT_FILE.exists():
        with open(REPORT_FILE) as f:
            pytest_report = json.load(f)

        summary = pytest_report.get("summary", {})
        test_details["summary"] = {
            "passed": summary.get("passed", 0),
            "failed": summary.get("failed", 0),
            "errors": summary.get("error", 0),
            "skipped": summary.get("skipped", 0),
            "total": summary.get("total", 0)
        }

    return test_details, None


def run_tests():
    """Run pytest, print a summary and save the report."""
    run_id = generate_run_id()
    start_time = datetime.now()

    print(f"Run ID: {run_id}")
    print(f"Started at: {format_timestamp(start_time)}")
    print("=" * 60)
    print(f"{TASK_TITLE.upper()} EVALUATION")
    print("=" * 60)

    environment = get_environment_info()
    print(f"Python version: {environment['python_version']}")
    print(f"Platform: {environment['platform']}")
    print()

    tests, error = run_pytest()

    if tests["passed"]:
        print("[✓] All tests passed")
    else:
        print("[✗] Some tests failed")
    print(f"Return code: {tests['return_code']}")

    if "summary" in tests:
        s = tests["summary"]
        print(f"Test summary: {s['passed']} passed, {s['failed']} failed, "
              f"{s['errors']} errors, {s['skipped']} skipped (total: {s['total']})")

    end_time = datetime.now()
    duration_seconds = (end_time - start_time).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": format_timestamp(start_time),
        "finished_at": format_timestamp(end_time),
        "duration_seconds": round(duration_seconds, 2),
        "environment": environment,
        "tests": tests,
        "success": error is None and tests["passed"],
        "error": error
    }

    date_path = start_time.strftime("%Y-%m-%d")
    time_path = start_time.strftime("%H-%M-%S")
    report_dir = PROJECT_ROOT / "evaluation" / "reports" / date_path / time_path
    report_dir.mkdir(parents=True, exist_ok=True)

    report_path = report_dir / "report.json"
    with open(report_path, "w") as f:
        json.dump(report, f, indent=2)

    print()
    print(f"Duration: {duration_seconds:.2f}s")
    print(f"Overall Evaluation Success: {'YES' if report['success'] else 'NO'}")
    if error:
        print(f"Error: {error}")
    print(f"Report saved to: {report_path.relative_to(PROJECT_ROOT)}")

    return 0 if report["success"] else 1


if __name__ == "__main__":
    sys.exit(run_tests())
