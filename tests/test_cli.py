"""End-to-end tests for the command-line interface."""

import json
import logging

import pandas as pd
import pytest

from autoscheduling.cli import build_parser, main
from autoscheduling.logger import ROOT_LOGGER_NAME

EMPLOYEES_CSV = """employee_id,first_name,last_name,position,hourly_rate,available_days,overall_performance
E1,Ada,Lovelace,barista,16,monday;tuesday;wednesday;thursday;friday,90
E2,Bob,Stone,barista,14,monday;tuesday;wednesday;thursday;friday,72
E3,Cara,Ng,cook,15,monday;tuesday,60
"""

AVAILABILITY_CSV = """employee_id,day_of_week,start_time,end_time
E3,monday,06:00,22:00
E3,tuesday,06:00,22:00
"""

REQUIREMENTS_CSV = """date,time_slot,position,required_staff,priority
2025-01-06,07:00-15:00,barista,2,high
2025-01-06,10:00-18:00,cook,1,critical
2025-01-07,07:00-15:00,barista,1,medium
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def seeded_db(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"
    (tmp_path / "employees.csv").write_text(EMPLOYEES_CSV)
    (tmp_path / "availability.csv").write_text(AVAILABILITY_CSV)
    (tmp_path / "requirements.csv").write_text(REQUIREMENTS_CSV)

    main(["--db", db_url, "init-db"])
    main([
        "--db", db_url, "import-csv",
        "--employees", str(tmp_path / "employees.csv"),
        "--availability", str(tmp_path / "availability.csv"),
        "--requirements", str(tmp_path / "requirements.csv"),
    ])
    return db_url


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_generate_requires_range():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["generate", "--start", "2025-01-06"])


@pytest.mark.integration
def test_import_generate_persist_export(seeded_db, tmp_path, capsys):
    out = tmp_path / "schedule.csv"
    main([
        "--db", seeded_db, "generate",
        "--start", "2025-01-06", "--end", "2025-01-12",
        "--out", str(out), "--persist",
    ])
    printed = capsys.readouterr().out
    assert "[OK] Persisted 4 shifts" in printed
    assert "[OK] Generated 4 shifts for 2025-01-06..2025-01-12" in printed

    generated = pd.read_csv(out)
    assert len(generated) == 4
    assert set(generated["employee_id"]) == {"E1", "E2", "E3"}

    stored = tmp_path / "stored.csv"
    main(["--db", seeded_db, "export", "--start", "2025-01-06", "--end", "2025-01-12", "--out", str(stored)])
    assert "[OK] Exported 4 shifts" in capsys.readouterr().out
    assert len(pd.read_csv(stored)) == 4


@pytest.mark.integration
def test_generate_json_report(seeded_db, capsys):
    main(["--db", seeded_db, "generate", "--start", "2025-01-06", "--end", "2025-01-12", "--json"])
    printed = capsys.readouterr().out
    report = json.loads(printed[printed.index("{"): printed.rindex("}") + 1])
    assert report["success"] is True
    assert report["metrics"]["total_shifts"] == 4
    assert report["metrics"]["coverage_rate"] == 100.0
    assert report["conflicts"] == []


@pytest.mark.integration
def test_import_failure_reports_error(tmp_path, capsys):
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"
    main(["--db", db_url, "init-db"])
    bad = tmp_path / "requirements.csv"
    bad.write_text("date,time_slot,position,required_staff\n2025-01-06,18:00-09:00,barista,1\n")

    with pytest.raises(ValueError):
        main(["--db", db_url, "import-csv", "--requirements", str(bad)])
    assert "[ERROR] Import failed" in capsys.readouterr().out
