"""Shared fixtures: a fresh record file and log in a temporary directory."""

import re
from pathlib import Path

import pytest

from record_keeper.config import RecordKeeperSettings
from record_keeper.orchestrator import create_app_components


LOG_LINE_RE = re.compile(
    r"^\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2} [A-Za-z]+ (Success|Failure|Aborted)( \S.*)?$"
)


@pytest.fixture
def settings(monkeypatch) -> RecordKeeperSettings:
    for var in (
        "RECORD_KEEPER_LOG_SUFFIX",
        "RECORD_KEEPER_TIMESTAMP_FORMAT",
        "RECORD_KEEPER_MATCH_POLICY",
        "RECORD_KEEPER_SEARCH_CASE_SENSITIVE",
        "RECORD_KEEPER_FILE_ENCODING",
        "RECORD_KEEPER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return RecordKeeperSettings(_env_file=None)


@pytest.fixture
def record_path(tmp_path) -> Path:
    return tmp_path / "records.txt"


@pytest.fixture
def log_path(record_path) -> Path:
    return Path(f"{record_path}_log")


@pytest.fixture
def components(record_path, settings):
    return create_app_components(record_path, settings)


@pytest.fixture
def controller(components):
    return components[0]


@pytest.fixture
def audit_logger(components):
    return components[1]


def write_records(path: Path, *lines: str) -> None:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def read_log(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()
