"""Common test fixtures for notexfr."""

import logging
from pathlib import Path

import pytest

from notexfr.config import config
from notexfr.observability import ROOT_LOGGER_NAME
from notexfr.services.reconciler import BackfillParams, ConvertParams

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers added by configure_logging so tests stay independent."""
    yield
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.NOTSET)


@pytest.fixture
def test_config(monkeypatch):
    """Pin settings that affect output (auto-restored even on crash)."""
    monkeypatch.setattr(config, "conflict_prefix", "conflict - ")
    monkeypatch.setattr(config, "json_indent", None)
    yield config


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def backfill_params(tmp_path):
    """Params reading every fixture file and writing into tmp_path."""
    return BackfillParams(
        input_sn=FIXTURES_DIR / "sn_conversion.json",
        input_en_notebooks=FIXTURES_DIR / "edam_notebooks.json",
        input_en_notes=FIXTURES_DIR / "edam_notes.json",
        input_en_tags=FIXTURES_DIR / "edam_tags.json",
        output_notebooks=tmp_path / "notebooks.json",
        output_notes=tmp_path / "notes.json",
        output_tags=tmp_path / "tags.json",
    )


@pytest.fixture
def convert_params(tmp_path):
    """Params for the conversion operations, writing into tmp_path."""
    return ConvertParams(
        input_en_notebooks=FIXTURES_DIR / "edam_notebooks.json",
        input_en_notes=FIXTURES_DIR / "edam_notes.json",
        input_en_tags=FIXTURES_DIR / "edam_tags.json",
        input=FIXTURES_DIR / "export.enex",
        output=tmp_path / "out.json",
    )
