"""Tests for the command line entry point."""
from pathlib import Path

import pytest

from commission_tracker import cli
from commission_tracker.core.config import settings


def test_parse_upload_args():
    args = cli.parse_args(["upload", "a.pdf", "b.xlsx", "--concurrency", "3", "--ask", "total?"])
    assert args.command == "upload"
    assert args.files == [Path("a.pdf"), Path("b.xlsx")]
    assert args.concurrency == 3
    assert args.ask == "total?"


def test_parse_init_db_args():
    assert cli.parse_args(["init-db"]).command == "init-db"


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.parse_args([])


@pytest.mark.asyncio
async def test_run_upload_end_to_end(tmp_path, asgi_transport, seeded_db, monkeypatch):
    monkeypatch.setattr(settings, "DASHBOARD_REFRESH_DELAY", 0.0)
    monkeypatch.setattr(settings, "ASSISTANT_RESPONSE_DELAY", 0.0)
    (tmp_path / "bcbs_jun.pdf").write_bytes(b"%PDF-1.4")
    (tmp_path / "readme.txt").write_text("not a statement")

    output = await cli.run_upload(
        [tmp_path / "bcbs_jun.pdf", tmp_path / "readme.txt"],
        api_url="http://test",
        question="which carrier?",
        transport=asgi_transport,
    )

    assert output["state"] == "settled"
    assert output["notice"].startswith("Invalid file type(s): readme.txt")
    assert output["results"][0]["carrier"] == "Blue Cross Blue Shield"
    assert output["results"][0]["month"] == "June 2024"
    assert output["results"][0]["fileName"] == "bcbs_jun.pdf"
    assert output["failed"] == []
    assert output["dashboard"]["statements_processed"] == 4
    assert output["dashboard"]["active_carriers"] == 3
    assert output["assistant"] == "Carriers in this batch: Blue Cross Blue Shield."
