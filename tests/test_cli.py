"""Tests for the SwapGuard CLI."""

import json
import tempfile

from click.testing import CliRunner

from swapguard.cli import EXIT_BLOCKED, EXIT_CLEAN, EXIT_FLAGGED, main


def test_check_clean():
    result = CliRunner().invoke(main, ["check", "Is this still available?"])
    assert result.exit_code == EXIT_CLEAN
    assert "CLEAN" in result.output


def test_check_blocked():
    result = CliRunner().invoke(main, ["check", "Call me at 555-123-4567"])
    assert result.exit_code == EXIT_BLOCKED
    assert "BLOCKED" in result.output
    assert "phone" in result.output


def test_check_flagged():
    result = CliRunner().invoke(main, ["check", "Check out my website www.example.com"])
    assert result.exit_code == EXIT_FLAGGED
    assert "FLAGGED" in result.output


def test_check_json():
    result = CliRunner().invoke(main, ["check", "--json", "Call me at 555-123-4567"])
    assert result.exit_code == EXIT_BLOCKED
    data = json.loads(result.output)
    assert data["blocked"] is True
    assert data["risk_score"] == 50
    assert data["flags"][0]["category"] == "phone"


def test_check_with_config():
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    f.write("platform_name: tradepost\nplatform_domain: tradepost.io\n")
    f.close()
    result = CliRunner().invoke(main, ["check", "--config", f.name, "https://tradepost.io/item/9"])
    assert result.exit_code == EXIT_CLEAN


def test_check_with_bad_config():
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    f.write("failure_policy: shrug\n")
    f.close()
    result = CliRunner().invoke(main, ["check", "--config", f.name, "hello"])
    assert result.exit_code == 1
    assert "failure_policy" in result.output


def test_redact():
    result = CliRunner().invoke(main, ["redact", "Call me at 555-123-4567"])
    assert result.exit_code == 0
    assert result.output.strip() == "Call me at [PHONE REDACTED]"


def test_batch():
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False, encoding="utf-8")
    f.write("Is this still available?\n\nCall me at 555-123-4567\n")
    f.close()
    result = CliRunner().invoke(main, ["batch", f.name, "--workers", "2"])
    assert result.exit_code == 0
    records = [json.loads(line) for line in result.output.splitlines()]
    assert [r["line"] for r in records] == [1, 3]
    assert [r["blocked"] for r in records] == [False, True]


def test_catalog_json():
    result = CliRunner().invoke(main, ["catalog", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["version"]
    assert {m["category"] for m in data["matchers"]} >= {"phone", "crypto"}


def test_catalog_table():
    result = CliRunner().invoke(main, ["catalog"])
    assert result.exit_code == 0
    assert "Pattern catalog" in result.output
