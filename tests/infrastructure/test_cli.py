"""End-to-end CLI tests through click's CliRunner.

Each test gets its own data directory seeded with the shipped catalog and
users; the packing optimizer is replaced with the in-memory fake.
"""

import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from printops.infrastructure import bootstrap
from printops.infrastructure.cli import batch_commands
from printops.infrastructure.cli.main import cli
from tests.fakes import FakePackingOptimizer

DATA_DIR = Path(__file__).resolve().parents[2] / "data"


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    for name in ("catalog.json", "users.json"):
        shutil.copy(DATA_DIR / name, tmp_path / name)
    monkeypatch.setenv("PRINTOPS_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PRINTOPS_USER", raising=False)
    bootstrap.settings.cache_clear()
    yield tmp_path
    bootstrap.settings.cache_clear()


@pytest.fixture
def optimizer(monkeypatch):
    fake = FakePackingOptimizer()
    monkeypatch.setattr(batch_commands, "packing_optimizer", lambda: fake)
    return fake


def _run(*args: str, user: str = "u-admin"):
    return CliRunner().invoke(cli, ["--as-user", user, *args])


def _create_card(user: str = "u-client"):
    return _run(
        "order", "create",
        "--product", "Business Card",
        "--quantity", "1000",
        "--paper", "pp-art300",
        "--side", "SINGLE",
        "--quality", "300",
        "--note", "Trim tight",
        "--size", "sz-bc",
        "--finishing", "LAMINATION=matte",
        user=user,
    )


def test_create_and_show_order(data_dir):
    result = _create_card()
    assert result.exit_code == 0, result.output
    assert "Order #1 created" in result.output
    assert "3200.00 USD" in result.output

    shown = _run("order", "show", "--id", "1")
    assert "PENDING" in shown.output
    assert "Uv" in shown.output


def test_missing_finishing_reports_field(data_dir):
    result = _run(
        "order", "create",
        "--product", "Business Card",
        "--quantity", "10",
        "--paper", "ART-300",
        "--side", "DOUBLE",
        "--quality", "300",
        "--note", "x",
        "--size", "sz-bc",
        user="u-client",
    )
    assert result.exit_code == 1
    assert "lamination_type" in result.output


def test_non_finite_quality_and_unknown_finishing_rejected(data_dir):
    base = [
        "order", "create",
        "--product", "Business Card",
        "--quantity", "10",
        "--paper", "pp-art300",
        "--side", "SINGLE",
        "--note", "x",
        "--size", "sz-bc",
    ]
    nan = _run(*base, "--quality", "nan", "--finishing", "LAMINATION=matte", user="u-client")
    assert nan.exit_code == 1
    assert "quality" in nan.output

    glitter = _run(
        *base, "--quality", "300", "--finishing", "LAMINATION=matte", "--finishing", "GLITTER=gold",
        user="u-client",
    )
    assert glitter.exit_code == 1
    assert "GLITTER" in glitter.output
    assert "Order #" not in glitter.output


def test_acting_user_required(data_dir):
    result = CliRunner().invoke(cli, ["order", "approve", "--id", "1"])
    assert result.exit_code == 2
    assert "--as-user" in result.output


def test_client_cannot_approve(data_dir):
    _create_card()
    result = _run("order", "approve", "--id", "1", user="u-client")
    assert result.exit_code == 1
    assert "not allowed" in result.output


def test_batch_flow(data_dir, optimizer):
    for _ in range(3):
        _create_card()
    for order_id in ("1", "2", "3"):
        assert _run("order", "approve", "--id", order_id).exit_code == 0
    _run("order", "cancel", "--id", "2")

    rejected = _run("batch", "submit", "--orders", "1,2,3", "--sheet", "sh-sra3", user="u-staff")
    assert rejected.exit_code == 1
    assert "2" in rejected.output
    assert "Deselect these orders" in rejected.output
    assert optimizer.requests == []

    accepted = _run(
        "batch", "submit", "--orders", "1,3", "--sheet", "sh-sra3",
        "--algorithm", "shelf", "--timeout", "5", user="u-staff",
    )
    assert accepted.exit_code == 0, accepted.output
    assert "82.50%" in accepted.output
    assert optimizer.requests[0][1] == 5.0

    listed = _run("order", "list", "--status", "AUTOMATED")
    assert listed.output.count("AUTOMATED") == 2


def test_manual_batch_upload_limit(data_dir):
    big = data_dir / "big.pdf"
    big.write_bytes(b"x" * (1024 * 1024 + 1))
    result = _run("batch", "upload", str(big), user="u-staff")
    assert result.exit_code == 1
    assert "maximum allowed" in result.output


def test_catalog_estimate(data_dir):
    result = _run(
        "catalog", "estimate",
        "--product", "Business Card",
        "--quantity", "1000",
        "--paper", "pp-art300",
        "--size", "sz-bc",
        "--side", "DOUBLE",
        "--finishing", "LAMINATION=gloss",
    )
    assert result.exit_code == 0, result.output
    # 2.50 + 0.30 + 0.50 + 0.12 + 0.25 = 3.67
    assert "3670.00 USD" in result.output


def test_catalog_form_shows_auto_selection(data_dir):
    result = _run("catalog", "form", "--product", "Business Card")
    assert "uv_type" in result.output
    assert "auto-selected: spot" in result.output


def test_staff_listing(data_dir):
    result = _run("user", "staff")
    assert "u-staff" in result.output
    assert "u-client" not in result.output
