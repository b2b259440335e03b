"""Unit tests for export service."""

import json

import pytest

from energy_trading_sim.schemas import FinalReport, GameRun
from energy_trading_sim.services.export import (
    export_run_to_csv,
    export_run_to_excel,
    save_run_json,
)


@pytest.fixture
def sample_run(basic_config, tick_result_factory) -> GameRun:
    """Create a sample game run for testing."""
    return GameRun(
        id="test_run_123",
        config=basic_config,
        ticks=[tick_result_factory(step=i + 1, hour=7 + i) for i in range(3)],
        report=FinalReport(
            total_profit=12.5, total_trades=4, final_rank=6, days_played=7
        ),
    )


def test_save_run_json(sample_run, tmp_path) -> None:
    path = save_run_json(sample_run, output_dir=tmp_path)
    assert path == tmp_path / "test_run_123" / "full_run.json"

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["id"] == "test_run_123"
    assert len(data["ticks"]) == 3
    assert GameRun.model_validate(data) == sample_run


def test_export_csv_bytes(sample_run) -> None:
    content = export_run_to_csv(sample_run, output_path="")
    assert isinstance(content, bytes)

    lines = content.decode("utf-8").strip().splitlines()
    assert len(lines) == 4  # header + 3 ticks
    header = lines[0].split(",")
    assert header[0] == "run_id"
    assert "market_price" in header
    assert "config_market_base_price" in header
    assert lines[1].startswith("test_run_123,")


def test_export_csv_file(sample_run, tmp_path) -> None:
    target = tmp_path / "run.csv"
    assert export_run_to_csv(sample_run, output_path=str(target)) == str(target)
    assert target.exists()


def test_export_csv_without_ticks(basic_config) -> None:
    run = GameRun(id="empty", config=basic_config)
    lines = export_run_to_csv(run, output_path="").decode("utf-8").strip().splitlines()
    assert len(lines) == 2


def test_export_excel_bytes(sample_run, engine) -> None:
    engine.submit_trade("buy", 10, 0.12)
    content = export_run_to_excel(
        sample_run, trades=engine.get_trades(), output_path=""
    )
    assert isinstance(content, bytes)
    assert content[:2] == b"PK"  # xlsx is a zip container


def test_export_excel_file(sample_run, tmp_path) -> None:
    target = tmp_path / "run.xlsx"
    assert export_run_to_excel(sample_run, output_path=str(target)) == str(target)
    assert target.stat().st_size > 0


def test_export_headless_run(engine) -> None:
    run = engine.run_headless(max_ticks=30)
    content = export_run_to_excel(
        run,
        trades=engine.get_trades(),
        output_path="",
        price_history=engine.get_market().price_history,
    )
    assert content[:2] == b"PK"
