"""Export functionality for game runs (JSON, CSV and Excel).

Exports run data to:
1. JSON with the full GameRun (config, ticks, final report).
2. CSV with one row per simulated hour and the configuration flattened
   into every row.
3. Excel with multiple sheets (Configuration, Summary, Ticks, Trades and,
   when given, Price History).
"""

import io
import math
import numbers
import os
from pathlib import Path

import pandas as pd
import xlsxwriter
from pydantic import BaseModel

from energy_trading_sim.core.ledger import Trade
from energy_trading_sim.schemas import FinalReport, GameConfig, GameRun
from energy_trading_sim.services.metrics import (
    price_history_to_frame,
    summarize_prices,
    ticks_to_frame,
    trades_to_frame,
)

OUTPUT_DIR = Path("outputs")


def save_run_json(run: GameRun, output_dir: Path | None = None) -> Path:
    """Persist the structured run to ``<output_dir>/<run.id>/full_run.json``."""
    run_dir = (output_dir or OUTPUT_DIR) / run.id
    run_dir.mkdir(parents=True, exist_ok=True)
    filepath = run_dir / "full_run.json"
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(run.model_dump_json(indent=2))
    return filepath


def _flatten_dict(d: dict, prefix: str = "config_") -> dict:
    items = []
    for k, v in d.items():
        new_key = f"{prefix}{k}"
        if isinstance(v, dict):
            items.extend(_flatten_dict(v, f"{new_key}_").items())
        elif isinstance(v, list):
            items.append((new_key, str(v)))
        else:
            items.append((new_key, v))
    return dict(items)


def export_run_to_csv(run: GameRun, output_path: str | None = None) -> str | bytes:
    """Export a run to a flattened CSV file.

    Includes all configuration parameters in every row to ensure the file is
    self-describing for external analysis tools.

    Args:
        run: The game run to export.
        output_path: File path to write to (None=auto, ""=bytes).

    Returns:
        str (path) if written to file.
        bytes if output_path was empty string.
    """
    flat_config = _flatten_dict(run.config.model_dump())

    df = ticks_to_frame(run.ticks)
    if df.empty:
        df = pd.DataFrame([{"run_id": run.id, **flat_config}])
    else:
        df.insert(0, "run_id", run.id)
        for key, value in flat_config.items():
            df[key] = value

    if output_path == "":
        return df.to_csv(index=False).encode("utf-8")

    if output_path is None:
        os.makedirs(OUTPUT_DIR, exist_ok=True)
        output_path = str(OUTPUT_DIR / f"game_run_{run.id}.csv")

    df.to_csv(output_path, index=False)
    return output_path


def export_run_to_excel(
    run: GameRun,
    trades: list[Trade] | None = None,
    output_path: str | None = None,
    price_history=None,
) -> str | bytes:
    """Export a run to an Excel workbook.

    Args:
        run: The game run to export.
        trades: Ledger entries to include (newest first), optional.
        output_path: File path to write to.
                     - If None (default): Generates a path in outputs/.
                     - If "": Returns bytes (in-memory).
                     - If valid path: Writes to that path.
        price_history: Rolling market history (PricePoints), optional.

    Returns:
        str (path) if written to file.
        bytes if output_path was empty string.
    """
    return_bytes = False

    if output_path == "":
        output = io.BytesIO()
        return_bytes = True
    elif output_path is None:
        os.makedirs(OUTPUT_DIR, exist_ok=True)
        output_path = str(OUTPUT_DIR / f"game_run_{run.id}.xlsx")
        output = output_path
    else:
        output = output_path

    workbook = xlsxwriter.Workbook(output)
    header_format = workbook.add_format(
        {"bold": True, "bg_color": "#2E7D32", "font_color": "white", "border": 1}
    )
    data_format = workbook.add_format({"border": 1})

    try:
        config_sheet = workbook.add_worksheet("Configuration")
        _write_config_sheet(config_sheet, run.config, header_format, data_format)

        summary_sheet = workbook.add_worksheet("Summary")
        _write_summary_sheet(summary_sheet, run, header_format, data_format)

        ticks_sheet = workbook.add_worksheet("Ticks")
        _write_frame(ticks_sheet, ticks_to_frame(run.ticks), header_format, data_format)

        trades_sheet = workbook.add_worksheet("Trades")
        _write_frame(
            trades_sheet, trades_to_frame(trades or []), header_format, data_format
        )

        if price_history is not None:
            history_sheet = workbook.add_worksheet("Price History")
            _write_frame(
                history_sheet,
                price_history_to_frame(price_history),
                header_format,
                data_format,
            )
    finally:
        workbook.close()

    if return_bytes:
        output.seek(0)
        return output.read()

    return output_path


def _cell(value):
    """Coerce a value into something xlsxwriter can write."""
    if value is None:
        return "None"
    if isinstance(value, float) and math.isnan(value):
        return ""
    if isinstance(value, (numbers.Number, str)):
        return value
    return str(value)


def _write_section(sheet, title: str, data: dict, row: int, header_format, data_format) -> int:
    sheet.write(row, 0, title, header_format)
    sheet.write(row, 1, "", header_format)
    row += 1
    for name, value in data.items():
        sheet.write(row, 0, name.replace("_", " ").title(), data_format)
        sheet.write(row, 1, _cell(value), data_format)
        row += 1
    return row + 1  # blank spacer row


def _write_config_sheet(sheet, config: GameConfig, header_format, data_format) -> None:
    """Write configuration parameters, one section per sub-config."""
    sheet.set_column("A:A", 30)
    sheet.set_column("B:B", 20)

    top_level = {}
    sections = {}
    for name in GameConfig.model_fields:
        value = getattr(config, name)
        if isinstance(value, BaseModel):
            sections[name] = value.model_dump()
        else:
            top_level[name] = value

    row = _write_section(sheet, "General", top_level, 0, header_format, data_format)
    for name, data in sections.items():
        row = _write_section(
            sheet, name.replace("_", " ").title(), data, row, header_format, data_format
        )


def _write_summary_sheet(sheet, run: GameRun, header_format, data_format) -> None:
    sheet.set_column("A:A", 25)
    sheet.set_column("B:B", 15)

    info = {"run_id": run.id, "total_ticks": len(run.ticks)}
    row = _write_section(sheet, "Run Information", info, 0, header_format, data_format)
    row = _write_section(
        sheet, "Prices", summarize_prices(run.ticks), row, header_format, data_format
    )
    if run.report is not None:
        report = {
            name: getattr(run.report, name) for name in FinalReport.model_fields
        }
        _write_section(sheet, "Final Report", report, row, header_format, data_format)


def _write_frame(sheet, df: pd.DataFrame, header_format, data_format) -> None:
    for col, name in enumerate(df.columns):
        sheet.write(0, col, name, header_format)
    for row, record in enumerate(df.itertuples(index=False), start=1):
        for col, value in enumerate(record):
            sheet.write(row, col, _cell(value), data_format)
