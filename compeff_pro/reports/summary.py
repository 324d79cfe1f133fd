"""Calculation summary report generation for CompEff Pro.

Produces text and HTML reports from a CalculationState, summarising the
operating point, key performance figures, state points and, where the
mode has them, the water circuit and subcooler selection.
"""

from __future__ import annotations

import html as html_mod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from compeff_pro import __app_name__
from compeff_pro.core.config import CalculationState
from compeff_pro.cycle.solver import CalculationMode

# (input key, label, unit) shown under the operating point when present
_OPERATING_INPUTS: list[tuple[str, str, str]] = [
    ("T_evap", "Evaporating Temp", "°C"),
    ("T_cond", "Condensing Temp", "°C"),
    ("superheat", "Superheat", "K"),
    ("subcooling", "Subcooling", "K"),
    ("P_in", "Suction Pressure", "bar"),
    ("T_in", "Suction Temp", "°C"),
    ("P_out", "Discharge Pressure", "bar"),
    ("T_discharge", "Discharge Estimate", "°C"),
    ("T_water_in", "Water Inlet", "°C"),
    ("T_water_out", "Water Outlet", "°C"),
]

_STATE_COLUMNS: list[tuple[str, str]] = [
    ("T_C", "T [°C]"),
    ("P_bar", "P [bar]"),
    ("h_kJ", "h [kJ/kg]"),
    ("s_kJ", "s [kJ/kg·K]"),
    ("m_dot", "ṁ [kg/s]"),
]


def _mode_label(state: CalculationState) -> str:
    try:
        return CalculationMode(state.mode).label
    except ValueError:
        return state.mode


def _fmt(value: Any, digits: int = 3) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        if value != value:  # NaN
            return "—"
        return f"{value:.{digits}f}"
    return str(value)


def _operating_rows(state: CalculationState) -> list[tuple[str, str, str]]:
    rows = [("Mode", _mode_label(state), ""), ("Fluid", state.fluid, "")]
    for key, label, unit in _OPERATING_INPUTS:
        if key in state.inputs and state.inputs[key] is not None:
            rows.append((label, _fmt(state.inputs[key], 2), unit))
    return rows


def _water_rows(water: dict[str, Any]) -> list[tuple[str, str, str]]:
    rows = [
        ("Water Flow", _fmt(water.get("mass_flow", 0.0)), "kg/s"),
        ("Total Duty", _fmt(water.get("total_duty", 0.0) / 1e3, 2), "kW"),
    ]
    for ex in water.get("exchangers", []):
        if not ex.get("enabled"):
            continue
        name = ex["name"].replace("_", " ").capitalize()
        rows.append((f"{name} Duty", _fmt(ex["duty"] / 1e3, 2), "kW"))
        rows.append(
            (f"{name} Water", f"{ex['T_water_in']:.1f} → {ex['T_water_out']:.1f}", "°C")
        )
        status = "" if ex.get("approach_satisfied", True) else " (not met)"
        rows.append((f"{name} Approach", f"{ex['approach_actual']:.1f}{status}", "K"))
    return rows


def _subcooler_rows(sub: dict[str, Any]) -> list[tuple[str, str, str]]:
    rows = []
    for side, label in (("hot", "Liquid"), ("cold", "Injection")):
        inlet, outlet = sub[f"{side}_in"], sub[f"{side}_out"]
        rows.append((f"{label} Side T", f"{inlet['T_C']:.1f} → {outlet['T_C']:.1f}", "°C"))
        rows.append((f"{label} Side P", _fmt(inlet["P_bar"], 2), "bar"))
        rows.append((f"{label} Side Flow", _fmt(inlet["m_dot"], 4), "kg/s"))
        rows.append((f"{label} Side Duty", _fmt(sub[f"{side}_duty"] / 1e3, 2), "kW"))
    return rows


# --- Plain-text report ---


def generate_text_report(state: CalculationState) -> str:
    """Generate a plain-text calculation report.

    Args:
        state: CalculationState with inputs and results.

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _hr = "=" * 72

    lines.append(_hr)
    lines.append(f"  {__app_name__}: Calculation Report")
    lines.append(f"  {state.meta.name}")
    lines.append(_hr)
    lines.append("")

    lines.append("OPERATING POINT")
    lines.append("-" * 40)
    for label, value, unit in _operating_rows(state):
        _add_row(lines, label, value, unit)
    lines.append("")

    if state.summary:
        lines.append("PERFORMANCE")
        lines.append("-" * 40)
        for row in state.summary:
            _add_row(lines, row["parameter"], _fmt(row["value"]), row["unit"])
        lines.append("")

    if state.state_points:
        lines.append("STATE POINTS")
        lines.append("-" * 40)
        header = f"  {'Point':<8s}" + "".join(f"{title:>14s}" for _, title in _STATE_COLUMNS)
        lines.append(header + "  Description")
        for p in state.state_points:
            cells = "".join(f"{_fmt(p.get(key)):>14s}" for key, _ in _STATE_COLUMNS)
            lines.append(f"  {p['name']:<8s}{cells}  {p.get('description', '')}")
        lines.append("")

    water = state.results.get("water")
    if water:
        lines.append("WATER CIRCUIT")
        lines.append("-" * 40)
        for label, value, unit in _water_rows(water):
            _add_row(lines, label, value, unit)
        lines.append("")

    subcooler = state.results.get("subcooler")
    if subcooler:
        lines.append("SUBCOOLER SELECTION")
        lines.append("-" * 40)
        for label, value, unit in _subcooler_rows(subcooler):
            _add_row(lines, label, value, unit)
        lines.append("")

    if state.warnings:
        lines.append("WARNINGS")
        lines.append("-" * 40)
        for w in state.warnings:
            lines.append(f"  ! {w}")
        lines.append("")

    lines.append(_hr)
    lines.append(f"  Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append(f"  {__app_name__} v{state.meta.version}")
    lines.append(_hr)

    return "\n".join(lines)


def _add_row(lines: list[str], label: str, value: str, unit: str = "") -> None:
    unit_str = f" {unit}" if unit else ""
    lines.append(f"  {label:<24s} {value:>16}{unit_str}")


# --- HTML report ---


def generate_html_report(state: CalculationState) -> str:
    """Generate an HTML calculation report.

    Produces a self-contained HTML document with inline CSS styling.
    """
    sections: list[str] = [_html_header(state)]

    sections.append(_html_table("Operating Point", _operating_rows(state)))

    if state.summary:
        rows = [(r["parameter"], _fmt(r["value"]), r["unit"]) for r in state.summary]
        sections.append(_html_table("Performance", rows))

    if state.state_points:
        sections.append(_html_state_points(state.state_points))

    water = state.results.get("water")
    if water:
        sections.append(_html_table("Water Circuit", _water_rows(water)))

    subcooler = state.results.get("subcooler")
    if subcooler:
        sections.append(_html_table("Subcooler Selection", _subcooler_rows(subcooler)))

    if state.warnings:
        items = "\n".join(f"<li>{html_mod.escape(w)}</li>" for w in state.warnings)
        sections.append(f'<h2>Warnings</h2>\n<ul class="warnings">\n{items}\n</ul>')

    sections.append(_html_footer(state))
    return "\n".join(sections)


def _html_header(state: CalculationState) -> str:
    title = html_mod.escape(state.meta.name)
    app = html_mod.escape(__app_name__)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{app}: {title}</title>
<style>
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
       max-width: 900px; margin: 2em auto; padding: 0 1em; color: #222; }}
h1 {{ color: #115e59; border-bottom: 2px solid #0d9488; padding-bottom: 0.3em; }}
h2 {{ color: #0d9488; margin-top: 1.5em; }}
table {{ width: 100%; border-collapse: collapse; margin: 0.5em 0 1.5em; }}
th, td {{ text-align: left; padding: 0.4em 0.8em; border-bottom: 1px solid #e2e8f0; }}
th {{ background: #f0fdfa; color: #115e59; }}
td.num {{ text-align: right; font-family: "SF Mono", "Fira Code", monospace; }}
td.unit {{ color: #718096; font-size: 0.9em; }}
ul.warnings {{ color: #b45309; }}
.footer {{ margin-top: 2em; padding-top: 1em; border-top: 1px solid #e2e8f0;
           color: #a0aec0; font-size: 0.85em; }}
</style>
</head>
<body>
<h1>{app} &middot; Calculation Report</h1>
<p><strong>{title}</strong></p>
"""


def _html_table(title: str, rows: list[tuple[str, str, str]]) -> str:
    esc = html_mod.escape
    lines = [f"<h2>{esc(title)}</h2>", "<table>"]
    lines.append("<tr><th>Parameter</th><th>Value</th><th>Unit</th></tr>")
    for label, value, unit in rows:
        lines.append(
            f'<tr><td>{esc(label)}</td><td class="num">{esc(value)}</td>'
            f'<td class="unit">{esc(unit)}</td></tr>'
        )
    lines.append("</table>")
    return "\n".join(lines)


def _html_state_points(points: list[dict[str, Any]]) -> str:
    esc = html_mod.escape
    head = "".join(f"<th>{esc(title)}</th>" for _, title in _STATE_COLUMNS)
    lines = ["<h2>State Points</h2>", "<table>", f"<tr><th>Point</th>{head}<th>Description</th></tr>"]
    for p in points:
        cells = "".join(f'<td class="num">{esc(_fmt(p.get(key)))}</td>' for key, _ in _STATE_COLUMNS)
        lines.append(
            f"<tr><td>{esc(p['name'])}</td>{cells}<td>{esc(p.get('description', ''))}</td></tr>"
        )
    lines.append("</table>")
    return "\n".join(lines)


def _html_footer(state: CalculationState) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return f"""<div class="footer">
Generated: {ts} &middot; {html_mod.escape(__app_name__)} v{html_mod.escape(state.meta.version)}
</div>
</body>
</html>"""


def save_text_report(state: CalculationState, filepath: str | Path) -> None:
    """Generate and save a plain-text report to a file."""
    report = generate_text_report(state)
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(report)


def save_html_report(state: CalculationState, filepath: str | Path) -> None:
    """Generate and save an HTML report to a file."""
    report = generate_html_report(state)
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(report)
