"""CLI command for the ammonia heat pump with hot-water circuit."""

from __future__ import annotations

import click

from compeff_pro.cli.output import (
    calculation_options,
    database_displacement,
    finish,
    run_calculation,
)
from compeff_pro.core.compressors import displacement_m3h_to_cm3
from compeff_pro.core.polynomial import FlowModel
from compeff_pro.cycle.common import FlowMode
from compeff_pro.cycle.heat_pump import HeatPumpInput
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.utils.units import (
    FLOW_UNITS,
    TEMPERATURE_UNITS,
    to_celsius,
    volume_flow_to_m3h,
)


def _parse_coeffs(ctx: click.Context, param: click.Parameter, value: str | None) -> list[float]:
    """Comma- or space-separated AHRI coefficients."""
    if not value:
        return []
    try:
        return [float(v) for v in value.replace(",", " ").split()]
    except ValueError as exc:
        raise click.BadParameter(f"Coefficients must be numbers: {exc}") from exc


@click.command("heat-pump")
@click.option("--te", type=float, default=5.0, show_default=True, help="Evaporating temperature.")
@click.option("--tc", type=float, default=75.0, show_default=True, help="Condensing temperature.")
@click.option("--superheat", type=float, default=5.0, show_default=True, help="Suction superheat [K].")
@click.option("--subcooling", type=float, default=5.0, show_default=True, help="Liquid subcooling [K].")
@click.option("--t-discharge", type=float, default=110.0, show_default=True, help="Oil-cooled discharge estimate.")
@click.option("--water-in", type=float, default=40.0, show_default=True, help="Water inlet temperature.")
@click.option("--water-out", type=float, default=70.0, show_default=True, help="Water outlet temperature.")
@click.option(
    "--temp-unit",
    type=click.Choice(TEMPERATURE_UNITS),
    default="degC",
    show_default=True,
    help="Unit of all absolute temperatures.",
)
@click.option(
    "--flow-model",
    type=click.Choice(["geometry", "polynomial"], case_sensitive=False),
    default="geometry",
    show_default=True,
    help="Mass flow and power from displacement or from AHRI 540 coefficients.",
)
@click.option(
    "--flow-mode",
    type=click.Choice(["volume", "rpm"], case_sensitive=False),
    default="volume",
    show_default=True,
)
@click.option("--flow", type=float, default=None, help="Swept volume flow (default 100 m³/h).")
@click.option(
    "--flow-unit",
    type=click.Choice(FLOW_UNITS),
    default="m**3/hour",
    show_default=True,
    help="Unit of --flow.",
)
@click.option("--rpm", type=float, default=2900.0, show_default=True, help="Compressor speed [rpm].")
@click.option("--displacement", type=float, default=None, help="Displacement [cm³/rev] (default 500).")
@click.option("--brand", default=None, help="Compressor brand (database lookup).")
@click.option("--series", default=None, help="Compressor series (database lookup).")
@click.option("--model", default=None, help="Compressor model; fills the displacement when no flow is given.")
@click.option("--eta-v", type=float, default=0.85, show_default=True, help="Volumetric efficiency.")
@click.option("--eta-s", type=float, default=0.75, show_default=True, help="Isentropic efficiency.")
@click.option("--auto-eff", is_flag=True, default=False, help="Screw efficiencies from pressure ratio and Vi.")
@click.option("--vi", type=float, default=3.6, show_default=True, help="Built-in volume ratio.")
@click.option("--mass-coeffs", callback=_parse_coeffs, help="AHRI mass-flow coefficients C1..C10 [kg/s].")
@click.option("--power-coeffs", callback=_parse_coeffs, help="AHRI power coefficients C1..C10 [kW].")
@click.option("--correction-coeffs", callback=_parse_coeffs, help="VSD correction coefficients.")
@click.option("--vsd", is_flag=True, default=False, help="Variable-speed drive.")
@click.option("--rated-rpm", type=float, default=2900.0, show_default=True)
@click.option("--current-rpm", type=float, default=2900.0, show_default=True)
@click.option("--subcooler/--no-subcooler", default=False, show_default=True, help="Water subcooler.")
@click.option("--oil-cooler/--no-oil-cooler", default=True, show_default=True, help="Water-cooled oil cooler.")
@click.option("--condenser/--no-condenser", default=True, show_default=True, help="Water-cooled condenser.")
@click.option("--desuperheater/--no-desuperheater", default=False, show_default=True, help="Desuperheater.")
@click.option("--desuperheater-t-out", type=float, default=90.0, show_default=True, help="Desuperheater gas outlet.")
@calculation_options
@click.pass_context
def heat_pump(
    ctx: click.Context,
    te: float,
    tc: float,
    superheat: float,
    subcooling: float,
    t_discharge: float,
    water_in: float,
    water_out: float,
    temp_unit: str,
    flow_model: str,
    flow_mode: str,
    flow: float | None,
    flow_unit: str,
    rpm: float,
    displacement: float | None,
    brand: str | None,
    series: str | None,
    model: str | None,
    eta_v: float,
    eta_s: float,
    auto_eff: bool,
    vi: float,
    mass_coeffs: list[float],
    power_coeffs: list[float],
    correction_coeffs: list[float],
    vsd: bool,
    rated_rpm: float,
    current_rpm: float,
    subcooler: bool,
    oil_cooler: bool,
    condenser: bool,
    desuperheater: bool,
    desuperheater_t_out: float,
    output: str | None,
    no_history: bool,
) -> None:
    """Rate an NH3 heat pump and size its hot-water circuit."""
    model_choice = FlowModel(flow_model.lower())
    if model_choice == FlowModel.POLYNOMIAL and not (mass_coeffs and power_coeffs):
        raise click.UsageError("The polynomial flow model needs --mass-coeffs and --power-coeffs")

    detail = database_displacement(brand, series, model)
    if flow is None:
        flow = float(detail["displacement"]) if detail else 100.0
    else:
        flow = volume_flow_to_m3h(flow, flow_unit)
    if displacement is None:
        displacement = displacement_m3h_to_cm3(detail["displacement"], rpm) if detail else 500.0

    inputs = HeatPumpInput(
        T_evap=to_celsius(te, temp_unit),
        T_cond=to_celsius(tc, temp_unit),
        superheat=superheat,
        subcooling=subcooling,
        T_discharge=to_celsius(t_discharge, temp_unit),
        flow_model=model_choice,
        flow_mode=FlowMode(flow_mode.lower()),
        rpm=rpm,
        displacement_cm3=displacement,
        flow_m3h=flow,
        eta_v=eta_v,
        eta_s=eta_s,
        auto_efficiency=auto_eff,
        vi_ratio=vi,
        mass_flow_coeffs=mass_coeffs,
        power_coeffs=power_coeffs,
        correction_coeffs=correction_coeffs,
        vsd_enabled=vsd,
        rated_rpm=rated_rpm,
        current_rpm=current_rpm,
        T_water_in=to_celsius(water_in, temp_unit),
        T_water_out=to_celsius(water_out, temp_unit),
        subcooler=subcooler,
        oil_cooler=oil_cooler,
        condenser=condenser,
        desuperheater=desuperheater,
        desuperheater_T_out=to_celsius(desuperheater_t_out, temp_unit),
    )

    result = run_calculation(CalculationMode.M7, inputs)
    finish(ctx, CalculationMode.M7, inputs, result, output, no_history)

    console = ctx.obj["console"]
    for ex in result.water.exchangers:
        if ex.enabled:
            console.print(
                f"  [cyan]{ex.name}[/cyan]: {ex.duty / 1e3:.1f} kW, "
                f"water {ex.T_water_in:.1f} → {ex.T_water_out:.1f} °C"
            )
