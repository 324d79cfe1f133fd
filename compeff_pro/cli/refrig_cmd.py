"""CLI command for single-stage oil-injected refrigeration / heat pump rating."""

from __future__ import annotations

import click

from compeff_pro.cli.output import (
    calculation_options,
    database_displacement,
    finish,
    run_calculation,
)
from compeff_pro.core.compressors import displacement_m3h_to_cm3
from compeff_pro.cycle.common import EfficiencyBasis, FlowMode, PressureMode
from compeff_pro.cycle.components.economizer import EconomizerType
from compeff_pro.cycle.refrigeration import RefrigerationInput
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.utils.units import (
    FLOW_UNITS,
    TEMPERATURE_UNITS,
    to_celsius,
    volume_flow_to_m3h,
)


@click.command("refrig")
@click.option("--fluid", default="R134a", show_default=True, help="Refrigerant.")
@click.option("--te", type=float, default=-10.0, show_default=True, help="Evaporating temperature.")
@click.option("--tc", type=float, default=40.0, show_default=True, help="Condensing temperature.")
@click.option("--superheat", type=float, default=5.0, show_default=True, help="Suction superheat [K].")
@click.option("--subcooling", type=float, default=5.0, show_default=True, help="Liquid subcooling [K].")
@click.option("--t-discharge", type=float, default=80.0, show_default=True, help="Oil-cooled discharge estimate.")
@click.option(
    "--temp-unit",
    type=click.Choice(TEMPERATURE_UNITS),
    default="degC",
    show_default=True,
    help="Unit of --te, --tc, --t-discharge and --eco-t-sat.",
)
@click.option(
    "--flow-mode",
    type=click.Choice(["volume", "rpm"], case_sensitive=False),
    default="volume",
    show_default=True,
    help="Swept volume from m³/h or from speed × displacement.",
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
@click.option("--eta-s", type=float, default=0.70, show_default=True, help="Isentropic efficiency.")
@click.option("--motor-eff", type=float, default=0.95, show_default=True, help="Motor efficiency.")
@click.option(
    "--basis",
    type=click.Choice(["shaft", "input"], case_sensitive=False),
    default="shaft",
    show_default=True,
    help="Whether --eta-s refers to shaft or electrical input power.",
)
@click.option("--auto-eff", is_flag=True, default=False, help="Estimate efficiencies from pressure ratio.")
@click.option("--eco", is_flag=True, default=False, help="Enable economizer.")
@click.option(
    "--eco-type",
    type=click.Choice(["subcooler", "flash_tank"], case_sensitive=False),
    default="subcooler",
    show_default=True,
)
@click.option("--eco-t-sat", type=float, default=None, help="Economizer saturation temperature (manual pressure).")
@click.option("--eco-superheat", type=float, default=5.0, show_default=True, help="Injection superheat [K].")
@calculation_options
@click.pass_context
def refrig(
    ctx: click.Context,
    fluid: str,
    te: float,
    tc: float,
    superheat: float,
    subcooling: float,
    t_discharge: float,
    temp_unit: str,
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
    motor_eff: float,
    basis: str,
    auto_eff: bool,
    eco: bool,
    eco_type: str,
    eco_t_sat: float | None,
    eco_superheat: float,
    output: str | None,
    no_history: bool,
) -> None:
    """Rate a single-stage oil-injected refrigeration or heat-pump compressor."""
    detail = database_displacement(brand, series, model)
    if flow is None:
        flow = float(detail["displacement"]) if detail else 100.0
    else:
        flow = volume_flow_to_m3h(flow, flow_unit)
    if displacement is None:
        displacement = displacement_m3h_to_cm3(detail["displacement"], rpm) if detail else 500.0

    inputs = RefrigerationInput(
        fluid=fluid,
        T_evap=to_celsius(te, temp_unit),
        T_cond=to_celsius(tc, temp_unit),
        superheat=superheat,
        subcooling=subcooling,
        T_discharge=to_celsius(t_discharge, temp_unit),
        flow_mode=FlowMode(flow_mode.lower()),
        rpm=rpm,
        displacement_cm3=displacement,
        flow_m3h=flow,
        eta_v=eta_v,
        eta_s=eta_s,
        motor_efficiency=motor_eff,
        efficiency_basis=EfficiencyBasis(basis.lower()),
        auto_efficiency=auto_eff,
        economizer=eco,
        economizer_type=EconomizerType(eco_type.lower()),
        economizer_pressure_mode=PressureMode.AUTO if eco_t_sat is None else PressureMode.MANUAL,
        economizer_T_sat=to_celsius(eco_t_sat, temp_unit),
        economizer_superheat=eco_superheat,
    )

    result = run_calculation(CalculationMode.M2, inputs)
    finish(ctx, CalculationMode.M2, inputs, result, output, no_history)
