"""CLI command for oil-injected gas compression."""

from __future__ import annotations

import click

from compeff_pro.cli.output import (
    calculation_options,
    database_displacement,
    finish,
    run_calculation,
)
from compeff_pro.core.compressors import displacement_m3h_to_cm3
from compeff_pro.cycle.common import EfficiencyBasis, FlowMode
from compeff_pro.cycle.gas import GasCompressionInput, GasEfficiencyType
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.utils.units import (
    FLOW_UNITS,
    PRESSURE_UNITS,
    TEMPERATURE_UNITS,
    to_bar,
    to_celsius,
    volume_flow_to_m3h,
)


@click.command("gas")
@click.option("--fluid", default="Air", show_default=True, help="Gas.")
@click.option("--p-in", type=float, default=1.0, show_default=True, help="Suction pressure (absolute).")
@click.option("--p-out", type=float, default=8.0, show_default=True, help="Discharge pressure (absolute).")
@click.option(
    "--pressure-unit",
    type=click.Choice(PRESSURE_UNITS),
    default="bar",
    show_default=True,
    help="Unit of --p-in and --p-out.",
)
@click.option("--t-in", type=float, default=20.0, show_default=True, help="Suction temperature.")
@click.option("--t-discharge", type=float, default=80.0, show_default=True, help="Oil-cooled discharge temperature.")
@click.option(
    "--temp-unit",
    type=click.Choice(TEMPERATURE_UNITS),
    default="degC",
    show_default=True,
    help="Unit of --t-in, --t-discharge and --aftercooler-t.",
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
@click.option("--eta-v", type=float, default=0.90, show_default=True, help="Volumetric efficiency.")
@click.option(
    "--eff-type",
    type=click.Choice(["isothermal", "isentropic"], case_sensitive=False),
    default="isothermal",
    show_default=True,
    help="Reference process of --eff.",
)
@click.option("--eff", type=float, default=0.70, show_default=True, help="Compressor efficiency.")
@click.option(
    "--basis",
    type=click.Choice(["shaft", "input"], case_sensitive=False),
    default="shaft",
    show_default=True,
)
@click.option("--motor-eff", type=float, default=0.95, show_default=True, help="Motor efficiency.")
@click.option("--auto-eff", is_flag=True, default=False, help="Estimate efficiencies from pressure ratio.")
@click.option("--aftercooler", is_flag=True, default=False, help="Add a gas aftercooler.")
@click.option("--aftercooler-t", type=float, default=35.0, show_default=True, help="Aftercooler outlet temperature.")
@click.option("--aftercooler-dp", type=float, default=0.2, show_default=True, help="Aftercooler pressure drop [bar].")
@calculation_options
@click.pass_context
def gas(
    ctx: click.Context,
    fluid: str,
    p_in: float,
    p_out: float,
    pressure_unit: str,
    t_in: float,
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
    eff_type: str,
    eff: float,
    basis: str,
    motor_eff: float,
    auto_eff: bool,
    aftercooler: bool,
    aftercooler_t: float,
    aftercooler_dp: float,
    output: str | None,
    no_history: bool,
) -> None:
    """Rate an oil-injected gas compressor (air, nitrogen, methane, ...)."""
    detail = database_displacement(brand, series, model)
    if flow is None:
        flow = float(detail["displacement"]) if detail else 100.0
    else:
        flow = volume_flow_to_m3h(flow, flow_unit)
    if displacement is None:
        displacement = displacement_m3h_to_cm3(detail["displacement"], rpm) if detail else 500.0

    inputs = GasCompressionInput(
        fluid=fluid,
        P_in=to_bar(p_in, pressure_unit),
        T_in=to_celsius(t_in, temp_unit),
        P_out=to_bar(p_out, pressure_unit),
        T_discharge=to_celsius(t_discharge, temp_unit),
        flow_mode=FlowMode(flow_mode.lower()),
        rpm=rpm,
        displacement_cm3=displacement,
        flow_m3h=flow,
        eta_v=eta_v,
        efficiency_type=GasEfficiencyType(eff_type.lower()),
        efficiency=eff,
        efficiency_basis=EfficiencyBasis(basis.lower()),
        motor_efficiency=motor_eff,
        auto_efficiency=auto_eff,
        aftercooler=aftercooler,
        aftercooler_T_out=to_celsius(aftercooler_t, temp_unit),
        aftercooler_pressure_drop=aftercooler_dp,
    )

    result = run_calculation(CalculationMode.M3, inputs)
    finish(ctx, CalculationMode.M3, inputs, result, output, no_history)
