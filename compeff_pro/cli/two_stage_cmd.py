"""CLI commands for two-stage compression (compound and two-compressor)."""

from __future__ import annotations

from typing import Any, Callable

import click

from compeff_pro.cli.output import (
    calculation_options,
    database_displacement,
    finish,
    run_calculation,
)
from compeff_pro.cycle.common import PressureMode
from compeff_pro.cycle.components.economizer import EconomizerType
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.cycle.two_stage_double import TwoStageDoubleInput
from compeff_pro.cycle.two_stage_single import TwoStageSingleInput
from compeff_pro.utils.units import TEMPERATURE_UNITS, to_celsius

_ECO_TYPES = click.Choice(["flash_tank", "subcooler"], case_sensitive=False)


@click.group("two-stage")
@click.pass_context
def two_stage(ctx: click.Context) -> None:
    """Two-stage compression commands."""
    pass


def _operating_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "--temp-unit",
        type=click.Choice(TEMPERATURE_UNITS),
        default="degC",
        show_default=True,
        help="Unit of all absolute temperatures.",
    )(func)
    func = click.option("--t-mid", type=float, default=None, help="Intermediate saturation temperature (manual).")(func)
    func = click.option("--t-discharge-lp", type=float, default=None, help="LP discharge estimate.")(func)
    func = click.option("--t-discharge", type=float, default=None, help="HP discharge estimate.")(func)
    func = click.option("--auto-eff", is_flag=True, default=False, help="Estimate stage efficiencies.")(func)
    func = click.option("--subcooling", type=float, default=5.0, show_default=True, help="Liquid subcooling [K].")(func)
    func = click.option("--superheat", type=float, default=5.0, show_default=True, help="Suction superheat [K].")(func)
    func = click.option("--tc", type=float, default=35.0, show_default=True, help="Condensing temperature.")(func)
    func = click.option("--te", type=float, default=-35.0, show_default=True, help="Evaporating temperature.")(func)
    func = click.option("--fluid", default="R717", show_default=True, help="Refrigerant.")(func)
    return func


@two_stage.command("single")
@_operating_options
@click.option("--flow", type=float, default=None, help="LP swept volume [m³/h] (default 500).")
@click.option("--eta-v-lp", type=float, default=0.80, show_default=True)
@click.option("--eta-s-lp", type=float, default=0.75, show_default=True)
@click.option("--eta-s-hp", type=float, default=0.75, show_default=True)
@click.option("--brand", default=None, help="Compressor brand (database lookup).")
@click.option("--series", default=None, help="Compressor series (database lookup).")
@click.option("--model", default=None, help="Compound compressor model (LP/HP displacement, Vi).")
@click.option("--vi-ratio", type=float, default=None, help="LP over HP swept volume.")
@click.option("--disp-hp", type=float, default=None, help="HP swept volume [m³/h].")
@click.option("--eco-superheat", type=float, default=5.0, show_default=True, help="Injection superheat [K].")
@click.option("--eco-approach", type=float, default=5.0, show_default=True, help="Subcooler approach [K].")
@click.option("--slhx", is_flag=True, default=False, help="Enable suction-line heat exchanger.")
@click.option("--slhx-eff", type=float, default=0.5, show_default=True, help="SLHX effectiveness.")
@calculation_options
@click.pass_context
def single_cmd(
    ctx: click.Context,
    fluid: str,
    te: float,
    tc: float,
    superheat: float,
    subcooling: float,
    auto_eff: bool,
    t_discharge: float | None,
    t_discharge_lp: float | None,
    t_mid: float | None,
    temp_unit: str,
    flow: float | None,
    eta_v_lp: float,
    eta_s_lp: float,
    eta_s_hp: float,
    brand: str | None,
    series: str | None,
    model: str | None,
    vi_ratio: float | None,
    disp_hp: float | None,
    eco_superheat: float,
    eco_approach: float,
    slhx: bool,
    slhx_eff: float,
    output: str | None,
    no_history: bool,
) -> None:
    """Compound screw: one compressor, two stages, subcooler economizer."""
    detail = database_displacement(brand, series, model)
    if flow is None:
        flow = float(detail.get("disp_lp", detail["displacement"])) if detail else 500.0

    inputs = TwoStageSingleInput(
        fluid=fluid,
        T_evap=to_celsius(te, temp_unit),
        T_cond=to_celsius(tc, temp_unit),
        superheat=superheat,
        subcooling=subcooling,
        flow_m3h=flow,
        eta_v_lp=eta_v_lp,
        eta_s_lp=eta_s_lp,
        eta_s_hp=eta_s_hp,
        auto_efficiency=auto_eff,
        pressure_mode=PressureMode.AUTO if t_mid is None else PressureMode.MANUAL,
        T_mid_sat=to_celsius(t_mid, temp_unit),
        compressor_model=model,
        vi_ratio=vi_ratio,
        disp_hp=disp_hp,
        economizer_superheat=eco_superheat,
        economizer_approach=eco_approach,
        slhx=slhx,
        slhx_effectiveness=slhx_eff,
        T_discharge=to_celsius(t_discharge, temp_unit),
        T_discharge_lp=to_celsius(t_discharge_lp, temp_unit),
    )

    result = run_calculation(CalculationMode.M5, inputs)
    finish(ctx, CalculationMode.M5, inputs, result, output, no_history)


@two_stage.command("double")
@_operating_options
@click.option("--flow-lp", type=float, default=None, help="LP swept volume [m³/h] (default 500).")
@click.option("--eta-v-lp", type=float, default=0.80, show_default=True)
@click.option("--eta-s-lp", type=float, default=0.75, show_default=True)
@click.option("--flow-hp", type=float, default=None, help="HP swept volume [m³/h] (default 200).")
@click.option("--eta-v-hp", type=float, default=0.80, show_default=True)
@click.option("--eta-s-hp", type=float, default=0.75, show_default=True)
@click.option("--lp-model", default=None, help="LP compressor model; fills --flow-lp.")
@click.option("--hp-model", default=None, help="HP compressor model; fills --flow-hp.")
@click.option("--lp-eco", is_flag=True, default=False, help="Economizer on the LP compressor.")
@click.option("--lp-eco-type", type=_ECO_TYPES, default="flash_tank", show_default=True)
@click.option("--lp-eco-dt", type=float, default=5.0, show_default=True, help="Liquid below intermediate saturation [K].")
@click.option("--ic-eco", is_flag=True, default=False, help="Intercooler economizer.")
@click.option("--ic-eco-type", type=_ECO_TYPES, default="flash_tank", show_default=True)
@click.option("--ic-eco-dt", type=float, default=5.0, show_default=True, help="Liquid approach [K].")
@click.option("--hp-eco", is_flag=True, default=False, help="Economizer on the HP compressor.")
@click.option("--hp-eco-type", type=_ECO_TYPES, default="subcooler", show_default=True)
@click.option("--hp-eco-dt", type=float, default=5.0, show_default=True, help="Liquid approach [K].")
@click.option("--eco-superheat", type=float, default=5.0, show_default=True, help="Injection superheat [K].")
@calculation_options
@click.pass_context
def double_cmd(
    ctx: click.Context,
    fluid: str,
    te: float,
    tc: float,
    superheat: float,
    subcooling: float,
    auto_eff: bool,
    t_discharge: float | None,
    t_discharge_lp: float | None,
    t_mid: float | None,
    temp_unit: str,
    flow_lp: float | None,
    eta_v_lp: float,
    eta_s_lp: float,
    flow_hp: float | None,
    eta_v_hp: float,
    eta_s_hp: float,
    lp_model: str | None,
    hp_model: str | None,
    lp_eco: bool,
    lp_eco_type: str,
    lp_eco_dt: float,
    ic_eco: bool,
    ic_eco_type: str,
    ic_eco_dt: float,
    hp_eco: bool,
    hp_eco_type: str,
    hp_eco_dt: float,
    eco_superheat: float,
    output: str | None,
    no_history: bool,
) -> None:
    """Two compressors in series with optional LP, intercooler and HP economizers."""
    if flow_lp is None:
        lp_detail = database_displacement(None, None, lp_model)
        flow_lp = float(lp_detail["displacement"]) if lp_detail else 500.0
    if flow_hp is None:
        hp_detail = database_displacement(None, None, hp_model)
        flow_hp = float(hp_detail["displacement"]) if hp_detail else 200.0

    inputs = TwoStageDoubleInput(
        fluid=fluid,
        T_evap=to_celsius(te, temp_unit),
        T_cond=to_celsius(tc, temp_unit),
        superheat=superheat,
        subcooling=subcooling,
        flow_m3h_lp=flow_lp,
        eta_v_lp=eta_v_lp,
        eta_s_lp=eta_s_lp,
        flow_m3h_hp=flow_hp,
        eta_v_hp=eta_v_hp,
        eta_s_hp=eta_s_hp,
        auto_efficiency=auto_eff,
        pressure_mode=PressureMode.AUTO if t_mid is None else PressureMode.MANUAL,
        T_mid_sat=to_celsius(t_mid, temp_unit),
        lp_eco=lp_eco,
        lp_eco_type=EconomizerType(lp_eco_type.lower()),
        lp_eco_superheat=eco_superheat,
        lp_eco_dt=lp_eco_dt,
        ic_eco=ic_eco,
        ic_eco_type=EconomizerType(ic_eco_type.lower()),
        ic_eco_superheat=eco_superheat,
        ic_eco_dt=ic_eco_dt,
        hp_eco=hp_eco,
        hp_eco_type=EconomizerType(hp_eco_type.lower()),
        hp_eco_superheat=eco_superheat,
        hp_eco_dt=hp_eco_dt,
        T_discharge_lp=to_celsius(t_discharge_lp, temp_unit),
        T_discharge=to_celsius(t_discharge, temp_unit),
    )

    result = run_calculation(CalculationMode.M6, inputs)
    finish(ctx, CalculationMode.M6, inputs, result, output, no_history)
