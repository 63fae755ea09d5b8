"""Engine control unit with idle speed control and fuel cut-off."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from vehicle_models.engine import RPM2RADSEC

RADSEC2RPM = 1.0 / RPM2RADSEC

TorqueCurve = Callable[[float], float]


def _bound(lo: float, hi: float, x: float) -> float:
    return min(hi, max(lo, x))


@dataclass(frozen=True)
class EngineCUConfig:
    """Engine speeds [rad/s] and the optional torque curves of the engine."""

    rotv_idle: float
    rotv_off: float
    trq_full: Optional[TorqueCurve] = None
    trq_drag: Optional[TorqueCurve] = None
    trq_opt: Optional[TorqueCurve] = None


@dataclass
class EngineCUState:
    """Interface quantities of the engine control unit.

    ``load`` and ``fuel_cut_off`` may be None, meaning no request was made.
    """

    ignition: bool = True
    rotv: float = 0.0
    engine_on: bool = False
    load: Optional[float] = None
    set_isc: bool = False
    fuel_cut_off: Optional[int] = None
    trq_full: float = 0.0
    trq_drag: float = 0.0
    trq_opt: float = 0.0


@dataclass
class EngineCUModel:
    """Decides whether the engine runs and which load it gets."""

    cfg: EngineCUConfig
    n_fuel_cut_off: float
    isc_p: float = 0.1
    isc_i: float = 50.0
    load_i: float = 0.0
    load_p: float = 0.0

    @classmethod
    def from_params(cls, params: Mapping[str, Any], cfg: EngineCUConfig) -> "EngineCUModel":
        """Read the idle speed controller gains and the fuel cut-off speed [rpm]."""
        cut_off_rpm = float(
            params.get("PowerTrain.ECU.FuelCutOff", cfg.rotv_idle * 2.0 * RADSEC2RPM)
        )
        return cls(
            cfg=cfg,
            n_fuel_cut_off=cut_off_rpm * RPM2RADSEC,
            isc_p=float(params.get("PowerTrain.MyEngineCU.ISCtrl.P", 0.1)),
            isc_i=float(params.get("PowerTrain.MyEngineCU.ISCtrl.I", 50.0)),
        )

    @staticmethod
    def _zero(state: EngineCUState) -> EngineCUState:
        state.engine_on = False
        state.fuel_cut_off = 0
        state.load = 0.0
        state.trq_drag = 0.0
        state.trq_full = 0.0
        state.trq_opt = 0.0
        return state

    def calc(self, state: EngineCUState, dt: float) -> EngineCUState:
        """Update ``state`` for one cycle and return it."""
        cfg = self.cfg
        if not state.ignition:
            return self._zero(state)

        if state.rotv > cfg.rotv_idle:
            state.engine_on = True
        if state.rotv < cfg.rotv_off:
            state.engine_on = False
        if not state.engine_on:
            return self._zero(state)

        if cfg.trq_full is not None:
            state.trq_full = cfg.trq_full(state.rotv)
        if cfg.trq_drag is not None:
            state.trq_drag = cfg.trq_drag(state.rotv)
        if cfg.trq_opt is not None:
            state.trq_opt = cfg.trq_opt(state.rotv)

        load = 0.0 if state.load is None else state.load

        if state.set_isc:
            band = 200.0 * RPM2RADSEC
            if state.rotv < cfg.rotv_idle + band:
                drotv = cfg.rotv_idle - state.rotv
                if load < 1e-3:
                    self.load_i = _bound(0.0, 1.0, self.load_i + drotv * self.isc_i * dt)
                    load_i = self.load_i
                else:
                    load_i = self.load_i * _bound(0.0, 1.0, 1.0 + drotv / band)
                self.load_p = max(0.0, drotv * self.isc_p)
                load += _bound(0.0, 1.0, load_i + self.load_p)
            else:
                self.load_i = self.load_p = 0.0
        load = _bound(0.0, 1.0, load)

        if state.fuel_cut_off is None:
            state.fuel_cut_off = int(state.rotv >= self.n_fuel_cut_off and load <= 1e-3)
        elif state.fuel_cut_off == 1:
            load = 0.0

        state.load = load
        return state