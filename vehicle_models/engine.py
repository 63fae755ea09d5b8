"""Engine model interpolating between full-load and drag torque curves."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, TextIO

MODEL_KIND = "MyModel"
RPM2RADSEC = 2.0 * math.pi / 60.0

TorqueCurve = Callable[[float], float]


def fac4velzero(vel: float, vel_ref: float) -> float:
    """Factor fading the torque to zero below the reference speed."""
    absvel = abs(vel)
    if absvel >= vel_ref:
        return 1.0
    return 0.5 * (1.0 - math.cos(math.pi * absvel / vel_ref))


def _sign(x: float) -> float:
    return float((x > 0) - (x < 0))


@dataclass
class EngineState:
    """Interface quantities of the engine."""

    ignition: bool = True
    load: float = 0.0
    fuel_level: float = 1.0
    rotv: float = 0.0
    trq: float = 0.0
    inert: float = 0.0


@dataclass
class EngineModel:
    """Engine torque from two speed-dependent curves and the load."""

    trq_kl15_off: float
    trq_full: TorqueCurve
    trq_drag: TorqueCurve
    i_out: float = 0.1
    rotv_min: float = 0.0

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        trq_full: Optional[TorqueCurve],
        trq_drag: Optional[TorqueCurve],
    ) -> "EngineModel":
        """Build the model; raises ValueError on missing data."""
        msg_pre = f"PowerTrain.Engine {MODEL_KIND}"
        key = "PowerTrain.MyEngine.TrqKl15Off"
        if key not in params:
            raise ValueError(f"{msg_pre}: missing parameter '{key}'")
        if trq_full is None or trq_drag is None:
            raise ValueError(f"{msg_pre}: missing engine torque characteristic")
        return cls(
            trq_kl15_off=float(params[key]),
            trq_full=trq_full,
            trq_drag=trq_drag,
            i_out=float(params.get("PowerTrain.Engine.I", 0.1)),
        )

    def calc(self, state: EngineState) -> EngineState:
        """Compute the engine torque and inertia for one cycle."""
        load = min(1.0, max(0.0, state.load))
        if state.fuel_level == 0.0:
            load = 0.0

        if state.ignition:
            rotv = max(state.rotv, self.rotv_min)
            full = self.trq_full(rotv)
            drag = self.trq_drag(rotv)
            trq = drag + load * (full - drag)
        else:
            trq = self.trq_kl15_off
        state.trq = trq * _sign(state.rotv) * fac4velzero(state.rotv, 2.0 * RPM2RADSEC)
        state.inert = self.i_out
        return state

    def model_check(self, fp: TextIO) -> None:
        """Write the model's design values to ``fp``."""
        fp.write(f"### Engine.Kind = {MODEL_KIND}\n")
        fp.write(f"Engine.I =                {self.i_out:10.7f}\n")
        fp.write("\n")