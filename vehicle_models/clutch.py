"""Friction clutch with a viscous torque characteristic."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TextIO

MODEL_CLASS = "PowerTrain.Clutch"
MODEL_KIND = "MyModel"


class ClutchKind(enum.Enum):
    """Kind of clutch the vehicle is parametrised with."""

    FRICTION = "Friction"
    CONVERTER = "Converter"


@dataclass
class ClutchState:
    """Interface quantities of the clutch."""

    pos: float = 0.0
    rotv_in: float = 0.0
    rotv_out: float = 0.0
    rot_in: float = 0.0
    trq_in: float = 0.0
    inert_in: float = 0.0
    trq_supp_inert: float = 0.0
    trq_out: float = 0.0
    inert_out: float = 0.0
    i_trq_in2out: float = 0.0


@dataclass
class ClutchModel:
    """Clutch torque proportional to the slip speed, limited and scaled by pedal."""

    c: float
    i_in: float = 1e-4
    i_out: float = 1e-4
    trq_max: float = 500.0
    drotv: float = 0.0
    trq: float = 0.0

    @classmethod
    def from_params(
        cls, params: Mapping[str, Any], ident: str, kind: ClutchKind = ClutchKind.FRICTION
    ) -> "ClutchModel":
        """Build the model; raises ValueError on a bad coefficient or clutch kind."""
        msg_pre = f"{MODEL_CLASS} {MODEL_KIND}"
        prefix = f"{MODEL_CLASS}.{ident}"
        i_in = float(params.get(f"{prefix}.I_in", 1e-4))
        i_out = float(params.get(f"{prefix}.I_out", 1e-4))
        trq_max = float(params.get(f"{prefix}.Trq_max", 500.0))

        key = f"{prefix}.c"
        if key not in params:
            raise ValueError(f"{msg_pre}: missing parameter '{key}'")
        c = float(params[key])
        if c <= 0.0:
            raise ValueError(f"{msg_pre}: torque coefficient '{key}' must be positive and non zero")
        if kind is not ClutchKind.FRICTION:
            raise ValueError(f"{msg_pre}: model supports only a friction clutch")
        return cls(c=c, i_in=i_in, i_out=i_out, trq_max=trq_max)

    def pre_sim_setup(self, state: ClutchState, rotv_in: float) -> ClutchState:
        """Set the input speed before the simulation starts."""
        state.rotv_in = rotv_in
        return state

    def calc(self, state: ClutchState, dt: float) -> ClutchState:
        """Compute the clutch torque and integrate the input shaft."""
        self.drotv = state.rotv_in - state.rotv_out
        trq = self.drotv * self.c
        trq = max(-self.trq_max, min(self.trq_max, trq))
        trq *= min(1.0, max(0.0, 1.0 - state.pos))
        self.trq = trq

        inertia = state.inert_in + self.i_in
        rota_in = (state.trq_in - self.trq) / inertia
        state.rotv_in += rota_in * dt
        state.rot_in += state.rotv_in * dt

        state.trq_supp_inert = rota_in * inertia
        state.trq_out = self.trq
        state.inert_out = self.i_out
        state.i_trq_in2out = 1.0 - state.pos
        return state

    def model_check(self, fp: TextIO) -> None:
        """Write the model's design values to ``fp``."""
        fp.write(f"### Clutch.Kind = {MODEL_KIND}\n")
        fp.write(f"Clutch.I_in =             {self.i_in:10.7f}\n")
        fp.write(f"Clutch.I_out =            {self.i_out:10.7f}\n")
        fp.write("\n")