"""Simple battery with a constant open-circuit voltage and an inner resistance."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

MODEL_CLASS = "PowerTrain.PowerSupply.Batt"


@dataclass(frozen=True)
class BatteryConfig:
    """Configuration handed to the battery: capacity [Ah], voltage [V], temperature [K]."""

    capacity: float
    voltage: float
    temp_init: float = 293.15


@dataclass
class BatteryState:
    """Interface quantities exchanged with the battery each cycle."""

    current: float = 0.0
    aoc: float = 0.0
    voltage: float = 0.0
    energy: float = 0.0
    temp: float = 0.0
    temp_cool_in: float = 0.0
    temp_cool_out: float = 0.0
    pwr_max: float = 0.0


@dataclass
class BatteryModel:
    """Battery whose terminal voltage drops linearly with the current."""

    ident: str
    capacity: float
    volt_oc0: float
    temp: float
    r0: float = 0.0012
    pwr_max: float = 100.0e3
    soc: float = 0.0
    volt_oc: float = 0.0
    volt0: float = 0.0

    @classmethod
    def from_params(cls, params: Mapping[str, Any], cfg: BatteryConfig, ident: str) -> "BatteryModel":
        """Build the model; raises ValueError if the inner resistance is zero."""
        prefix = f"{MODEL_CLASS}{ident}."
        key = f"{prefix}R0"
        r0 = abs(float(params.get(key, 0.0012)))
        if r0 <= 0.0:
            raise ValueError(
                f"{MODEL_CLASS} MyModel: Parameter '{key}' must be positive and non zero"
            )
        pwr_max = float(params.get(f"{prefix}Pwr_max", 100.0)) * 1e3
        return cls(
            ident=ident,
            capacity=cfg.capacity,
            volt_oc0=cfg.voltage,
            temp=cfg.temp_init,
            r0=r0,
            pwr_max=pwr_max,
        )

    def calc(self, state: BatteryState, dt: float) -> BatteryState:
        """Advance the charge by one step and update the outputs in ``state``."""
        aoc = state.aoc - state.current * dt / 3600.0
        state.aoc = min(self.capacity, max(0.0, aoc))

        self.soc = state.aoc / self.capacity * 100.0

        self.volt_oc = 0.0 if self.soc <= 1e-2 else self.volt_oc0
        self.volt0 = state.current * self.r0

        state.voltage = max(self.volt_oc - self.volt0, 0.0)
        state.energy = state.aoc * state.voltage * 1e-3

        state.temp = self.temp
        state.temp_cool_out = state.temp_cool_in
        state.pwr_max = self.pwr_max
        return state