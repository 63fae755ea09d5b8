"""Constant ambient environment model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EnvironmentState:
    """Ambient temperature [K] and air pressure [bar]."""

    temperature: float
    air_pressure: float


@dataclass
class EnvironmentModel:
    """Environment with fixed temperature and pressure."""

    temp: float = 293.15
    pressure: float = 1.013

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "EnvironmentModel":
        """Read temperature and pressure, falling back to the defaults."""
        return cls(
            temp=float(params.get("Env.MyEnvironment.Temp", 293.15)),
            pressure=float(params.get("Env.MyEnvironment.Pressure", 1.013)),
        )

    def calc(self) -> EnvironmentState:
        """Return the current ambient state."""
        return EnvironmentState(temperature=self.temp, air_pressure=self.pressure)