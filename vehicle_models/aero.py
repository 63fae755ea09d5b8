"""Aerodynamics model driven by a coefficient map over the flow angle."""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

Vector3 = tuple[float, float, float]


class LinearMap:
    """Piecewise linear map from a scalar to a vector, held at its end values."""

    def __init__(self, xs: Sequence[float], ys: Sequence[Sequence[float]]) -> None:
        if not xs:
            raise ValueError("map needs at least one point")
        if len(xs) != len(ys):
            raise ValueError("map needs as many values as points")
        if any(b <= a for a, b in zip(xs, xs[1:])):
            raise ValueError("map points must be strictly increasing")
        widths = {len(y) for y in ys}
        if len(widths) != 1:
            raise ValueError("map values must all have the same length")
        self.xs = [float(x) for x in xs]
        self.ys = [tuple(float(v) for v in y) for y in ys]

    def __call__(self, x: float) -> tuple[float, ...]:
        if x <= self.xs[0]:
            return self.ys[0]
        if x >= self.xs[-1]:
            return self.ys[-1]
        i = bisect_right(self.xs, x)
        x0, x1 = self.xs[i - 1], self.xs[i]
        w = (x - x0) / (x1 - x0)
        return tuple(a + w * (b - a) for a, b in zip(self.ys[i - 1], self.ys[i]))


@dataclass(frozen=True)
class AeroForces:
    """Point of attack, force and torque in the vehicle frame."""

    poa: Vector3
    force: Vector3
    torque: Vector3


@dataclass
class AeroModel:
    """Aerodynamic forces from reference area, length and six coefficients."""

    area: float
    length: float
    poa: Vector3
    coeff_map: LinearMap

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "AeroModel":
        """Build the model; coefficient rows are angle [deg] plus six values."""
        try:
            area = float(params["MyAero.Area"])
            length = float(params["MyAero.Length"])
        except KeyError as exc:
            raise ValueError(f"Aero MyModel: missing parameter {exc.args[0]!r}") from None

        poa_raw = list(params.get("MyAero.PoA_1", (0.0, 0.0, 0.0)))
        if len(poa_raw) != 3:
            raise ValueError("Aero MyModel: 'MyAero.PoA_1' needs three values")
        poa = (float(poa_raw[0]), float(poa_raw[1]), float(poa_raw[2]))

        rows = params.get("MyAero.Coeff")
        if rows is None or any(len(row) != 7 for row in rows):
            raise ValueError("Aero MyModel: Error while reading 'MyAero.Coeff'")
        try:
            coeff_map = LinearMap(
                [math.radians(float(row[0])) for row in rows],
                [row[1:] for row in rows],
            )
        except ValueError as exc:
            raise ValueError(f"Aero MyModel: Can't generate aero mapping: {exc}") from None
        return cls(area=area, length=length, poa=poa, coeff_map=coeff_map)

    def calc(self, approach_velocity: Sequence[float], tau: float, air_density: float) -> AeroForces:
        """Forces and torques for the approach velocity and flow angle tau [rad]."""
        vel = math.hypot(approach_velocity[0], approach_velocity[1])
        c = self.coeff_map(tau)
        x = air_density * 0.5 * self.area * vel * vel
        xt = x * self.length
        return AeroForces(
            poa=self.poa,
            force=(x * c[0], x * c[1], x * c[2]),
            torque=(xt * c[3], xt * c[4], xt * c[5]),
        )