"""Brake model with a fixed pedal-to-torque ratio per wheel."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

NWHEEL = 4


@dataclass
class BrakeModel:
    """Four-wheel brake: wheel torque is pedal position times a gain."""

    trq_distrib: tuple[float, ...]
    trq_wb: tuple[float, ...] = field(default=(0.0,) * NWHEEL)

    @classmethod
    def from_params(cls, params: Mapping[str, Any], n_wheels: int) -> "BrakeModel":
        """Read ``Brake.Pedal2Trq``; the vehicle must have four wheels."""
        if n_wheels != NWHEEL:
            raise ValueError(
                f"Brake MyModel: wheel number mismatch (brake {NWHEEL}, vehicle {n_wheels})"
            )
        values = params.get("Brake.Pedal2Trq")
        if values is None or len(values) != NWHEEL:
            raise ValueError("Brake MyModel: Unsupported argument for 'Brake.Pedal2Trq'")
        return cls(trq_distrib=tuple(float(v) for v in values))

    def calc(self, pedal: float) -> tuple[float, ...]:
        """Return the brake torque [Nm] of each wheel for the pedal position."""
        self.trq_wb = tuple(d * pedal for d in self.trq_distrib)
        return self.trq_wb