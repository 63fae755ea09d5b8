"""Control unit for the low-voltage battery."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BatteryCUState:
    """Interface quantities of the battery control unit."""

    ignition: bool = False
    aoc: float = 0.0
    soc: float = 0.0
    soh: float = 0.0
    temp_cool_in: float = 0.0
    pwr_hv1_to_lv_trg: float = 0.0


@dataclass
class BatteryCUModel:
    """Reports state of charge and health of the low-voltage battery."""

    capacity_lv: float
    temp_cool_in_lv: float

    def calc(self, state: BatteryCUState) -> BatteryCUState:
        """Update ``state`` for one cycle and return it."""
        if not state.ignition:
            state.soc = 0.0
            state.soh = 0.0
            state.pwr_hv1_to_lv_trg = 0.0
            return state

        state.temp_cool_in = self.temp_cool_in_lv
        state.soc = state.aoc / self.capacity_lv * 100.0
        state.soh = 100.0
        return state