"""Open driveline that only distributes torque, leaving wheel dynamics outside."""

from __future__ import annotations

from dataclasses import dataclass, field

from vehicle_models.drive_line import NWHEEL, WheelIn, WheelOut


def _wheels_in() -> list[WheelIn]:
    return [WheelIn() for _ in range(NWHEEL)]


def _wheels_out() -> list[WheelOut]:
    return [WheelOut() for _ in range(NWHEEL)]


@dataclass
class DriveLineXWDState:
    """Interface quantities of the open driveline."""

    drive_trq_in: float = 0.0
    drive_rotv_in: float = 0.0
    wheel_in: list[WheelIn] = field(default_factory=_wheels_in)
    wheel_out: list[WheelOut] = field(default_factory=_wheels_out)


@dataclass
class DriveLineXWDModel:
    """Splits the drive torque evenly to the front wheels."""

    i_diff_mean: float

    @classmethod
    def from_config(cls, n_wheels: int, i_diff_mean: float) -> "DriveLineXWDModel":
        """Validate the configuration; raises ValueError if it does not fit the model."""
        msg_pre = "PowerTrain.DLXWD MyModel"
        if n_wheels != NWHEEL:
            raise ValueError(f"{msg_pre}: model supports only a four wheel vehicle")
        if i_diff_mean <= 0:
            raise ValueError(f"{msg_pre}: mean driveline ratio must be positive and non zero")
        return cls(i_diff_mean=i_diff_mean)

    def calc(self, state: DriveLineXWDState) -> DriveLineXWDState:
        """Compute the wheel drive torques and the drive input speed."""
        half = 0.5 * self.i_diff_mean
        for wo in state.wheel_out[:2]:
            wo.trq_drive = state.drive_trq_in * half
        for wo in state.wheel_out[2:]:
            wo.trq_drive = 0.0
        state.drive_rotv_in = (state.wheel_in[0].rotv + state.wheel_in[1].rotv) * half
        for wo in state.wheel_out:
            wo.trq_supp2wc = -wo.trq_drive
        return state