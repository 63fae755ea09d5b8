"""Front-wheel driveline with an open differential and wheel brakes."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field

NWHEEL = 4


class SimState(enum.Enum):
    """Phases of a simulation run the driveline reacts to."""

    IDLE = enum.auto()
    START = enum.auto()
    START_SIM = enum.auto()
    SIMULATE = enum.auto()
    PAUSE = enum.auto()
    END = enum.auto()
    END_IDLE_GET = enum.auto()
    END_IDLE_SET = enum.auto()


class DriveSourcePos(enum.Enum):
    """Where a drive source is attached to the driveline."""

    NO_POSITION = enum.auto()
    DIFF_FRONT = enum.auto()
    DIFF_REAR = enum.auto()
    DIFF_CENTER = enum.auto()
    WHEEL_FL = enum.auto()
    WHEEL_FR = enum.auto()
    WHEEL_RL = enum.auto()
    WHEEL_RR = enum.auto()


@dataclass(frozen=True)
class DriveLineConfig:
    """Wheel count, wheel inertias [kgm^2], mean ratio and drive source positions."""

    n_wheels: int
    wheel_iyy: Sequence[float]
    i_diff_mean: float
    drive_source_pos: Sequence[DriveSourcePos] = (
        DriveSourcePos.DIFF_FRONT,
        DriveSourcePos.NO_POSITION,
        DriveSourcePos.NO_POSITION,
        DriveSourcePos.NO_POSITION,
    )


@dataclass
class WheelIn:
    """Torques acting on a wheel from outside the driveline, and its speed."""

    trq_brake: float = 0.0
    trq_t2w: float = 0.0
    trq_whl_bearing: float = 0.0
    rotv: float = 0.0


@dataclass
class WheelOut:
    """Driveline outputs of a wheel."""

    trq_drive: float = 0.0
    trq_supp2wc: float = 0.0
    trq_b2w: float = 0.0
    rotv: float = 0.0
    rot: float = 0.0


def _wheels_in() -> list[WheelIn]:
    return [WheelIn() for _ in range(NWHEEL)]


def _wheels_out() -> list[WheelOut]:
    return [WheelOut() for _ in range(NWHEEL)]


@dataclass
class DriveLineState:
    """Interface quantities of the driveline."""

    drive_trq_in: float = 0.0
    drive_inert_in: float = 0.0
    drive_rotv_in: float = 0.0
    wheel_in: list[WheelIn] = field(default_factory=_wheels_in)
    wheel_out: list[WheelOut] = field(default_factory=_wheels_out)


@dataclass
class DriveLineModel:
    """Splits the drive torque evenly to the front wheels and integrates wheel speeds."""

    irot: tuple[float, ...]
    i_diff_mean: float
    rota: list[float] = field(default_factory=lambda: [0.0] * NWHEEL)

    @classmethod
    def from_config(cls, cfg: DriveLineConfig) -> "DriveLineModel":
        """Validate the configuration; raises ValueError if it does not fit the model."""
        msg_pre = "PowerTrain.DL MyModel"
        if cfg.n_wheels != NWHEEL:
            raise ValueError(f"{msg_pre}: model supports only a four wheel vehicle")
        if len(cfg.wheel_iyy) < NWHEEL:
            raise ValueError(f"{msg_pre}: missing wheel inertia")
        if cfg.i_diff_mean <= 0:
            raise ValueError(f"{msg_pre}: mean driveline ratio must be positive and non zero")
        expected = (DriveSourcePos.DIFF_FRONT,) + (DriveSourcePos.NO_POSITION,) * 3
        if tuple(cfg.drive_source_pos[:NWHEEL]) != expected:
            raise ValueError(
                f"{msg_pre}: model supports only one drive source at front differential"
            )
        return cls(irot=tuple(float(v) for v in cfg.wheel_iyy[:NWHEEL]), i_diff_mean=cfg.i_diff_mean)

    def calc(self, state: DriveLineState, sim_state: SimState, dt: float) -> DriveLineState:
        """Compute wheel torques and advance the wheel speeds by one step."""
        w_in, w_out = state.wheel_in, state.wheel_out
        half = 0.5 * self.i_diff_mean

        for wo in w_out[:2]:
            wo.trq_drive = state.drive_trq_in * half
        for wo in w_out[2:]:
            wo.trq_drive = 0.0
        state.drive_rotv_in = (w_out[0].rotv + w_out[1].rotv) * half

        for wo in w_out:
            wo.trq_supp2wc = -wo.trq_drive

        if any(wi.trq_brake > 0.0 for wi in w_in):
            for wi, wo in zip(w_in, w_out):
                trq_p = min(100.0, 1000.0 * wo.rotv)
                x = wi.trq_t2w + wo.trq_drive + trq_p
                magnitude = min(abs(x), wi.trq_brake)
                # Brake torque acts against the motion.
                wo.trq_b2w = magnitude if x < 0 else -magnitude
        else:
            for wo in w_out:
                wo.trq_b2w = 0.0

        if sim_state in (SimState.END_IDLE_GET, SimState.END_IDLE_SET):
            for wo in w_out:
                wo.trq_b2w = 0.0

        inert_in = state.drive_inert_in * 0.5
        self.rota = [
            (wo.trq_drive + wo.trq_b2w + wi.trq_t2w + wi.trq_whl_bearing) / (irot + inert_in)
            for wi, wo, irot in zip(w_in, w_out, self.irot)
        ]

        if sim_state not in (SimState.SIMULATE, SimState.END_IDLE_GET):
            self.rota = [0.0] * NWHEEL

        if sim_state is SimState.END_IDLE_SET:
            for wo in w_out:
                wo.rotv = 0.0
        else:
            for wo, rota in zip(w_out, self.rota):
                wo.rotv += rota * dt
                wo.rot += wo.rotv * dt
        return state