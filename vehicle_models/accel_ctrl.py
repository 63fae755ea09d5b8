"""Longitudinal acceleration controller with an adaptive cruise control."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

NOTSET = -99999.0
KMH2MS = 1.0 / 3.6

_SOURCES = ("ACC", "DVA", "User")

_user_desired_accel_func: Optional[Callable[[float, "AccelInputs"], float]] = None


def set_user_desired_accel_func(func: Optional[Callable[[float, "AccelInputs"], float]]) -> None:
    """Register the function used when the desired acceleration source is ``User``.

    The function is called as ``func(dt, inputs)`` and returns the desired
    longitudinal acceleration in m/s^2 (or ``NOTSET`` for no control).
    Passing None clears the registration. Raises TypeError for anything
    that is neither None nor callable.
    """
    global _user_desired_accel_func
    if func is not None and not callable(func):
        raise TypeError(f"desired acceleration function must be callable, not {type(func).__name__}")
    _user_desired_accel_func = func


@dataclass
class AccEcu:
    """State and parameters of the adaptive cruise control."""

    is_active: bool = True
    brake_threshold: float = 0.2
    desired_tgap: float = 1.8
    desired_speed: float = 100 * KMH2MS
    dc_kd: float = 36.0
    dc_kv: float = 2.0
    sc_kv: float = 13.0
    axmin: float = -2.5
    axmax: float = 1.0
    dsmin: float = 20.0
    ref_object_sensor_id: int = 0
    desired_dist: float = 0.0
    desired_ax: float = 0.0
    time_to_collision: float = 0.0


@dataclass
class ObjectTarget:
    """Nearest point of the object seen by the reference sensor."""

    detected: bool = False
    ds: float = 0.0
    dv: float = 0.0


@dataclass
class AccelInputs:
    """Vehicle and driver quantities the controller reads each cycle."""

    vehicle_speed: float = 0.0
    vehicle_ax: float = 0.0
    driver_brake: float = 0.0
    gas: float = 0.0
    target: ObjectTarget = field(default_factory=ObjectTarget)
    simulating: bool = True


@dataclass(frozen=True)
class ControlOutput:
    """Gas and brake pedal positions, each within 0..1."""

    gas: float
    brake: float


def _dbl(params: Mapping[str, Any], key: str, default: float) -> float:
    return float(params.get(key, default))


@dataclass
class AccelCtrl:
    """PI controller turning a desired acceleration into gas or brake."""

    p_gain: float = 0.001
    i_gain: float = 1.0
    acc: AccEcu = field(default_factory=AccEcu)
    accel_source: str = "ACC"
    user_func: Optional[Callable[[float, AccelInputs], float]] = None
    desired_ax: float = NOTSET
    c_i: float = 0.0

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        driver_velocity: float,
        object_sensors: Sequence[str],
    ) -> "AccelCtrl":
        """Build a controller from a parameter mapping.

        Raises ValueError for an unknown acceleration source or an unknown
        reference object sensor.
        """
        source = str(params.get("AccelCtrl.DesrAccelFunc", "ACC"))
        if source not in _SOURCES:
            raise ValueError(f"AccelCtrl: no supported function '{source}' for ax calculation")

        key = "AccelCtrl.ACC"
        v_init = driver_velocity if driver_velocity > 10.0 * KMH2MS else 100 * KMH2MS
        sensor_name = str(params.get(f"{key}.RefObjectSensorName", "Vhcl.RadarL"))
        try:
            sensor_id = list(object_sensors).index(sensor_name)
        except ValueError:
            raise ValueError(f"{key}: no ObjectSensor found with the name '{sensor_name}'") from None

        acc = AccEcu(
            is_active=bool(int(params.get(f"{key}.IsActive", 1))),
            brake_threshold=_dbl(params, f"{key}.BrakeThreshold", 0.2),
            desired_tgap=_dbl(params, f"{key}.DesrTGap", 1.8),
            desired_speed=_dbl(params, f"{key}.DesrSpd", v_init),
            dc_kd=_dbl(params, f"{key}.DistCtrl.kd", 36.0),
            dc_kv=_dbl(params, f"{key}.DistCtrl.kv", 2.0),
            sc_kv=_dbl(params, f"{key}.SpdCtrl.kv", 13.0),
            axmin=_dbl(params, f"{key}.AxMin", -2.5),
            axmax=_dbl(params, f"{key}.AxMax", 1.0),
            dsmin=_dbl(params, f"{key}.DistMin", 20.0),
            ref_object_sensor_id=sensor_id,
        )
        return cls(
            p_gain=_dbl(params, "AccelCtrl.p", 0.001),
            i_gain=_dbl(params, "AccelCtrl.i", 1.0),
            acc=acc,
            accel_source=source,
            user_func=_user_desired_accel_func if source == "User" else None,
        )

    def desired_accel_acc(self, driver_brake: float, vehicle_speed: float, target: ObjectTarget) -> float:
        """Compute the ACC's desired acceleration and return it."""
        acc = self.acc
        if driver_brake > acc.brake_threshold:
            acc.is_active = False

        acc.time_to_collision = target.ds / -target.dv if target.dv < 0 else 0.0

        if not acc.is_active:
            acc.desired_speed = vehicle_speed
            acc.desired_ax = NOTSET
        else:
            if target.detected:
                acc.desired_dist = max((vehicle_speed + target.dv) * acc.desired_tgap, acc.dsmin)
                delta_ds = target.ds - acc.desired_dist
                ax = delta_ds / acc.dc_kd + target.dv / acc.dc_kv
                ax_sc = (acc.desired_speed - vehicle_speed) / acc.sc_kv
                ax = min(ax, ax_sc)
                ax = min(ax, acc.axmax)
                ax = max(ax, acc.axmin)
            else:
                ax = (acc.desired_speed - vehicle_speed) / acc.sc_kv
                ax = min(ax, acc.axmax)
                ax = max(ax, -0.35)
            acc.desired_ax = ax

        self.desired_ax = acc.desired_ax
        return self.desired_ax

    def calc(self, dt: float, inputs: AccelInputs) -> Optional[ControlOutput]:
        """Run one cycle; return the pedal positions or None if not controlling."""
        if not inputs.simulating:
            return None

        if self.accel_source == "ACC":
            self.desired_accel_acc(inputs.driver_brake, inputs.vehicle_speed, inputs.target)
        elif self.accel_source == "User" and self.user_func is not None:
            self.desired_ax = float(self.user_func(dt, inputs))

        if self.desired_ax == NOTSET:
            self.c_i = inputs.gas
            return None

        delta_ax = self.desired_ax - inputs.vehicle_ax
        c_p = self.p_gain * delta_ax
        self.c_i += self.i_gain * delta_ax * dt
        c = min(1.0, max(-1.0, c_p + self.c_i))
        self.c_i = c - c_p

        if c >= 0:
            return ControlOutput(gas=c, brake=0.0)
        return ControlOutput(gas=0.0, brake=-c)