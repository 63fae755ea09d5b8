"""Single-track style car model driving along a road supplied by the caller."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from vehicle_models.drive_line import SimState
from vehicle_models.engine import RPM2RADSEC

NPTTRQ = 10
GRAVITY = 9.81
V_CRITICAL = 2000.0 / 3.6

Vector3 = tuple[float, float, float]
Matrix3 = tuple[Vector3, Vector3, Vector3]


def rotation_zyx(rx: float, ry: float, rz: float) -> Matrix3:
    """Rotation matrix for the Z-Y-X sequence of angles, rows in frame 0."""
    srx, crx = math.sin(rx), math.cos(rx)
    sry, cry = math.sin(ry), math.cos(ry)
    srz, crz = math.sin(rz), math.cos(rz)
    return (
        (cry * crz, srx * sry * crz - crx * srz, crx * sry * crz + srx * srz),
        (cry * srz, srx * sry * srz + crx * crz, crx * sry * srz - srx * crz),
        (-sry, srx * cry, crx * cry),
    )


def _euler_zyx(x_h: Sequence[float], y_h: Sequence[float], z_h: Sequence[float]) -> Vector3:
    """Z-Y-X angles of the frame whose unit vectors are the given columns."""
    rx = math.atan2(y_h[2], z_h[2])
    ry = math.atan2(-x_h[2], math.hypot(x_h[0], x_h[1]))
    rz = math.atan2(x_h[1], x_h[0])
    return rx, ry, rz


def _column(mat: Matrix3, col: int) -> Vector3:
    return (mat[0][col], mat[1][col], mat[2][col])


def _slip(val: float) -> float:
    if val > 1.0:
        return 0.05 + 10.0 * (val - 1.0)
    if val < -1.0:
        return -0.05 + 10.0 * (val + 1.0)
    return 0.05 * math.asin(val)


@dataclass(frozen=True)
class CarConfig:
    """Vehicle geometry, masses, gear ratios and the initial conditions."""

    mass_total: float
    whl_radius: float
    cog2axle_front: float
    cog2axle_rear: float
    i_diff: float
    i_fgear: Sequence[float]
    bdy1_com: Sequence[float] = (0.0, 0.0, 0.0)
    fr1_pos: Vector3 = (0.0, 0.0, 0.0)
    yaw: float = 0.0
    velocity: float = 0.0
    s_road: float = 0.0
    road_pos: Vector3 = (0.0, 0.0, 0.0)
    road_dir: Vector3 = (1.0, 0.0, 0.0)
    n_wheels: int = 4


@dataclass(frozen=True)
class DriverControls:
    """Driver commands: pedals within 0..1, gear number, steering wheel angle [rad]."""

    gas: float = 0.0
    brake: float = 0.0
    clutch: float = 0.0
    gear_no: int = 1
    steer_ang: float = 0.0


@dataclass(frozen=True)
class RoadSample:
    """Result of evaluating the road under the vehicle."""

    on_road: bool = True
    xyz: Vector3 = (0.0, 0.0, 0.0)
    s: float = 0.0
    link_obj_id: int = -1
    on_junction: bool = False
    junc_obj_id: int = -1
    next_junc_obj_id: int = -1
    s2next_junc: float = 0.0
    s2last_junc: float = 0.0
    suv: Vector3 = (1.0, 0.0, 0.0)
    tuv: Vector3 = (0.0, 1.0, 0.0)
    nuv: Vector3 = (0.0, 0.0, 1.0)


RoadEval = Callable[[Vector3, float], RoadSample]


@dataclass(frozen=True)
class VehicleState:
    """Snapshot of the vehicle quantities the rest of the simulation reads."""

    s_road: float
    distance: float
    v: float
    link_obj_id: int
    on_junction: bool
    junc_obj_id: int
    next_junc_obj_id: int
    s2next_junc: float
    s2last_junc: float
    poi_pos: Vector3
    poi_vel: Vector3
    poi_acc: Vector3
    poi_vel_1: Vector3
    poi_acc_1: Vector3
    yaw: float
    yaw_rate: float
    yaw_acc: float
    roll: float
    pitch: float
    front_steer: float
    wheel_rot: tuple[float, ...]
    long_slip: tuple[float, ...]
    side_slip: tuple[float, ...]
    wheel_fz: tuple[float, ...]
    steer_ang: float
    fr1_pos: Vector3
    fr1_vel: Vector3
    fr1_acc: Vector3
    tr2fr0: Matrix3
    x_0: Vector3
    y_0: Vector3
    z_0: Vector3
    engine_rotv: float
    gear_no: int


class RoadLeftError(RuntimeError):
    """The vehicle has left the road."""


class CarModel:
    """Point-mass car with engine map, aerodynamics and simple tyre limits."""

    def __init__(self, cfg: CarConfig, params: Mapping[str, Any]) -> None:
        self.cfg = cfg
        self.whl_base_f = cfg.cog2axle_front
        self.whl_base_r = cfg.cog2axle_rear
        self.mass = cfg.mass_total
        self.weight = self.mass * GRAVITY
        self.whl_radius = cfg.whl_radius

        def dbl(key: str, default: float) -> float:
            return float(params.get(key, default))

        self.steer_ratio = dbl("Steering.i", 10.0)
        self.rho = dbl("Aero.rho", 1.205)
        self.cw = dbl("Aero.cw", 0.91)
        self.ca_f = dbl("Aero.ca_f", 1.04)
        self.ca_r = dbl("Aero.ca_r", 1.44)
        self.ayz = dbl("Aero.Ayz", 1.725)
        self.ax0 = dbl("Tire.ax0", 13.0)
        self.ay0 = dbl("Tire.ay0", 13.0)

        rows = list(params.get("PowerTrain.Engine.Trq") or ())[:NPTTRQ]
        self.rotp = [float(row[0]) * RPM2RADSEC for row in rows]
        self.trq = [float(row[1]) for row in rows]
        prev_rotp = self.rotp[-1] if self.rotp else 0.0
        prev_trq = self.trq[-1] if self.trq else 0.0
        while len(self.rotp) < NPTTRQ:
            prev_rotp += RPM2RADSEC
            self.rotp.append(prev_rotp)
            self.trq.append(prev_trq)

        # Driver inputs
        self.throttle = 0.0
        self.clutch = 0.0
        self.brake = 0.0
        self.gear_no = 0
        self.steer_ang = 0.0

        # Road
        self.road_dist = cfg.s_road
        self.link_obj_id = -1
        self.on_junction = False
        self.junc_obj_id = -1
        self.next_junc_obj_id = -1
        self.s2next_junc = 0.0
        self.s2last_junc = 0.0
        self.x_h: Vector3 = (1.0, 0.0, 0.0)
        self.y_h: Vector3 = (0.0, 1.0, 0.0)
        self.z_h: Vector3 = (0.0, 0.0, 1.0)

        # Frame 1 motion
        self.x, self.y, self.z = cfg.fr1_pos
        self.yaw = cfg.yaw
        self.vx_1 = cfg.velocity
        self.ax = self.ay = 0.0
        self.ax_1 = self.ay_1 = 0.0
        self.yaw_rate = self.yaw_acc = 0.0
        self.rx = self.ry = self.rz = 0.0

        # The model never takes part in preprocessing, so start from the driver's road position.
        self.poi_x, self.poi_y, self.poi_z = cfg.road_pos
        self.vx = cfg.velocity * cfg.road_dir[0]
        self.vy = cfg.velocity * cfg.road_dir[1]

        self.distance = 0.0
        self.aero_fx = self.aero_fz = 0.0
        self.ax_max = self.ay_max = 0.0
        self.long_slip_f = self.long_slip_r = 0.0
        self.side_slip_f = self.side_slip_r = 0.0
        self.whl_rot = 0.0
        self.front_rz = 0.0
        self.i_act = 0.0
        self.engine_rotv = 0.0
        self.engine_trq = 0.0

    def engine_torque(self) -> float:
        """Engine torque [Nm] from the torque map, the current gear and throttle."""
        gear = max(self.gear_no, 1)
        self.i_act = self.cfg.i_diff * self.cfg.i_fgear[gear]
        if self.i_act != 0.0:
            self.engine_rotv = self.vx_1 * self.i_act / self.whl_radius
        self.engine_rotv = max(self.engine_rotv, self.rotp[0])

        i = next(
            (k for k in range(1, NPTTRQ) if self.engine_rotv < self.rotp[k]),
            NPTTRQ,
        )
        i = min(NPTTRQ - 1, i)
        dn = self.engine_rotv - self.rotp[i - 1]
        dtrq_dn = (self.trq[i] - self.trq[i - 1]) / (self.rotp[i] - self.rotp[i - 1])
        self.engine_trq = self.throttle * (self.trq[i - 1] + dtrq_dn * dn)
        return self.engine_trq

    def calc(
        self,
        controls: DriverControls,
        road: RoadEval,
        dt: float,
        sim_state: SimState = SimState.SIMULATE,
    ) -> VehicleState:
        """Advance the car by one step; only moves while simulating.

        Raises RoadLeftError when the road evaluation reports the car off the road.
        """
        if sim_state is not SimState.SIMULATE:
            return self.vehicle_state()

        self.gear_no = controls.gear_no
        self.throttle = controls.gas
        self.clutch = controls.clutch
        self.brake = controls.brake
        self.steer_ang = controls.steer_ang

        sample = road((self.x, self.y, self.z), self.road_dist)
        if not sample.on_road:
            raise RoadLeftError(
                f"MyCar leaves road at about sRoad={self.road_dist:g} m, "
                f"x={sample.xyz[0]:g}, y={sample.xyz[1]:g}"
            )
        self.z = sample.xyz[2]
        self.road_dist = sample.s
        self.link_obj_id = sample.link_obj_id
        self.on_junction = sample.on_junction
        self.junc_obj_id = sample.junc_obj_id
        self.next_junc_obj_id = sample.next_junc_obj_id
        self.s2next_junc = sample.s2next_junc
        self.s2last_junc = sample.s2last_junc
        self.x_h, self.y_h, self.z_h = sample.suv, sample.tuv, sample.nuv

        self.engine_torque()

        val = 0.5 * self.rho * self.ayz * self.vx_1 * self.vx_1
        self.aero_fx = val * self.cw
        self.aero_fz = val * (self.ca_f + self.ca_r)

        self.ax_max = self.ax0 * (1.0 + self.aero_fz / self.weight)
        self.ay_max = self.ay0 * (1.0 + self.aero_fz / self.weight)

        fac_brake = 0.0 if self.vx_1 <= 0 else 1.0
        self.ax_1 = (
            self.engine_trq * self.i_act / self.whl_radius / self.mass
            - 40.0 * self.brake * fac_brake
        )
        self.ay_1 = (
            self.vx_1 * self.vx_1 * self.steer_ang / self.steer_ratio
            * (1.0 / (self.whl_base_f - self.whl_base_r) - self.vx_1 / V_CRITICAL)
        )

        self.long_slip_f = max(-1.0, min(1.0, _slip(1.2 * self.ax_1 / self.ax_max)))
        self.long_slip_r = self.long_slip_f
        half_pi = math.pi / 2.0
        self.side_slip_f = max(-half_pi, min(half_pi, _slip(1.2 * self.ay_1 / self.ay_max)))
        self.side_slip_r = self.side_slip_f

        self.ay_1 = max(-self.ay_max, min(self.ay_max, self.ay_1))
        self.ax_1 = max(-self.ax_max, min(self.ax_max, self.ax_1))

        # Aerodynamic drag does not pass through the tyres, so it is applied after the limits.
        self.ax_1 -= self.aero_fx / self.mass

        self.vx_1 += self.ax_1 * dt

        cy, sy = math.cos(self.yaw), math.sin(self.yaw)
        self.ax = self.ax_1 * cy - self.ay_1 * sy
        self.ay = self.ax_1 * sy + self.ay_1 * cy
        self.vx += self.ax * dt
        self.vy += self.ay * dt
        self.x += self.vx * dt + 0.5 * self.ax * dt * dt
        self.y += self.vy * dt + 0.5 * self.ay * dt * dt

        self.yaw_acc = 0.0
        self.yaw_rate = self.ay_1 / self.vx_1 if abs(self.vx_1) > 0.01 else 0.0
        self.yaw += self.yaw_rate * dt

        com = self.cfg.bdy1_com
        cy, sy = math.cos(self.yaw), math.sin(self.yaw)
        self.poi_x = self.x + com[0] * cy - com[1] * sy
        self.poi_y = self.y + com[0] * sy + com[1] * cy
        self.poi_z = self.z

        self.distance += self.vx_1 * dt

        self.rx, self.ry, _ = _euler_zyx(self.x_h, self.y_h, self.z_h)
        self.rz = self.yaw

        self.whl_rot += self.vx_1 / (2.0 * math.pi * self.whl_radius) * dt
        self.front_rz = self.steer_ang / self.steer_ratio

        return self.vehicle_state()

    def vehicle_state(self) -> VehicleState:
        """Current vehicle quantities as seen by the rest of the simulation."""
        n = self.cfg.n_wheels
        tr = rotation_zyx(self.rx, self.ry, self.yaw)
        return VehicleState(
            s_road=self.road_dist,
            distance=self.distance,
            v=self.vx_1,
            link_obj_id=self.link_obj_id,
            on_junction=self.on_junction,
            junc_obj_id=self.junc_obj_id,
            next_junc_obj_id=self.next_junc_obj_id,
            s2next_junc=self.s2next_junc,
            s2last_junc=self.s2last_junc,
            poi_pos=(self.poi_x, self.poi_y, self.poi_z),
            poi_vel=(self.vx, self.vy, 0.0),
            poi_acc=(self.ax, self.ay, 0.0),
            poi_vel_1=(self.vx_1, 0.0, 0.0),
            poi_acc_1=(self.ax_1, self.ay_1, 0.0),
            yaw=self.yaw,
            yaw_rate=self.yaw_rate,
            yaw_acc=self.yaw_acc,
            roll=self.rx,
            pitch=self.ry,
            front_steer=self.front_rz,
            wheel_rot=(self.whl_rot,) * n,
            long_slip=(self.long_slip_f, self.long_slip_f, self.long_slip_r, self.long_slip_r),
            side_slip=(self.side_slip_f, self.side_slip_f, self.side_slip_r, self.side_slip_r),
            wheel_fz=(self.weight * 0.25,) * 4,
            steer_ang=self.steer_ang,
            fr1_pos=(self.x, self.y, self.z),
            fr1_vel=(self.vx, self.vy, 0.0),
            fr1_acc=(self.ax, self.ay, 0.0),
            tr2fr0=tr,
            x_0=_column(tr, 0),
            y_0=_column(tr, 1),
            z_0=_column(tr, 2),
            engine_rotv=self.engine_rotv,
            gear_no=self.gear_no,
        )