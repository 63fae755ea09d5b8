# vehicle_models

A small collection of vehicle sub-system models for cycle-based longitudinal
driving simulation, plus an autonomous emergency braking (AEB) controller.
Each model is a plain Python object. You build it from a parameter mapping or
a configuration object, and you advance it one time step at a time with
`calc` (`step` for the AEB controller). Only the standard library is used.

## Contents

| Module | What it models |
| --- | --- |
| `vehicle_models.aeb` | `AebController`: time-to-collision emergency braking that holds the brake once it has fired |
| `vehicle_models.accel_ctrl` | `AccelCtrl`: adaptive cruise control (`AccEcu`) plus a PI controller that turns a desired acceleration into gas or brake (`ControlOutput`) |
| `vehicle_models.environment` | `EnvironmentModel`: constant air temperature and pressure |
| `vehicle_models.aero` | `AeroModel`: aerodynamic forces and torques from a `LinearMap` of coefficients over the flow angle |
| `vehicle_models.brake` | `BrakeModel`: pedal-to-torque brake distribution for four wheels |
| `vehicle_models.battery` | `BatteryModel`: charge integration, state of charge and terminal voltage |
| `vehicle_models.battery_cu` | `BatteryCUModel`: state of charge and health of the low-voltage battery |
| `vehicle_models.clutch` | `ClutchModel`: friction clutch with one rotational degree of freedom |
| `vehicle_models.engine` | `EngineModel`: engine torque between full-load and drag curves; `fac4velzero` fades torque near standstill |
| `vehicle_models.engine_cu` | `EngineCUModel`: engine on/off, idle speed control and fuel cut-off |
| `vehicle_models.drive_line` | `DriveLineModel`: front-wheel driveline with wheel dynamics and brake friction; also defines `SimState` |
| `vehicle_models.drive_line_xwd` | `DriveLineXWDModel`: torque split for an open driveline |
| `vehicle_models.hyd_brake_wrap` | `HydEspWrapModel`: wraps a hydraulic brake model taken from a registry and adds park brake torque |
| `vehicle_models.car` | `CarModel`: planar car with engine map, aerodynamics and tyre limits, driven along a road you supply |

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Example: emergency braking

```python
from vehicle_models.aeb import AebController

aeb = AebController()
aeb.reset()
aeb.current_distance = 8.0      # m to the object ahead
aeb.relative_velocity = 10.0    # m/s closing speed
aeb.step()
print(aeb.brake_request, aeb.ttc)   # True 0.8
```

Once the controller has braked, the request is held on later steps until
`stop()` or `reset()` is called.

## Example: brake model

```python
from vehicle_models.brake import BrakeModel

brake = BrakeModel.from_params({"Brake.Pedal2Trq": [1000, 1000, 500, 500]}, n_wheels=4)
print(brake.calc(0.5))   # (500.0, 500.0, 250.0, 250.0)
```

## Example: adaptive cruise control

```python
from vehicle_models.accel_ctrl import AccelCtrl, AccelInputs, ObjectTarget

ctrl = AccelCtrl.from_params({}, driver_velocity=20.0, object_sensors=["Vhcl.RadarL"])
out = ctrl.calc(0.01, AccelInputs(vehicle_speed=18.0, target=ObjectTarget(detected=False)))
print(out.gas, out.brake)
```

`calc` returns `None` when the controller is not acting: when
`AccelInputs.simulating` is false, or when the desired acceleration is unset
(for example after the driver's brake has switched the ACC off). A custom
source of desired acceleration can be registered with
`set_user_desired_accel_func` and chosen with `"AccelCtrl.DesrAccelFunc": "User"`.

## Example: car on a flat road

```python
from vehicle_models.car import CarConfig, CarModel, DriverControls, RoadSample

cfg = CarConfig(
    mass_total=1500.0, whl_radius=0.3,
    cog2axle_front=1.2, cog2axle_rear=-1.4,
    i_diff=3.5, i_fgear=[0.0, 3.5, 2.0, 1.4, 1.0],
    velocity=10.0,
)
car = CarModel(cfg, {"PowerTrain.Engine.Trq": [(1000, 100), (6000, 250)]})

def flat_road(xyz, s):
    return RoadSample(xyz=(xyz[0], xyz[1], 0.0), s=s)

state = car.calc(DriverControls(gas=0.5, gear_no=2), flat_road, 0.01)
print(state.v, state.poi_pos)
```

`calc` only moves the car while `sim_state` is `SimState.SIMULATE`, and it
raises `RoadLeftError` when the road callable reports the car off the road.

## Errors

Models check their parameters when they are built and raise `ValueError` for
missing or unsuitable values. They do not return a failure status.

## What this package does not do

- It has no simulation loop, scheduler or test-run management: you call each
  model's `calc` yourself and pass the quantities between models.
- It has no road network or road geometry: `CarModel` asks a callable you
  supply for each road sample.
- It has no hydraulic brake model of its own: `HydEspWrapModel` needs a factory
  for `"HydESP"` in the registry you pass in.
- It has no command-line tool, data recording or visualisation.