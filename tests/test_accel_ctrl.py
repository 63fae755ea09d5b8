import pytest

from vehicle_models.accel_ctrl import (
    NOTSET,
    AccelCtrl,
    AccelInputs,
    ObjectTarget,
    set_user_desired_accel_func,
)

SENSORS = ["Vhcl.RadarL"]


def make(params=None, velocity=0.0):
    return AccelCtrl.from_params(params or {}, velocity, SENSORS)


def test_defaults_from_params():
    ctrl = make()
    assert ctrl.p_gain == 0.001
    assert ctrl.i_gain == 1.0
    assert ctrl.acc.desired_speed == pytest.approx(100 / 3.6)
    assert ctrl.acc.axmin == -2.5
    assert ctrl.desired_ax == NOTSET


def test_driver_velocity_used_when_fast_enough():
    ctrl = make(velocity=25.0)
    assert ctrl.acc.desired_speed == 25.0


def test_unknown_source_raises():
    with pytest.raises(ValueError):
        make({"AccelCtrl.DesrAccelFunc": "Nope"})


def test_missing_sensor_raises():
    with pytest.raises(ValueError):
        make({"AccelCtrl.ACC.RefObjectSensorName": "Vhcl.Missing"})


def test_speed_control_lower_limit():
    ctrl = make({"AccelCtrl.ACC.DesrSpd": 10.0})
    ax = ctrl.desired_accel_acc(0.0, 40.0, ObjectTarget())
    assert ax == -0.35


def test_distance_control_hits_axmin():
    ctrl = make()
    ax = ctrl.desired_accel_acc(0.0, 20.0, ObjectTarget(detected=True, ds=1.0, dv=-20.0))
    assert ax == ctrl.acc.axmin
    assert ctrl.acc.desired_dist >= ctrl.acc.dsmin


def test_time_to_collision():
    ctrl = make()
    ctrl.desired_accel_acc(0.0, 20.0, ObjectTarget(detected=True, ds=20.0, dv=-5.0))
    assert ctrl.acc.time_to_collision == pytest.approx(4.0)


def test_driver_brake_deactivates():
    ctrl = make()
    inputs = AccelInputs(vehicle_speed=12.0, driver_brake=0.5, gas=0.3)
    assert ctrl.calc(0.01, inputs) is None
    assert ctrl.acc.is_active is False
    assert ctrl.acc.desired_speed == 12.0
    assert ctrl.c_i == 0.3


def test_full_gas_saturation_and_integral_invariant():
    ctrl = make({"AccelCtrl.p": 10.0})
    inputs = AccelInputs(vehicle_speed=0.0, vehicle_ax=0.0)
    out = ctrl.calc(0.01, inputs)
    assert out.gas == 1.0
    assert out.brake == 0.0
    delta = ctrl.desired_ax - inputs.vehicle_ax
    assert ctrl.c_i + ctrl.p_gain * delta == pytest.approx(1.0)


def test_braking_output():
    ctrl = make({"AccelCtrl.p": 10.0, "AccelCtrl.ACC.DesrSpd": 0.0})
    out = ctrl.calc(0.01, AccelInputs(vehicle_speed=30.0, vehicle_ax=0.0))
    assert out.gas == 0.0
    assert 0.0 < out.brake <= 1.0


def test_not_simulating_does_nothing():
    ctrl = make()
    assert ctrl.calc(0.01, AccelInputs(simulating=False, gas=0.4)) is None
    assert ctrl.c_i == 0.0


def test_dva_source_uses_external_value():
    ctrl = make({"AccelCtrl.DesrAccelFunc": "DVA"})
    assert ctrl.calc(0.01, AccelInputs(gas=0.2)) is None
    assert ctrl.c_i == 0.2
    ctrl.desired_ax = 2.0
    out = ctrl.calc(0.01, AccelInputs())
    assert out.gas > 0.0


def test_user_source():
    set_user_desired_accel_func(lambda dt, inputs: -3.0)
    try:
        ctrl = make({"AccelCtrl.DesrAccelFunc": "User"})
    finally:
        set_user_desired_accel_func(None)
    out = ctrl.calc(0.1, AccelInputs())
    assert ctrl.desired_ax == -3.0
    assert out.brake > 0.0