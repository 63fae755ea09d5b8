import pytest

from vehicle_models.drive_line import (
    DriveLineConfig,
    DriveLineModel,
    DriveLineState,
    DriveSourcePos,
    SimState,
)


@pytest.fixture
def model():
    return DriveLineModel.from_config(
        DriveLineConfig(n_wheels=4, wheel_iyy=(1.0, 1.0, 1.0, 1.0), i_diff_mean=4.0)
    )


def test_rejects_wrong_wheel_count():
    with pytest.raises(ValueError, match="four wheel"):
        DriveLineModel.from_config(DriveLineConfig(n_wheels=2, wheel_iyy=(1.0, 1.0), i_diff_mean=3.0))


def test_rejects_non_positive_ratio():
    with pytest.raises(ValueError, match="ratio"):
        DriveLineModel.from_config(DriveLineConfig(n_wheels=4, wheel_iyy=(1.0,) * 4, i_diff_mean=0.0))


def test_rejects_rear_drive_source():
    cfg = DriveLineConfig(
        n_wheels=4,
        wheel_iyy=(1.0,) * 4,
        i_diff_mean=3.0,
        drive_source_pos=(DriveSourcePos.DIFF_REAR,) + (DriveSourcePos.NO_POSITION,) * 3,
    )
    with pytest.raises(ValueError, match="front differential"):
        DriveLineModel.from_config(cfg)


def test_torque_goes_to_front_wheels_only(model):
    state = DriveLineState(drive_trq_in=100.0)
    model.calc(state, SimState.SIMULATE, 0.01)
    front = [w.trq_drive for w in state.wheel_out[:2]]
    rear = [w.trq_drive for w in state.wheel_out[2:]]
    assert front[0] == front[1]
    assert sum(front) == pytest.approx(100.0 * model.i_diff_mean)
    assert rear == [0.0, 0.0]
    for w in state.wheel_out:
        assert w.trq_supp2wc == -w.trq_drive
        assert w.trq_b2w == 0.0


def test_brake_opposes_motion_and_is_limited(model):
    state = DriveLineState()
    for wi, wo in zip(state.wheel_in, state.wheel_out):
        wi.trq_brake = 50.0
        wo.rotv = 5.0
    model.calc(state, SimState.SIMULATE, 0.01)
    for w in state.wheel_out:
        assert w.trq_b2w == -50.0
        assert w.rotv < 5.0


def test_brake_released_during_idle_phases(model):
    state = DriveLineState()
    for wi, wo in zip(state.wheel_in, state.wheel_out):
        wi.trq_brake = 50.0
        wo.rotv = 5.0
    model.calc(state, SimState.END_IDLE_GET, 0.01)
    assert all(w.trq_b2w == 0.0 for w in state.wheel_out)


def test_no_acceleration_outside_simulation(model):
    state = DriveLineState(drive_trq_in=100.0)
    for wo in state.wheel_out:
        wo.rotv = 3.0
    model.calc(state, SimState.START_SIM, 0.1)
    assert model.rota == [0.0] * 4
    assert all(w.rotv == 3.0 for w in state.wheel_out)
    assert all(w.rot == pytest.approx(0.3) for w in state.wheel_out)


def test_end_idle_set_stops_wheels(model):
    state = DriveLineState(drive_trq_in=100.0)
    for wo in state.wheel_out:
        wo.rotv = 3.0
        wo.rot = 1.0
    model.calc(state, SimState.END_IDLE_SET, 0.1)
    assert all(w.rotv == 0.0 for w in state.wheel_out)
    assert all(w.rot == 1.0 for w in state.wheel_out)


def test_drive_torque_accelerates_front_wheels(model):
    state = DriveLineState(drive_trq_in=100.0)
    model.calc(state, SimState.SIMULATE, 0.01)
    out = state.wheel_out
    assert out[0].rotv > 0.0 and out[0].rotv == out[1].rotv
    assert out[2].rotv == 0.0 and out[3].rotv == 0.0
    assert out[0].rot == pytest.approx(out[0].rotv * 0.01)