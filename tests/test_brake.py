import pytest

from vehicle_models.brake import BrakeModel

PARAMS = {"Brake.Pedal2Trq": [1500.0, 1500.0, 900.0, 900.0]}


def test_full_pedal_gives_distribution():
    model = BrakeModel.from_params(PARAMS, 4)
    assert model.calc(1.0) == (1500.0, 1500.0, 900.0, 900.0)
    assert model.trq_wb == (1500.0, 1500.0, 900.0, 900.0)


def test_zero_pedal_gives_zero():
    model = BrakeModel.from_params(PARAMS, 4)
    assert model.calc(0.0) == (0.0, 0.0, 0.0, 0.0)


def test_torque_is_linear_in_pedal():
    model = BrakeModel.from_params(PARAMS, 4)
    half = model.calc(0.5)
    full = model.calc(1.0)
    assert [2 * h for h in half] == pytest.approx(list(full))


def test_wheel_count_mismatch():
    with pytest.raises(ValueError):
        BrakeModel.from_params(PARAMS, 6)


@pytest.mark.parametrize("params", [{}, {"Brake.Pedal2Trq": [1.0, 2.0, 3.0]}])
def test_bad_table(params):
    with pytest.raises(ValueError):
        BrakeModel.from_params(params, 4)