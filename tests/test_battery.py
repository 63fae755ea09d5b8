import pytest

from vehicle_models.battery import BatteryConfig, BatteryModel, BatteryState


@pytest.fixture
def cfg():
    return BatteryConfig(capacity=50.0, voltage=12.0, temp_init=300.0)


def test_defaults(cfg):
    model = BatteryModel.from_params({}, cfg, "LV")
    assert model.r0 == pytest.approx(0.0012)
    assert model.pwr_max == pytest.approx(100000.0)
    assert model.capacity == 50.0
    assert model.volt_oc0 == 12.0


def test_params_read_with_ident_prefix(cfg):
    params = {
        "PowerTrain.PowerSupply.BattLV.R0": -0.5,
        "PowerTrain.PowerSupply.BattLV.Pwr_max": 2.0,
    }
    model = BatteryModel.from_params(params, cfg, "LV")
    assert model.r0 == 0.5
    assert model.pwr_max == pytest.approx(2000.0)


def test_zero_resistance_rejected(cfg):
    with pytest.raises(ValueError, match="R0"):
        BatteryModel.from_params({"PowerTrain.PowerSupply.BattLV.R0": 0.0}, cfg, "LV")


def test_no_current_keeps_charge_and_voltage(cfg):
    model = BatteryModel.from_params({}, cfg, "LV")
    state = BatteryState(current=0.0, aoc=25.0, temp_cool_in=280.0)
    model.calc(state, 0.01)
    assert state.aoc == 25.0
    assert state.voltage == 12.0
    assert state.temp == 300.0
    assert state.temp_cool_out == 280.0
    assert state.pwr_max == model.pwr_max
    assert model.soc == pytest.approx(50.0)


def test_discharge_lowers_charge(cfg):
    model = BatteryModel.from_params({}, cfg, "LV")
    state = BatteryState(current=3600.0, aoc=25.0)
    model.calc(state, 1.0)
    assert state.aoc == pytest.approx(24.0)
    assert state.voltage < 12.0


def test_charge_is_bounded(cfg):
    model = BatteryModel.from_params({}, cfg, "LV")
    full = BatteryState(current=-1e6, aoc=49.0)
    model.calc(full, 1.0)
    assert full.aoc == cfg.capacity
    empty = BatteryState(current=1e6, aoc=1.0)
    model.calc(empty, 1.0)
    assert empty.aoc == 0.0
    assert empty.voltage == 0.0
    assert empty.energy == 0.0


def test_voltage_never_negative(cfg):
    model = BatteryModel.from_params({"PowerTrain.PowerSupply.BattLV.R0": 10.0}, cfg, "LV")
    state = BatteryState(current=100.0, aoc=25.0)
    model.calc(state, 0.001)
    assert state.voltage == 0.0