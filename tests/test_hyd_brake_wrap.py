from dataclasses import dataclass, field

import pytest

from vehicle_models.hyd_brake_wrap import HydEspWrapModel


@dataclass
class FakeState:
    pedal: float = 0.0
    trq_wb: list = field(default_factory=lambda: [0.0] * 4)
    trq_pb: list = field(default_factory=lambda: [0.0] * 4)


class FakeHydEsp:
    instances = []

    def __init__(self, params, cfg, kind_key):
        self.params = params
        self.cfg = cfg
        self.kind_key = kind_key
        self.calls = 0
        self.closed = 0
        FakeHydEsp.instances.append(self)

    def calc(self, state, dt):
        self.calls += 1
        state.trq_wb = [state.pedal * 10.0] * 4
        return state

    def close(self):
        self.closed += 1


PARAMS = {"Park.BrakePark2Trq": [100.0, 100.0, 400.0, 400.0]}


@pytest.fixture
def registry():
    FakeHydEsp.instances.clear()
    return {"HydESP": FakeHydEsp}


def test_missing_wrapped_model():
    with pytest.raises(ValueError, match="Missing brake model 'HydESP'"):
        HydEspWrapModel.from_params(PARAMS, {}, None, "Brake")


def test_bad_park_parameters_close_wrapped(registry):
    with pytest.raises(ValueError, match="Park.BrakePark2Trq"):
        HydEspWrapModel.from_params({"Park.BrakePark2Trq": [1.0, 2.0]}, registry, None, "Brake")
    assert FakeHydEsp.instances[0].closed == 1


def test_wrapped_model_gets_arguments(registry):
    cfg = object()
    model = HydEspWrapModel.from_params(PARAMS, registry, cfg, "Brake")
    assert model.wrapped.cfg is cfg
    assert model.wrapped.kind_key == "Brake"
    assert model.pb_trq_max == (100.0, 100.0, 400.0, 400.0)


def test_calc_runs_wrapped_and_sets_park_torque(registry):
    model = HydEspWrapModel.from_params(PARAMS, registry, None, "Brake")
    state = model.calc(FakeState(pedal=0.5), brake_park=1.0, dt=0.01)
    assert model.wrapped.calls == 1
    assert state.trq_wb == [5.0] * 4
    assert state.trq_pb == [100.0, 100.0, 400.0, 400.0]


def test_released_park_brake_gives_zero_torque(registry):
    model = HydEspWrapModel.from_params(PARAMS, registry, None, "Brake")
    state = model.calc(FakeState(), brake_park=0.0, dt=0.01)
    assert state.trq_pb == [0.0] * 4


def test_context_manager_closes_once(registry):
    with HydEspWrapModel.from_params(PARAMS, registry, None, "Brake") as model:
        model.close()
    assert model.wrapped.closed == 1


def test_wrapped_errors_propagate(registry):
    class Failing(FakeHydEsp):
        def calc(self, state, dt):
            raise RuntimeError("hydraulics failed")

    model = HydEspWrapModel.from_params(PARAMS, {"HydESP": Failing}, None, "Brake")
    with pytest.raises(RuntimeError, match="hydraulics failed"):
        model.calc(FakeState(), 1.0, 0.01)