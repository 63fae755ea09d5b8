from vehicle_models.environment import EnvironmentModel, EnvironmentState


def test_defaults():
    state = EnvironmentModel.from_params({}).calc()
    assert state == EnvironmentState(temperature=293.15, air_pressure=1.013)


def test_custom_params():
    model = EnvironmentModel.from_params(
        {"Env.MyEnvironment.Temp": 250.0, "Env.MyEnvironment.Pressure": "0.9"}
    )
    state = model.calc()
    assert state.temperature == 250.0
    assert state.air_pressure == 0.9


def test_calc_is_stable():
    model = EnvironmentModel(temp=300.0, pressure=1.1)
    first = model.calc()
    second = model.calc()
    assert first == EnvironmentState(temperature=300.0, air_pressure=1.1)
    assert second == EnvironmentState(temperature=300.0, air_pressure=1.1)