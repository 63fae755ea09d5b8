"""Wrapper around a hydraulic brake model adding a simple park brake."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

NWHEEL = 4
MODEL_CLASS = "Brake.System"
MODEL_KIND = "HydESPWrap"
WRAPPED_KIND = "HydESP"


class HydBrakeModel(Protocol):
    """A hydraulic brake model that can be wrapped."""

    def calc(self, state: Any, dt: float) -> Any: ...


HydBrakeFactory = Callable[[Mapping[str, Any], Any, str], HydBrakeModel]


class HydEspWrapModel:
    """Runs the wrapped brake model, then sets park brake torques per wheel.

    Usable as a context manager; leaving it closes the wrapped model.
    """

    def __init__(self, wrapped: HydBrakeModel, pb_trq_max: tuple[float, ...]) -> None:
        self.wrapped = wrapped
        self.pb_trq_max = pb_trq_max
        self._closed = False

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        registry: Mapping[str, HydBrakeFactory],
        cfg: Any,
        kind_key: str,
    ) -> "HydEspWrapModel":
        """Create the wrapped model from ``registry`` and read ``Park.BrakePark2Trq``."""
        msg_pre = f"{MODEL_CLASS} {MODEL_KIND}"
        factory = registry.get(WRAPPED_KIND)
        if factory is None:
            raise ValueError(f"{msg_pre}: Missing brake model '{WRAPPED_KIND}'")
        wrapped = factory(params, cfg, kind_key)

        key = "Park.BrakePark2Trq"
        values = params.get(key)
        if values is None or len(values) != NWHEEL:
            _close(wrapped)
            raise ValueError(f"{msg_pre}: Unsupported argument for '{key}'")
        return cls(wrapped, tuple(float(v) for v in values))

    def calc(self, state: Any, brake_park: float, dt: float) -> Any:
        """Run the wrapped model, then set ``state.trq_pb`` from the park brake lever."""
        self.wrapped.calc(state, dt)
        state.trq_pb = [trq * brake_park for trq in self.pb_trq_max]
        return state

    def close(self) -> None:
        """Release the wrapped model; further calls do nothing."""
        if not self._closed:
            self._closed = True
            _close(self.wrapped)

    def __enter__(self) -> "HydEspWrapModel":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def _close(model: Any) -> None:
    close = getattr(model, "close", None)
    if close is not None:
        close()