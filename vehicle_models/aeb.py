"""Autonomous emergency braking based on time to collision."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AebController:
    """Emergency brake controller that latches the brake once it has fired.

    Inputs are ``vehicle_speed`` (km/h), ``current_distance`` (m) and
    ``relative_velocity`` (m/s, positive when closing in).  Outputs are
    ``brake_request`` and ``ttc`` (s).
    """

    vehicle_speed: float = 0.0
    current_distance: float = 0.0
    relative_velocity: float = 0.0
    time_threshold: float = 1.0
    minimum_distance: float = 5.0
    brake_request: bool = False
    ttc: float = 0.0
    is_stopped_after_braking: bool = False

    def reset(self) -> None:
        """Bring the controller into its initial state."""
        self.time_threshold = 1.0
        self.brake_request = False
        self.is_stopped_after_braking = False

    def step(self) -> bool:
        """Run one control cycle and return the brake request."""
        if self.is_stopped_after_braking:
            # The brake stays held once an emergency stop has happened.
            if self.current_distance > 1.0 and self.vehicle_speed < 0.1:
                self.is_stopped_after_braking = False
            self.brake_request = True
            self.is_stopped_after_braking = True
            self.ttc = 0.0
        elif self.current_distance == 0.0 and self.relative_velocity == 0.0:
            self.brake_request = False
            self.ttc = 0.0
        elif self.relative_velocity > 0.01 and self.current_distance > 0.0:
            self.ttc = self.current_distance / self.relative_velocity
            if self.ttc < self.time_threshold:
                self.brake_request = True
                self.is_stopped_after_braking = True
            else:
                self.brake_request = False
        else:
            self.brake_request = False
            self.ttc = 0.0
        return self.brake_request

    def stop(self) -> None:
        """Release the brake and clear the latched state."""
        self.brake_request = False
        self.is_stopped_after_braking = False