"""Vehicle sub-system models (engine, clutch, driveline, brakes, battery, aerodynamics, car) and AEB/ACC controllers."""

__version__ = "0.1.0"