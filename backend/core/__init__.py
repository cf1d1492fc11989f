"""Core mathematics and configuration for the points projection.

This package contains pure building blocks:

- ``projection_config`` — calibration weights, league baselines, caps
- ``projection_engine`` — blend, adjustment factors, capped combination

Nothing in this package imports from ``backend.services``.
All modules are side-effect-free and unit-testable in isolation.
"""
