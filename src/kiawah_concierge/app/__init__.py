"""Application wiring and command entry points."""
