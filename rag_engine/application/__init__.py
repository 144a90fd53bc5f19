"""Application layer: service orchestrators over core logic and boundaries."""
