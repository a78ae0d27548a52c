from .simulation import SimulationService, DEFAULT_INPUTS

__all__ = ["SimulationService", "DEFAULT_INPUTS"]
