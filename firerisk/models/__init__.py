from .simulation import (
    ReadingsInput,
    DeltaInput,
    Readings,
    PredictionResponse,
    AssessmentResponse,
    HistoryEntryResponse,
    HistoryResponse,
    LayoutResponse,
    SimulationStateResponse,
    HealthResponse,
)
