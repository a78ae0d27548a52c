"""
Fire Risk API Models
"""
from pydantic import BaseModel, Field
from typing import Dict, Any, List, Optional


class ReadingsInput(BaseModel):
    """Environmental readings. Out-of-range values are clamped, not rejected."""
    temperature: float = Field(..., description="Temperature in °C (0-50)")
    precipitation: float = Field(..., description="Precipitation in % (0-100)")
    wind_speed: float = Field(..., description="Wind speed in m/s (0-20)")
    humidity: float = Field(..., description="Relative humidity in % (0-100)")


class DeltaInput(BaseModel):
    """Simulation delta. Each field is clamped to its allowed change range."""
    temperature: float = Field(default=0.0, description="Temperature change (-4 to 4 °C)")
    precipitation: float = Field(default=0.0, description="Precipitation change (-30 to 30 %)")
    wind_speed: float = Field(default=0.0, description="Wind speed change (-5 to 5 m/s)")
    humidity: float = Field(default=0.0, description="Humidity change (-30 to 30 %)")


class Readings(BaseModel):
    temperature: float
    precipitation: float
    wind_speed: float
    humidity: float


class PredictionResponse(BaseModel):
    """Stateless forward pass result."""
    inputs: Readings
    risk: int
    risk_level: str
    activations: List[List[float]]
    adjustments: List[str]


class AssessmentResponse(PredictionResponse):
    """Assessment of the session's current inputs."""
    assessment_id: str
    timestamp: str
    explanation: Optional[Dict[str, Any]] = None


class HistoryEntryResponse(BaseModel):
    temperature: float
    precipitation: float
    wind_speed: float
    humidity: float
    risk: int


class HistoryResponse(BaseModel):
    capacity: int
    entries: List[HistoryEntryResponse]
    chart: Dict[str, List[Any]]


class LayoutResponse(BaseModel):
    """Diagram geometry for the latest activations."""
    width: float
    height: float
    margin: float
    layers: List[Dict[str, Any]]
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]


class SimulationStateResponse(BaseModel):
    delta: Readings
    preset: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
    components: Dict[str, str]
