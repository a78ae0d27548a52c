"""
Fire Risk Demonstrator - FastAPI Application

Main application entry point with API endpoints for:
- Fire risk prediction and session assessment
- Network diagram layout
- Risk history for trend charts
- Scenario presets and simulation runs
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime
from dotenv import load_dotenv

# Load environment variables
load_dotenv()
import logging

from firerisk.config import settings
from firerisk.core.inference import RawInputs
from firerisk.models import (
    ReadingsInput,
    DeltaInput,
    PredictionResponse,
    AssessmentResponse,
    HistoryResponse,
    LayoutResponse,
    SimulationStateResponse,
    HealthResponse,
)
from firerisk.services import SimulationService

logger = logging.getLogger(__name__)

# ---- FastAPI Application ----

app = FastAPI(
    title="Fire Risk Neural Demonstrator API",
    description="Fixed-weight neural fire risk estimation with network visualization data",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- In-memory session (single user demonstrator) ----
_service = SimulationService()


def get_service() -> SimulationService:
    return _service


def _simulation_state(service: SimulationService) -> SimulationStateResponse:
    return SimulationStateResponse(
        delta=service.delta.to_dict(),
        preset=service.preset.value if service.preset else None,
    )


# ---- API Endpoints ----

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now().isoformat(),
        components={
            "inference": "ready",
            "layout": "ready",
            "history": f"{len(get_service().history)}/{get_service().history.capacity}",
        }
    )


@app.post(f"{settings.api_prefix}/predict", response_model=PredictionResponse, tags=["Inference"])
async def predict(request: ReadingsInput):
    """
    Stateless forward pass.

    Readings are clamped into range; the session history is not touched.
    """
    raw = RawInputs.clamped(**request.model_dump())
    return get_service().predict(raw)


@app.get(f"{settings.api_prefix}/inputs", response_model=ReadingsInput, tags=["Session"])
async def get_inputs():
    """Current session readings."""
    return get_service().inputs.to_dict()


@app.put(f"{settings.api_prefix}/inputs", response_model=AssessmentResponse, tags=["Session"])
async def set_inputs(request: ReadingsInput):
    """Replace the session readings and reassess."""
    return get_service().set_inputs(**request.model_dump())


@app.get(f"{settings.api_prefix}/assessment", response_model=AssessmentResponse, tags=["Session"])
async def get_assessment():
    """Latest assessment of the session readings."""
    return get_service().latest()


@app.get(f"{settings.api_prefix}/network/layout", response_model=LayoutResponse, tags=["Visualization"])
async def network_layout():
    """Node and edge geometry for the latest activations."""
    try:
        return get_service().diagram()
    except ValueError as e:
        logger.error(f"Layout failed: {e}")
        raise HTTPException(status_code=500, detail=f"Layout failed: {str(e)}")


@app.get(f"{settings.api_prefix}/history", response_model=HistoryResponse, tags=["Visualization"])
async def history():
    """Recent assessments, oldest first, with chart series."""
    return get_service().history_snapshot()


@app.get(f"{settings.api_prefix}/simulation/delta", response_model=SimulationStateResponse, tags=["Simulation"])
async def get_delta():
    return _simulation_state(get_service())


@app.put(f"{settings.api_prefix}/simulation/delta", response_model=SimulationStateResponse, tags=["Simulation"])
async def set_delta(request: DeltaInput):
    """Set a custom delta; each field is clamped to its allowed change."""
    service = get_service()
    service.set_delta(**request.model_dump())
    return _simulation_state(service)


@app.post(f"{settings.api_prefix}/simulation/presets/{{name}}", response_model=SimulationStateResponse, tags=["Simulation"])
async def apply_preset(name: str):
    """Select a preset scenario: current_trend, mitigation or worst_case."""
    service = get_service()
    try:
        service.apply_preset(name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _simulation_state(service)


@app.post(f"{settings.api_prefix}/simulation/run", response_model=AssessmentResponse, tags=["Simulation"])
async def run_simulation():
    """Apply the pending delta to the session readings and reassess."""
    return get_service().run_simulation()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
