"""
Regress Kernel API — FastAPI endpoints.

A thin reporting surface over the verification engine:
- Canonical and caller-supplied scenario runs
- Individual consistency, disagreement and grounding checks
- Verification ledger queries
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ValidationError

from regress_kernel import __version__
from regress_kernel.config import get_config
from regress_kernel.errors import DomainContractError
from regress_kernel.ledger.store import VerificationLedger
from regress_kernel.models.scenario import Scenario
from regress_kernel.models.worldview import ExternalCriterion, ObservationFunction, Worldview
from regress_kernel.scenario.catalog import CANONICAL_SCENARIOS
from regress_kernel.scenario.driver import ScenarioDriver
from regress_kernel.verification.engine import VerificationEngine

logging.basicConfig(
    level=get_config().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# --- Request Models ---

class ConsistencyRequest(BaseModel):
    worldview: dict
    observation: dict


class DisagreementRequest(BaseModel):
    first: dict
    second: dict


class GroundingRequest(BaseModel):
    criterion: dict
    observation: dict


def _parse(model, payload: dict):
    """Validate a payload into a kernel model, mapping contract violations to 422."""
    try:
        return model.model_validate(payload)
    except (ValidationError, DomainContractError) as exc:
        raise HTTPException(422, str(exc))


# --- Application Factory ---

def create_app(
    engine: Optional[VerificationEngine] = None,
    ledger: Optional[VerificationLedger] = None,
    driver: Optional[ScenarioDriver] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Regress Kernel API",
        description="Finite-domain consistency and underdetermination checks",
        version=__version__,
    )

    eng = engine or VerificationEngine()
    led = ledger or VerificationLedger(db_path=get_config().ledger_db_path)
    drv = driver or ScenarioDriver(engine=eng, ledger=led)

    app.state.engine = eng
    app.state.ledger = led
    app.state.driver = drv

    @app.get("/health")
    def health():
        return {"status": "ok", "version": __version__}

    # === SCENARIOS ===

    @app.get("/scenarios")
    def list_scenarios():
        """Names of the canonical regress scenarios."""
        return sorted(CANONICAL_SCENARIOS)

    @app.post("/scenarios/{name}/run")
    def run_canonical_scenario(name: str):
        """Run a canonical scenario and return its report."""
        builder = CANONICAL_SCENARIOS.get(name)
        if builder is None:
            raise HTTPException(404, "Scenario not found")
        return drv.run(builder()).model_dump(mode="json")

    @app.post("/scenarios/evaluate")
    def evaluate_scenario(payload: dict):
        """Run a caller-supplied scenario."""
        scenario = _parse(Scenario, payload)
        return drv.run(scenario).model_dump(mode="json")

    # === CHECKS ===

    @app.post("/consistency")
    def check_consistency(req: ConsistencyRequest):
        worldview = _parse(Worldview, req.worldview)
        observation = _parse(ObservationFunction, req.observation)
        if not worldview.covers(observation.domain):
            raise HTTPException(
                422, f"Worldview '{worldview.name}' is not total over the observed entities"
            )
        return eng.check_consistency(worldview, observation).model_dump(mode="json")

    @app.post("/disagreement")
    def check_disagreement(req: DisagreementRequest):
        first = _parse(Worldview, req.first)
        second = _parse(Worldview, req.second)
        return eng.check_disagreement(first, second).model_dump(mode="json")

    @app.post("/grounding")
    def check_grounding(req: GroundingRequest):
        criterion = _parse(ExternalCriterion, req.criterion)
        observation = _parse(ObservationFunction, req.observation)
        try:
            report = eng.check_grounding(criterion, observation)
        except DomainContractError as exc:
            raise HTTPException(422, str(exc))
        return report.model_dump(mode="json")

    # === LEDGER ===

    @app.get("/ledger")
    def list_ledger(scenario: Optional[str] = None, limit: int = 50):
        """Recent verification records, optionally filtered by scenario."""
        if scenario:
            records = led.query_by_scenario(scenario)
        else:
            records = led.query_recent(limit)
        return [r.model_dump(mode="json") for r in records]

    @app.get("/ledger/verify")
    def verify_ledger():
        return {"intact": led.verify_chain_integrity(), "records": led.count()}

    @app.get("/ledger/{record_id}")
    def get_ledger_record(record_id: str):
        record = led.get_by_id(record_id)
        if not record:
            raise HTTPException(404, "Record not found")
        return record.model_dump(mode="json")

    return app
