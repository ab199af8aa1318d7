"""FastAPI application exposing account analysis, settings and the scenario catalog."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from influence_engine.config.settings import Settings
from influence_engine.engine.analysis import analyze_for_blogger, analyze_for_business
from influence_engine.engine.calculator import MetricCalculator
from influence_engine.engine.probability import get_scenario_probability
from influence_engine.hooks.audit_hooks import log_analysis_call
from influence_engine.metric_library.registry import get_all_metrics
from influence_engine.methodology.schema import (
    BloggerSettings,
    BusinessSettings,
    NonNegative,
    OptimalityWeights,
    parse_settings,
    settings_weight_errors,
)
from influence_engine.models.account import (
    AccountRecord,
    AccountValidationError,
    validate_account_record,
)
from influence_engine.models.enums import AnalysisMode, OptimalityMode
from influence_engine.scenarios.plugins import CustomScenarioDefinition
from influence_engine.storage.json_file_store import JsonFileStore
from influence_engine.storage.memory_store import InMemoryStore
from influence_engine.storage.repository import SettingsRepository
from influence_engine.tools.account_io import record_from_dict
from influence_engine.tools.export import (
    account_analysis_to_dict,
    batch_result_to_dict,
    recommended_summary,
)

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Influence Engine API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_repository = SettingsRepository(
    JsonFileStore(settings.store_path) if settings.store_path else InMemoryStore()
)


def get_repository() -> SettingsRepository:
    return _repository


class AccountInput(BaseModel):
    id: Optional[str] = None
    name: str
    platform: str = ""
    category: str = ""
    subscribers: float
    subscriptions: float
    followers_growth: float
    posts: float
    post_frequency: float
    likes: float
    comments: float
    shares: float
    avg_reach: float
    mentions: float
    engagement_rate_std: Optional[float] = None
    post_frequency_std: float = 0.0
    reach_std: Optional[float] = None


class AnalyzeAccountRequest(BaseModel):
    account: AccountInput
    settings: Optional[BloggerSettings] = None
    scenarios: Optional[list[CustomScenarioDefinition]] = None
    optimality_weights: Optional[OptimalityWeights] = None
    optimality_mode: Optional[OptimalityMode] = None


class AnalyzeBatchRequest(BaseModel):
    accounts: list[AccountInput]
    settings: Optional[BusinessSettings] = None


class CreateScenarioRequest(BaseModel):
    name: str
    description: str = ""
    cost: Optional[NonNegative] = None


def _to_record(account: AccountInput) -> AccountRecord:
    """Convert a request account into a validated record, 422 on bad counters."""
    try:
        return validate_account_record(record_from_dict(account.model_dump()))
    except AccountValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"account": e.account_name, "problems": e.problems},
        )


@app.post("/api/analyze/account")
async def analyze_account(
    body: AnalyzeAccountRequest,
    repository: SettingsRepository = Depends(get_repository),
):
    """Score one account and rank its improvement scenarios."""
    record = _to_record(body.account)
    blogger_settings = body.settings or repository.settings_or_default(AnalysisMode.BLOGGER)
    optimality_weights = (
        body.optimality_weights
        or repository.settings_or_default(AnalysisMode.BUSINESS).optimality_weights
    )
    scenarios = body.scenarios
    if scenarios is None:
        scenarios = repository.load_scenario_catalog().all()

    analysis = analyze_for_blogger(
        record,
        settings=blogger_settings,
        scenarios=scenarios,
        optimality_weights=optimality_weights,
        optimality_mode=body.optimality_mode,
    )
    payload = account_analysis_to_dict(analysis)
    payload["recommended"] = recommended_summary(analysis)

    repository.save_blogger_data(record)
    repository.save_blogger_results(payload)
    log_analysis_call(
        "account",
        [record.id],
        recommended_scenario=analysis.scenarios.recommended_scenario or None,
        details={"optimality_mode": analysis.scenarios.optimality_mode.value},
    )
    return payload


@app.post("/api/analyze/batch")
async def analyze_batch_endpoint(
    body: AnalyzeBatchRequest,
    repository: SettingsRepository = Depends(get_repository),
):
    """Compare several accounts against the batch averages."""
    records = [_to_record(account) for account in body.accounts]
    business_settings = body.settings or repository.settings_or_default(AnalysisMode.BUSINESS)

    result = analyze_for_business(records, settings=business_settings)
    payload = batch_result_to_dict(result)

    repository.save_business_data(records)
    repository.save_business_results(payload)
    log_analysis_call("batch", [r.id for r in records])
    return payload


@app.get("/api/scenarios/{scenario_key}/probability")
async def scenario_probability(
    scenario_key: str,
    repository: SettingsRepository = Depends(get_repository),
):
    """Probability for the last analysed account, or the fixed default without one."""
    record = repository.load_blogger_data()
    metrics = None
    if record is not None:
        blogger_settings = repository.settings_or_default(AnalysisMode.BLOGGER)
        metrics = MetricCalculator().calculate(
            record, blogger_settings.ii_weights, blogger_settings.si_weights
        )
    return {
        "scenario": scenario_key,
        "probability": get_scenario_probability(scenario_key, metrics),
        "based_on_account": record.id if record is not None else None,
    }


@app.get("/api/metrics")
async def list_metrics():
    """Registered base metrics."""
    return [
        {
            "id": d.id,
            "symbol": d.symbol,
            "label": d.label,
            "description": d.description,
            "required_inputs": list(d.required_inputs),
            "unit": d.unit,
        }
        for d in get_all_metrics().values()
    ]


@app.get("/api/settings/{mode}")
async def get_settings(
    mode: AnalysisMode,
    repository: SettingsRepository = Depends(get_repository),
):
    current = repository.settings_or_default(mode)
    return {
        "settings": current.model_dump(),
        "warnings": settings_weight_errors(current),
    }


@app.put("/api/settings/{mode}")
async def put_settings(
    mode: AnalysisMode,
    body: dict[str, Any],
    repository: SettingsRepository = Depends(get_repository),
):
    """Validate and save settings. Unbalanced weight groups are saved with warnings."""
    raw = {**body, "mode": mode.value}
    try:
        parsed = parse_settings(raw)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    repository.save_settings(parsed)
    logger.info("Saved %s settings", mode.value)
    return {
        "settings": parsed.model_dump(),
        "warnings": settings_weight_errors(parsed),
    }


@app.get("/api/scenarios")
async def list_scenarios(repository: SettingsRepository = Depends(get_repository)):
    return [d.model_dump(by_alias=True) for d in repository.load_scenario_catalog().all()]


@app.post("/api/scenarios")
async def create_scenario(
    body: CreateScenarioRequest,
    repository: SettingsRepository = Depends(get_repository),
):
    catalog = repository.load_scenario_catalog()
    try:
        definition = catalog.add(body.name, body.description, body.cost)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    repository.save_scenario_catalog(catalog)
    return definition.model_dump(by_alias=True)


@app.post("/api/scenarios/{scenario_id}/toggle")
async def toggle_scenario(
    scenario_id: int,
    repository: SettingsRepository = Depends(get_repository),
):
    catalog = repository.load_scenario_catalog()
    try:
        definition = catalog.toggle(scenario_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Scenario {scenario_id} not found")
    repository.save_scenario_catalog(catalog)
    return definition.model_dump(by_alias=True)


@app.delete("/api/scenarios/{scenario_id}")
async def delete_scenario(
    scenario_id: int,
    repository: SettingsRepository = Depends(get_repository),
):
    catalog = repository.load_scenario_catalog()
    try:
        catalog.delete(scenario_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Scenario {scenario_id} not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    repository.save_scenario_catalog(catalog)
    return {"deleted": scenario_id}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
