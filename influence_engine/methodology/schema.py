"""Pydantic models for scoring weights, scenario parameters and settings."""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

# Tolerance used by the settings screen when checking that a group sums to 1.0
WEIGHT_SUM_TOLERANCE = 0.001

NonNegative = Annotated[float, Field(ge=0)]


class WeightGroup(BaseModel):
    """A group of non-negative weights that is expected, not required, to sum to 1.0."""

    def weight_fields(self) -> list[str]:
        return list(type(self).model_fields)

    def total(self) -> float:
        return sum(getattr(self, name) for name in self.weight_fields())

    def sum_drift(self) -> float:
        return self.total() - 1.0

    def is_balanced(self, tolerance: float = WEIGHT_SUM_TOLERANCE) -> bool:
        return abs(self.sum_drift()) <= tolerance

    def normalized(self):
        """Return a copy scaled so the group sums to 1.0 (unchanged when the sum is 0)."""
        total = self.total()
        if total <= 0:
            return self.model_copy()
        return self.model_copy(
            update={name: getattr(self, name) / total for name in self.weight_fields()}
        )


class IIWeights(WeightGroup):
    """Weights of the five influence index terms."""

    followers_ratio: float = Field(default=0.2, ge=0, description="w1, followers ratio (FR)")
    engagement_rate: float = Field(default=0.3, ge=0, description="w2, engagement rate (ER)")
    post_frequency: float = Field(default=0.2, ge=0, description="w3, post frequency (PA)")
    reach: float = Field(default=0.2, ge=0, description="w4, average reach (RA)")
    mentions: float = Field(default=0.1, ge=0, description="w5, mentions (M)")


class SIWeights(WeightGroup):
    """Weights of the three sustainability index terms."""

    engagement_consistency: float = Field(default=0.4, ge=0)
    posting_consistency: float = Field(default=0.3, ge=0)
    reach_consistency: float = Field(default=0.3, ge=0)


class OptimalityWeights(WeightGroup):
    """Weights of delta II, delta SI and (inverted) cost in the optimality score."""

    alpha: float = Field(default=0.5, ge=0)
    beta: float = Field(default=0.3, ge=0)
    gamma: float = Field(default=0.2, ge=0)


class ScenarioParameters(BaseModel):
    """Magnitude knobs and per-scenario costs for the scenario simulator.

    ``None`` values are accepted and read as 0 by the simulator.
    """

    post_frequency_delta: Optional[float] = Field(default=2.0, description="Added posts per week")
    engagement_target: Optional[float] = Field(default=1.5, description="Engagement rate multiplier")
    mentions_delta: Optional[float] = Field(default=3.0, description="Added mentions")
    cost_activity: Optional[NonNegative] = 0.2
    cost_engagement: Optional[NonNegative] = 0.2
    cost_collaboration: Optional[NonNegative] = 0.4
    cost_education: Optional[NonNegative] = 0.2
    custom_costs: dict[str, NonNegative] = Field(
        default_factory=dict,
        description="Costs of caller-defined scenarios keyed by custom_scenario_<id>",
    )

    BUILTIN_COST_FIELDS: ClassVar[tuple[str, ...]] = (
        "cost_activity",
        "cost_engagement",
        "cost_collaboration",
        "cost_education",
    )

    def builtin_cost_total(self) -> float:
        return sum(getattr(self, name) or 0.0 for name in self.BUILTIN_COST_FIELDS)

    def costs_balanced(self, tolerance: float = WEIGHT_SUM_TOLERANCE) -> bool:
        return abs(self.builtin_cost_total() - 1.0) <= tolerance

    def normalized(self) -> ScenarioParameters:
        """Return a copy whose built-in costs sum to 1.0 (unchanged when the sum is 0)."""
        total = self.builtin_cost_total()
        if total <= 0:
            return self.model_copy()
        return self.model_copy(
            update={
                name: (getattr(self, name) or 0.0) / total
                for name in self.BUILTIN_COST_FIELDS
            }
        )


class BusinessSettings(BaseModel):
    """Settings for comparing several accounts."""

    mode: Literal["business"] = "business"
    ii_weights: IIWeights = Field(default_factory=IIWeights)
    si_weights: SIWeights = Field(default_factory=SIWeights)
    optimality_weights: OptimalityWeights = Field(default_factory=OptimalityWeights)

    def normalized(self) -> BusinessSettings:
        return self.model_copy(
            update={
                "ii_weights": self.ii_weights.normalized(),
                "si_weights": self.si_weights.normalized(),
                "optimality_weights": self.optimality_weights.normalized(),
            }
        )


class BloggerSettings(BaseModel):
    """Settings for a creator analysing their own account."""

    mode: Literal["blogger"] = "blogger"
    ii_weights: IIWeights = Field(default_factory=IIWeights)
    si_weights: SIWeights = Field(default_factory=SIWeights)
    scenario_parameters: ScenarioParameters = Field(default_factory=ScenarioParameters)

    def normalized(self) -> BloggerSettings:
        return self.model_copy(
            update={
                "ii_weights": self.ii_weights.normalized(),
                "si_weights": self.si_weights.normalized(),
                "scenario_parameters": self.scenario_parameters.normalized(),
            }
        )


AnalysisSettings = Annotated[
    Union[BusinessSettings, BloggerSettings],
    Field(discriminator="mode"),
]

_SETTINGS_ADAPTER: TypeAdapter[AnalysisSettings] = TypeAdapter(AnalysisSettings)


def parse_settings(raw: dict) -> Union[BusinessSettings, BloggerSettings]:
    """Validate a raw settings dict into the variant named by its ``mode`` tag."""
    return _SETTINGS_ADAPTER.validate_python(raw)


def settings_weight_errors(settings: Union[BusinessSettings, BloggerSettings]) -> list[str]:
    """Describe every weight group whose sum drifts from 1.0.

    Used by callers that offer to normalize settings; the formulas apply
    weights as given.
    """
    errors: list[str] = []
    if not settings.ii_weights.is_balanced():
        errors.append(
            f"II weights must sum to 1.0, got {settings.ii_weights.total():.2f}"
        )
    if not settings.si_weights.is_balanced():
        errors.append(
            f"SI weights must sum to 1.0, got {settings.si_weights.total():.2f}"
        )
    if isinstance(settings, BusinessSettings):
        if not settings.optimality_weights.is_balanced():
            errors.append(
                "Optimality weights (alpha+beta+gamma) must sum to 1.0, "
                f"got {settings.optimality_weights.total():.2f}"
            )
    elif not settings.scenario_parameters.costs_balanced():
        errors.append(
            "Scenario costs must sum to 1.0, "
            f"got {settings.scenario_parameters.builtin_cost_total():.2f}"
        )
    return errors
