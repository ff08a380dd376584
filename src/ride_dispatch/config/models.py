from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class SimModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    epoch: tuple[int, int, int, int, int, int] = (2025, 1, 1, 0, 0, 0)
    seed: int = 0


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- LATENCY ---------------------


class LatencyFixedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["fixed"] = "fixed"
    search_s: float = 3.0
    pickup_s: float = 0.0
    ride_s: float = 3.0

    @field_validator("search_s", "pickup_s", "ride_s")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class LatencyWindowModel(BaseModel):
    """Each delay drawn uniformly from [min_s, max_s]."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["window"] = "window"
    min_s: float = 1.0
    max_s: float = 5.0

    @model_validator(mode="after")
    def _check_window(self):
        if self.min_s < 0 or self.max_s < self.min_s:
            raise ValueError("latency window needs 0 <= min_s <= max_s")
        return self


LatencyUnion = Annotated[LatencyFixedModel | LatencyWindowModel, Field(discriminator="kind")]


# ------------------ POLICIES -----------------------------


class PricingPolicyUniformModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["uniform"] = "uniform"
    min_fare: Decimal = Decimal("5")
    max_fare: Decimal = Decimal("20")
    decimals: int = 2

    @model_validator(mode="after")
    def _check_range(self):
        if self.min_fare < 0 or self.max_fare < self.min_fare:
            raise ValueError("fare range needs 0 <= min_fare <= max_fare")
        return self


class PricingPolicyConstantModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["constant"] = "constant"
    fare: Decimal = Field(default=Decimal("10.00"), ge=0)


PricingPolicyUnion = Annotated[
    PricingPolicyUniformModel | PricingPolicyConstantModel, Field(discriminator="kind")
]


class AcceptanceBernoulliModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["bernoulli"] = "bernoulli"
    p_accept: float = Field(default=0.7, ge=0.0, le=1.0)


class AcceptanceAlwaysModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["always"] = "always"


class AcceptanceNeverModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["never"] = "never"


AcceptancePolicyUnion = Annotated[
    AcceptanceBernoulliModel | AcceptanceAlwaysModel | AcceptanceNeverModel,
    Field(discriminator="kind"),
]


class MatchingPolicyNearestPriorityModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["nearest_priority"] = "nearest_priority"


MatchingPolicyUnion = Annotated[MatchingPolicyNearestPriorityModel, Field(discriminator="kind")]


# ------------------ ACCOUNTS -----------------------------


class AccountsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    premium_discount_rate: Decimal = Field(default=Decimal("0.05"), ge=0, le=1)
    driver_commission_rate: Decimal = Field(default=Decimal("0.05"), ge=0, le=1)
    priority_commission_rate: Decimal = Field(default=Decimal("0.02"), ge=0, le=1)
    spot_min: int = 0
    spot_max: int = 100

    @model_validator(mode="after")
    def _check_spots(self):
        if self.spot_max < self.spot_min:
            raise ValueError("spot_max must be >= spot_min")
        return self


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    run_id: str = "local"
    sim: SimModel = SimModel()
    log: LogModel = LogModel()
    latency: LatencyUnion = Field(default_factory=LatencyFixedModel)
    pricing: PricingPolicyUnion = Field(default_factory=PricingPolicyUniformModel)
    acceptance: AcceptancePolicyUnion = Field(default_factory=AcceptanceBernoulliModel)
    matching: MatchingPolicyUnion = Field(default_factory=MatchingPolicyNearestPriorityModel)
    accounts: AccountsModel = AccountsModel()
