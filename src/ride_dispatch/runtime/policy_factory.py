from ride_dispatch.app.protocols import (
    AcceptancePolicy,
    LatencyProvider,
    MatchingPolicy,
    PricingPolicy,
)
from ride_dispatch.config.models import (
    AcceptanceAlwaysModel,
    AcceptanceBernoulliModel,
    AcceptanceNeverModel,
    AcceptancePolicyUnion,
    LatencyFixedModel,
    LatencyUnion,
    LatencyWindowModel,
    MatchingPolicyNearestPriorityModel,
    MatchingPolicyUnion,
    PricingPolicyConstantModel,
    PricingPolicyUniformModel,
    PricingPolicyUnion,
)
from ride_dispatch.policy.acceptance import BernoulliAcceptancePolicy, FixedAcceptancePolicy
from ride_dispatch.policy.matching import NearestPriorityMatchingPolicy
from ride_dispatch.policy.pricing import ConstantFarePolicy, UniformFarePolicy
from ride_dispatch.services.latency import FixedLatency, WindowLatency
from ride_dispatch.sim.rng import RNGRegistry


def make_matching_policy(cfg: MatchingPolicyUnion) -> MatchingPolicy:
    if isinstance(cfg, MatchingPolicyNearestPriorityModel):
        return NearestPriorityMatchingPolicy()
    else:
        raise TypeError(cfg)


def make_pricing_policy(cfg: PricingPolicyUnion, *, rng_registry: RNGRegistry) -> PricingPolicy:
    if isinstance(cfg, PricingPolicyUniformModel):
        return UniformFarePolicy(
            rng=rng_registry.stream("fare"),
            min_fare=cfg.min_fare,
            max_fare=cfg.max_fare,
            decimals=cfg.decimals,
        )
    elif isinstance(cfg, PricingPolicyConstantModel):
        return ConstantFarePolicy(fare=cfg.fare)
    else:
        raise TypeError(cfg)


def make_acceptance_policy(
    cfg: AcceptancePolicyUnion, *, rng_registry: RNGRegistry
) -> AcceptancePolicy:
    if isinstance(cfg, AcceptanceBernoulliModel):
        return BernoulliAcceptancePolicy(
            rng=rng_registry.stream("acceptance"), p_accept=cfg.p_accept
        )
    elif isinstance(cfg, AcceptanceAlwaysModel):
        return FixedAcceptancePolicy(accept=True)
    elif isinstance(cfg, AcceptanceNeverModel):
        return FixedAcceptancePolicy(accept=False)
    else:
        raise TypeError(cfg)


def make_latency(cfg: LatencyUnion, *, rng_registry: RNGRegistry) -> LatencyProvider:
    if isinstance(cfg, LatencyFixedModel):
        return FixedLatency(search_s=cfg.search_s, pickup_s=cfg.pickup_s, ride_s=cfg.ride_s)
    elif isinstance(cfg, LatencyWindowModel):
        return WindowLatency(rng=rng_registry.stream("latency"), min_s=cfg.min_s, max_s=cfg.max_s)
    else:
        raise TypeError(cfg)
