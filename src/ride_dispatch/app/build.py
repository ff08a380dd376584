# ride_dispatch/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from ride_dispatch.app.controllers.dispatch import DispatchEngine
from ride_dispatch.app.controllers.rides import RideHandler
from ride_dispatch.app.notifications import NotificationHub
from ride_dispatch.app.protocols import AcceptancePolicy, LatencyProvider, PricingPolicy
from ride_dispatch.app.wiring import wire
from ride_dispatch.config.models import ScenarioModel
from ride_dispatch.domain.state import DispatchState
from ride_dispatch.io.kernel_logging import KernelLogging, json_logger
from ride_dispatch.io.recorder import JsonlSink, Recorder
from ride_dispatch.runtime.account_factory import AccountFactory
from ride_dispatch.runtime.policy_factory import (
    make_acceptance_policy,
    make_latency,
    make_matching_policy,
    make_pricing_policy,
)
from ride_dispatch.sim.clock import SimClock
from ride_dispatch.sim.hooks import KernelHooks, NoopHooks
from ride_dispatch.sim.kernel import Kernel
from ride_dispatch.sim.rng import RNGRegistry


@dataclass
class App:
    kernel: Kernel
    clock: SimClock
    rng: RNGRegistry
    state: DispatchState
    hub: NotificationHub
    engine: DispatchEngine
    rides: RideHandler
    recorder: Recorder | None

    def run(self, until: float | None = None) -> int:
        """Advance simulated time until every scheduled lifecycle event ran."""
        return self.kernel.run(until=until)


def build(
    cfg: ScenarioModel | Mapping | None = None,
    *,
    worker: int = 0,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    hooks: KernelHooks | None = None,
    pricing: PricingPolicy | None = None,
    acceptance: AcceptancePolicy | None = None,
    latency: LatencyProvider | None = None,
) -> App:
    """Assemble an engine from config.

    pricing / acceptance / latency override the configured policies, which
    is how tests force fares, offer outcomes and delays.
    """
    # 0) Validate config
    if cfg is None:
        model = ScenarioModel()
    else:
        model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Clock & RNG
    clock = SimClock.utc_epoch(*model.sim.epoch)
    rng_registry = RNGRegistry(model.sim.seed, scenario=model.name, worker=worker)

    # 2) Kernel (with hooks)
    if use_logging:
        json_logger(level=model.log.level)
        recorder = recorder or Recorder(JsonlSink())
    if hooks is None:
        hooks = (
            KernelLogging(
                run_id=model.run_id, clock=clock, level=model.log.level, debug=model.log.debug
            )
            if use_logging
            else NoopHooks()
        )
    kernel = Kernel(hooks=hooks)

    # 3) State & policies
    state = DispatchState()
    hub = NotificationHub()
    factory = AccountFactory(model.accounts, rng_registry=rng_registry)
    matching = make_matching_policy(model.matching)
    pricing = pricing or make_pricing_policy(model.pricing, rng_registry=rng_registry)
    acceptance = acceptance or make_acceptance_policy(model.acceptance, rng_registry=rng_registry)
    latency = latency or make_latency(model.latency, rng_registry=rng_registry)

    # 4) Handlers (inject deps explicitly)
    rides = RideHandler(
        state=state, hub=hub, latency=latency, recorder=recorder, run_id=model.run_id
    )
    engine = DispatchEngine(
        kernel=kernel,
        state=state,
        hub=hub,
        factory=factory,
        matching=matching,
        pricing=pricing,
        acceptance=acceptance,
        latency=latency,
        rides=rides,
        recorder=recorder,
        run_id=model.run_id,
    )

    # 5) Wiring
    wire(kernel, rides=rides)

    return App(kernel, clock, rng_registry, state, hub, engine, rides, recorder)
