# main.py
from ride_dispatch.app.build import build


def run(seed: int = 0):
    app = build({"name": "demo", "run_id": f"demo-{seed}", "sim": {"seed": seed}})
    engine = app.engine

    alice = engine.register_rider("rider", "Alice", "Credit Card", 50)
    bob = engine.register_rider("premium_rider", "Bob", "PayPal", 75)
    engine.register_driver("driver", "Charlie", True, 100)
    engine.register_driver("priority_driver", "Vera", True, 100)
    engine.register_driver("driver", "David", False, 90)

    engine.request_ride(alice, {"name": "Mall", "coordinates": 50}, "Park")
    engine.request_ride(bob, {"name": "Stadium", "coordinates": 45}, "Concert Hall")
    engine.request_ride(alice, "Mall", "Library")  # rejected: pickup has no coordinate

    app.run()

    for ride in engine.history:
        print(f"ride {ride.ride_id}: {ride.rider.name} -> {ride.driver.name} {ride.status.value}")
    return app


if __name__ == "__main__":
    run()
