#!/usr/bin/env python
"""Fly the default descent scenario end to end.

Runs the reference game loop around the guidance engine:
- Lander starts at (5000, 2500) drifting left at 50 m/s
- Landing zone is the flat segment between x=2000 and x=3500
- Setpoints are rate-limited and rounded as the game protocol does
- Each guidance call must finish within 100 ms

Usage:
    uv run python scripts/run_descent.py
"""

import logging

from lander.exceptions import GuidanceTimeout
from lander.gnc import compute_setpoint
from lander.simulation import (
    FlightStatus,
    SimConfig,
    Simulator,
    default_ship,
    default_terrain,
)


def run_descent():
    """Run the default scenario and print a summary."""
    print("=" * 70)
    print("MARS LANDER DESCENT")
    print("=" * 70)

    terrain = default_terrain()
    ship = default_ship()
    zone = terrain.require_landing_zone()

    print(f"\nLanding zone: x = {zone.p1.x:.0f} .. {zone.p2.x:.0f} m, y = {zone.p1.y:.0f} m")
    print(f"Start:        ({ship.x:.0f}, {ship.y:.0f}) m, hs = {ship.horizontal_speed:.0f} m/s")

    # Compile the numba kernels before the budget is enforced
    compute_setpoint(ship, terrain)

    sim = Simulator(
        state=ship,
        terrain=terrain,
        config=SimConfig(guidance_budget=0.1),
    )
    try:
        result = sim.run(max_steps=1000)
    except GuidanceTimeout as exc:
        print(f"\nOutcome:      TIMEOUT ({exc})")
        return False
    final = result.states[-1]

    print("\n" + "-" * 70)
    print(f"Outcome:      {result.status.name}")
    print(f"Steps:        {result.steps}")
    print(f"Position:     ({final.x:.1f}, {final.y:.1f}) m")
    print(f"Speed:        hs = {final.horizontal_speed:.1f} m/s, vs = {final.vertical_speed:.1f} m/s")
    print(f"Tilt:         {final.tilt:.0f} deg")
    print(f"Fuel left:    {final.fuel:.0f} l")
    print("-" * 70)

    return result.status is FlightStatus.LANDED


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run_descent()
