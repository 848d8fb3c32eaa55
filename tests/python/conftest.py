import os
import sys
from dataclasses import replace
from pathlib import Path

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from quorum.sim.core.config import CullingConfig, FoodConfig, SimulationConfig  # noqa: E402


@pytest.fixture
def quiet_config():
    """An empty world with no food supply and no culling; tests populate it by hand."""

    def _build(**overrides) -> SimulationConfig:
        config = SimulationConfig(
            seed=11,
            ncell=0,
            food=FoodConfig(food_rnd=0, wandering_amplitude=0.0),
            culling=CullingConfig(enabled=False),
        )
        return replace(config, **overrides)

    return _build
