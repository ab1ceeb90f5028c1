import os
import random
import sys

import pytest

# Allow running from a source checkout without installing.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blox_coach.config import Settings  # noqa: E402
from blox_coach.engine import CoachEngine  # noqa: E402
from blox_coach.knowledge import parse_kb  # noqa: E402


THEORY = (
    "PvP is about cooldowns and endlag. Survive the string, then punish the window "
    "with your fastest stun. Spacing beats speed. " * 20
).strip()


@pytest.fixture
def kb_data():
    return {
        "combos": [
            {"title": "Ice Godhuman", "inputs": ["Ice V", "Ice C", "GH Z"], "notes": ["ground route"]},
            {"title": "Dough Claw", "inputs": ["Dough V", "EClaw C"], "notes": ["respect endlag"]},
        ],
        "counters": [
            {"enemy": "Leopard", "tips": ["stay airborne", "punish dash"], "use": ["Cyborg V4"]},
        ],
        "builds": [
            {"label": "Fruit Main", "style": "Godhuman", "notes": ["Max Fruit"], "accessories": ["Mobility"]},
        ],
        "guides": {"theory": THEORY, "ken_tricking": "toggle instinct on and off"},
    }


@pytest.fixture
def kb(kb_data):
    return parse_kb(kb_data)


@pytest.fixture
def settings():
    return Settings(generation_enabled=False, kb_only=False, top_k=5, chunk_delay_ms=0)


@pytest.fixture
def engine(settings):
    return CoachEngine(settings=settings, rng=random.Random(7))


@pytest.fixture
def kb_engine(kb, settings):
    return CoachEngine(kb, settings=settings, rng=random.Random(7))
