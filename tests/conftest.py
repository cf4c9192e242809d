"""
Shared fixtures: in-memory database, rate limiting off, no OpenAI key
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("OPENAI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from studynotes.db import engine
from studynotes.main import app


PHOTOSYNTHESIS = (
    "Photosynthesis converts light into energy. Plants use chlorophyll to capture light. "
    "This process occurs in the chloroplast. Energy is stored as ATP. "
    "Oxygen is released as a byproduct. This process is essential for life on Earth."
)

MITOCHONDRIA_SENTENCES = [
    "Mitochondria are the powerhouse of the eukaryotic cell and produce most of its energy",
    "The inner membrane of mitochondria is folded into cristae that increase surface area",
    "So it is",
    "Cellular respiration in mitochondria converts glucose and oxygen into usable energy",
    "Mitochondria contain their own circular DNA inherited from the maternal line",
    "And so on",
    "The electron transport chain in the membrane pumps protons to build a gradient",
    "ATP synthase uses the proton gradient across the membrane to make energy carriers",
    "Mitochondria can divide independently of the cell through a process called fission",
    "Damaged mitochondria are removed by a recycling process known as mitophagy",
    "Mitochondrial dysfunction is linked to many diseases of the muscles and nerves",
    "In summary mitochondria are central to how cells obtain energy",
]


class SequenceRandom:
    """Random source that replays fixed values, then keeps returning 0."""

    def __init__(self, values=()):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        value = self.values.pop(0) if self.values else 0
        assert 0 <= value < stop
        return value


class IdentityRandom:
    """Random source under which Fisher-Yates leaves the order unchanged."""

    def randrange(self, stop):
        return stop - 1


@pytest.fixture
def mitochondria_text():
    return ". ".join(MITOCHONDRIA_SENTENCES) + "."


@pytest.fixture
def client():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    return TestClient(app)
