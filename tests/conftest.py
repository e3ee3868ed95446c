"""
Shared pytest fixtures for the whole suite (unit/ and api/).
Settings are built per test and handed to the pipeline explicitly,
so nothing here talks to the real completion endpoint.
"""

import os
import json

import pytest

# Minimal env so the module-level Settings validates on import
os.environ.setdefault("NVIDIA_API_KEY", "nvapi-test-key")
os.environ.setdefault("MOCK_MODE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from examgen.settings import Settings


@pytest.fixture
def make_settings():
    def _make(**overrides):
        base = {"NVIDIA_API_KEY": "nvapi-test-key", "MOCK_MODE": False}
        base.update(overrides)
        return Settings(**base)
    return _make


@pytest.fixture
def study_text():
    return (
        "Metformin is the first-line treatment for type 2 diabetes. "
        "Beta-lactam antibiotics inhibit transpeptidase and weaken the bacterial cell wall."
    )


def _objective(i):
    return {"id": i, "type": "objective", "question": f"Objective question {i}?",
            "options": ["Alpha", "Beta", "Gamma", "Delta"], "answer": "Beta",
            "explanation": "Because."}

def _subjective(i):
    return {"id": i, "type": "subjective", "question": f"Gap {i} is _______.", "answer": "Foo Bar"}

def _theory(i):
    return {"id": i, "type": "theory", "question": f"Explain topic {i}.",
            "answer": "A model answer.", "keywords": ["one", "two"]}


@pytest.fixture
def make_questions():
    """make_questions(n) -> list of n valid raw elements cycling through the three kinds."""
    builders = [_objective, _subjective, _theory]
    def _make(n):
        return [builders[i % 3](i + 1) for i in range(n)]
    return _make


@pytest.fixture
def completion_text(make_questions):
    """Bare JSON body with twelve valid questions."""
    return json.dumps({"questions": make_questions(12)})
