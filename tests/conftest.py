"""Shared fixtures: a seed file per test and a client bound to a fresh app."""
import json

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from core.config import Settings

SEED_TASKS = [
    {
        "id": 1,
        "title": "Low task",
        "description": "Something small",
        "completed": False,
        "priority": "low",
        "createdAt": "2024-01-01T00:00:00.000Z",
    },
    {
        "id": 3,
        "title": "High task",
        "description": "Something urgent",
        "completed": True,
        "priority": "high",
        "createdAt": "2024-01-03T00:00:00.000Z",
    },
    {
        "id": 2,
        "title": "Legacy task",
        "description": "No priority or timestamp",
        "completed": False,
    },
]


@pytest.fixture()
def seed_file(tmp_path):
    path = tmp_path / "task.json"
    path.write_text(json.dumps({"tasks": SEED_TASKS}), encoding="utf-8")
    return path


@pytest.fixture()
def settings(seed_file):
    return Settings(seed_file=seed_file)


@pytest.fixture()
def client(settings):
    # Context manager so the lifespan (seeding) runs.
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def empty_client(tmp_path):
    with TestClient(create_app(Settings(seed_file=tmp_path / "missing.json"))) as c:
        yield c
