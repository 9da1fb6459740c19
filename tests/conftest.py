"""
Pytest configuration and fixtures for ccql.
"""

import os
import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"

from ccql_api.app import app


@pytest.fixture(scope="session")
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def typo_prompts():
    """Repeated prompt with two typo variants plus two unrelated prompts."""
    return ["continue", "continue", "cotninue", "contnue", "fix it", "fix this"]


@pytest.fixture
def noisy_prompts():
    """Realistic history slice mixing prose, typos, pasted code and log lines."""
    return [
        "Continue",
        "continue",
        "  continue  ",
        "contineu",
        "commit this",
        "commit that",
        "Commit this",
        "run the tests",
        "run teh tests",
        "import React from 'react'",
        "at render (chunk-4F2A.js:120:15)",
        "// why does this fail",
        "```\nnpm run build\n```",
        "{\"error\": true}",
        "<div>",
        "ok",
        "",
        "explain this error",
        "explain the error",
        "why is the build failing",
    ]
