"""Shared pytest fixtures for proxy-deployments tests."""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def write_json(path: Path, data: Any) -> Path:
    """Write data as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path


class FakePrompter:
    """
    Stand-in for the interactive input primitive.

    Answers each question from a canned mapping, computing callable choices
    from earlier answers the way the real prompter does.
    """

    def __init__(self, answers: Optional[Dict[str, Any]] = None):
        self.answers = answers or {}
        self.rounds: List[List[Dict[str, Any]]] = []
        self.computed_choices: Dict[str, List[Any]] = {}

    def __call__(self, questions: List[Dict[str, Any]]) -> Dict[str, Any]:
        self.rounds.append(questions)
        collected: Dict[str, Any] = {}
        for question in questions:
            name = question["name"]
            if callable(question.get("choices")):
                self.computed_choices[name] = question["choices"](dict(collected))
            if name in self.answers:
                collected[name] = self.answers[name]
        return collected

    @property
    def asked(self) -> List[str]:
        return [q["name"] for round_ in self.rounds for q in round_]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_project(tmp_path: Path, fixtures_dir: Path) -> Path:
    """
    Copy the sample project into a temporary directory.

    The project is named "local", declares contracts Foo and MyToken[Token],
    links dependency dep1 (contracts A and B[BImpl]) and has proxies on mainnet.
    """
    project_root = tmp_path / "project"
    shutil.copytree(fixtures_dir / "project", project_root)
    return project_root


@pytest.fixture
def empty_project(tmp_path: Path) -> Path:
    """Create a project with a manifest and nothing else."""
    project_root = tmp_path / "empty"
    write_json(project_root / "upgrades.json", {"name": "local"})
    return project_root


@pytest.fixture
def fake_prompter() -> FakePrompter:
    """A prompter that answers nothing; set .answers to script it."""
    return FakePrompter()
