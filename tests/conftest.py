# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures and collaborator fakes."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import pytest

from ccru.dispatch import Dispatcher
from ccru.linting.rubocop import RubocopAnalyzer
from ccru.reporting import OffenseReporter


@dataclass
class FakeGitClient:
    """Return canned diff output keyed by the diff mode flag."""

    name_status: str = ""
    unified: str = ""
    existing_refs: frozenset[str] = frozenset()
    calls: list[list[str]] = field(default_factory=list)
    verified: list[str] = field(default_factory=list)

    def capture(self, args: Sequence[str]) -> str:
        self.calls.append(list(args))
        if "--name-status" in args:
            return self.name_status
        if "--unified=0" in args:
            return self.unified
        return ""

    def verify_ref(self, ref: str) -> bool:
        self.verified.append(ref)
        return ref in self.existing_refs


@dataclass
class FakeBackend:
    """Return a fixed analyzer payload per path."""

    payloads: Mapping[str, str] = field(default_factory=dict)
    requests: list[tuple[str, str]] = field(default_factory=list)

    def analyze(self, path: str, content: str) -> str:
        self.requests.append((path, content))
        return self.payloads.get(path, rubocop_payload([]))


@dataclass
class RecordingEcho:
    """Collect reporter output lines."""

    lines: list[str] = field(default_factory=list)

    def __call__(self, message: str) -> None:
        self.lines.append(message)


def rubocop_offense(
    line: int,
    *,
    column: int = 1,
    length: int = 1,
    cop_name: str = "Style/StringLiterals",
    severity: str = "convention",
    message: str = "Prefer single-quoted strings.",
) -> dict[str, object]:
    """Return one offense entry shaped like RuboCop's JSON formatter output."""

    return {
        "severity": severity,
        "message": message,
        "cop_name": cop_name,
        "corrected": False,
        "location": {"line": line, "column": column, "length": length, "start_line": line},
    }


def rubocop_payload(offenses: Iterable[dict[str, object]]) -> str:
    """Return a RuboCop JSON report for a single file."""

    return json.dumps(
        {
            "metadata": {"rubocop_version": "1.60.0"},
            "files": [{"path": "app.rb", "offenses": list(offenses)}],
            "summary": {"offense_count": 0},
        },
    )


@pytest.fixture
def echo() -> RecordingEcho:
    return RecordingEcho()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def dispatcher(tmp_path, echo: RecordingEcho, backend: FakeBackend) -> Dispatcher:
    """Dispatcher rooted at ``tmp_path`` with fake analyzer and recording reporter."""

    reporter = OffenseReporter(root=tmp_path, echo=echo)
    return Dispatcher(analyzer=RubocopAnalyzer(backend), reporter=reporter, root=tmp_path)


@pytest.fixture
def git_client() -> type[FakeGitClient]:
    """Return the fake git client class for per-test construction."""

    return FakeGitClient


@pytest.fixture
def make_payload():
    """Return a builder turning offense dicts into a RuboCop JSON report."""

    def _build(*offenses: dict[str, object]) -> str:
        return rubocop_payload(offenses)

    return _build


@pytest.fixture
def make_offense():
    """Return the RuboCop offense entry builder."""

    return rubocop_offense
