"""Pytest fixtures for lnr tests."""

import os
from pathlib import Path
from typing import Any, Callable, Generator, Sequence

import pytest
from click.testing import CliRunner

from lnr.config import LnrConfig, OrganizationConfig
from lnr.core.context import LnrContext
from lnr.core.exceptions import PromptCancelledError, RemoteError
from lnr.core.output import OutputFormat
from lnr.models import CreatedIssue, Issue, Priority, Project, State, Team, Viewer


class FakeGateway:
    """In-memory gateway recording every call."""

    def __init__(
        self,
        teams: Sequence[Team] | None = None,
        states: Sequence[State] | None = None,
        fail_titles: Sequence[str] = (),
        issues: Sequence[Issue] = (),
    ):
        self.teams = list(teams) if teams is not None else [
            Team(
                id="team-eng",
                name="Engineering",
                projects=(Project(id="proj-1", name="Roadmap"),),
            )
        ]
        self.states = list(states) if states is not None else [
            State(id="state-todo", name="Todo", position=1),
            State(id="state-backlog", name="Backlog", position=0),
        ]
        self.fail_titles = set(fail_titles)
        self.issues = list(issues)
        self.issue_filters: list[dict[str, Any]] = []
        self.created: list[dict[str, Any]] = []
        self.calls: list[str] = []

    def get_viewer(self) -> Viewer:
        self.calls.append("get_viewer")
        return Viewer(id="user-1", name="Bruce", teams=tuple(self.teams))

    def list_teams(self) -> list[Team]:
        self.calls.append("list_teams")
        return sorted(self.teams, key=lambda t: t.name)

    def list_projects(self, team: Team) -> list[Project]:
        self.calls.append("list_projects")
        return sorted(team.projects, key=lambda p: p.name)

    def list_states(self, team: Team) -> list[State]:
        self.calls.append("list_states")
        return sorted(self.states, key=lambda s: s.position)

    def list_priorities(self) -> list[Priority]:
        self.calls.append("list_priorities")
        return Priority.choices()

    def create_issue(self, team_id: str, title: str, **kwargs: Any) -> CreatedIssue:
        self.calls.append("create_issue")
        self.created.append({"team_id": team_id, "title": title, **kwargs})
        if title in self.fail_titles:
            raise RemoteError(f"cannot create {title}", status_code=500)
        number = len(self.created)
        return CreatedIssue(
            id=f"issue-{number}",
            identifier=f"ENG-{number}",
            url=f"https://linear.app/acme/issue/ENG-{number}",
        )

    def list_issues(self, assignee_id: str, **kwargs: Any) -> list[Issue]:
        self.calls.append("list_issues")
        self.issue_filters.append({"assignee_id": assignee_id, **kwargs})
        return list(self.issues)


class FakePrompt:
    """Prompt answering from a queue of option indexes."""

    def __init__(self, answers: Sequence[int] = (), text: str = "", cancel: bool = False):
        self.answers = list(answers)
        self.text_answer = text
        self.cancel = cancel
        self.questions: list[str] = []

    def select(self, message: str, options: Sequence[Any], label: Callable[[Any], str] = str) -> Any:
        self.questions.append(message)
        if self.cancel:
            raise PromptCancelledError(f"{message}: cancelled")
        index = self.answers.pop(0) if self.answers else 0
        return options[index]

    def text(self, message: str) -> str:
        self.questions.append(message)
        if self.cancel:
            raise PromptCancelledError(f"{message}: cancelled")
        return self.text_answer


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner."""
    return CliRunner()


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def fake_prompt() -> FakePrompt:
    return FakePrompt()


@pytest.fixture
def mock_config() -> LnrConfig:
    """Create a mock configuration."""
    return LnrConfig(
        organizations={
            "acme": OrganizationConfig(token="lin_api_acme_1234"),
            "wayne": OrganizationConfig(token="lin_api_wayne_5678"),
        }
    )


@pytest.fixture
def mock_context(mock_config: LnrConfig, fake_prompt: FakePrompt) -> LnrContext:
    """Create a mock lnr context."""
    return LnrContext(
        config=mock_config,
        output_format=OutputFormat.TABLE,
        verbose=0,
        quiet=False,
        dry_run=False,
        color=False,
        prompt=fake_prompt,
    )


@pytest.fixture
def write_template(tmp_path: Path) -> Callable[..., Path]:
    """Write a template file below tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the user's environment and config files."""
    for name in (
        "LNR_API_KEY",
        "LINEAR_API_KEY",
        "LNR_ORG",
        "LNR_CONFIG",
        "LNR_LINEAR_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DISABLE_SPINNER", "1")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def make_gateway() -> Callable[..., FakeGateway]:
    """Build gateways with custom teams, states or failing titles."""
    return FakeGateway


@pytest.fixture
def make_prompt() -> Callable[..., FakePrompt]:
    """Build prompts with scripted answers."""
    return FakePrompt
