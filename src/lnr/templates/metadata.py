"""Issue metadata shared by every template in a run."""

from dataclasses import dataclass
from typing import Protocol

from lnr.core.exceptions import ValidationError
from lnr.core.logging import get_logger
from lnr.core.prompt import Prompt
from lnr.models import CreatedIssue, Priority, Project, State, Team, Viewer

logger = get_logger(__name__)

NO_PROJECT = "None"


class IssueGateway(Protocol):
    """Remote operations the template engine depends on."""

    def get_viewer(self) -> Viewer: ...

    def list_teams(self) -> list[Team]: ...

    def list_projects(self, team: Team) -> list[Project]: ...

    def list_states(self, team: Team) -> list[State]: ...

    def list_priorities(self) -> list[Priority]: ...

    def create_issue(
        self,
        team_id: str,
        title: str,
        description: str | None = None,
        project_id: str | None = None,
        state_id: str | None = None,
        priority: Priority | None = None,
        assignee_id: str | None = None,
        parent_id: str | None = None,
    ) -> CreatedIssue: ...


def select_team(gateway: IssueGateway, prompt: Prompt, name: str | None = None) -> Team:
    """Pick the team called ``name``, or ask when there is more than one.

    Raises:
        ValidationError: If there are no teams or none is called ``name``
    """
    teams = gateway.list_teams()
    if not teams:
        raise ValidationError("No teams found")

    if name is not None:
        for team in teams:
            if team.name == name:
                return team
        options = ", ".join(t.name for t in teams)
        raise ValidationError(f"Team {name} not found, options are: {options}")

    if len(teams) == 1:
        return teams[0]
    return prompt.select("Select a team", teams, label=lambda t: t.name)


def select_project(gateway: IssueGateway, prompt: Prompt, team: Team) -> Project | None:
    """Ask for one of the team's projects; ``None`` is always offered first."""
    projects = gateway.list_projects(team)
    if not projects:
        return None

    choices: list[Project | None] = [None, *projects]
    return prompt.select(
        "Select project",
        choices,
        label=lambda p: p.name if p else NO_PROJECT,
    )


@dataclass(frozen=True)
class IssueMetadata:
    """Team, project, state and priority applied to created issues."""

    team: Team
    project: Project | None = None
    state: State | None = None
    priority: Priority | None = None
    assignee_id: str | None = None

    def to_dict(self) -> dict[str, str]:
        return {
            "team": self.team.name,
            "project": self.project.name if self.project else "-",
            "state": self.state.name if self.state else "-",
            "priority": self.priority.label if self.priority is not None else "-",
        }


class MetadataResolver:
    """Resolves :class:`IssueMetadata` from flags, falling back to prompts.

    Resolution happens on the first call to :meth:`resolve` and the result is
    reused for the rest of the run, so the user is asked at most once.
    """

    def __init__(
        self,
        gateway: IssueGateway,
        prompt: Prompt,
        team: str | None = None,
        state: str | None = None,
        priority: Priority | None = None,
        no_project: bool = False,
    ):
        self._gateway = gateway
        self._prompt = prompt
        self._team_name = team
        self._state_name = state
        self._priority = priority
        self._no_project = no_project
        self._resolved: IssueMetadata | None = None

    @property
    def resolved(self) -> IssueMetadata | None:
        """The cached metadata, if resolution already happened."""
        return self._resolved

    def resolve(self) -> IssueMetadata:
        """Resolve metadata once and cache it for the rest of the run."""
        if self._resolved is not None:
            return self._resolved

        viewer = self._gateway.get_viewer()
        team = self._resolve_team()
        priority = self._resolve_priority()
        state = self._resolve_state(team)
        project = None if self._no_project else self._resolve_project(team)

        self._resolved = IssueMetadata(
            team=team,
            project=project,
            state=state,
            priority=priority,
            assignee_id=viewer.id,
        )
        logger.info("Resolved issue metadata", **self._resolved.to_dict())
        return self._resolved

    def _resolve_team(self) -> Team:
        return select_team(self._gateway, self._prompt, self._team_name)

    def _resolve_priority(self) -> Priority:
        if self._priority is not None:
            return self._priority
        return self._prompt.select(
            "Select priority",
            self._gateway.list_priorities(),
            label=lambda p: p.label,
        )

    def _resolve_state(self, team: Team) -> State:
        states = self._gateway.list_states(team)
        if self._state_name is None:
            return self._prompt.select("Select state", states, label=lambda s: s.name)

        for state in states:
            if state.name == self._state_name:
                return state
        raise ValidationError(f"{self._state_name} state not found")

    def _resolve_project(self, team: Team) -> Project | None:
        return select_project(self._gateway, self._prompt, team)
