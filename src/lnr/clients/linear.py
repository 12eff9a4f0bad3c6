"""Linear GraphQL API client using httpx."""

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from lnr.config import LinearConfig
from lnr.core.exceptions import AuthenticationError, RemoteError
from lnr.core.logging import get_logger
from lnr.core.progress import spinner
from lnr.models import CreatedIssue, Issue, Priority, Project, State, Team, Viewer

logger = get_logger(__name__)

VIEWER_QUERY = """
query {
    viewer {
        id
        name
        teamMemberships {
            nodes {
                team {
                    id
                    name
                    projects {
                        nodes {
                            id
                            name
                        }
                    }
                }
            }
        }
    }
}
"""

TEAM_STATES_QUERY = """
query ($id: String!) {
    team(id: $id) {
        id
        name
        states {
            nodes {
                id
                name
                position
            }
        }
    }
}
"""

ISSUE_CREATE_MUTATION = """
mutation (
    $title: String!
    $teamId: String!
    $priority: Int
    $assigneeId: String
    $description: String
    $parentId: String
    $stateId: String
    $projectId: String
) {
    issueCreate(
        input: {
            title: $title
            teamId: $teamId
            priority: $priority
            assigneeId: $assigneeId
            description: $description
            parentId: $parentId
            stateId: $stateId
            projectId: $projectId
        }
    ) {
        success
        issue {
            id
            identifier
            url
        }
    }
}
"""

ISSUE_LIST_QUERY = """
query ($filter: IssueFilter, $first: Int) {
    issues(filter: $filter, first: $first) {
        nodes {
            id
            identifier
            title
            url
            priority
            state {
                name
            }
            team {
                name
            }
            project {
                name
            }
        }
    }
}
"""

# Workflow states counted as open work
OPEN_STATES = ("Todo", "In Progress")

ISSUE_LIST_LIMIT = 50


class LinearClient:
    """Client for the Linear GraphQL API."""

    def __init__(self, config: LinearConfig, token: str | None, spinners: bool = False):
        self._config = config
        self._token = token
        self._spinners = spinners
        self._client: httpx.Client | None = None
        self._viewer: Viewer | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            if not self._token:
                raise AuthenticationError(
                    "Linear API key not configured",
                    {"hint": "set LINEAR_API_KEY or add an organization to the config"},
                )

            headers = {
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }

            self._client = httpx.Client(
                headers=headers,
                timeout=self._config.timeout,
            )

            logger.debug("Created Linear client", url=self._config.get_url())

        return self._client

    def query(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL document and return its ``data`` payload.

        Args:
            document: GraphQL query or mutation
            variables: Variables for the document; ``None`` values are dropped

        Returns:
            The ``data`` member of the response
        """
        payload = {
            "query": document,
            "variables": {k: v for k, v in (variables or {}).items() if v is not None},
        }

        try:
            with spinner(enabled=self._spinners):
                response = self.client.post(self._config.get_url(), json=payload)
            response.raise_for_status()
            body = response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            try:
                message = self._error_message(e.response.json()) or str(e)
            except ValueError:
                message = e.response.text or str(e)

            if status_code in (401, 403):
                raise AuthenticationError(f"Linear rejected the API key: {message}")
            raise RemoteError(message, status_code=status_code)

        except httpx.RequestError as e:
            raise RemoteError(f"Request failed: {e}")

        except ValueError as e:
            raise RemoteError(f"Could not decode response: {e}")

        message = self._error_message(body)
        if message:
            raise RemoteError(message, details={"errors": len(body.get("errors", []))})

        data = body.get("data")
        if not isinstance(data, dict):
            raise RemoteError("Response did not contain any data")
        return data

    @staticmethod
    def _error_message(body: Any) -> str:
        """Join the messages of a GraphQL ``errors`` array."""
        if not isinstance(body, dict):
            return ""
        errors = body.get("errors") or []
        return "; ".join(str(err.get("message", err)) for err in errors if err)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "LinearClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # Viewer operations
    def get_viewer(self) -> Viewer:
        """Get the authenticated user with their teams and projects."""
        if self._viewer is None:
            data = self.query(VIEWER_QUERY)
            try:
                raw = data["viewer"]
                teams = [
                    Team(
                        id=node["team"]["id"],
                        name=node["team"]["name"],
                        projects=tuple(
                            Project(**p) for p in node["team"]["projects"]["nodes"]
                        ),
                    )
                    for node in raw["teamMemberships"]["nodes"]
                ]
                self._viewer = Viewer(id=raw["id"], name=raw["name"], teams=tuple(teams))
            except (KeyError, TypeError, PydanticValidationError) as e:
                raise RemoteError(f"Could not parse response for viewer: {e}")

            logger.debug("Fetched viewer", name=self._viewer.name, teams=len(teams))
        return self._viewer

    # Team operations
    def list_teams(self) -> list[Team]:
        """List teams the viewer is a member of."""
        return sorted(self.get_viewer().teams, key=lambda t: t.name)

    def list_projects(self, team: Team) -> list[Project]:
        """List projects for a team."""
        return sorted(team.projects, key=lambda p: p.name)

    def list_states(self, team: Team) -> list[State]:
        """List workflow states for a team, in board order."""
        data = self.query(TEAM_STATES_QUERY, {"id": team.id})
        try:
            states = [State(**node) for node in data["team"]["states"]["nodes"]]
        except (KeyError, TypeError, PydanticValidationError) as e:
            raise RemoteError(f"Could not parse response for states: {e}")
        return sorted(states, key=lambda s: s.position)

    def list_priorities(self) -> list[Priority]:
        """List the priorities an issue can have."""
        return Priority.choices()

    # Issue operations
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
    ) -> CreatedIssue:
        """Create a new issue, optionally as a child of ``parent_id``."""
        variables: dict[str, Any] = {
            "title": title,
            "teamId": team_id,
            "description": description,
            "projectId": project_id,
            "stateId": state_id,
            "priority": int(priority) if priority is not None else None,
            "assigneeId": assignee_id,
            "parentId": parent_id,
        }
        data = self.query(ISSUE_CREATE_MUTATION, variables)

        try:
            result = data["issueCreate"]
            if result.get("success") is False or not result.get("issue"):
                raise RemoteError(f"Linear did not create issue '{title}'")
            issue = CreatedIssue(**result["issue"])
        except (KeyError, TypeError, AttributeError, PydanticValidationError) as e:
            raise RemoteError(f"Could not parse response for issue '{title}': {e}")

        logger.info("Created issue", identifier=issue.key, parent=parent_id or "-")
        return issue

    def list_issues(
        self,
        assignee_id: str,
        team_id: str | None = None,
        project_id: str | None = None,
        states: tuple[str, ...] = OPEN_STATES,
        limit: int = ISSUE_LIST_LIMIT,
    ) -> list[Issue]:
        """List issues assigned to ``assignee_id`` that are in one of ``states``.

        Args:
            assignee_id: User the issues are assigned to
            team_id: Only issues of this team, when given
            project_id: Only issues of this project, when given
            states: Names of the workflow states to include
            limit: Maximum number of issues returned
        """
        issue_filter: dict[str, Any] = {
            "assignee": {"id": {"eq": assignee_id}},
            "state": {"name": {"in": list(states)}},
        }
        if team_id:
            issue_filter["team"] = {"id": {"eq": team_id}}
        if project_id:
            issue_filter["project"] = {"id": {"eq": project_id}}

        data = self.query(ISSUE_LIST_QUERY, {"filter": issue_filter, "first": limit})

        try:
            issues = [
                Issue(
                    id=node["id"],
                    identifier=node["identifier"],
                    title=node["title"],
                    url=node["url"],
                    priority=Priority(node.get("priority") or 0),
                    state=(node.get("state") or {}).get("name", ""),
                    team=(node.get("team") or {}).get("name", ""),
                    project=(node.get("project") or {}).get("name"),
                )
                for node in data["issues"]["nodes"]
            ]
        except (KeyError, TypeError, ValueError, PydanticValidationError) as e:
            raise RemoteError(f"Could not parse response for issues: {e}")

        logger.debug("Fetched issues", count=len(issues), team=team_id or "-")
        return issues
