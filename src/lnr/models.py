"""Linear entities returned by the API."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Priority(IntEnum):
    """Linear issue priority, using the API's integer values."""

    NONE = 0
    URGENT = 1
    HIGH = 2
    NORMAL = 3
    LOW = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_flag(cls, value: int) -> "Priority":
        """Map the CLI scale (1 Low .. 4 Urgent) to a priority."""
        mapping = {1: cls.LOW, 2: cls.NORMAL, 3: cls.HIGH, 4: cls.URGENT}
        if value not in mapping:
            raise ValueError(f"Priority {value} is not valid. Must choose between 1 and 4.")
        return mapping[value]

    @classmethod
    def choices(cls) -> list["Priority"]:
        """Priorities in the order they are offered to the user."""
        return [cls.LOW, cls.NORMAL, cls.HIGH, cls.URGENT, cls.NONE]


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Project(_Node):
    id: str
    name: str


class State(_Node):
    id: str
    name: str
    position: float = 0.0


class Team(_Node):
    id: str
    name: str
    projects: tuple[Project, ...] = ()


class Viewer(_Node):
    id: str
    name: str
    teams: tuple[Team, ...] = ()


class CreatedIssue(_Node):
    """Identifiers of an issue created through ``issueCreate``."""

    id: str
    identifier: str = Field(default="")
    url: str

    @property
    def key(self) -> str:
        """Human-facing key, falling back to the opaque id."""
        return self.identifier or self.id


class Issue(_Node):
    """Summary of an existing issue, as shown by ``issue list``."""

    id: str
    identifier: str
    title: str
    url: str
    priority: Priority = Priority.NONE
    state: str = ""
    team: str = ""
    project: str | None = None

    def to_row(self) -> dict[str, str]:
        return {
            "identifier": self.identifier,
            "title": self.title,
            "state": self.state or "-",
            "priority": self.priority.label,
            "project": self.project or "-",
            "url": self.url,
        }
