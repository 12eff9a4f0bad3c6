"""Template document schema."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IssueSpec(BaseModel):
    """One issue described by a template."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str
    description: str | None = None


class TemplateDocument(BaseModel):
    """A parent issue, its ordered children and the variables they use."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    variables: dict[str, str] = Field(default_factory=dict)
    parent: IssueSpec
    children: list[IssueSpec] = Field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return 1 + len(self.children)


def validate_template(template_dict: dict[str, Any]) -> TemplateDocument:
    """Validate a template dictionary against the schema.

    Args:
        template_dict: Template as decoded from TOML

    Returns:
        Validated template document

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return TemplateDocument.model_validate(template_dict)
