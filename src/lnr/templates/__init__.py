"""Template evaluation: discovery, parsing, rendering and issue creation."""

from lnr.templates.builder import HierarchyBuilder
from lnr.templates.discovery import discover
from lnr.templates.evaluator import TemplateEvaluator
from lnr.templates.metadata import IssueMetadata, MetadataResolver
from lnr.templates.parser import load_template, parse
from lnr.templates.renderer import VariableRenderer, render
from lnr.templates.schema import IssueSpec, TemplateDocument

__all__ = [
    "HierarchyBuilder",
    "IssueMetadata",
    "IssueSpec",
    "MetadataResolver",
    "TemplateDocument",
    "TemplateEvaluator",
    "VariableRenderer",
    "discover",
    "load_template",
    "parse",
    "render",
]
