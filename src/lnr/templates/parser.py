"""TOML template parsing."""

import tomllib
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from lnr.core.exceptions import ParseError
from lnr.core.logging import get_logger
from lnr.templates.schema import TemplateDocument, validate_template

logger = get_logger(__name__)


def parse(contents: bytes, source: str | Path | None = None) -> TemplateDocument:
    """Decode template file contents into a :class:`TemplateDocument`.

    No variable substitution happens here.

    Args:
        contents: Raw file contents
        source: Path the contents came from, used in error messages

    Returns:
        Parsed template document

    Raises:
        ParseError: If the contents are not valid TOML or miss required fields
    """
    try:
        text = contents.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"File is not valid UTF-8: {e}", path=source)

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(f"Invalid TOML: {e}", path=source)

    try:
        document = validate_template(data)
    except PydanticValidationError as e:
        raise ParseError(_format_validation_error(e), path=source)

    logger.debug(
        "Parsed template",
        source=source or "<bytes>",
        children=len(document.children),
        variables=len(document.variables),
    )
    return document


def load_template(path: str | Path) -> TemplateDocument:
    """Read and parse a template file."""
    path = Path(path)
    try:
        contents = path.read_bytes()
    except OSError as e:
        raise ParseError(f"Cannot read file: {e.strerror or e}", path=path)
    return parse(contents, source=path)


def _format_validation_error(error: PydanticValidationError) -> str:
    """Summarize every invalid field as ``location: message``."""
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        problems.append(f"{location}: {err['msg']}")
    return "Invalid template - " + "; ".join(problems)
