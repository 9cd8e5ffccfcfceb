"""
SupportAudit Policy Schema Loader

Loads and validates policy schemas from JSON or YAML text and files.

Converts Pydantic document models to SupportAudit domain models.
Validation is atomic: a schema is either fully valid or rejected with a
SchemaParseError; individual rules are never dropped.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import SchemaLoadError, SchemaParseError, SchemaVersionMismatch
from ..models import (
    MatchCombine,
    MatchSpec,
    PolicySchema,
    Rule,
    RuleAction,
    Thresholds,
)
from .schema import (
    SCHEMA_VERSION,
    MatchSpecSchema,
    PolicySchemaDocument,
    RuleSchema,
    ThresholdsSchema,
    check_schema_version,
    validate_policy_schema,
)

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_RESOURCE = "retail_support.yaml"


# =============================================================================
# Reference Integrity Validation
# =============================================================================

def validate_reference_integrity(document: PolicySchemaDocument) -> list[str]:
    """
    Validate internal references are consistent.

    Catches:
    - Duplicate rule IDs

    Returns:
        List of error strings (empty when consistent)
    """
    errors = []
    seen_rule_ids: set[str] = set()
    for rule in document.rules:
        if rule.id in seen_rule_ids:
            errors.append(f"Duplicate rule ID: '{rule.id}'")
        seen_rule_ids.add(rule.id)
    return errors


# =============================================================================
# Document to Model Converters
# =============================================================================

def _convert_match(schema: MatchSpecSchema) -> MatchSpec:
    """Convert MatchSpecSchema to MatchSpec model."""
    return MatchSpec(
        user_includes=tuple(schema.user_includes) if schema.user_includes is not None else None,
        bot_includes=tuple(schema.bot_includes) if schema.bot_includes is not None else None,
        days_since_order_over=schema.days_since_order_over,
        combine=MatchCombine(schema.combine),
    )


def _convert_rule(schema: RuleSchema) -> Rule:
    """Convert RuleSchema to Rule model."""
    return Rule(
        id=schema.id,
        title=schema.title,
        description=schema.description,
        severity=schema.severity,
        match=_convert_match(schema.match),
        action=RuleAction(schema.action),
        on_violation_guidance=schema.on_violation_guidance,
    )


def _convert_thresholds(schema: ThresholdsSchema) -> Thresholds:
    return Thresholds(
        high_confidence=schema.high_confidence,
        interject_min_confidence=schema.interject_min_confidence,
    )


def _convert_policy_schema(document: PolicySchemaDocument) -> PolicySchema:
    """Convert PolicySchemaDocument to PolicySchema model."""
    return PolicySchema(
        name=document.name,
        version=document.version,
        thresholds=_convert_thresholds(document.thresholds),
        support_protocols=tuple(document.support_protocols),
        rules=tuple(_convert_rule(r) for r in document.rules),
    )


# =============================================================================
# Decoding
# =============================================================================

def _format_location(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def _validation_message(error: ValidationError) -> str:
    """First validation problem as a single readable line."""
    first = error.errors()[0]
    more = error.error_count() - 1
    suffix = f" (and {more} more)" if more > 0 else ""
    return f"{_format_location(first['loc'])}: {first['msg']}{suffix}"


def _decode(content: str, format: str) -> Any:
    """Decode JSON or YAML text, raising SchemaParseError with a location."""
    if format.lower() == "json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise SchemaParseError(
                message=f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
                details={"line": e.lineno, "column": e.colno, "error": e.msg},
            ) from e
    elif format.lower() in {"yaml", "yml"}:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            details: dict[str, Any] = {"error": str(e)}
            location = ""
            if mark is not None:
                details.update({"line": mark.line + 1, "column": mark.column + 1})
                location = f" at line {mark.line + 1}, column {mark.column + 1}"
            problem = getattr(e, "problem", None) or str(e)
            raise SchemaParseError(
                message=f"Invalid YAML{location}: {problem}",
                details=details,
            ) from e
    raise SchemaParseError(
        message=f"Unsupported schema format: {format}",
        details={"format": format},
    )


def build_policy_schema(
    data: Any,
    strict_version: bool = True,
    source: Optional[str] = None,
) -> PolicySchema:
    """
    Validate decoded data and convert it to a PolicySchema.

    Args:
        data: Decoded JSON/YAML data
        strict_version: Reject documents with an incompatible format version
        source: File path or label for error details

    Raises:
        SchemaParseError: If the data is not a valid schema
        SchemaVersionMismatch: If the format version is incompatible
    """
    details: dict[str, Any] = {"source": source} if source else {}

    if not isinstance(data, dict):
        raise SchemaParseError(
            message="Policy schema must be an object at the top level",
            details={**details, "type": type(data).__name__},
        )

    if strict_version and not check_schema_version(data):
        doc_version = data.get("schemaVersion", data.get("schema_version", "unknown"))
        raise SchemaVersionMismatch(
            message=f"Schema version mismatch: document has {doc_version}, expected {SCHEMA_VERSION}",
            details={
                **details,
                "document_version": doc_version,
                "expected_version": SCHEMA_VERSION,
            },
        )

    try:
        document = validate_policy_schema(data)
    except ValidationError as e:
        raise SchemaParseError(
            message=f"Policy schema validation failed: {_validation_message(e)}",
            details={
                **details,
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
            },
        ) from e

    integrity_errors = validate_reference_integrity(document)
    if integrity_errors:
        raise SchemaParseError(
            message=f"Reference integrity validation failed: {integrity_errors[0]}",
            details={**details, "errors": integrity_errors},
        )

    return _convert_policy_schema(document)


# =============================================================================
# Policy Schema Loader
# =============================================================================

class PolicySchemaLoader:
    """
    Loads policy schemas from text or files.

    Usage:
        loader = PolicySchemaLoader()
        schema = loader.load("path/to/schema.yaml")
        schema = loader.parse(text, format="json")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject schemas with incompatible format versions
        """
        self.strict_version = strict_version

    def parse(self, content: str, format: str = "json", source: Optional[str] = None) -> PolicySchema:
        """
        Parse a policy schema from text.

        Raises:
            SchemaParseError: If decoding or validation fails
        """
        try:
            data = _decode(content, format)
            schema = build_policy_schema(data, strict_version=self.strict_version, source=source)
        except SchemaParseError as e:
            logger.warning("Policy schema rejected: %s", e.message)
            raise

        logger.debug(
            "Policy schema loaded",
            extra={"schema_name": schema.name, "schema_version": schema.version},
        )
        return schema

    def load(self, path: Union[str, Path]) -> PolicySchema:
        """
        Load a policy schema from a file.

        The format is taken from the suffix (.json, .yaml, .yml). Unknown
        suffixes are tried as YAML, which also accepts JSON.

        Raises:
            SchemaLoadError: If the file cannot be read
            SchemaParseError: If validation fails
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SchemaLoadError(
                message=f"Failed to load policy schema: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        format = "json" if path.suffix.lower() == ".json" else "yaml"
        return self.parse(content, format=format, source=str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_policy_schema(content: str, format: str = "json", strict_version: bool = True) -> PolicySchema:
    """Parse a policy schema from a JSON or YAML string."""
    return PolicySchemaLoader(strict_version=strict_version).parse(content, format=format)


def load_policy_schema(path: Union[str, Path], strict_version: bool = True) -> PolicySchema:
    """Load a policy schema from a file."""
    return PolicySchemaLoader(strict_version=strict_version).load(path)


def default_schema_text() -> str:
    """Packaged default schema document (YAML)."""
    return resources.files("supportaudit.packs").joinpath("data").joinpath(DEFAULT_SCHEMA_RESOURCE).read_text(
        encoding="utf-8"
    )


@lru_cache(maxsize=1)
def default_policy_schema() -> PolicySchema:
    """The packaged "Retail Support" conversational policy schema."""
    return parse_policy_schema(default_schema_text(), format="yaml")


def load_configured_schema(path: Optional[Union[str, Path]] = None) -> PolicySchema:
    """
    Schema to audit against when the caller supplies none.

    Uses the given path, else SA_SCHEMA_PATH, else the packaged default.
    """
    if path is None:
        from ..config import get_settings

        settings = get_settings()
        path = settings.schema_path
        strict = settings.schema_strict_version
    else:
        strict = True
    if path:
        return load_policy_schema(path, strict_version=strict)
    return default_policy_schema()
