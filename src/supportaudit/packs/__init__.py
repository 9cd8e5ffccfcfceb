"""
SupportAudit Policy Schemas

Document validation and loading for conversational policy schemas.

Policy schemas are JSON or YAML documents that declare the rules a
customer-support transcript is audited against.

Usage:
    from supportaudit.packs import parse_policy_schema, PolicySchemaLoader

    # Parse schema text edited by a reviewer
    schema = parse_policy_schema(text, format="json")

    # Use a loader for several files (one strict-version setting)
    loader = PolicySchemaLoader()
    schema = loader.load("path/to/retail_support.yaml")

    # The packaged retail support schema
    schema = default_policy_schema()
"""
from __future__ import annotations

from .loader import (
    PolicySchemaLoader,
    build_policy_schema,
    default_policy_schema,
    default_schema_text,
    load_configured_schema,
    load_policy_schema,
    parse_policy_schema,
    validate_reference_integrity,
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

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "PolicySchemaLoader",
    "build_policy_schema",
    "default_policy_schema",
    "default_schema_text",
    "load_configured_schema",
    "load_policy_schema",
    "parse_policy_schema",
    # Validation
    "validate_policy_schema",
    "validate_reference_integrity",
    "check_schema_version",
    # Schemas (for advanced usage)
    "PolicySchemaDocument",
    "RuleSchema",
    "MatchSpecSchema",
    "ThresholdsSchema",
]
