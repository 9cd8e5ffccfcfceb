"""Policy schema endpoints."""
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ...config import get_settings
from ...exceptions import SchemaParseError
from ...models import PolicySchema
from ...packs import build_policy_schema, default_schema_text, load_configured_schema, parse_policy_schema
from ..schemas.requests import SchemaSource, SchemaTextRequest
from ..schemas.responses import ErrorBody, SchemaSummary, SchemaValidationResponse

router = APIRouter(prefix="/schema", tags=["Schema"])


def resolve_schema(request: SchemaSource) -> PolicySchema:
    """
    Schema carried by a request, or the configured default.

    Raises:
        SchemaParseError: If the supplied schema is invalid
    """
    strict = get_settings().schema_strict_version
    if request.policy_schema is not None:
        return build_policy_schema(request.policy_schema, strict_version=strict, source="request")
    if request.schema_text is not None:
        return parse_policy_schema(request.schema_text, format=request.schema_format, strict_version=strict)
    return load_configured_schema()


@router.get("/default")
async def get_default_schema():
    """The active default policy schema (camelCase JSON)."""
    return load_configured_schema().to_dict()


@router.get("/default.yaml", response_class=PlainTextResponse)
async def get_default_schema_text():
    """The packaged default schema document, as authored."""
    return default_schema_text()


@router.post("/validate", response_model=SchemaValidationResponse)
async def validate_schema(request: SchemaTextRequest):
    """
    Validate schema text without using it.

    Invalid schemas return 200 with valid=false and the parse error.
    """
    try:
        schema = parse_policy_schema(
            request.content,
            format=request.format,
            strict_version=get_settings().schema_strict_version,
        )
    except SchemaParseError as e:
        return SchemaValidationResponse(valid=False, error=ErrorBody(**e.to_dict()))
    return SchemaValidationResponse(valid=True, schema_info=SchemaSummary.from_schema(schema))
