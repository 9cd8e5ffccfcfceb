#!/usr/bin/env python3
"""
SupportAudit CLI

Command-line interface for auditing support transcripts against a
conversational policy schema.

Usage:
    supportaudit audit --transcript conversation.json --schema retail_support.yaml
    supportaudit incidents --samples
    supportaudit incidents --transcript a.json b.json --profile full-schema
    supportaudit validate-schema --schema retail_support.yaml
    supportaudit show-default-schema --format json

Exit Codes:
    0   ALLOW           - Bot reply may stand
    2   INTERJECT       - Auditor interjects (modify or ask user)
    3   STOP            - Bot must be stopped, human required
    10  INPUT_INVALID   - Invalid transcript
    11  SCHEMA_ERROR    - Schema validation/loading failed
    20  INTERNAL_ERROR  - Unexpected internal error
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .canon import decision_fingerprint, schema_hash
from .engine import Auditor, derive_incidents
from .exceptions import SchemaParseError, TranscriptValidationError
from .logging_setup import configure_logging
from .models import Decision, Outcome, PolicySchema, ScanProfile
from .packs import default_schema_text, load_configured_schema, load_policy_schema
from .samples import sample_conversations
from .transcripts import load_conversation


# ============================================================================
# EXIT CODES
# ============================================================================

class ExitCode:
    """Deterministic exit codes for pipeline integration."""
    ALLOW = 0             # Bot reply may stand
    INTERJECT = 2         # Interject + modify / ask user
    STOP = 3              # Stop the bot, human required
    INPUT_INVALID = 10    # Invalid transcript
    SCHEMA_ERROR = 11     # Schema validation/loading failed
    INTERNAL_ERROR = 20   # Unexpected error


def outcome_to_exit_code(outcome: Outcome) -> int:
    """Map decision outcome to exit code."""
    if outcome is Outcome.ALLOW:
        return ExitCode.ALLOW
    if outcome is Outcome.STOP:
        return ExitCode.STOP
    return ExitCode.INTERJECT


# ============================================================================
# TERMINAL OUTPUT
# ============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


def print_header(text: str):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'='*60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'='*60}{Colors.END}")


def print_success(text: str):
    print(f"{Colors.GREEN}[OK] {text}{Colors.END}")


def print_error(text: str):
    print(f"{Colors.RED}[ERROR] {text}{Colors.END}", file=sys.stderr)


def print_warning(text: str):
    print(f"{Colors.YELLOW}[WARN] {text}{Colors.END}")


def print_kv(key: str, value: str, indent: int = 0):
    spaces = "  " * indent
    print(f"{spaces}{Colors.BOLD}{key}:{Colors.END} {value}")


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _load_schema(path: Optional[str]) -> PolicySchema:
    if path:
        return load_policy_schema(path)
    return load_configured_schema()


# ============================================================================
# COMMANDS
# ============================================================================

def _print_decision(decision: Decision) -> None:
    print_kv("Outcome", f"{decision.outcome.value} ({decision.outcome.label})")
    print_kv("Confidence", f"{decision.confidence_percent}% ({decision.confidence_band.value})")
    print_kv("Fingerprint", decision_fingerprint(decision))
    if decision.rationale:
        print(f"\n{Colors.BOLD}Rationale:{Colors.END}")
        for line in decision.rationale:
            print(f"  - {line}")
    if decision.suggested_reply:
        print(f"\n{Colors.BOLD}Suggested reply:{Colors.END}")
        print(decision.suggested_reply)


def cmd_audit(args) -> int:
    """Audit the latest exchange of a transcript."""
    try:
        schema = _load_schema(args.schema)
    except SchemaParseError as e:
        print_error(str(e))
        return ExitCode.SCHEMA_ERROR

    try:
        conversation = load_conversation(args.transcript)
    except TranscriptValidationError as e:
        print_error(str(e))
        return ExitCode.INPUT_INVALID

    decision = Auditor().audit(conversation, schema)

    if args.json:
        result = decision.to_dict()
        result["decision_fingerprint"] = decision_fingerprint(decision)
        print_json(result)
    else:
        print_header("SupportAudit - Audit")
        print_kv("Transcript", str(args.transcript))
        print_kv("Schema", f"{schema.name} v{schema.version}")
        print()
        _print_decision(decision)

    return outcome_to_exit_code(decision.outcome)


def cmd_incidents(args) -> int:
    """Derive incidents for transcripts."""
    profile = ScanProfile(args.profile)
    schema: Optional[PolicySchema] = None
    if profile is ScanProfile.FULL_SCHEMA:
        try:
            schema = _load_schema(args.schema)
        except SchemaParseError as e:
            print_error(str(e))
            return ExitCode.SCHEMA_ERROR

    if args.samples:
        conversations = sample_conversations()
    else:
        try:
            conversations = [load_conversation(p) for p in args.transcript or []]
        except TranscriptValidationError as e:
            print_error(str(e))
            return ExitCode.INPUT_INVALID
        if not conversations:
            print_error("No transcripts given (use --transcript or --samples)")
            return ExitCode.INPUT_INVALID

    incidents = derive_incidents(conversations, schema=schema, profile=profile)

    if args.json:
        print_json([i.to_dict() for i in incidents])
        return ExitCode.ALLOW

    print_header(f"SupportAudit - Incidents ({profile.value})")
    for incident in incidents:
        status = incident.status.value
        color = Colors.RED if incident.is_flagged else Colors.GREEN
        rules = ", ".join(incident.triggered_rule_ids) or "-"
        print(
            f"  {incident.conversation_id or incident.id}: "
            f"{color}{status}{Colors.END} "
            f"({incident.violation_count} violations, {incident.message_count} messages) [{rules}]"
        )
    flagged = sum(1 for i in incidents if i.is_flagged)
    print()
    print_kv("Flagged", f"{flagged}/{len(incidents)}")
    return ExitCode.ALLOW


def cmd_validate_schema(args) -> int:
    """Validate a policy schema file."""
    print_header("SupportAudit - Validate Schema")

    schema_path = Path(args.schema)
    if not schema_path.exists():
        print_error(f"Schema file not found: {schema_path}")
        return ExitCode.INPUT_INVALID

    try:
        schema = load_policy_schema(schema_path)
    except SchemaParseError as e:
        print_error(f"Validation failed: {e.message}")
        return ExitCode.SCHEMA_ERROR

    print_success("Schema is valid!")
    print()
    print_kv("Name", schema.name)
    print_kv("Version", schema.version)
    print_kv("Schema Hash", schema_hash(schema))
    print_kv("Rules", str(len(schema.rules)))
    for rule in schema.rules:
        print(f"  {rule.id}: {rule.action.value} (severity {rule.severity}) - {rule.title}")
    if not schema.rules:
        print_warning("Schema has no rules; every audit will allow")
    return ExitCode.ALLOW


def cmd_show_default_schema(args) -> int:
    """Print the packaged default schema."""
    if args.format == "json":
        print_json(load_configured_schema().to_dict())
    else:
        print(default_schema_text(), end="")
    return ExitCode.ALLOW


# ============================================================================
# MAIN
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="supportaudit",
        description="SupportAudit CLI - conversation policy auditor for support transcripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0   ALLOW           Bot reply may stand
  2   INTERJECT       Auditor interjects
  3   STOP            Bot stopped, human required
  10  INPUT_INVALID   Invalid transcript
  11  SCHEMA_ERROR    Schema validation failed

Examples:
  supportaudit audit --transcript conversation.json
  supportaudit audit --transcript conversation.json --schema schema.yaml --json
  supportaudit incidents --samples --profile quick-scan
  supportaudit validate-schema --schema schema.yaml
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Log level (defaults to SA_LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # audit
    audit_parser = subparsers.add_parser("audit", help="Audit the latest exchange of a transcript")
    audit_parser.add_argument("--transcript", "-t", required=True, help="Transcript JSON file")
    audit_parser.add_argument("--schema", "-s", help="Policy schema file (JSON or YAML)")
    audit_parser.add_argument("--json", action="store_true", help="Print the decision as JSON")
    audit_parser.set_defaults(func=cmd_audit)

    # incidents
    incidents_parser = subparsers.add_parser("incidents", help="Derive incidents for transcripts")
    incidents_parser.add_argument("--transcript", "-t", nargs="+", help="Transcript JSON files")
    incidents_parser.add_argument("--samples", action="store_true", help="Use the seeded sample transcripts")
    incidents_parser.add_argument(
        "--profile",
        choices=[p.value for p in ScanProfile],
        default=ScanProfile.QUICK_SCAN.value,
        help="Matcher profile",
    )
    incidents_parser.add_argument("--schema", "-s", help="Policy schema file (full-schema profile)")
    incidents_parser.add_argument("--json", action="store_true", help="Print incidents as JSON")
    incidents_parser.set_defaults(func=cmd_incidents)

    # validate-schema
    validate_parser = subparsers.add_parser("validate-schema", help="Validate a policy schema file")
    validate_parser.add_argument("--schema", "-s", required=True, help="Policy schema file")
    validate_parser.set_defaults(func=cmd_validate_schema)

    # show-default-schema
    show_parser = subparsers.add_parser("show-default-schema", help="Print the default policy schema")
    show_parser.add_argument("--format", choices=["yaml", "json"], default="yaml")
    show_parser.set_defaults(func=cmd_show_default_schema)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    if not sys.stdout.isatty():
        Colors.disable()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.log_level)

    try:
        return args.func(args)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        return ExitCode.INTERNAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
