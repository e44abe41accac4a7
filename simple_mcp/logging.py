# simple_mcp/logging.py
import logging
import re
import sys
from typing import Any, Dict

PII_RE = re.compile(r"([\w\.-]+)@([\w\.-]+)")  # naive email redaction
KEY_RE = re.compile(r"\b[0-9a-fA-F]{64}\b")     # raw private keys pasted into arguments


def configure_logging(level: str = "INFO"):
    # stderr only: stdout carries the stdio transport
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def redact_str(s: str) -> str:
    return KEY_RE.sub("[redacted-key]", PII_RE.sub("[redacted-email]", s))


def redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_str(value)
    if isinstance(value, dict):
        return {k: redact_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact_value(v) for v in value]
    return value


def redact_args(args: Dict[str, Any]) -> Dict[str, Any]:
    return {k: redact_value(v) for k, v in args.items()}


def log_tool_call(logger: logging.Logger, name: str, args: Dict[str, Any]):
    logger.info("tool_call %s %s", name, redact_args(args))
