# simple_mcp/errors.py
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import ValidationError


class SchemaViolation(ValueError):
    """
    Caller input failed the declared enum/type/required constraints.
    Raised before any handler or template substitution runs.
    """

    def __init__(self, operation: str, errors: List[Dict[str, Any]]):
        self.operation = operation
        self.errors = errors
        details = "; ".join(f"{e['path']}: {e['message']}" for e in errors)
        super().__init__(f"Invalid arguments for {operation}: {details}")

    @classmethod
    def from_validation_error(cls, operation: str, exc: ValidationError) -> "SchemaViolation":
        errors = []
        for err in exc.errors():
            # Same entry shape as a JSON Schema validation report
            segments = [str(p) for p in err.get("loc", ())]
            errors.append({
                "path": "/" + "/".join(segments) if segments else "/",
                "keyword": err.get("type"),
                "message": err.get("msg"),
            })
        return cls(operation, errors)

    def to_dict(self) -> Dict[str, Any]:
        return {"operation": self.operation, "errors": self.errors}


class UnknownIdentifier(KeyError):
    """Lookup of a tool, resource or prompt outside the registered set."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Unknown {kind}: {identifier}")

    def __str__(self) -> str:
        return self.args[0]


class CompositionDegenerate(RuntimeError):
    """The fragment library and the enum definitions disagree. A programming defect."""
