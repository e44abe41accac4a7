# simple_mcp/services/prompts.py
"""
Prompt templates: small user messages filled from caller arguments.

Optional arguments fall back to fixed defaults; a missing required argument
is rejected before any substitution happens.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from simple_mcp.errors import SchemaViolation, UnknownIdentifier

logger = logging.getLogger(__name__)

FEATURE_NAMES = (
    "payments, tokens, inscriptions, messagebox, certification, did, credentials, overlay, server-wallet"
)


@dataclass(frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool = False
    default: Optional[str] = None


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    description: str
    arguments: List[PromptArgument]
    render: Callable[[Dict[str, str]], str]
    role: str = "user"

    def resolve(self, args: Mapping[str, Any]) -> Dict[str, str]:
        errors = []
        known = {a.name for a in self.arguments}
        for key in args:
            if key not in known:
                errors.append({"path": f"/{key}", "keyword": "additionalProperties",
                               "message": f"Unexpected argument '{key}'"})

        values: Dict[str, str] = {}
        for arg in self.arguments:
            raw = args.get(arg.name)
            if raw is not None and not isinstance(raw, str):
                errors.append({"path": f"/{arg.name}", "keyword": "type",
                               "message": "Input should be a valid string"})
                continue
            if raw is None or not raw.strip():
                if arg.required:
                    errors.append({"path": f"/{arg.name}", "keyword": "required",
                                   "message": f"Missing required argument '{arg.name}'"})
                    continue
                raw = arg.default or ""
            values[arg.name] = raw

        if errors:
            raise SchemaViolation(self.name, errors)
        return values


def _integrate(args: Dict[str, str]) -> str:
    features = [f.strip() for f in args["features"].split(",") if f.strip()]
    framework = args["framework"]
    listed = ", ".join(features)
    return f"""I want to integrate @bsv/simple into my {framework} project. I need these features: {listed}.

Please help me:
1. Set up the project configuration (next.config.ts if Next.js, package.json dependencies)
2. Create wallet initialization code (browser wallet for client, server wallet if needed)
3. Generate handler functions for each feature I listed
4. Show me the critical gotchas I should watch out for

Use the MCP resources and tools to generate the code. Start with scaffold_nextjs_config, then generate_wallet_setup, then the feature-specific generators."""


def _add_feature(args: Dict[str, str]) -> str:
    feature, framework = args["feature"], args["framework"]
    return f"""I have an existing {framework} project with @bsv/simple already set up. I want to add the "{feature}" feature.

Please:
1. Read the relevant API reference for this feature (use the simple://api/{feature} resource)
2. Generate the implementation code using the appropriate tool
3. Show me any gotchas specific to this feature
4. Provide a complete, working code example I can drop into my project

Assume I already have a wallet instance available. Generate production-ready TypeScript code."""


def _debug(args: Dict[str, str]) -> str:
    error, feature = args["error"], args["feature"]
    return f"""I'm having an issue with @bsv/simple in the "{feature}" area.

Error/Problem: {error}

Please:
1. Read the gotchas reference (simple://guide/gotchas resource) to check if this is a known issue
2. Read the relevant API reference for the feature area
3. Identify the likely cause based on common patterns
4. Suggest a fix with corrected code

Common causes to check:
- basket insertion vs wallet payment confusion
- PeerPayClient.acceptPayment() swallowing errors
- Missing changeBasket for change recovery
- result.tx being undefined
- Missing serverExternalPackages in next.config.ts
- Static vs dynamic imports for server code
- Overlay topic/service prefix requirements (tm_, ls_)
- FileRevocationStore used in browser context
- Server wallet not cached (re-initializing every request)"""


TEMPLATES: List[PromptTemplate] = [
    PromptTemplate(
        name="integrate_simplifier",
        description=(
            "Walk through adding @bsv/simple to a project. Asks about framework, "
            "features needed, and generates complete setup."
        ),
        arguments=[
            PromptArgument("framework", "Target framework: nextjs, react, or vanilla", default="nextjs"),
            PromptArgument("features", f"Comma-separated features: {FEATURE_NAMES}", default="payments"),
        ],
        render=_integrate,
    ),
    PromptTemplate(
        name="add_bsv_feature",
        description=(
            "Generate code for adding a specific BSV feature (payments, tokens, messagebox, etc.) "
            "to an existing project."
        ),
        arguments=[
            PromptArgument("feature", f"The feature to add: {FEATURE_NAMES}", required=True),
            PromptArgument("framework", "Target framework: nextjs, react, or vanilla", default="nextjs"),
        ],
        render=_add_feature,
    ),
    PromptTemplate(
        name="debug_simple",
        description="Help debug issues with @bsv/simple code. Checks common gotchas and suggests fixes.",
        arguments=[
            PromptArgument("error", "The error message or description of the problem", required=True),
            PromptArgument("feature", f"Which feature area: wallet, {FEATURE_NAMES}", default="general"),
        ],
        render=_debug,
    ),
]


@dataclass
class PromptService:
    templates: List[PromptTemplate] = field(default_factory=lambda: list(TEMPLATES))

    def __post_init__(self):
        self._by_name = {t.name: t for t in self.templates}

    def template(self, name: str) -> PromptTemplate:
        if name not in self._by_name:
            raise UnknownIdentifier("prompt", name)
        return self._by_name[name]

    def list(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": t.name,
                "description": t.description,
                "arguments": [
                    {"name": a.name, "description": a.description, "required": a.required}
                    for a in t.arguments
                ],
            }
            for t in self.templates
        ]

    def build(self, name: str, args: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        template = self.template(name)
        values = template.resolve(args or {})
        logger.debug("prompt_build %s", name)
        return [{"role": template.role, "content": {"type": "text", "text": template.render(values)}}]
