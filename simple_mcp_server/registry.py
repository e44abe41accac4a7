# simple_mcp_server/registry.py
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, Field, ValidationError

from simple_mcp.di import Container, build_container
from simple_mcp.errors import SchemaViolation, UnknownIdentifier
from simple_mcp.logging import log_tool_call
from simple_mcp.services.prompts import PromptService, PromptTemplate
from simple_mcp.services.resources import ResourceService

# Import only the Pydantic input models from the tool modules.
from simple_mcp_server.tools.identity import CredentialIssuerIn, DIDIntegrationIn
from simple_mcp_server.tools.messaging import MessageBoxSetupIn
from simple_mcp_server.tools.payments import InscriptionHandlerIn, PaymentHandlerIn, TokenHandlerIn
from simple_mcp_server.tools.scaffolding import ScaffoldIn, WalletSetupIn
from simple_mcp_server.tools.server_wallet import ServerRouteIn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[BaseModel], str]


class ToolHandlers:
    """
    Named handlers for each tool (no lambdas).
    Each one calls exactly one composer and returns its document.
    """
    def __init__(self, container: Container):
        self.snippets = container.snippet_service

    # ---- Project setup
    def scaffold_nextjs_config(self, args: ScaffoldIn) -> str:
        return self.snippets.scaffold(args.features)

    def generate_wallet_setup(self, args: WalletSetupIn) -> str:
        return self.snippets.wallet_setup(args.target, args.framework)

    # ---- Payments, tokens, inscriptions
    def generate_payment_handler(self, args: PaymentHandlerIn) -> str:
        return self.snippets.payment_handler(args.type, args.basket, args.changeBasket)

    def generate_token_handler(self, args: TokenHandlerIn) -> str:
        return self.snippets.token_handler(args.operations)

    def generate_inscription_handler(self, args: InscriptionHandlerIn) -> str:
        return self.snippets.inscription_handler(args.types)

    # ---- Messaging
    def generate_messagebox_setup(self, args: MessageBoxSetupIn) -> str:
        return self.snippets.messagebox_setup(args.features, args.registryUrl)

    # ---- Server wallet
    def generate_server_route(self, args: ServerRouteIn) -> str:
        return self.snippets.server_route(args.actions, args.walletPersistence)

    # ---- Identity
    def generate_credential_issuer(self, args: CredentialIssuerIn) -> str:
        return self.snippets.credential_issuer(args.schemaFields, args.revocation)

    def generate_did_integration(self, args: DIDIntegrationIn) -> str:
        return self.snippets.did_integration(args.features)


_CATALOGUE = [
    ("scaffold_nextjs_config",
     "Generate next.config.ts, package.json additions, and .gitignore for a BSV app", ScaffoldIn),
    ("generate_wallet_setup",
     "Generate wallet initialization code for browser or server", WalletSetupIn),
    ("generate_payment_handler", "Generate payment handler function", PaymentHandlerIn),
    ("generate_token_handler", "Generate token handler functions", TokenHandlerIn),
    ("generate_inscription_handler", "Generate inscription handler functions", InscriptionHandlerIn),
    ("generate_messagebox_setup", "Generate MessageBox integration code", MessageBoxSetupIn),
    ("generate_server_route", "Generate Next.js API route for server wallet", ServerRouteIn),
    ("generate_credential_issuer", "Generate CredentialIssuer setup with schema", CredentialIssuerIn),
    ("generate_did_integration", "Generate DID integration code", DIDIntegrationIn),
]


def _schema_from_model(model: Type[BaseModel]) -> Dict[str, Any]:
    return model.model_json_schema()


def build_tool_registry(container: Optional[Container] = None) -> Dict[str, OperationSpec]:
    """
    Build a registry once at startup.
    Transport layers (stdio/HTTP) read from this registry to expose tools.
    """
    handlers = ToolHandlers(container or build_container())
    return {
        name: OperationSpec(
            name=name,
            description=description,
            input_model=model,
            handler=getattr(handlers, name),
        )
        for name, description, model in _CATALOGUE
    }


def list_tools_payload(registry: Dict[str, OperationSpec]) -> Dict[str, Any]:
    """
    Produce the `tools/list` payload body as per the MCP tools protocol.
    """
    tools = []
    for spec in registry.values():
        tools.append({
            "name": spec.name,
            "description": spec.description,
            "inputSchema": _schema_from_model(spec.input_model),
        })
    return {"tools": tools}


def validate_arguments(spec: OperationSpec, arguments: Any) -> BaseModel:
    try:
        return spec.input_model.model_validate(arguments if arguments is not None else {})
    except ValidationError as exc:
        raise SchemaViolation.from_validation_error(spec.name, exc) from None


def dispatch_tool_call(registry: Dict[str, OperationSpec], name: str, arguments: Any) -> str:
    """
    Validate args with the tool's Pydantic model, then invoke the named handler.
    The handler is never reached when validation fails.
    """
    if name not in registry:
        raise UnknownIdentifier("tool", name)
    spec = registry[name]
    log_tool_call(logger, name, arguments if isinstance(arguments, dict) else {"arguments": arguments})
    args_obj = validate_arguments(spec, arguments)
    return spec.handler(args_obj)


def call_tool(registry: Dict[str, OperationSpec], name: str, arguments: Any) -> Dict[str, Any]:
    """
    Wrap a dispatch in the single-content `tools/call` result envelope.
    Schema violations are reported in-band; unknown tools propagate.
    """
    try:
        text = dispatch_tool_call(registry, name, arguments)
    except SchemaViolation as sv:
        logger.warning("schema_violation %s %s", name, sv.errors)
        return {"content": [{"type": "text", "text": str(sv)}], "isError": True}
    return {"content": [{"type": "text", "text": text}], "isError": False}


# ---------- FastMCP (stdio) registration ----------

def _flat_signature(params: List[inspect.Parameter], return_annotation: Any):
    sig = inspect.Signature(params, return_annotation=return_annotation)
    annotations = {p.name: p.annotation for p in params}
    annotations["return"] = return_annotation
    return sig, annotations


def _tool_parameters(model: Type[BaseModel]) -> List[inspect.Parameter]:
    params = []
    for field_name, info in model.model_fields.items():
        params.append(inspect.Parameter(
            field_name,
            inspect.Parameter.KEYWORD_ONLY,
            default=inspect.Parameter.empty if info.is_required() else info.default,
            annotation=Annotated[info.annotation, Field(description=info.description)],
        ))
    return params


def _prompt_parameters(template: PromptTemplate) -> List[inspect.Parameter]:
    params = []
    for arg in template.arguments:
        if arg.required:
            annotation, default = Annotated[str, Field(description=arg.description)], inspect.Parameter.empty
        else:
            annotation, default = Annotated[Optional[str], Field(description=arg.description)], None
        params.append(inspect.Parameter(arg.name, inspect.Parameter.KEYWORD_ONLY,
                                        default=default, annotation=annotation))
    return params


def register_into_fastmcp(mcp, registry: Dict[str, OperationSpec]) -> None:
    """
    Register all registry tools into a FastMCP stdio host with flat arguments,
    so stdio and HTTP transports expose the same schemas without duplication.
    """
    for spec in registry.values():
        # Create a local closure so each handler binds to its spec
        def make_tool(spec: OperationSpec):
            def tool_handler(**arguments):
                return dispatch_tool_call(registry, spec.name, arguments)
            sig, annotations = _flat_signature(_tool_parameters(spec.input_model), str)
            tool_handler.__signature__ = sig
            tool_handler.__annotations__ = annotations
            tool_handler.__name__ = spec.name
            return tool_handler

        mcp.tool(name=spec.name, description=spec.description)(make_tool(spec))


def register_resources(mcp, resource_service: ResourceService) -> None:
    for entry in resource_service.entries.values():
        def make_reader(uri: str):
            def read_resource() -> str:
                return resource_service.get(uri)
            return read_resource

        mcp.resource(
            entry.uri,
            name=entry.name,
            description=entry.description,
            mime_type=entry.mime_type,
        )(make_reader(entry.uri))


def register_prompts(mcp, prompt_service: PromptService) -> None:
    for template in prompt_service.templates:
        def make_prompt(template: PromptTemplate):
            def render_prompt(**arguments) -> str:
                # A plain string is sent back as a single user message
                supplied = {k: v for k, v in arguments.items() if v is not None}
                messages = prompt_service.build(template.name, supplied)
                return "\n\n".join(m["content"]["text"] for m in messages)
            sig, annotations = _flat_signature(_prompt_parameters(template), str)
            render_prompt.__signature__ = sig
            render_prompt.__annotations__ = annotations
            render_prompt.__name__ = template.name
            return render_prompt

        mcp.prompt(name=template.name, description=template.description)(make_prompt(template))
