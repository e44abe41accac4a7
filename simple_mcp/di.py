# simple_mcp/di.py
from dataclasses import dataclass
from simple_mcp.config import Settings
from simple_mcp.services.prompts import PromptService
from simple_mcp.services.resources import ResourceService
from simple_mcp.services.snippets import SnippetService

@dataclass
class Container:
    settings: Settings
    snippet_service: SnippetService
    resource_service: ResourceService
    prompt_service: PromptService

def build_container(settings: Settings | None = None) -> Container:
    s = settings or Settings()

    snippets = SnippetService()
    resources = ResourceService(s.RESOURCES_DIR)
    prompts = PromptService()

    return Container(s, snippets, resources, prompts)
