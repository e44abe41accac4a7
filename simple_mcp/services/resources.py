# simple_mcp/services/resources.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from simple_mcp.errors import UnknownIdentifier

logger = logging.getLogger(__name__)

MARKDOWN = "text/markdown"
PACKAGED_RESOURCES = Path(__file__).resolve().parent.parent / "resources"


@dataclass(frozen=True)
class ResourceEntry:
    name: str
    uri: str
    description: str
    filename: str
    mime_type: str = MARKDOWN


CATALOGUE: List[ResourceEntry] = [
    ResourceEntry("wallet-api", "simple://api/wallet", "Wallet API reference", "wallet-api.md"),
    ResourceEntry("tokens-api", "simple://api/tokens", "Tokens API reference", "tokens-api.md"),
    ResourceEntry("inscriptions-api", "simple://api/inscriptions", "Inscriptions API reference",
                  "inscriptions-api.md"),
    ResourceEntry("messagebox-api", "simple://api/messagebox", "MessageBox API reference",
                  "messagebox-api.md"),
    ResourceEntry("certification-api", "simple://api/certification", "Certification API reference",
                  "certification-api.md"),
    ResourceEntry("did-api", "simple://api/did", "DID API reference", "did-api.md"),
    ResourceEntry("credentials-api", "simple://api/credentials", "Verifiable credentials API reference",
                  "credentials-api.md"),
    ResourceEntry("overlay-api", "simple://api/overlay", "Overlay network API reference", "overlay-api.md"),
    ResourceEntry("nextjs-guide", "simple://guide/nextjs", "Next.js integration guide", "nextjs-guide.md"),
    ResourceEntry("gotchas", "simple://guide/gotchas", "Critical pitfalls and gotchas", "gotchas.md"),
    ResourceEntry("patterns", "simple://guide/patterns", "Common code patterns", "patterns.md"),
]


class ResourceService:
    """
    Serve the fixed reference catalogue.
    Every document is read once at construction; lookups never touch the disk.
    """

    def __init__(self, root: Optional[Path] = None, catalogue: Optional[List[ResourceEntry]] = None):
        self.root = (root or PACKAGED_RESOURCES).resolve()
        self.entries: Dict[str, ResourceEntry] = {e.uri: e for e in (catalogue or CATALOGUE)}
        self._by_name: Dict[str, str] = {e.name: e.uri for e in self.entries.values()}
        self._texts: Dict[str, str] = {}
        for entry in self.entries.values():
            path = self.root / entry.filename
            if not path.is_file():
                raise FileNotFoundError(f"Resource file missing for {entry.uri}: {path}")
            self._texts[entry.uri] = path.read_text(encoding="utf-8")
        logger.debug("loaded %d resources from %s", len(self._texts), self.root)

    # ---------- Public API ----------

    def list(self) -> List[Dict[str, str]]:
        return [
            {"uri": e.uri, "name": e.name, "description": e.description, "mimeType": e.mime_type}
            for e in self.entries.values()
        ]

    def get(self, uri: str) -> str:
        if uri not in self._texts:
            raise UnknownIdentifier("resource", uri)
        return self._texts[uri]

    def get_by_name(self, name: str) -> str:
        if name not in self._by_name:
            raise UnknownIdentifier("resource", name)
        return self.get(self._by_name[name])

    def read(self, uri: str) -> Dict[str, str]:
        text = self.get(uri)
        logger.debug("resource_read %s", uri)
        return {"uri": uri, "mimeType": self.entries[uri].mime_type, "text": text}
