from dataclasses import dataclass, field
from typing import Dict
from urllib.parse import urlparse

from core.document import Document

@dataclass(frozen=True)
class ScanContext:
    domain: str # As entered by the user
    url: str # Final URL after redirects
    base_url: str # scheme://host[:port] of the final URL
    document: Document
    html: str = ""
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=dict) # Response headers, lower-cased keys
    request_headers: Dict[str, str] = field(default_factory=dict) # Reused for auxiliary fetches

    @property
    def hostname(self) -> str:
        return urlparse(self.base_url).hostname or ""

    @property
    def is_https(self) -> bool:
        return self.base_url.startswith("https://")
