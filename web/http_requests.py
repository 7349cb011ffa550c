"""
Inbound API Gateway HTTP API (payload v2) requests.
"""
import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import parse_qs


@dataclass
class HttpApiRequest:
    """The parts of a proxy event the executor and handlers use."""

    raw_path: str = ''
    headers: Dict[str, str] = field(default_factory=dict)
    query_string_parameters: Dict[str, str] = field(default_factory=dict)
    path_parameters: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    is_base64_encoded: bool = False
    request_id: Optional[str] = None

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "HttpApiRequest":
        """Build a request from a proxy event. Header names are lower-cased."""
        event = event or {}
        headers = {
            str(name).lower(): value
            for name, value in (event.get('headers') or {}).items()
        }
        request_context = event.get('requestContext') or {}
        raw_path = event.get('rawPath') or event.get('path') or ''

        return cls(
            raw_path=raw_path,
            headers=headers,
            query_string_parameters=dict(event.get('queryStringParameters') or {}),
            path_parameters=dict(event.get('pathParameters') or {}),
            body=event.get('body'),
            is_base64_encoded=bool(event.get('isBase64Encoded', False)),
            request_id=request_context.get('requestId'),
        )

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)

    def decoded_body(self) -> str:
        if not self.body:
            return ''
        if self.is_base64_encoded:
            return base64.b64decode(self.body).decode('utf-8')
        return self.body

    def to_form_values(self) -> Dict[str, List[str]]:
        """Parse a URL-encoded form body (base64 bodies are decoded first)."""
        return parse_qs(self.decoded_body(), keep_blank_values=True)
