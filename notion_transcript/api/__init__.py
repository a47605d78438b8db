"""n8n API client package — async HTTP interface to an n8n instance.

WHY: The workflow importer needs to check connectivity and create
workflows. This package encapsulates all n8n API communication behind an
async client class.

HOW: Uses httpx.AsyncClient. Response data is parsed into the typed
dataclass defined in models.py.

RULES:
- All n8n HTTP calls go through N8nClient (no direct httpx usage elsewhere)
- Authentication is via the X-N8N-API-KEY header from config
"""

from notion_transcript.api.client import N8nAPIError, N8nClient
from notion_transcript.api.models import WorkflowSummary

__all__ = ["N8nAPIError", "N8nClient", "WorkflowSummary"]
