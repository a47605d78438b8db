"""Import bundled n8n workflow templates through the n8n API.

WHY: The transcript pipeline runs inside n8n. Setting it up by hand means
importing several workflow JSON exports one at a time. The importer
creates them all in one go, inactive, so credentials and database IDs can
be configured before anything runs.

HOW: check_connection() lists existing workflows to confirm the URL and
key work. import_workflows() reads each template file, reduces it to the
fields the create endpoint accepts, fills defaults, and POSTs it. One
template failing never stops the others.

RULES:
- Imported workflows are always created inactive
- Missing name/nodes/connections/settings fall back to defaults
- No validation of the workflow JSON beyond "is it parseable"
- Per-template failures are logged and counted, not raised
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from notion_transcript.api.client import N8nAPIError, N8nClient
from notion_transcript.api.models import WorkflowSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkflowTemplate:
    """A workflow export shipped with the project."""

    file: str
    name: str
    description: str


WORKFLOW_TEMPLATES: List[WorkflowTemplate] = [
    WorkflowTemplate(
        file="transcript-pipeline-blog-generator-information-extractor.json",
        name="Transcript Pipeline - Blog Generator (AI)",
        description="Uses Information Extractor for AI-powered text extraction from Notion blocks",
    ),
    WorkflowTemplate(
        file="workflow-1-blog-generator-fixed.json",
        name="Blog Generator (Code Node)",
        description="Alternative version using Code node for text extraction",
    ),
    WorkflowTemplate(
        file="video-content-pipeline-complete.json",
        name="Complete Content Pipeline",
        description="Full pipeline for Blog, Newsletter, LinkedIn, and Instagram",
    ),
]

DEFAULT_WORKFLOW_SETTINGS: Dict[str, Any] = {
    "executionOrder": "v1",
    "saveDataSuccessExecution": "all",
    "saveDataErrorExecution": "all",
    "saveExecutionProgress": True,
    "saveManualExecutions": True,
}


@dataclass
class ImportSummary:
    """Outcome of a batch import."""

    succeeded: List[WorkflowSummary] = field(default_factory=list)
    failed: List[WorkflowTemplate] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def fail_count(self) -> int:
        return len(self.failed)


def build_workflow_payload(data: Dict[str, Any], fallback_name: str) -> Dict[str, Any]:
    """Reduce a workflow export to a create-workflow request body.

    WHY: Exports carry read-only fields (id, versionId, tags, ...) that the
    create endpoint rejects. Only the writable fields are sent.

    RULES:
    - name: the export's name, else fallback_name
    - nodes → [] and connections → {} when absent
    - settings → DEFAULT_WORKFLOW_SETTINGS when absent
    - active is always False
    """
    return {
        "name": data.get("name") or fallback_name,
        "nodes": data.get("nodes") or [],
        "connections": data.get("connections") or {},
        "settings": data.get("settings") or dict(DEFAULT_WORKFLOW_SETTINGS),
        "active": False,
    }


def load_template(path: Path) -> Dict[str, Any]:
    """Read a workflow export file as a JSON object.

    Raises:
        ValueError: The file is not valid JSON, or its top level is not an object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(
            "Workflow template must be a JSON object, got {}: {}".format(type(data).__name__, path)
        )
    return data


async def check_connection(client: N8nClient) -> bool:
    """Return True if the n8n API answers with the configured credentials."""
    logger.info("Connecting to n8n at %s", client.api_url)
    try:
        workflows = await client.list_workflows()
    except (N8nAPIError, httpx.HTTPError) as e:
        logger.error("Failed to connect to n8n: %s", e)
        return False
    logger.info("Connected, found %d existing workflows", len(workflows))
    return True


async def import_workflow(
    client: N8nClient,
    template: WorkflowTemplate,
    templates_dir: Path,
) -> Optional[WorkflowSummary]:
    """Create one workflow from its template file.

    Returns:
        The created workflow, or None if the file is missing or the
        import failed.
    """
    path = Path(templates_dir) / template.file
    if not path.is_file():
        logger.warning("Template file not found: %s", path)
        return None

    logger.info("Importing %s", template.name)
    try:
        payload = build_workflow_payload(load_template(path), template.name)
        created = await client.create_workflow(payload)
    except (OSError, ValueError, N8nAPIError, httpx.HTTPError) as e:
        logger.error("Failed to import %s: %s", template.name, e)
        return None

    logger.info("Created workflow %s (ID: %s)", created.name, created.id)
    return created


async def import_workflows(
    client: N8nClient,
    templates: List[WorkflowTemplate],
    templates_dir: Path,
) -> ImportSummary:
    """Import every template in order and report what happened."""
    summary = ImportSummary()
    for template in templates:
        created = await import_workflow(client, template, templates_dir)
        if created is None:
            summary.failed.append(template)
        else:
            summary.succeeded.append(created)
    return summary
