"""n8n public API response dataclasses.

WHY: The n8n REST API returns plain JSON objects for workflows. A typed
dataclass makes the fields the importer relies on explicit.

HOW: WorkflowSummary maps the subset of the workflow object the importer
reports (id, name, active). from_dict() tolerates extra fields.

RULES:
- id and name are required in every workflow response
- active defaults to False when absent
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WorkflowSummary:
    """A workflow as returned by GET/POST /api/v1/workflows."""

    id: str
    name: str
    active: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> WorkflowSummary:
        """Parse a WorkflowSummary from a raw API response dict.

        RULES:
        - id is stringified (older n8n versions return integers)
        - Missing id or name raises KeyError; the client reports it as N8nAPIError
        """
        return cls(
            id=str(data["id"]),
            name=data["name"],
            active=bool(data.get("active", False)),
        )
