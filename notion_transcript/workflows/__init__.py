"""n8n workflow importer for the transcript pipeline templates."""

from notion_transcript.workflows.importer import (
    DEFAULT_WORKFLOW_SETTINGS,
    WORKFLOW_TEMPLATES,
    ImportSummary,
    WorkflowTemplate,
    build_workflow_payload,
    check_connection,
    import_workflow,
    import_workflows,
)

__all__ = [
    "DEFAULT_WORKFLOW_SETTINGS",
    "WORKFLOW_TEMPLATES",
    "ImportSummary",
    "WorkflowTemplate",
    "build_workflow_payload",
    "check_connection",
    "import_workflow",
    "import_workflows",
]
