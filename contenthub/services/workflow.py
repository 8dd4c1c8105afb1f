"""
Project Workflow Engine

Owns the project status lifecycle:

    draft -> editor_review -> client_review -> approved -> final_delivered
                  ^                |   |
                  |                v   v
                  +--------- needs_revision

The guided actions ("advance", "request changes") are a convenience layer.
The status field itself stays unconstrained: set_status() accepts any of
the six states regardless of the current one.
"""

from typing import Any, Dict, Optional

from contenthub.models.project import ProjectStatus


# =============================================================================
# TRANSITION TABLES
# =============================================================================

ADVANCE_TRANSITIONS: Dict[ProjectStatus, ProjectStatus] = {
    ProjectStatus.DRAFT: ProjectStatus.EDITOR_REVIEW,
    ProjectStatus.EDITOR_REVIEW: ProjectStatus.CLIENT_REVIEW,
    ProjectStatus.CLIENT_REVIEW: ProjectStatus.APPROVED,
    ProjectStatus.NEEDS_REVISION: ProjectStatus.EDITOR_REVIEW,
    ProjectStatus.APPROVED: ProjectStatus.FINAL_DELIVERED,
    ProjectStatus.FINAL_DELIVERED: ProjectStatus.FINAL_DELIVERED,
}

REVIEW_STATES = frozenset({ProjectStatus.EDITOR_REVIEW, ProjectStatus.CLIENT_REVIEW})

TERMINAL_STATE = ProjectStatus.FINAL_DELIVERED

# Values written by earlier releases of the tracker
LEGACY_STATUS_MAP: Dict[str, ProjectStatus] = {
    "in_progress": ProjectStatus.DRAFT,
    "pending_review": ProjectStatus.CLIENT_REVIEW,
}

DISPLAY_NAMES: Dict[ProjectStatus, str] = {
    ProjectStatus.DRAFT: "Draft",
    ProjectStatus.EDITOR_REVIEW: "Editor Review",
    ProjectStatus.CLIENT_REVIEW: "Client Review",
    ProjectStatus.NEEDS_REVISION: "Needs Revision",
    ProjectStatus.APPROVED: "Approved",
    ProjectStatus.FINAL_DELIVERED: "Final Delivered",
}

ADVANCE_LABELS: Dict[ProjectStatus, str] = {
    ProjectStatus.DRAFT: "Send to Review",
    ProjectStatus.EDITOR_REVIEW: "Send to Client",
    ProjectStatus.CLIENT_REVIEW: "Approve",
    ProjectStatus.NEEDS_REVISION: "Resubmit",
    ProjectStatus.APPROVED: "Mark Final",
}


# =============================================================================
# OPERATIONS
# =============================================================================

def normalize_status(raw: Any) -> ProjectStatus:
    """
    Map a stored status value onto the current six-state workflow.

    Legacy values are translated, unknown values fall back to draft.
    Only used on read; the stored value is never rewritten by this.
    """
    if isinstance(raw, ProjectStatus):
        return raw
    if raw in LEGACY_STATUS_MAP:
        return LEGACY_STATUS_MAP[raw]
    try:
        return ProjectStatus(raw)
    except ValueError:
        return ProjectStatus.DRAFT


def advance(current: ProjectStatus) -> ProjectStatus:
    """Next status along the guided forward path. Terminal state maps to itself."""
    return ADVANCE_TRANSITIONS[ProjectStatus(current)]


def can_advance(current: ProjectStatus) -> bool:
    return ProjectStatus(current) != TERMINAL_STATE


def request_changes(current: ProjectStatus) -> ProjectStatus:
    """
    Send the project back for revision.

    Callers gate this with can_request_changes(); the mapping itself is
    unconditional.
    """
    return ProjectStatus.NEEDS_REVISION


def can_request_changes(current: ProjectStatus) -> bool:
    return ProjectStatus(current) in REVIEW_STATES


def set_status(current: ProjectStatus, requested: ProjectStatus) -> ProjectStatus:
    """Free-choice override; any state may follow any other."""
    return ProjectStatus(requested)


def display_name(status: ProjectStatus) -> str:
    return DISPLAY_NAMES[ProjectStatus(status)]


def advance_label(current: ProjectStatus) -> Optional[str]:
    # None at the terminal state: the advance action is hidden there
    return ADVANCE_LABELS.get(ProjectStatus(current))
