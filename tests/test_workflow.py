"""Tests for the project workflow engine."""
import pytest

from contenthub.models.project import ProjectStatus
from contenthub.services import workflow


ALL_STATES = list(ProjectStatus)


class TestAdvance:
    """Tests for the guided forward transition."""

    @pytest.mark.parametrize("current,expected", [
        (ProjectStatus.DRAFT, ProjectStatus.EDITOR_REVIEW),
        (ProjectStatus.EDITOR_REVIEW, ProjectStatus.CLIENT_REVIEW),
        (ProjectStatus.CLIENT_REVIEW, ProjectStatus.APPROVED),
        (ProjectStatus.NEEDS_REVISION, ProjectStatus.EDITOR_REVIEW),
        (ProjectStatus.APPROVED, ProjectStatus.FINAL_DELIVERED),
        (ProjectStatus.FINAL_DELIVERED, ProjectStatus.FINAL_DELIVERED),
    ])
    def test_transition_table(self, current, expected):
        assert workflow.advance(current) == expected

    def test_total_over_all_states(self):
        """Every state has a successor that is itself a valid state."""
        for state in ALL_STATES:
            assert workflow.advance(state) in ALL_STATES

    def test_terminal_state_is_idempotent(self):
        state = ProjectStatus.FINAL_DELIVERED
        for _ in range(3):
            state = workflow.advance(state)
        assert state == ProjectStatus.FINAL_DELIVERED
        assert not workflow.can_advance(state)

    def test_accepts_plain_string(self):
        assert workflow.advance("draft") == ProjectStatus.EDITOR_REVIEW

    def test_three_advances_from_draft(self):
        sequence = [ProjectStatus.DRAFT]
        for _ in range(3):
            sequence.append(workflow.advance(sequence[-1]))
        assert sequence == [
            ProjectStatus.DRAFT,
            ProjectStatus.EDITOR_REVIEW,
            ProjectStatus.CLIENT_REVIEW,
            ProjectStatus.APPROVED,
        ]


class TestRequestChanges:
    """Tests for sending work back for revision."""

    def test_gated_states_yield_needs_revision(self):
        for state in ALL_STATES:
            if workflow.can_request_changes(state):
                assert workflow.request_changes(state) == ProjectStatus.NEEDS_REVISION

    def test_only_review_states_allow_it(self):
        allowed = {s for s in ALL_STATES if workflow.can_request_changes(s)}
        assert allowed == {ProjectStatus.EDITOR_REVIEW, ProjectStatus.CLIENT_REVIEW}

    def test_mapping_itself_is_unconditional(self):
        assert workflow.request_changes(ProjectStatus.DRAFT) == ProjectStatus.NEEDS_REVISION


class TestSetStatus:
    """Tests for the free-choice override."""

    def test_any_state_can_follow_any_state(self):
        for current in ALL_STATES:
            for requested in ALL_STATES:
                assert workflow.set_status(current, requested) == requested


class TestNormalizeStatus:
    """Tests for the legacy status compatibility mapping."""

    @pytest.mark.parametrize("raw,expected", [
        ("in_progress", ProjectStatus.DRAFT),
        ("pending_review", ProjectStatus.CLIENT_REVIEW),
        ("approved", ProjectStatus.APPROVED),
        ("needs_revision", ProjectStatus.NEEDS_REVISION),
        ("final_delivered", ProjectStatus.FINAL_DELIVERED),
        ("archived", ProjectStatus.DRAFT),
        ("", ProjectStatus.DRAFT),
        (None, ProjectStatus.DRAFT),
    ])
    def test_mapping(self, raw, expected):
        assert workflow.normalize_status(raw) == expected

    def test_current_values_map_to_themselves(self):
        for state in ALL_STATES:
            assert workflow.normalize_status(state.value) == state
            assert workflow.normalize_status(state) is state


class TestLabels:
    """Tests for display names and action labels."""

    def test_display_names(self):
        assert workflow.display_name(ProjectStatus.EDITOR_REVIEW) == "Editor Review"
        assert workflow.display_name(ProjectStatus.FINAL_DELIVERED) == "Final Delivered"

    def test_advance_labels(self):
        assert workflow.advance_label(ProjectStatus.DRAFT) == "Send to Review"
        assert workflow.advance_label(ProjectStatus.EDITOR_REVIEW) == "Send to Client"
        assert workflow.advance_label(ProjectStatus.CLIENT_REVIEW) == "Approve"
        assert workflow.advance_label(ProjectStatus.NEEDS_REVISION) == "Resubmit"
        assert workflow.advance_label(ProjectStatus.APPROVED) == "Mark Final"
        assert workflow.advance_label(ProjectStatus.FINAL_DELIVERED) is None
