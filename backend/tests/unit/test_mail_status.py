"""Unit tests for mail status transitions"""

import pytest

from domain.mail import ALLOWED_TRANSITIONS, MailStatus, can_transition


class TestMailStatusTransitions:
    """Test the mail item state machine"""

    def test_new_items_start_pending(self):
        """Only PENDING is reachable from nothing"""
        assert can_transition(None, MailStatus.PENDING) is True
        assert can_transition(None, MailStatus.RECEIVED) is False

    def test_pending_to_received_allowed(self):
        assert can_transition(MailStatus.PENDING, MailStatus.RECEIVED) is True

    def test_received_is_terminal_for_normal_flow(self):
        """Reverting to pending is an edit, not a transition"""
        assert can_transition(MailStatus.RECEIVED, MailStatus.PENDING) is False
        assert can_transition(MailStatus.RECEIVED, MailStatus.RECEIVED) is False
        assert ALLOWED_TRANSITIONS[MailStatus.RECEIVED] == []

    def test_every_status_has_an_entry(self):
        for status in MailStatus:
            assert status in ALLOWED_TRANSITIONS

    @pytest.mark.parametrize("status,value", [
        (MailStatus.PENDING, "pending"),
        (MailStatus.RECEIVED, "received"),
    ])
    def test_status_values(self, status, value):
        """Stored values are lower-case strings"""
        assert status.value == value
        assert MailStatus(value) is status
