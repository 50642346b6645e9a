"""
Status Workflow - which complaint status changes an admin may make.

RULES:
- Any status may move to any other status (submitted -> closed is legal)
- Re-applying the current status is an idempotent no-op
- A complaint's current status is never offered as a transition
"""

from typing import List

from safety_hub.models.complaint import ComplaintStatus


class StatusWorkflowEngine:
    """
    Unordered workflow over the four complaint statuses.
    """

    @classmethod
    def get_allowed_transitions(cls, current_status: ComplaintStatus) -> List[ComplaintStatus]:
        """
        Statuses offered as actions for a complaint: every status except the
        current one.
        """
        return [status for status in ComplaintStatus if status != current_status]
