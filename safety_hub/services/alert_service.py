"""
Emergency alert - SIMULATED.

Pressing SOS only produces the confirmation the user sees. Nothing is sent
to trusted contacts or authorities; `dispatched` is always False so callers
can tell the placeholder apart from a real notification path.
"""

from dataclasses import dataclass
from typing import List
import logging

from safety_hub.models.base import Notification
from safety_hub.models.user import Identity

logger = logging.getLogger(__name__)

ALERT_TITLE = "Emergency Alert Sent"
ALERT_DESCRIPTION = "Your location and alert have been sent to trusted contacts and authorities."


@dataclass
class EmergencyAlert:
    notification: Notification
    location: str
    trusted_contacts: int
    dispatched: bool = False


def trigger_emergency_alert(identity: Identity, location: str, contacts: List[str]) -> EmergencyAlert:
    """
    Produce the SOS confirmation for the signed-in user.
    """
    logger.warning(
        f"SOS pressed by {identity.uid} at {location!r} "
        f"({len(contacts)} trusted contacts); alert dispatch is not implemented"
    )
    return EmergencyAlert(
        notification=Notification.error(ALERT_DESCRIPTION, title=ALERT_TITLE),
        location=location,
        trusted_contacts=len(contacts),
    )
