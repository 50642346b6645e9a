"""
Location capture - formats the browser's one-shot geolocation result.

Best effort only: no continuous tracking, no retry. Anything other than a
usable coordinate pair yields the "Location not available" sentinel.
"""

import logging
from typing import Optional

from safety_hub.models.complaint import LOCATION_UNAVAILABLE
from safety_hub.models.dashboard import DevicePosition

logger = logging.getLogger(__name__)


def format_location(latitude: float, longitude: float) -> str:
    return f"{latitude:.4f}, {longitude:.4f}"


def capture_location(position: Optional[DevicePosition]) -> str:
    """
    Turn a geolocation result into the stored location string.

    Args:
        position: What the device reported, or None if geolocation is
            unsupported

    Returns:
        "lat, lon" with 4 decimals, or LOCATION_UNAVAILABLE
    """
    if position is None:
        return LOCATION_UNAVAILABLE

    if position.error:
        logger.info(f"Location error: {position.error}")
        return LOCATION_UNAVAILABLE

    lat, lon = position.latitude, position.longitude
    if lat is None or lon is None:
        return LOCATION_UNAVAILABLE

    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        logger.warning(f"Ignoring out-of-range position: {lat}, {lon}")
        return LOCATION_UNAVAILABLE

    return format_location(lat, lon)
