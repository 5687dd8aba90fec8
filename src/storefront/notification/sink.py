"""Notification sink: persist a message for a user.

The single entry point other parts of the storefront use to reach a
customer's inbox.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.notification.notification import Notification

logger = structlog.get_logger(__name__)


def notify(user_id, title: str, message: str) -> Notification | None:
    """Create and store a notification. Returns None when there is no recipient."""
    if not user_id:
        logger.warning("Notification skipped, no recipient", title=title)
        return None

    notification = Notification.create(user_id=str(user_id), title=title, message=message)
    current_domain.repository_for(Notification).add(notification)

    logger.info("Notification stored", user_id=str(user_id), title=title)
    return notification
