"""
Change notification for attendance requests.

``request_created`` is sent after the transaction that stored a request
commits. Receivers get the stored ``AttendanceRequest`` as ``request``.
Delivery is in-process and best effort; a partner that misses a signal
still sees the request on the next read.
"""

import logging
from typing import Callable

from django.db import transaction
from django.dispatch import Signal

logger = logging.getLogger(__name__)

request_created = Signal()


def publish_request_created(attendance_request) -> None:
    """Send ``request_created`` once the current transaction commits."""
    transaction.on_commit(
        lambda: request_created.send_robust(sender=type(attendance_request), request=attendance_request)
    )


def subscribe_to_requests(partner_id, callback: Callable) -> Callable[[], None]:
    """
    Call ``callback(request)`` for every new request addressed to ``partner_id``.

    Returns:
        A function that removes the subscription
    """
    def receiver(sender, request, **kwargs):
        if request.partner_id == partner_id:
            callback(request)

    request_created.connect(receiver, weak=False)
    logger.debug("Subscribed to requests for partner %s", partner_id)

    def unsubscribe():
        request_created.disconnect(receiver)

    return unsubscribe
