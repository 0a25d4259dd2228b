"""Best-effort email dispatch.

Delivery problems are logged and reported as False. They never propagate, so
a failing mailer cannot roll back the operation that triggered the email.
"""

import structlog

from storefront.notifications import get_mailer

logger = structlog.get_logger(__name__)


def notify(template, recipient: str, context: dict) -> bool:
    template = getattr(template, "value", template)

    if not recipient:
        logger.warning("Email skipped: no recipient", template=template)
        return False

    try:
        delivered = get_mailer().send(template, recipient, context)
    except Exception as exc:
        logger.error("Email dispatch failed", template=template, recipient=recipient, error=str(exc))
        return False

    if delivered:
        logger.info("Email sent", template=template, recipient=recipient)
    else:
        logger.warning("Email rejected by mailer", template=template, recipient=recipient)
    return delivered
