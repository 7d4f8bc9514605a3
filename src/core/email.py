"""Email utilities for templated emails with an optional HTML part."""

from __future__ import annotations

import logging
from typing import Sequence

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template import TemplateDoesNotExist
from django.template.loader import render_to_string

logger = logging.getLogger("spadesk")


def send_templated_email(
    *,
    subject: str,
    template_name: str,
    context: dict,
    recipient_list: Sequence[str],
    from_email: str | None = None,
    fail_silently: bool = False,
) -> int:
    """Render and send an email from ``<template_name>.txt``.

    *template_name* is the base name **without** extension,
    e.g. ``"emails/low_stock"``. A sibling ``.html`` template, when it
    exists, is attached as the HTML alternative.

    Returns the number of emails successfully sent (0 or 1).
    """
    recipients = [address for address in recipient_list if address]
    if not recipients:
        return 0

    sender = from_email or getattr(settings, "DEFAULT_FROM_EMAIL", None)
    text_body = render_to_string(f"{template_name}.txt", context).strip()

    msg = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=sender,
        to=recipients,
    )
    try:
        html_body = render_to_string(f"{template_name}.html", context)
    except TemplateDoesNotExist:
        html_body = None
    if html_body:
        msg.attach_alternative(html_body, "text/html")

    sent = msg.send(fail_silently=fail_silently)
    logger.info("Email '%s' sent to %d recipient(s)", subject, len(recipients))
    return sent
