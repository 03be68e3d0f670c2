"""
PII redaction for the SES event sub-documents.

Each redactor mutates its sub-document in place and silently skips fields
that are missing or hold an unexpected type.
"""

import logging
from typing import Any, Dict, List, Optional

from services.document import get_mapping, get_sequence, get_string, iter_mappings
from services.masking import mask_email

logger = logging.getLogger(__name__)

OMITTED_SUBJECT = "**Omitted**"


def _mask_address_list(addresses: Optional[List[Any]]) -> None:
    """Mask every string element of an address list in place."""
    if addresses is None:
        return
    for i, address in enumerate(addresses):
        if isinstance(address, str):
            addresses[i] = mask_email(address)


def _mask_recipient_objects(recipients: Optional[List[Any]]) -> None:
    """Mask the emailAddress field of each recipient object in place."""
    for recipient in iter_mappings(recipients):
        email_address = get_string(recipient, 'emailAddress')
        if email_address is not None:
            recipient['emailAddress'] = mask_email(email_address)


def redact_delivery(delivery: Dict[str, Any]) -> None:
    """Mask delivery.recipients."""
    _mask_address_list(get_sequence(delivery, 'recipients'))


def redact_mail(mail: Dict[str, Any]) -> None:
    """
    Mask recipient addresses and omit subjects in a mail sub-document.

    Touches mail.destination, mail.commonHeaders.to, mail.commonHeaders.subject
    and the "To"/"Subject" entries of mail.headers.

    Note:
        commonHeaders.subject is always written when commonHeaders exists,
        even if the event had no subject.
    """
    _mask_address_list(get_sequence(mail, 'destination'))

    common_headers = get_mapping(mail, 'commonHeaders')
    if common_headers is not None:
        _mask_address_list(get_sequence(common_headers, 'to'))
        common_headers['subject'] = OMITTED_SUBJECT

    for header in iter_mappings(get_sequence(mail, 'headers')):
        name = get_string(header, 'name')
        if name == 'To':
            value = get_string(header, 'value')
            if value is not None:
                header['value'] = mask_email(value)
        elif name == 'Subject':
            header['value'] = OMITTED_SUBJECT


def redact_bounce(bounce: Dict[str, Any]) -> None:
    """Mask bounce.bouncedRecipients[*].emailAddress."""
    _mask_recipient_objects(get_sequence(bounce, 'bouncedRecipients'))


def redact_complaint(complaint: Dict[str, Any]) -> None:
    """Mask complaint.complainedRecipients[*].emailAddress."""
    _mask_recipient_objects(get_sequence(complaint, 'complainedRecipients'))


def redact_delivery_delay(delivery_delay: Dict[str, Any]) -> None:
    """Mask deliveryDelay.delayedRecipients[*].emailAddress."""
    _mask_recipient_objects(get_sequence(delivery_delay, 'delayedRecipients'))


# Top-level event key -> redactor, in the order they are applied
REDACTORS = {
    'delivery': redact_delivery,
    'mail': redact_mail,
    'bounce': redact_bounce,
    'complaint': redact_complaint,
    'deliveryDelay': redact_delivery_delay,
}


def redact_event(event: Dict[str, Any]) -> List[str]:
    """
    Apply every applicable redactor to a decoded SES event.

    Args:
        event: Decoded event document (mutated in place)

    Returns:
        List[str]: Top-level keys that were redacted
    """
    redacted = []
    for key, redactor in REDACTORS.items():
        sub_document = get_mapping(event, key)
        if sub_document is None:
            continue
        redactor(sub_document)
        redacted.append(key)

    if not redacted:
        logger.debug("No recognized SES sub-documents in event")
    return redacted
