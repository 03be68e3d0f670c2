"""
Email address masking for SES event payloads.

Addresses are masked with a partial-reveal scheme: the first character of the
local part and the first/last characters of the domain stay visible, the rest
become asterisks.

Example:
    >>> mask_email("User One <user1@example.com>, user2@example.com")
    'u****@e*********m,u****@e*********m'
"""

import re2
from typing import List

# Only recognized email shape; display names and angle brackets fall outside the match.
# Compiled with RE2 for linear-time matching
EMAIL_PATTERN = re2.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')


def _mask_local_part(local_part: str) -> str:
    if len(local_part) > 1:
        return local_part[0] + '*' * (len(local_part) - 1)
    return local_part


def _mask_domain_part(domain_part: str) -> str:
    if len(domain_part) > 2:
        return domain_part[0] + '*' * (len(domain_part) - 2) + domain_part[-1]
    return domain_part


def find_email_addresses(value: str) -> List[str]:
    """Return every email-shaped substring of value, left to right."""
    return EMAIL_PATTERN.findall(value)


def mask_email(value: str) -> str:
    """
    Mask every email address embedded in a string.

    Args:
        value: Free-form string, e.g. a recipient or a raw "To" header value
            ("Name <a@b.com>, c@d.org")

    Returns:
        str: Masked addresses joined by "," (surrounding text is dropped), or
        the original string unchanged if it holds no email address
    """
    addresses = find_email_addresses(value)
    if not addresses:
        return value

    masked = []
    for address in addresses:
        local_part, domain_part = address.split('@', 1)
        masked.append(f"{_mask_local_part(local_part)}@{_mask_domain_part(domain_part)}")

    return ','.join(masked)
