"""
Utility functions for the Firehose transformation handler.

This package contains the PII-redaction primitives: email masking, safe
document access and the per-shape SES event redactors.
"""

__all__ = ['document', 'masking', 'redaction']
