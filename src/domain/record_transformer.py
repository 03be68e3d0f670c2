"""
Record transformation pipeline - core business logic.

This module handles the redaction of a single Firehose record:
1. Decode the payload as a UTF-8 JSON object
2. Redact PII in the recognized SES sub-documents
3. Re-encode the document
4. Return result (success or failure)

Decode and encode failures are returned as TransformResult with success=False.
No exceptions propagate out of the public methods for these failure kinds.
"""

import json
import logging
from typing import Any, Dict

from .models import FirehoseRecord, TransformResult
from services import redaction as redaction_service

logger = logging.getLogger(__name__)


# ============================================================================
# Custom Exception Classes
# ============================================================================

class RecordTransformError(ValueError):
    """Base class for per-record transformation failures."""
    pass


class RecordDecodeError(RecordTransformError):
    """Raised when a payload is not a UTF-8 JSON object."""
    pass


class RecordEncodeError(RecordTransformError):
    """Raised when a redacted document cannot be serialized."""
    pass


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


class RecordTransformer:
    """
    Redacts PII from SES event records.

    Stateless; a single instance is reused across records and invocations.
    Returns TransformResult for explicit success/failure handling.
    """

    def transform_record(self, record: FirehoseRecord) -> TransformResult:
        """
        Transform a single Firehose record.

        Args:
            record: Firehose record with decoded payload bytes

        Returns:
            TransformResult with success=True and redacted bytes, or
            success=False with the decode/encode error message
        """
        try:
            document = self._decode(record.data)
            redacted = redaction_service.redact_event(document)
            logger.debug(f"Record {record.record_id}: redacted {redacted}")
            data = self._encode(document)

        except RecordDecodeError as e:
            logger.error(f"Failed to decode record data for record {record.record_id}: {e}")
            return TransformResult.failed(record.record_id, str(e))

        except RecordEncodeError as e:
            logger.error(f"Failed to encode record data for record {record.record_id}: {e}")
            return TransformResult.failed(record.record_id, str(e))

        return TransformResult.ok(record.record_id, data)

    def _decode(self, data: bytes) -> Dict[str, Any]:
        """
        Decode payload bytes into an event document.

        Raises:
            RecordDecodeError: If the bytes are not UTF-8, not valid JSON,
                use NaN/Infinity, or do not hold a JSON object
        """
        try:
            document = json.loads(data.decode('utf-8'), parse_constant=_reject_constant)
        except ValueError as e:
            raise RecordDecodeError(str(e)) from e

        if not isinstance(document, dict):
            raise RecordDecodeError(
                f"Expected a JSON object, got {type(document).__name__}"
            )
        return document

    def _encode(self, document: Dict[str, Any]) -> bytes:
        """
        Encode an event document as compact UTF-8 JSON, keeping key order.

        Raises:
            RecordEncodeError: If the document cannot be serialized
        """
        try:
            text = json.dumps(
                document,
                ensure_ascii=False,
                separators=(',', ':'),
                allow_nan=False
            )
            return text.encode('utf-8')
        except (TypeError, ValueError) as e:
            raise RecordEncodeError(str(e)) from e
