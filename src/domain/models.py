"""
Data models for the Firehose transformation domain.

These type-safe data structures define clear contracts between the handler,
the batch dispatcher and the record transformer.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Firehose transformation result values
RESULT_OK = 'Ok'
RESULT_PROCESSING_FAILED = 'ProcessingFailed'


@dataclass
class FirehoseRecord:
    """
    One record of a Firehose data-transformation batch.

    Attributes:
        record_id: Opaque Firehose record identifier (copied to the response)
        data: Raw payload bytes (base64-decoded)
    """
    record_id: str
    data: bytes

    @classmethod
    def from_event(cls, record: Dict[str, Any]) -> 'FirehoseRecord':
        """
        Build a record from a Firehose event record.

        Args:
            record: Event record dict with 'recordId' and base64 'data'

        Returns:
            FirehoseRecord with decoded payload bytes

        Raises:
            ValueError: If 'data' is missing or not valid base64
        """
        record_id = record.get('recordId', 'UNKNOWN')
        encoded = record.get('data')
        if not isinstance(encoded, str):
            raise ValueError(f"Record {record_id} has no base64 'data' field")

        try:
            data = base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Record {record_id} data is not valid base64: {e}")

        return cls(record_id=record_id, data=data)

    def __repr__(self) -> str:
        """Representation for logging; never includes the payload."""
        return f"FirehoseRecord(record_id={self.record_id}, size={len(self.data)})"


@dataclass
class TransformResult:
    """
    Result of transforming one Firehose record.

    This explicit result type keeps per-record failures from crossing the
    batch boundary as exceptions.

    Attributes:
        success: Whether the record was decoded, redacted and re-encoded
        record_id: Firehose record identifier
        data: Transformed payload bytes (only on success)
        error_message: Error description (only on failure)
    """
    success: bool
    record_id: str
    data: Optional[bytes] = None
    error_message: Optional[str] = None

    @classmethod
    def ok(cls, record_id: str, data: bytes) -> 'TransformResult':
        return cls(success=True, record_id=record_id, data=data)

    @classmethod
    def failed(cls, record_id: str, error_message: str) -> 'TransformResult':
        return cls(success=False, record_id=record_id, error_message=error_message)

    @property
    def result(self) -> str:
        """Firehose result value for this record."""
        return RESULT_OK if self.success else RESULT_PROCESSING_FAILED

    def to_response(self) -> Dict[str, Any]:
        """
        Convert to a Firehose response record.

        Returns:
            Dict with recordId, result and (on success) base64 data
        """
        response = {
            'recordId': self.record_id,
            'result': self.result,
        }
        if self.success and self.data is not None:
            response['data'] = base64.b64encode(self.data).decode('ascii')
        return response

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"TransformResult(success=True, record_id={self.record_id})"
        else:
            return f"TransformResult(success=False, record_id={self.record_id}, error={self.error_message})"
