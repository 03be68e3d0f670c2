"""
AWS Lambda handler for redacting PII from SES events in a Firehose stream.

Thin orchestration layer that delegates each record to RecordTransformer.
Policy: every input record gets a response. Failed records are marked
ProcessingFailed for Firehose to route; the batch itself never fails.
"""

import json
import os
import logging
from typing import Dict, Any, List

from domain.models import FirehoseRecord, TransformResult
from domain.record_transformer import RecordTransformer
from services.redaction import REDACTORS

# Environment variables
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
ENVIRONMENT = os.environ.get('ENVIRONMENT', 'dev')

# Configure logging
logger = logging.getLogger()
logger.setLevel(LOG_LEVEL)

# Add console handler for local testing (AWS Lambda provides handlers automatically)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVEL)
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

# Initialize transformer once at module level (reused across invocations)
record_transformer = RecordTransformer()


def process_records(records: List[Any]) -> List[TransformResult]:
    """
    Transform a batch of Firehose event records in order.

    Args:
        records: Firehose event records (dicts with recordId and base64 data)

    Returns:
        List[TransformResult]: One result per input record, same order
    """
    results = []
    for raw_record in records:
        record_id = raw_record.get('recordId', 'UNKNOWN') if isinstance(raw_record, dict) else 'UNKNOWN'

        try:
            record = FirehoseRecord.from_event(raw_record)
            result = record_transformer.transform_record(record)
        except Exception as e:
            logger.error(f"Failed to process record {record_id}: {e}", exc_info=True)
            result = TransformResult.failed(record_id, str(e))

        if result.success:
            logger.debug(f"✓ Redacted record {result.record_id}")
        else:
            logger.warning(
                f"⚠ Record {result.record_id} marked {result.result}: "
                f"{result.error_message}"
            )
        results.append(result)

    return results


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Redact SES event records delivered by a Firehose transformation.

    Args:
        event: Firehose transformation event with 'records'
        context: Lambda context

    Returns:
        Dict with 'records': recordId, result and (on success) base64 data
    """
    logger.info("=" * 70)
    logger.info("SES Event Redactor - Started")
    logger.info("=" * 70)

    records = event.get('records', [])
    if not isinstance(records, list):
        logger.error(f"Invalid 'records' field: expected list, got {type(records).__name__}")
        records = []
    logger.info(f"Processing batch of {len(records)} record(s)")

    results = process_records(records)

    # Log summary
    logger.info("=" * 70)
    logger.info(f"Batch processing complete: {len(results)} record(s)")
    success_count = sum(1 for r in results if r.success)
    error_count = len(results) - success_count
    logger.info(f"  Ok: {success_count}")
    logger.info(f"  ProcessingFailed: {error_count}")
    logger.info("=" * 70)

    return {'records': [r.to_response() for r in results]}


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Report the deployed configuration and the SES event shapes this function redacts."""
    body = {
        'status': 'healthy',
        'environment': ENVIRONMENT,
        'logLevel': LOG_LEVEL,
        'redactedShapes': list(REDACTORS),
    }
    return {'statusCode': 200, 'body': json.dumps(body)}
