import base64
import json
import boto3
import os
import logging

logger = logging.getLogger()
logger.setLevel(logging.INFO)

codedeploy = boto3.client('codedeploy')
lambda_client = boto3.client('lambda')

SMOKE_RECORD_ID = 'pre-deployment-ses-event'
SMOKE_BAD_RECORD_ID = 'pre-deployment-invalid-json'
SMOKE_ADDRESS = 'smoke.test@example.com'
OMITTED_SUBJECT = '**Omitted**'


def _encode(payload):
    return base64.b64encode(payload).decode('ascii')


def build_test_event():
    """
    Build a synthetic Firehose batch: one SES mail event and one record
    whose payload is not JSON.
    """
    ses_event = {
        'eventType': 'Delivery',
        'mail': {
            'destination': [SMOKE_ADDRESS],
            'commonHeaders': {
                'to': [f'Smoke Test <{SMOKE_ADDRESS}>'],
                'subject': 'Pre-traffic smoke test'
            }
        }
    }
    return {
        'invocationId': 'pre-traffic-hook',
        'records': [
            {
                'recordId': SMOKE_RECORD_ID,
                'data': _encode(json.dumps(ses_event).encode('utf-8'))
            },
            {
                'recordId': SMOKE_BAD_RECORD_ID,
                'data': _encode(b'not valid json')
            }
        ]
    }


def validate_response(response_payload):
    """
    Check the transformation response for the synthetic batch.

    Raises:
        Exception: If any record is missing, misrouted or not redacted
    """
    records = response_payload.get('records')
    if not isinstance(records, list) or len(records) != 2:
        raise Exception(f"Expected 2 response records, got: {records}")

    good, bad = records
    if good.get('recordId') != SMOKE_RECORD_ID or bad.get('recordId') != SMOKE_BAD_RECORD_ID:
        raise Exception("Response record ids do not match input order")

    if good.get('result') != 'Ok':
        raise Exception(f"SES event was not transformed: {good.get('result')}")
    if bad.get('result') != 'ProcessingFailed':
        raise Exception(f"Invalid record was not flagged: {bad.get('result')}")

    transformed = base64.b64decode(good['data']).decode('utf-8')
    if SMOKE_ADDRESS in transformed:
        raise Exception("Email address was not redacted")

    mail = json.loads(transformed)['mail']
    if mail['commonHeaders'].get('subject') != OMITTED_SUBJECT:
        raise Exception("Subject was not omitted")


def run_smoke_test(target_function):
    """Invoke the new function version with the synthetic batch and validate it."""
    response = lambda_client.invoke(
        FunctionName=target_function,
        InvocationType='RequestResponse',
        Payload=json.dumps(build_test_event())
    )
    response_payload = json.loads(response['Payload'].read())

    if response.get('FunctionError'):
        raise Exception(f"Function returned error: {response_payload}")
    if response.get('StatusCode') != 200:
        raise Exception(f"Unexpected status code: {response.get('StatusCode')}")

    validate_response(response_payload)


def report_status(event, status):
    """Tell CodeDeploy whether the lifecycle hook passed."""
    codedeploy.put_lifecycle_event_hook_execution_status(
        deploymentId=event['DeploymentId'],
        lifecycleEventHookExecutionId=event['LifecycleEventHookExecutionId'],
        status=status
    )


def lambda_handler(event, context):
    """
    CodeDeploy BeforeAllowTraffic hook.

    Smoke-tests redaction and per-record failure isolation on the new
    version; a Failed status stops the deployment.
    """
    target_function = os.environ.get('TARGET_FUNCTION')
    logger.info(f"Pre-traffic hook for deployment {event.get('DeploymentId')}, target={target_function}")

    try:
        if not target_function:
            raise ValueError("TARGET_FUNCTION environment variable is not set")
        run_smoke_test(target_function)
    except Exception as e:
        logger.error(f"Redaction smoke test failed on {target_function}: {e}", exc_info=True)
        report_status(event, 'Failed')
        return {'statusCode': 500, 'body': json.dumps(f'Pre-traffic validation failed: {e}')}

    logger.info(f"Redaction smoke test passed on {target_function}")
    report_status(event, 'Succeeded')
    return {'statusCode': 200, 'body': json.dumps('Pre-traffic validation succeeded')}
