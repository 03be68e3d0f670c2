import json
import boto3
import os
import logging
from datetime import datetime, timedelta, timezone

logger = logging.getLogger()
logger.setLevel(logging.INFO)

codedeploy = boto3.client('codedeploy')
cloudwatch = boto3.client('cloudwatch')

ERROR_THRESHOLD = int(os.environ.get('ERROR_THRESHOLD', '0'))
METRIC_WINDOW_MINUTES = int(os.environ.get('METRIC_WINDOW_MINUTES', '5'))


def count_errors(function_name, window_minutes=METRIC_WINDOW_MINUTES):
    """Sum the AWS/Lambda Errors metric for a function over the last window."""
    end_time = datetime.now(timezone.utc)
    start_time = end_time - timedelta(minutes=window_minutes)

    response = cloudwatch.get_metric_statistics(
        Namespace='AWS/Lambda',
        MetricName='Errors',
        Dimensions=[
            {
                'Name': 'FunctionName',
                'Value': function_name
            }
        ],
        StartTime=start_time,
        EndTime=end_time,
        Period=window_minutes * 60,
        Statistics=['Sum']
    )

    logger.info(f"CloudWatch metrics: {json.dumps(response, default=str)}")
    return sum(point.get('Sum', 0) for point in response.get('Datapoints', []))


def report_status(event, status):
    """Tell CodeDeploy whether the lifecycle hook passed."""
    codedeploy.put_lifecycle_event_hook_execution_status(
        deploymentId=event['DeploymentId'],
        lifecycleEventHookExecutionId=event['LifecycleEventHookExecutionId'],
        status=status
    )


def lambda_handler(event, context):
    """
    CodeDeploy AfterAllowTraffic hook.

    Fails the deployment (triggering rollback) when the new version's error
    count over the metric window exceeds ERROR_THRESHOLD.
    """
    target_function = os.environ.get('TARGET_FUNCTION')
    logger.info(f"Post-traffic hook for deployment {event.get('DeploymentId')}, target={target_function}")

    try:
        if not target_function:
            raise ValueError("TARGET_FUNCTION environment variable is not set")

        errors = count_errors(target_function)
        if errors > ERROR_THRESHOLD:
            raise Exception(
                f"Error count {errors:g} exceeds threshold {ERROR_THRESHOLD} "
                f"in the last {METRIC_WINDOW_MINUTES} minutes"
            )
    except Exception as e:
        logger.error(f"Error metric check failed on {target_function}: {e}", exc_info=True)
        report_status(event, 'Failed')
        return {'statusCode': 500, 'body': json.dumps(f'Post-traffic validation failed: {e}')}

    logger.info(f"{target_function}: {errors:g} error(s) in the last {METRIC_WINDOW_MINUTES} minutes")
    report_status(event, 'Succeeded')
    return {'statusCode': 200, 'body': json.dumps('Post-traffic validation succeeded')}
