"""
Click CLI for alarmsync.

``analyze`` builds plan.json from the live inventory, ``deploy`` applies it.
"""

import json
import logging
import sys
from typing import Any, Dict

import click
from botocore.exceptions import BotoCoreError

from .aws.alarms import AlarmSettings
from .aws.inventory import list_alarm_names, list_queue_names
from .config import SyncConfig
from .errors import AlarmSyncError, ConfigError, PlanError, PlanNotFoundError
from .executor import PlanExecutor
from .plan import diff, dumps_plan, plan_to_dict, read_plan, write_plan

logger = logging.getLogger("alarmsync")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PLAN_UNAVAILABLE = 2

BANNER = "=" * 42


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _json_output(data: Dict[str, Any]) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=None))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, verbose):
    """
    Alarmsync - keep CloudWatch alarms in step with SQS queues.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = SyncConfig.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_FAILED)


@main.command()
@click.option("--region", help="AWS region (default: $AWS_REGION or us-east-1)")
@click.option("--suffix", help="Alarm name suffix (default: $ALARM_SUFFIX or -cloudwatch-alarm)")
@click.option("--threshold", type=int, help="Threshold for non dead-letter queues (default: $ALARM_THRESHOLD or 5)")
@click.option("--output", "-o", "output", help="Plan file to write (default: $ALARM_PLAN_PATH or plan.json)")
@click.option("--json", "output_json", is_flag=True, help="Output machine-readable JSON")
@click.pass_context
def analyze(ctx, region, suffix, threshold, output, output_json):
    """
    Diff queues against alarms and write a plan.
    """
    try:
        config = ctx.obj["config"].with_overrides(
            region=region, alarm_suffix=suffix, default_threshold=threshold, plan_path=output
        )

        logger.info(BANNER)
        logger.info("Build Stage: Analyzing SQS Queues")
        logger.info(BANNER)

        logger.info("Fetching SQS queues...")
        queues = list_queue_names(config.region)
        logger.info("Fetching CloudWatch alarms...")
        alarms = list_alarm_names(config.region, config.alarm_suffix)

        logger.info("Analyzing differences...")
        plan = diff(queues, alarms, config.alarm_suffix, config.default_threshold, region=config.region)

        plan_file = write_plan(plan, config.plan_path)
        logger.info(f"Plan saved to {plan_file}")
        logger.info(BANNER)
        logger.info("Summary:")
        logger.info(f"  Alarms to create: {plan.summary.to_create}")
        logger.info(f"  Alarms to delete: {plan.summary.to_delete}")
        logger.info(BANNER)
    except AlarmSyncError as e:
        if output_json:
            _json_output({"error": str(e)})
        else:
            click.echo(f"Analysis failed: {e}", err=True)
        sys.exit(EXIT_FAILED)

    if output_json:
        _json_output({"plan_path": str(plan_file), "plan": plan_to_dict(plan)})
    else:
        click.echo(dumps_plan(plan), nl=False)


@main.command()
@click.option("--plan", "plan_path", help="Plan file to apply (default: $ALARM_PLAN_PATH or plan.json)")
@click.option("--topic-arn", help="SNS topic for alarm actions and the summary (default: $SNS_TOPIC_ARN)")
@click.option("--period", type=int, help="Alarm period in seconds (default: $ALARM_PERIOD or 60)")
@click.option("--json", "output_json", is_flag=True, help="Output machine-readable JSON")
@click.pass_context
def deploy(ctx, plan_path, topic_arn, period, output_json):
    """
    Apply a plan written by analyze.
    """
    try:
        config = ctx.obj["config"].with_overrides(plan_path=plan_path, topic_arn=topic_arn, period=period)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_FAILED)

    try:
        plan = read_plan(config.plan_path)
    except PlanError as e:
        logger.error(f"ERROR: {e}")
        if isinstance(e, PlanNotFoundError):
            logger.error("Make sure the analyze stage completed successfully.")
        if output_json:
            _json_output({"error": str(e)})
        sys.exit(EXIT_PLAN_UNAVAILABLE)

    logger.info(BANNER)
    logger.info("Deploy Stage: Executing Alarm Changes")
    logger.info(BANNER)
    logger.info(f"Region: {plan.region}")
    logger.info(f"Alarms to create: {plan.summary.to_create}")
    logger.info(f"Alarms to delete: {plan.summary.to_delete}")

    settings = AlarmSettings(topic_arn=config.topic_arn, period=config.period)
    try:
        executor = PlanExecutor.for_plan(plan, settings)
    except (BotoCoreError, ValueError) as e:
        logger.error(f"ERROR: Cannot use region '{plan.region}' from plan: {e}")
        if output_json:
            _json_output({"error": str(e)})
        sys.exit(EXIT_PLAN_UNAVAILABLE)

    outcome = executor.execute(plan)

    logger.info(BANNER)
    logger.info("Deployment Complete")
    logger.info(BANNER)
    logger.info(f"Alarms created:  {outcome.created}")
    logger.info(f"Alarms deleted:  {outcome.deleted}")
    logger.info(f"Failed operations: {outcome.failed}")
    logger.info(BANNER)

    if output_json:
        _json_output({"region": plan.region, **outcome.to_dict()})
    else:
        click.echo(f"Created: {outcome.created}  Deleted: {outcome.deleted}  Failed: {outcome.failed}")

    sys.exit(EXIT_OK if outcome.success else EXIT_FAILED)


@main.command()
@click.option("--plan", "plan_path", help="Plan file to show (default: $ALARM_PLAN_PATH or plan.json)")
@click.pass_context
def show(ctx, plan_path):
    """
    Validate a plan and print what it would do.
    """
    path = plan_path or ctx.obj["config"].plan_path
    try:
        plan = read_plan(path)
    except PlanError as e:
        click.echo(f"Invalid plan: {e}", err=True)
        sys.exit(EXIT_PLAN_UNAVAILABLE)

    click.echo(f"Region: {plan.region}")
    click.echo(f"Alarm suffix: {plan.alarm_suffix}")
    for action in plan.create:
        click.echo(f"  [CREATE] {action.alarm} (queue: {action.queue}, threshold: {action.threshold})")
    for action in plan.delete:
        click.echo(f"  [DELETE] {action.alarm}")
    click.echo(f"To create: {plan.summary.to_create}, to delete: {plan.summary.to_delete}")


if __name__ == "__main__":
    main()
