# scheduler.py
import logging

from google.cloud import scheduler_v1

from config import ScheduleConfig, load_schedule_config

logger = logging.getLogger(__name__)

HOURLY = "0 * * * *"


def _is_bound(job, target_uri: str) -> bool:
    """A job is ours if it calls the run-sync function URL."""
    target = getattr(job, "http_target", None)
    return bool(target) and target.uri == target_uri


def _matches(job, desired) -> bool:
    return (
        job.name == desired.name
        and job.schedule == desired.schedule
        and job.time_zone == desired.time_zone
    )


def desired_job(config: ScheduleConfig) -> scheduler_v1.Job:
    http_target = scheduler_v1.HttpTarget(
        uri=config.target_uri,
        http_method=scheduler_v1.HttpMethod.POST,
    )
    if config.service_account:
        http_target.oidc_token = scheduler_v1.OidcToken(
            service_account_email=config.service_account,
            audience=config.target_uri,
        )
    return scheduler_v1.Job(
        name=config.job_name,
        description="Hourly spreadsheet -> GitHub CSV sync",
        schedule=HOURLY,
        time_zone=config.time_zone,
        http_target=http_target,
    )


def install_schedule(config: ScheduleConfig | None = None, client=None):
    """
    Make sure exactly one hourly job calls the run-sync function.

    Jobs bound to the function URL that do not match the desired job are
    deleted; the desired job is created only if it is missing. Jobs pointing
    anywhere else are left alone.
    """
    config = config or load_schedule_config()
    client = client or scheduler_v1.CloudSchedulerClient()
    desired = desired_job(config)

    bound = [job for job in client.list_jobs(parent=config.parent)
             if _is_bound(job, config.target_uri)]

    kept = None
    for job in bound:
        if kept is None and _matches(job, desired):
            kept = job
            continue
        client.delete_job(name=job.name)
        logger.info("Deleted old sync job %s", job.name)

    if kept is not None:
        logger.info("Hourly sync job already in place: %s", kept.name)
        return kept

    created = client.create_job(parent=config.parent, job=desired)
    logger.info("Installed hourly sync job %s (%s, %s)", created.name, HOURLY, config.time_zone)
    return created
