from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .backend.connection import ApiConfig, ApiConnection
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_API_TIMEOUT_SECONDS, DEFAULT_GRACE_MINUTES
from .daily_targets.http_daily_target_repository import HttpDailyTargetRepository
from .daily_targets.repository import DailyTargetRepository
from .daily_targets.service import DailyAggregateReconciler
from .hourly_reports.http_hourly_report_repository import HttpHourlyReportRepository
from .hourly_reports.repository import HourlyReportRepository
from .hourly_reports.service import ReportSubmissionCoordinator
from .periods.scheduler import PeriodScheduler
from .projects.http_project_repository import HttpProjectRepository
from .projects.repository import ProjectRepository
from .sessions.service import SessionTrackerRegistry
from .users.http_auth_repository import HttpAuthRepository
from .users.repository import AuthRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[ApiConnection]
    clock: Callable[[], datetime]

    auth_repo: AuthRepository
    hourly_reports_repo: HourlyReportRepository
    daily_targets_repo: DailyTargetRepository
    projects_repo: ProjectRepository

    scheduler: PeriodScheduler
    trackers: SessionTrackerRegistry
    reconciler: DailyAggregateReconciler
    auth_service: AuthService
    submission_coordinator: ReportSubmissionCoordinator


def assemble(
    *,
    auth_repo: AuthRepository,
    hourly_reports_repo: HourlyReportRepository,
    daily_targets_repo: DailyTargetRepository,
    projects_repo: ProjectRepository,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[ApiConnection] = None,
) -> Container:
    """Wire services on top of the given repositories (tests pass in-memory fakes)."""
    scheduler = PeriodScheduler(grace_minutes=grace_minutes)
    trackers = SessionTrackerRegistry(scheduler, hourly_reports_repo, clock=clock)
    reconciler = DailyAggregateReconciler(daily_targets_repo)
    auth_service = AuthService(auth_repo)
    submission_coordinator = ReportSubmissionCoordinator(hourly_reports_repo, reconciler, trackers, clock=clock)

    return Container(
        conn=conn,
        clock=clock,
        auth_repo=auth_repo,
        hourly_reports_repo=hourly_reports_repo,
        daily_targets_repo=daily_targets_repo,
        projects_repo=projects_repo,
        scheduler=scheduler,
        trackers=trackers,
        reconciler=reconciler,
        auth_service=auth_service,
        submission_coordinator=submission_coordinator,
    )


def build_container(*, api_config: dict, grace_minutes: int = DEFAULT_GRACE_MINUTES) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout_seconds=float(api_config.get("timeout_seconds", DEFAULT_API_TIMEOUT_SECONDS)),
    )
    conn = ApiConnection.get_instance(config)

    return assemble(
        auth_repo=HttpAuthRepository(conn),
        hourly_reports_repo=HttpHourlyReportRepository(conn),
        daily_targets_repo=HttpDailyTargetRepository(conn),
        projects_repo=HttpProjectRepository(conn),
        grace_minutes=grace_minutes,
        conn=conn,
    )
