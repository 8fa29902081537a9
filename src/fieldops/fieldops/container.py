from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.model import AttendancePolicy
from .attendance.factory import ClockInStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .evaluations.mysql_evaluation_repository import MySQLEvaluationRepository
from .evaluations.repository import EvaluationRepository
from .evaluations.service import EvaluationService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ChecklistService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .users.mysql_user_repository import MySQLInviteRepository, MySQLUserRepository
from .users.repository import InviteRepository, UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    invites_repo: InviteRepository
    locations_repo: LocationRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository
    evaluations_repo: EvaluationRepository

    user_service: UserService
    location_service: LocationService
    schedule_service: ScheduleService
    attendance_service: AttendanceService
    checklist_service: ChecklistService
    evaluation_service: EvaluationService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    users_repo: UserRepository,
    invites_repo: InviteRepository,
    locations_repo: LocationRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    reports_repo: ReportRepository,
    evaluations_repo: EvaluationRepository,
    policy: AttendancePolicy | None = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations."""

    schedule_service = ScheduleService(schedules_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        locations_repo,
        schedule_service,
        policy=policy or AttendancePolicy(),
        strategy_factory=ClockInStrategyFactory(),
    )

    return Container(
        users_repo=users_repo,
        invites_repo=invites_repo,
        locations_repo=locations_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        evaluations_repo=evaluations_repo,
        user_service=UserService(users_repo, invites_repo),
        location_service=LocationService(locations_repo, users_repo),
        schedule_service=schedule_service,
        attendance_service=attendance_service,
        checklist_service=ChecklistService(reports_repo),
        evaluation_service=EvaluationService(evaluations_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, policy: AttendancePolicy | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        invites_repo=MySQLInviteRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        evaluations_repo=MySQLEvaluationRepository(conn),
        policy=policy,
        conn=conn,
    )
