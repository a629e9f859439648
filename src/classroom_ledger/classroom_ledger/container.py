from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import AuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .locks.mysql_lock_repository import MySQLLockRepository
from .locks.repository import LockRepository
from .locks.service import LockGate
from .points.mysql_points_repository import MySQLPointsRepository
from .points.repository import PointsRepository
from .points.service import PointsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    points_repo: PointsRepository
    locks_repo: LockRepository

    auth_service: AuthService
    roster_service: RosterService
    attendance_service: AttendanceService
    points_service: PointsService
    lock_gate: LockGate


def wire(
    *,
    accounts_repo: AccountRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    points_repo: PointsRepository,
    locks_repo: LockRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any set of repositories (MySQL or in-memory)."""

    lock_gate = LockGate(locks_repo)
    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        points_repo=points_repo,
        locks_repo=locks_repo,
        auth_service=AuthService(accounts_repo),
        roster_service=RosterService(students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, lock_gate),
        points_service=PointsService(points_repo),
        lock_gate=lock_gate,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire(
        conn=conn,
        accounts_repo=MySQLAccountRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        points_repo=MySQLPointsRepository(conn),
        locks_repo=MySQLLockRepository(conn),
    )
