from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path

import mysql.connector
import pytest

from src.classroom_ledger.classroom_ledger.accounts.model import StreakState
from src.classroom_ledger.classroom_ledger.accounts.mysql_account_repository import MySQLAccountRepository
from src.classroom_ledger.classroom_ledger.accounts.streak import next_streak
from src.classroom_ledger.classroom_ledger.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.classroom_ledger.classroom_ledger.core.enums import AttendanceStatus
from src.classroom_ledger.classroom_ledger.core.exceptions import StorageError
from src.classroom_ledger.classroom_ledger.database.mysql_base import db_cursor
from src.classroom_ledger.classroom_ledger.locks.mysql_lock_repository import MySQLLockRepository
from src.classroom_ledger.classroom_ledger.points.model import PointsUpdate
from src.classroom_ledger.classroom_ledger.points.mysql_points_repository import MySQLPointsRepository
from src.classroom_ledger.classroom_ledger.points.service import MAX_POINTS
from src.classroom_ledger.classroom_ledger.students.mysql_student_repository import MySQLStudentRepository


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self.rowcount = 1
        self.lastrowid = 0
        self.closed = False

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))
        if self._conn.fail_on_execute == len(self._conn.executed):
            raise mysql.connector.errors.OperationalError(msg="Lost connection to MySQL server")
        self.rowcount = self._conn.rowcounts.pop(0) if self._conn.rowcounts else 1
        self.lastrowid = self._conn.lastrowid

    def fetchone(self):
        return self._conn.rows.pop(0) if self._conn.rows else None

    def fetchall(self):
        rows, self._conn.rows = self._conn.rows, []
        return rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, *, rows=None, rowcounts=None, fail_on_execute=None, lastrowid=0):
        self.rows = list(rows or [])
        self.rowcounts = list(rowcounts or [])
        self.fail_on_execute = fail_on_execute
        self.lastrowid = lastrowid
        self.executed: list[tuple[str, tuple]] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self.connects = 0

    def connect(self):
        self.connects += 1
        return self.conn


def test_db_cursor_commits_and_returns_connection():
    conn = FakeConnection()

    with db_cursor(FakeConnFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert (conn.commits, conn.rollbacks, conn.closed) == (1, 0, True)


def test_db_cursor_wraps_driver_errors_and_rolls_back():
    conn = FakeConnection(fail_on_execute=1)

    with pytest.raises(StorageError) as info:
        with db_cursor(FakeConnFactory(conn)) as (_, cur):
            cur.execute("SELECT 1")

    assert isinstance(info.value.__cause__, mysql.connector.Error)
    assert (conn.commits, conn.rollbacks, conn.closed) == (0, 1, True)


def test_db_cursor_rolls_back_on_application_errors_without_wrapping():
    conn = FakeConnection()

    with pytest.raises(KeyError):
        with db_cursor(FakeConnFactory(conn)):
            raise KeyError("boom")

    assert (conn.commits, conn.rollbacks) == (0, 1)


def test_attendance_upsert_is_one_conflict_resolving_statement():
    conn = FakeConnection()

    MySQLAttendanceRepository(FakeConnFactory(conn)).upsert(
        student_id=4, work_date=date(2026, 3, 2), status=AttendanceStatus.ABSENT
    )

    assert len(conn.executed) == 1
    sql, params = conn.executed[0]
    assert sql.startswith("INSERT INTO attendance_records")
    assert "ON DUPLICATE KEY UPDATE status=VALUES(status)" in sql
    assert params == (4, date(2026, 3, 2), "Absent")
    assert conn.commits == 1


def test_student_get_or_create_inserts_before_selecting():
    conn = FakeConnection(rows=[{"student_id": 9, "teacher_id": 1, "name": "Ada", "points": 3}])

    student = MySQLStudentRepository(FakeConnFactory(conn)).get_or_create(1, "Ada")

    assert [sql.split()[0] for sql, _ in conn.executed] == ["INSERT", "SELECT"]
    assert "ON DUPLICATE KEY UPDATE" in conn.executed[0][0]
    assert (student.student_id, student.points) == (9, 3)
    assert conn.commits == 1


def test_student_create_reports_duplicates():
    conn = FakeConnection(rowcounts=[0])

    assert MySQLStudentRepository(FakeConnFactory(conn)).create(1, "Ada") is None


def test_points_batch_runs_in_one_transaction():
    conn = FakeConnection(rowcounts=[1, 0, 1])
    factory = FakeConnFactory(conn)
    updates = [PointsUpdate("A", 1), PointsUpdate("Ghost", 2), PointsUpdate("C", 3)]

    changed = MySQLPointsRepository(factory).apply_batch(1, updates)

    assert changed == 2
    assert factory.connects == 1
    assert conn.commits == 1
    assert [p for _, p in conn.executed] == [(1, 1, "A"), (2, 1, "Ghost"), (3, 1, "C")]


def test_points_batch_failure_on_third_write_rolls_back_everything():
    conn = FakeConnection(fail_on_execute=3)
    updates = [PointsUpdate(n, 10) for n in ["A", "B", "C", "D", "E"]]

    with pytest.raises(StorageError):
        MySQLPointsRepository(FakeConnFactory(conn)).apply_batch(1, updates)

    assert len(conn.executed) == 3
    assert (conn.commits, conn.rollbacks) == (0, 1)


def test_streak_update_locks_row_then_writes_in_same_transaction():
    last = datetime(2026, 2, 1, 8, 0)
    now = last + timedelta(hours=30)
    conn = FakeConnection(rows=[{"last_login_at": last, "streak_count": 2, "best_streak": 5}])
    factory = FakeConnFactory(conn)

    state = MySQLAccountRepository(factory).update_streak(7, lambda prev: next_streak(prev, now))

    assert state == StreakState(last_login_at=now, streak_count=3, best_streak=5)
    assert factory.connects == 1
    assert conn.executed[0][0].endswith("FOR UPDATE")
    assert conn.executed[1] == (
        "UPDATE accounts SET last_login_at=%s, streak_count=%s, best_streak=%s WHERE account_id=%s",
        (now, 3, 5, 7),
    )
    assert conn.commits == 1


def test_streak_update_failure_is_rolled_back():
    conn = FakeConnection(rows=[{"last_login_at": None, "streak_count": 0, "best_streak": 0}], fail_on_execute=2)

    with pytest.raises(StorageError):
        MySQLAccountRepository(FakeConnFactory(conn)).update_streak(7, lambda prev: next_streak(prev, datetime(2026, 1, 1)))

    assert (conn.commits, conn.rollbacks) == (0, 1)


def test_streak_update_of_missing_account_writes_nothing():
    conn = FakeConnection(rows=[])

    assert MySQLAccountRepository(FakeConnFactory(conn)).update_streak(7, lambda prev: prev) is None
    assert len(conn.executed) == 1


def test_lock_set_is_an_upsert_and_missing_row_reads_none():
    conn = FakeConnection()
    repo = MySQLLockRepository(FakeConnFactory(conn))

    assert repo.get("exam:midterm") is None
    state = repo.set("exam:midterm", True)

    assert state.locked is True
    assert "ON DUPLICATE KEY UPDATE locked=VALUES(locked)" in conn.executed[1][0]
    assert conn.executed[1][1] == ("exam:midterm", True)


def test_points_column_is_signed_int_with_non_negative_check():
    schema = (Path(__file__).resolve().parents[2] / "database" / "schema.sql").read_text()
    students = schema.split("CREATE TABLE IF NOT EXISTS students", 1)[1].split(";", 1)[0]

    assert "points INT NOT NULL" in students
    assert "UNSIGNED" not in students
    assert "CHECK (points >= 0)" in students
    assert MAX_POINTS == 2**31 - 1
