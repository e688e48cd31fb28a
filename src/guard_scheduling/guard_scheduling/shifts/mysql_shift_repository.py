from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.enums import ShiftType, Weekday
from ..core.exceptions import ParseError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    in_placeholders,
    normalize_mysql_date,
    normalize_mysql_decimal,
)
from .model import ExcludeDay, IncludeDay, Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

_SHIFT_COLUMNS = """
    shift_id, site_id, name, type, notes, start_time, end_time, start_date, end_date,
    off_days, every_day, pay_rate, overtime_multiplier, is_terminated
"""


def _off_day_tokens(value: Any) -> list[str]:
    if not value:
        return []
    tokens = value.split(",") if isinstance(value, str) else list(value)
    return [str(t).strip() for t in tokens if str(t).strip()]


def parse_off_days(value: Any) -> frozenset[Weekday]:
    """off_days column: comma separated tokens (or a set, depending on connector).

    Raises ParseError(kind="invalid_weekday") on the first unknown token.
    """

    days = set()
    for token in _off_day_tokens(value):
        try:
            days.add(Weekday.from_token(token))
        except ValueError:
            raise ParseError(ParseError.INVALID_WEEKDAY, token) from None
    return frozenset(days)


def load_off_days(shift_id: int, value: Any) -> frozenset[Weekday]:
    """Row-loading variant of parse_off_days: an unknown token is logged and
    dropped so one bad row does not fail the whole batch."""

    days = set()
    for token in _off_day_tokens(value):
        try:
            days |= parse_off_days(token)
        except ParseError as e:
            logger.warning("Shift %s: ignoring off_days token %r (%s)", shift_id, token, e.kind)
    return frozenset(days)


def serialize_off_days(days) -> str:
    return ",".join(sorted(d.value for d in days))


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, site_id: Optional[int] = None, include_terminated: bool = False) -> Sequence[Shift]:
        clauses = []
        params: list[object] = []
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))
        if not include_terminated:
            clauses.append("is_terminated=0")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SHIFT_COLUMNS} FROM shifts {where} ORDER BY shift_id", tuple(params))
            rows = fetchall(cur)
            return self._hydrate(cur, rows)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        shifts = self.get_many([shift_id])
        return shifts[0] if shifts else None

    def get_many(self, shift_ids: Sequence[int]) -> Sequence[Shift]:
        ids = [int(i) for i in shift_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SHIFT_COLUMNS} FROM shifts WHERE shift_id IN ({in_placeholders(ids)})", tuple(ids))
            by_id = {s.shift_id: s for s in self._hydrate(cur, fetchall(cur))}
        return [by_id[i] for i in ids if i in by_id]

    def create(self, shift: Shift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(site_id, name, type, notes, start_time, end_time, start_date, end_date,
                                   off_days, every_day, pay_rate, overtime_multiplier, is_terminated)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    shift.site_id,
                    shift.name,
                    shift.type.value,
                    shift.notes,
                    shift.start_time,
                    shift.end_time,
                    shift.start_date,
                    shift.end_date,
                    serialize_off_days(shift.off_days),
                    int(shift.every_day),
                    shift.pay_rate,
                    shift.overtime_multiplier,
                    int(shift.terminated),
                ),
            )
            shift_id = int(cur.lastrowid)

            for ex in shift.exclude_days or ():
                self._insert_exclude(cur, shift_id, ex)
            for inc in shift.include_days or ():
                self._insert_include(cur, shift_id, inc)

        logger.info("Created shift %s (%s)", shift_id, shift.type.value)
        return shift_id

    def add_exclude_day(self, *, shift_id: int, exclude: ExcludeDay) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert_exclude(cur, int(shift_id), exclude)

    def add_include_day(self, *, shift_id: int, include: IncludeDay) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert_include(cur, int(shift_id), include)

    def set_terminated(self, shift_id: int, *, terminated: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE shifts SET is_terminated=%s WHERE shift_id=%s", (int(terminated), int(shift_id)))
            return cur.rowcount > 0

    @staticmethod
    def _insert_exclude(cur, shift_id: int, ex: ExcludeDay) -> int:
        cur.execute(
            "INSERT INTO shift_exclude_days(shift_id, from_date, to_date, reason, notes) VALUES(%s,%s,%s,%s,%s)",
            (shift_id, ex.from_date, ex.to_date, ex.reason, ex.notes),
        )
        return int(cur.lastrowid)

    @staticmethod
    def _insert_include(cur, shift_id: int, inc: IncludeDay) -> int:
        cur.execute(
            """
            INSERT INTO shift_include_days(shift_id, start_date, end_date, custom_time, start_time, end_time)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (shift_id, inc.start_date, inc.end_date, int(inc.custom_time), inc.start_time, inc.end_time),
        )
        return int(cur.lastrowid)

    def _hydrate(self, cur, rows: list[dict]) -> list[Shift]:
        """Attach exclude/include rows to each shift row (two extra queries total)."""

        if not rows:
            return []

        ids = [int(r["shift_id"]) for r in rows]
        excludes: dict[int, list[ExcludeDay]] = {i: [] for i in ids}
        includes: dict[int, list[IncludeDay]] = {i: [] for i in ids}

        cur.execute(
            f"""
            SELECT exclude_id, shift_id, from_date, to_date, reason, notes
            FROM shift_exclude_days
            WHERE shift_id IN ({in_placeholders(ids)})
            ORDER BY exclude_id
            """,
            tuple(ids),
        )
        for r in fetchall(cur):
            excludes[int(r["shift_id"])].append(
                ExcludeDay(
                    exclude_id=int(r["exclude_id"]),
                    from_date=normalize_mysql_date(r["from_date"]),
                    to_date=normalize_mysql_date(r.get("to_date")),
                    reason=r.get("reason"),
                    notes=r.get("notes"),
                )
            )

        cur.execute(
            f"""
            SELECT include_id, shift_id, start_date, end_date, custom_time, start_time, end_time
            FROM shift_include_days
            WHERE shift_id IN ({in_placeholders(ids)})
            ORDER BY include_id
            """,
            tuple(ids),
        )
        for r in fetchall(cur):
            includes[int(r["shift_id"])].append(
                IncludeDay(
                    include_id=int(r["include_id"]),
                    start_date=normalize_mysql_date(r["start_date"]),
                    end_date=normalize_mysql_date(r.get("end_date")),
                    custom_time=bool(r.get("custom_time")),
                    start_time=r.get("start_time"),
                    end_time=r.get("end_time"),
                )
            )

        logger.debug("Loaded %d shift(s) with exclusions/inclusions", len(rows))
        return [
            Shift(
                shift_id=int(r["shift_id"]),
                site_id=int(r["site_id"]) if r.get("site_id") is not None else None,
                name=r.get("name"),
                type=ShiftType(r["type"]),
                notes=r.get("notes"),
                start_time=r["start_time"],
                end_time=r["end_time"],
                start_date=normalize_mysql_date(r["start_date"]),
                end_date=normalize_mysql_date(r.get("end_date")),
                off_days=load_off_days(int(r["shift_id"]), r.get("off_days")),
                every_day=bool(r.get("every_day")),
                pay_rate=normalize_mysql_decimal(r.get("pay_rate")) or normalize_mysql_decimal(0),
                overtime_multiplier=normalize_mysql_decimal(r.get("overtime_multiplier")),
                terminated=bool(r.get("is_terminated")),
                exclude_days=tuple(excludes[int(r["shift_id"])]),
                include_days=tuple(includes[int(r["shift_id"])]),
            )
            for r in rows
        ]
