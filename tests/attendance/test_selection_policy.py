from datetime import date

import pytest

from src.guard_scheduling.guard_scheduling.attendance.selection import FirstMatchPolicy, RejectAmbiguousPolicy
from src.guard_scheduling.guard_scheduling.core.enums import Weekday
from src.guard_scheduling.guard_scheduling.core.exceptions import AmbiguousShiftError


def test_first_match_uses_assignment_order(make_shift):
    morning = make_shift(shift_id=1, start_time="07:00 AM")
    evening = make_shift(shift_id=2, start_time="06:00 PM")

    occ = FirstMatchPolicy().select([evening, morning], date(2024, 1, 8))

    assert occ.shift_id == 2
    assert occ.start_time == "06:00 PM"


def test_first_match_skips_shifts_not_in_effect(make_shift):
    weekdays_only = make_shift(shift_id=1, off_days=frozenset({Weekday.SUNDAY, Weekday.SATURDAY}))
    weekend = make_shift(shift_id=2, every_day=True)

    assert FirstMatchPolicy().select([weekdays_only, weekend], date(2024, 1, 6)).shift_id == 2
    assert FirstMatchPolicy().select([], date(2024, 1, 6)) is None


def test_reject_ambiguous_raises_on_double_booking(make_shift):
    shifts = [make_shift(shift_id=1), make_shift(shift_id=2)]

    with pytest.raises(AmbiguousShiftError) as exc:
        RejectAmbiguousPolicy().select(shifts, date(2024, 1, 8))

    assert exc.value.shift_ids == [1, 2]


def test_reject_ambiguous_returns_single_match(make_shift):
    shifts = [make_shift(shift_id=1), make_shift(shift_id=2, off_days=frozenset({Weekday.MONDAY}))]

    assert RejectAmbiguousPolicy().select(shifts, date(2024, 1, 8)).shift_id == 1
