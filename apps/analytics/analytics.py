"""
Analytics Module
=================

Statistics for the rider and partner dashboards, computed from attendance
and request rows.

The arithmetic lives in two pure functions, ``aggregate`` and
``build_timeseries``, which take already-fetched records and a reference
date and never touch the database. ``AnalyticsQueries`` fetches the rows
the caller may see and feeds them to those functions.

Example:
    Summary for the current session::

        from apps.analytics.analytics import AnalyticsQueries

        summary = AnalyticsQueries.summary(actor)
        print(f"This month: {summary['monthly']} over {summary['days_this_month']} days")

Note:
    This module is read-only. Amounts are ``Decimal`` and every average is
    rounded half-up to two places.
"""

from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from django.utils import timezone

from apps.travel.models import RequestStatus
from apps.travel.services import scoped_attendance, scoped_requests

from .exceptions import InvalidViewError


ZERO = Decimal('0.00')
CENTS = Decimal('0.01')

VIEW_WINDOWS = {
    'day': 7,
    'month': 30,
    'year': 365,
    'all': 730,
}


def _amount(record) -> Decimal:
    return Decimal(str(record.amount))


def aggregate(records: Iterable, reference_date: date) -> dict:
    """
    Summarize attendance records relative to ``reference_date``.

    Args:
        records: Objects with ``date`` and ``amount`` attributes.
        reference_date: The day considered "today".

    Returns:
        dict: A dictionary containing:
            - total (Decimal): Sum of all amounts.
            - monthly (Decimal): Sum over records in the reference month.
            - days_this_month (int): Number of records in the reference month.
            - average_per_day (Decimal): ``monthly / days_this_month``,
              ``0.00`` when there are no days.
            - today_status (str): ``completed`` if a record falls on the
              reference date, otherwise ``pending``.

    Example:
        Three days in the current month::

            aggregate(records, date(2025, 8, 4))
            # {'total': Decimal('250.00'), 'monthly': Decimal('250.00'),
            #  'days_this_month': 3, 'average_per_day': Decimal('83.33'), ...}
    """
    total = ZERO
    monthly = ZERO
    days_this_month = 0
    marked_today = False

    for record in records:
        amount = _amount(record)
        total += amount
        if record.date.year == reference_date.year and record.date.month == reference_date.month:
            monthly += amount
            days_this_month += 1
        if record.date == reference_date:
            marked_today = True

    if days_this_month:
        average = (monthly / days_this_month).quantize(CENTS, rounding=ROUND_HALF_UP)
    else:
        average = ZERO

    return {
        'total': total.quantize(CENTS),
        'monthly': monthly.quantize(CENTS),
        'days_this_month': days_this_month,
        'average_per_day': average,
        'today_status': 'completed' if marked_today else 'pending',
    }


def window_for(view: str) -> int:
    """
    Number of days shown for a chart view.

    Raises:
        InvalidViewError: If the view is unknown
    """
    try:
        return VIEW_WINDOWS[view]
    except KeyError:
        raise InvalidViewError(
            f"Invalid view: '{view}'. Valid options: {', '.join(VIEW_WINDOWS)}"
        )


def build_timeseries(attendance: Iterable, requests: Iterable, reference_date: date, view: str) -> list:
    """
    Build a dense day-by-day series ending at ``reference_date``.

    Every day of the window appears exactly once, in ascending order.
    Days with attendance are ``completed`` and carry the recorded amount
    (summed when several partners marked the same day). Days with only a
    pending request are ``requested``. All other days are ``none`` with
    amount 0.

    Args:
        attendance: Objects with ``date`` and ``amount``.
        requests: Objects with ``date`` and ``status``; only pending ones count.
        reference_date: Last day of the series.
        view: One of ``day``, ``month``, ``year``, ``all``.

    Returns:
        list[dict]: Entries with ``date``, ``amount`` and ``status``.

    Raises:
        InvalidViewError: If the view is unknown.
    """
    days = window_for(view)
    start = reference_date - timedelta(days=days - 1)

    amounts = {}
    for record in attendance:
        if start <= record.date <= reference_date:
            amounts[record.date] = amounts.get(record.date, ZERO) + _amount(record)

    requested = {
        r.date for r in requests
        if r.status == RequestStatus.PENDING and start <= r.date <= reference_date
    }

    series = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        if day in amounts:
            entry = {'date': day, 'amount': amounts[day], 'status': 'completed'}
        elif day in requested:
            entry = {'date': day, 'amount': ZERO, 'status': 'requested'}
        else:
            entry = {'date': day, 'amount': ZERO, 'status': 'none'}
        series.append(entry)

    return series


class AnalyticsQueries:
    """
    Role-scoped queries backing the analytics endpoints.

    A rider sees every row where they are the rider. A partner sees the
    rows they recorded for the rider they are currently paired with, and
    nothing while unpaired.

    Methods:
        summary: Totals for the session's rows.
        timeseries: Chart series for the session's rows.
        pending_request_count: Open reminders visible to the session.
    """

    @staticmethod
    def summary(actor, reference_date=None):
        """
        Totals over all attendance visible to ``actor``.

        Args:
            actor (SessionContext): Caller session.
            reference_date (date, optional): Defaults to today in the
                configured time zone.
        """
        reference_date = reference_date or timezone.localdate()
        records = scoped_attendance(actor).only('date', 'amount')
        return aggregate(records, reference_date)

    @staticmethod
    def timeseries(actor, view='month', reference_date=None):
        """
        Dense daily series for a chart view.

        Only rows inside the window are fetched.

        Raises:
            InvalidViewError: If the view is unknown.
        """
        reference_date = reference_date or timezone.localdate()
        start = reference_date - timedelta(days=window_for(view) - 1)

        attendance = (
            scoped_attendance(actor)
            .filter(date__gte=start, date__lte=reference_date)
            .only('date', 'amount')
        )
        requests = (
            scoped_requests(actor)
            .filter(date__gte=start, date__lte=reference_date, status=RequestStatus.PENDING)
            .only('date', 'status')
        )
        return build_timeseries(attendance, requests, reference_date, view)

    @staticmethod
    def pending_request_count(actor):
        return scoped_requests(actor).filter(status=RequestStatus.PENDING).count()
