"""Dashboard statistics for the admin panel."""

from datetime import date as calendar_date
from datetime import datetime, timezone
from typing import Callable

from anganwadi.core.logging import logger
from anganwadi.schemas.programs import DashboardStats
from anganwadi.services.program_store import ProgramStore

NO_PROGRAMS = "N/A"

# Formats the admin form and older records use, tried in order.
DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y", "%Y/%m/%d")


def parse_program_date(value: str | None) -> calendar_date | None:
    """Parse the free-text ``date`` of a program into a calendar date.

    ISO timestamps such as ``2026-10-05T09:30:00Z`` count by their date part.

    Returns:
        The parsed date, or None when ``value`` matches none of the formats.
    """
    if not value:
        return None
    text = value.strip()
    # keep only the date part of ISO timestamps
    text = text.split("T", 1)[0].split(" ", 1)[0]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def utc_today() -> calendar_date:
    return datetime.now(timezone.utc).date()


class DashboardService:
    """Aggregates counts and the newest program for the dashboard.

    Attributes:
        program_store: Gateway to the `programs` table.
        today: Callable returning the current date; replaced in tests.
    """

    def __init__(
        self,
        program_store: ProgramStore,
        today: Callable[[], calendar_date] = utc_today,
    ) -> None:
        self.program_store = program_store
        self.today = today

    async def get_stats(self) -> DashboardStats:
        """Compute the dashboard figures.

        Programs whose date cannot be parsed are left out of the monthly
        count instead of failing the request.

        Raises:
            PersistenceError: If the database cannot be read.
        """
        today = self.today()
        total = await self.program_store.count_programs()

        this_month = 0
        unparseable = 0
        for value in await self.program_store.list_dates():
            parsed = parse_program_date(value)
            if parsed is None:
                unparseable += 1
            elif (parsed.year, parsed.month) == (today.year, today.month):
                this_month += 1
        if unparseable:
            logger.debug("Skipped {} programs with unparseable dates", unparseable)

        latest = await self.program_store.latest_program()

        return DashboardStats(
            totalPrograms=total,
            thisMonthCount=this_month,
            lastAdded=latest.date if latest else NO_PROGRAMS,
        )
