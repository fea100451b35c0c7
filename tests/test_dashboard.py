"""Tests for the dashboard statistics service and endpoint."""

import asyncio
from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from anganwadi.core.errors import PersistenceError
from anganwadi.services.dashboard import DashboardService, parse_program_date
from conftest import ADMIN_HEADERS, TODAY


def seed(program_store, *dates):
    async def create_all():
        for n, value in enumerate(dates):
            await program_store.create_program(
                title=f"Program {n}",
                description="Growth monitoring camp",
                date=value,
                time="09:00",
            )

    asyncio.run(create_all())


class TestDashboardEndpoint:
    def test_empty_store(self, client):
        response = client.get("/dashboard-stats", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        assert response.json() == {
            "totalPrograms": 0,
            "thisMonthCount": 0,
            "lastAdded": "N/A",
        }

    def test_counts_and_last_added(self, client, program_store):
        seed(
            program_store,
            "2026-10-01",
            "2025-10-12",
            "not a date",
            "18/10/2026",
            "2026-09-30",
            "2026-10-31",
        )

        response = client.get("/dashboard-stats", headers=ADMIN_HEADERS)

        assert response.json() == {
            "totalPrograms": 6,
            "thisMonthCount": 3,
            "lastAdded": "2026-10-31",
        }

    def test_store_failure_is_generic_error(self, client, program_store, monkeypatch):
        monkeypatch.setattr(
            program_store,
            "count_programs",
            AsyncMock(side_effect=PersistenceError("boom")),
        )

        response = client.get("/dashboard-stats", headers=ADMIN_HEADERS)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to load stats"}


class TestDashboardService:
    async def test_month_boundary_uses_injected_clock(self):
        store = AsyncMock()
        store.count_programs.return_value = 2
        store.list_dates.return_value = ["2026-11-01", "2026-10-31"]
        store.latest_program.return_value = None

        stats = await DashboardService(store, today=lambda: date(2026, 11, 15)).get_stats()

        assert stats.thisMonthCount == 1
        assert stats.lastAdded == "N/A"

    async def test_last_added_is_date_of_latest_program(self):
        store = AsyncMock()
        store.count_programs.return_value = 1
        store.list_dates.return_value = ["sometime next week"]
        store.latest_program.return_value = SimpleNamespace(date="sometime next week")

        stats = await DashboardService(store, today=lambda: TODAY).get_stats()

        assert stats.totalPrograms == 1
        assert stats.thisMonthCount == 0
        assert stats.lastAdded == "sometime next week"


class TestParseProgramDate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2026-10-05", date(2026, 10, 5)),
            ("2026-10-05T09:30:00.000Z", date(2026, 10, 5)),
            ("2026-10-05 09:30", date(2026, 10, 5)),
            ("05-10-2026", date(2026, 10, 5)),
            ("05/10/2026", date(2026, 10, 5)),
            ("2026/10/05", date(2026, 10, 5)),
            ("  2026-10-05  ", date(2026, 10, 5)),
        ],
    )
    def test_accepted_formats(self, value, expected):
        assert parse_program_date(value) == expected

    @pytest.mark.parametrize(
        "value", [None, "", "tomorrow", "2026-13-01", "31/02/2026", "Oct 5"]
    )
    def test_unparseable_dates(self, value):
        assert parse_program_date(value) is None
