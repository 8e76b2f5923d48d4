#!/usr/bin/env python3
"""
Hiring Drive Tests - poller loop and HTTP controls.

Run: pytest scripts/test_hiring_drive.py
"""
import asyncio

from hr360.services.hiring_drive import HiringDrivePoller


class FakeApplicants:
    def __init__(self, fail_first=0):
        self.calls = 0
        self.fail_first = fail_first

    def pipeline_counts(self):
        self.calls += 1
        if self.calls <= self.fail_first:
            raise RuntimeError("database is restarting")
        return [{"status": "New", "count": self.calls}]

    def list(self, limit=None):
        return [{"id": 1, "full_name": "Priya Raman"}]


def test_poller_refreshes_until_stopped():
    async def scenario():
        poller = HiringDrivePoller(interval_seconds=0.01, repository=FakeApplicants())
        await poller.start()
        await asyncio.sleep(0.1)
        await poller.stop()
        return poller

    poller = asyncio.run(scenario())
    assert poller.running is False
    assert poller.refresh_count >= 2
    assert poller.snapshot["newest_applicants"][0]["full_name"] == "Priya Raman"
    assert poller.last_refreshed_at is not None


def test_failed_refresh_keeps_polling():
    async def scenario():
        poller = HiringDrivePoller(interval_seconds=0.01, repository=FakeApplicants(fail_first=2))
        await poller.start()
        await asyncio.sleep(0.15)
        await poller.stop()
        return poller

    poller = asyncio.run(scenario())
    assert poller.repository.calls > 2
    assert 1 <= poller.refresh_count <= poller.repository.calls - 2


def test_start_is_idempotent():
    async def scenario():
        poller = HiringDrivePoller(interval_seconds=60, repository=FakeApplicants())
        await poller.start()
        first_task = poller._task
        await poller.start()
        same = poller._task is first_task
        await poller.stop()
        return same, poller

    same, poller = asyncio.run(scenario())
    assert same
    assert poller._task is None


def test_stop_when_not_running_is_noop():
    poller = HiringDrivePoller(repository=FakeApplicants())
    asyncio.run(poller.stop())
    assert poller.status()["running"] is False
    assert poller.status()["refresh_count"] == 0


def test_http_controls(client, auth_headers, make_applicant):
    make_applicant()
    assert client.get("/api/hiring-drive/status").status_code in (401, 403)

    status = client.post("/api/hiring-drive/start", headers=auth_headers).json()
    assert status["running"] is True

    status = client.post("/api/hiring-drive/stop", headers=auth_headers).json()
    assert status["running"] is False

    status = client.get("/api/hiring-drive/status", headers=auth_headers).json()
    assert status["running"] is False
