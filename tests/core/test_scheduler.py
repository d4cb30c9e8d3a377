import asyncio

from core.session import SessionUser, admin_ids, elect_coordinator
from core.updates.scheduler import is_coordinator, schedule_initial_check


class RecordingNotifier:
    def __init__(self):
        self.calls = 0

    async def check_and_notify(self):
        self.calls += 1
        return []


USERS = [
    SessionUser("u3", is_admin=True),
    SessionUser("u1", is_admin=True, active=False),
    SessionUser("u2", is_admin=True),
    SessionUser("u0"),
]


def test_coordinator_is_smallest_active_admin():
    assert elect_coordinator(USERS).id == "u2"
    assert is_coordinator(USERS, "u2")
    assert not is_coordinator(USERS, "u3")
    assert not is_coordinator(USERS, "u1")
    assert elect_coordinator([SessionUser("x")]) is None


def test_admin_ids_include_inactive():
    assert admin_ids(USERS) == ["u3", "u1", "u2"]


def test_coordinator_runs_check_once():
    notifier = RecordingNotifier()

    async def run():
        task = schedule_initial_check(notifier, USERS, "u2", delay_s=0)
        assert task is not None
        assert task.get_name() == "initial-update-check"
        await task

    asyncio.run(run())
    assert notifier.calls == 1


def test_non_coordinators_do_not_schedule():
    notifier = RecordingNotifier()

    async def run():
        return [
            schedule_initial_check(notifier, USERS, uid, delay_s=0)
            for uid in ("u3", "u1", "u0", "missing")
        ]

    assert asyncio.run(run()) == [None, None, None, None]
    assert notifier.calls == 0


def test_check_waits_for_delay():
    notifier = RecordingNotifier()

    async def run():
        task = schedule_initial_check(notifier, USERS, "u2", delay_s=0.05)
        await asyncio.sleep(0)
        before = notifier.calls
        await task
        return before

    assert asyncio.run(run()) == 0
    assert notifier.calls == 1
