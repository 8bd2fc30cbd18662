import asyncio
from datetime import date
import fnmatch

from src.core.cache import QueryCache
from src.core.exceptions import StoreError
from src.core.security import create_access_token, hash_password
from src.modules.appointments.models import Appointment
from src.modules.conditions.models import Condition, PatientCondition
from src.modules.users.models import User
from src.shared.enums import UserRole
from src.shared.ulid import generate_ulid


class RecordingCache(QueryCache):
    """Pass-through cache that remembers which namespaces were invalidated."""

    def __init__(self):
        super().__init__(client=None)
        self.invalidated: list[str] = []

    async def invalidate(self, namespace: str) -> int:
        self.invalidated.append(namespace)
        return 0


class InMemoryRedis:
    """Tiny async stand-in for the handful of redis calls QueryCache makes."""

    def __init__(self):
        self.data: dict[str, str] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value

    async def scan_iter(self, match=None):
        for key in list(self.data):
            if match is None or fnmatch.fnmatch(key, match):
                yield key

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed


class RecordingStore:
    """Appointment store double that keeps every record it is handed."""

    def __init__(self, fail_with: StoreError | None = None, delay: float = 0):
        self.records = []
        self.fail_with = fail_with
        self.delay = delay

    async def create(self, record):
        self.records.append(record)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        return Appointment(appointment_id=generate_ulid(), **record.model_dump())


async def make_user(db_session, role: UserRole | None, full_name: str = "Test User", **extra) -> User:
    user = User(
        user_id=generate_ulid(),
        email=extra.pop("email", f"{generate_ulid().lower()}@example.com"),
        password_hash=hash_password(extra.pop("password", "secret-pass")),
        full_name=full_name,
        role=role,
        is_active=extra.pop("is_active", True),
        **extra,
    )
    db_session.add(user)
    await db_session.commit()
    return user


async def make_condition(db_session, name: str = "Hypertension") -> Condition:
    condition = Condition(condition_id=generate_ulid(), name=name)
    db_session.add(condition)
    await db_session.commit()
    return condition


async def diagnose(db_session, patient: User, condition: Condition, doctor: User | None = None) -> PatientCondition:
    record = PatientCondition(
        record_id=generate_ulid(),
        patient_id=patient.user_id,
        condition_id=condition.condition_id,
        diagnosed_by=doctor.user_id if doctor else None,
        diagnosed_date=date(2030, 1, 15),
    )
    db_session.add(record)
    await db_session.commit()
    return record


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.user_id, user.role)
    return {"Authorization": f"Bearer {token}"}
