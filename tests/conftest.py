import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TESTS = Path(__file__).resolve().parent

for path in (ROOT, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest  # noqa: E402
from beanie import init_beanie  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from config import PersistentRedisKeys, RedisKeys  # noqa: E402
from db.models import ALL_DOCUMENT_MODELS  # noqa: E402


@pytest.fixture
async def beanie_db():
    client = AsyncMongoMockClient()
    database = client["test_db"]
    await init_beanie(database=database, document_models=ALL_DOCUMENT_MODELS)
    return database


@pytest.fixture
def redis_keys() -> RedisKeys:
    return RedisKeys(
        gps_alive="gps:alive",
        obd_alive="obd:alive",
        latitude="gps:lat",
        longitude="gps:lon",
        altitude="gps:alt",
        fix_mode="gps:mode",
        gps_time="gps:time",
        gps_speed="gps:speed",
        gps_speed_kmh="gps:speed_kmh",
        gps_accuracy_lon="gps:epx",
        gps_accuracy_lat="gps:epy",
        gps_accuracy_height="gps:epv",
        gps_accuracy_speed="gps:eps",
        obd_speed_kmh="obd:speed",
        engine_rpm="obd:rpm",
        intake_temp="obd:intake_temp",
        intake_map="obd:intake_map",
        record_trip_id_a="record:trip_a",
        record_trip_id_b="record:trip_b",
    )


@pytest.fixture
def persistent_keys() -> PersistentRedisKeys:
    return PersistentRedisKeys(odo="odo", trip_a="trip:a", trip_b="trip:b")
