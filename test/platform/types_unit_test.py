from datetime import datetime, timedelta, timezone
import uuid

from pydantic import BaseModel, ValidationError
import pytest
import uuid_utils

from src.platform.types.utc_datetime import ensure_utc
from src.platform.types.uuid7_utils_types import UtilsUUID7, to_std_uuid, to_utils_uuid


class _Model(BaseModel):
    id: UtilsUUID7


@pytest.mark.unit
class TestEnsureUtc:
    def test_naive_is_read_as_utc(self):
        value = ensure_utc(datetime(2026, 3, 1, 9, 0))

        assert value.tzinfo == timezone.utc
        assert value.hour == 9

    def test_offset_is_converted(self):
        taipei = timezone(timedelta(hours=8))

        value = ensure_utc(datetime(2026, 3, 1, 9, 0, tzinfo=taipei))

        assert value == datetime(2026, 3, 1, 1, 0, tzinfo=timezone.utc)
        assert value.tzinfo == timezone.utc


@pytest.mark.unit
class TestUtilsUUID7:
    def test_accepts_string_stdlib_and_utils_uuid(self):
        raw = uuid_utils.uuid7()

        from_str = _Model(id=str(raw)).id
        from_std = _Model(id=uuid.UUID(str(raw))).id
        from_utils = _Model(id=raw).id

        assert from_str == from_std == from_utils == raw

    def test_serializes_to_canonical_string(self):
        raw = uuid_utils.uuid7()

        assert _Model(id=raw).model_dump() == {'id': str(raw)}
        assert _Model.model_validate_json(f'{{"id": "{raw}"}}').id == raw

    def test_rejects_garbage(self):
        with pytest.raises(ValidationError):
            _Model(id='not-a-uuid')

    def test_json_schema_is_uuid_string(self):
        schema = _Model.model_json_schema()

        assert schema['properties']['id']['type'] == 'string'
        assert schema['properties']['id']['format'] == 'uuid'

    def test_std_and_utils_conversions(self):
        raw = uuid_utils.uuid7()

        std = to_std_uuid(raw)

        assert isinstance(std, uuid.UUID)
        assert to_utils_uuid(std) == raw
