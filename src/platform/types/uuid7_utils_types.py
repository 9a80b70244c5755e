"""
https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__
https://docs.pydantic.dev/latest/concepts/json_schema/#implementing-__get_pydantic_json_schema__

Pydantic-compatible uuid_utils.UUID.

Reservation ids are UUID7 (`uuid_utils.uuid7()`), and uuid_utils.UUID has no pydantic schema of its own.
Use `UtilsUUID7` in request/response schemas and path parameters:

```python
class ReservationResponse(BaseModel):
    id: UtilsUUID7
```

- JSON input: string only, converted to uuid_utils.UUID
- Python input: uuid_utils.UUID, stdlib uuid.UUID or string
- Output: always the canonical string form
- OpenAPI: `type: string, format: uuid`
"""

from typing import Any
import uuid

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


def to_utils_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except Exception as e:
        raise ValueError(f'Invalid UUID: {value}') from e


def to_std_uuid(value: Any) -> uuid.UUID:
    """SQLAlchemy's Uuid type binds stdlib uuid.UUID only"""
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def validate_uuid_json(value: str) -> UUID:
            return to_utils_uuid(value)

        # Path parameters arrive as str, repo rows as stdlib uuid.UUID
        python_schema = core_schema.union_schema(
            [
                core_schema.is_instance_schema(UUID),
                core_schema.chain_schema(
                    [
                        core_schema.is_instance_schema(uuid.UUID),
                        core_schema.no_info_plain_validator_function(to_utils_uuid),
                    ]
                ),
                core_schema.chain_schema(
                    [
                        core_schema.str_schema(),
                        core_schema.no_info_plain_validator_function(to_utils_uuid),
                    ]
                ),
            ]
        )

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(validate_uuid_json),
                ]
            ),
            python_schema=python_schema,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # Skip handler(schema), the validator chain has no JSON schema
        return {'type': 'string', 'format': 'uuid'}
