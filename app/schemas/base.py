from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Largest value an INTEGER column holds on every supported database
MAX_STORAGE_INT = 2**31 - 1


def in_storage_range(value: int) -> bool:
    return 1 <= value <= MAX_STORAGE_INT


class CamelModel(BaseModel):
    """Python-side snake_case fields, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
