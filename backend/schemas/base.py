import logging
from typing import Annotated, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from core.converters import parse_number

logger = logging.getLogger(__name__)


# Form fields arrive as strings; anything unparseable is treated as 0.
RawNumber = Annotated[float, BeforeValidator(parse_number)]
# Same, but an explicit null means "leave unchanged".
OptionalRawNumber = Annotated[Optional[float], BeforeValidator(lambda v: None if v is None else parse_number(v))]


class CamelModel(BaseModel):
    """Persisted records use the camelCase keys of the stored collections."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


RecordT = TypeVar("RecordT", bound=CamelModel)


def load_records(model: Type[RecordT], raw: Iterable, collection: str) -> List[RecordT]:
    """Validate stored records one by one, dropping (and logging) any that don't fit ``model``."""
    records: List[RecordT] = []
    for entry in raw:
        try:
            records.append(model.model_validate(entry))
        except ValidationError as e:
            record_id = entry.get("id") if isinstance(entry, dict) else None
            logger.warning(
                "Dropping invalid %s record (id=%r): %d validation error(s)",
                collection, record_id, e.error_count(),
            )
    return records


def strip_required(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("field is required")
    return v


def strip_optional(v):
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty")
    return v


def non_negative(v: float) -> float:
    if v < 0:
        raise ValueError("must be >= 0")
    return v
