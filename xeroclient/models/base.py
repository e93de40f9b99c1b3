"""Base class for Xero records."""

from decimal import Decimal
from typing import Annotated, Any, ClassVar, Dict, Optional, Type, get_args

from pydantic import BaseModel, ConfigDict, PlainSerializer

from xeroclient.services.timefmt import decode

# Decimal amounts are written as their exact decimal text, never through float
Amount = Annotated[Decimal, PlainSerializer(str, return_type=str, when_used="json")]


def _nested_record(annotation: Any) -> Optional[Type["XeroModel"]]:
    """Find the XeroModel subclass inside e.g. Optional[List[LineItem]]."""
    if (
        isinstance(annotation, type)
        and not get_args(annotation)
        and issubclass(annotation, XeroModel)
    ):
        return annotation
    for arg in get_args(annotation):
        found = _nested_record(arg)
        if found is not None:
            return found
    return None


class XeroModel(BaseModel):
    """Base class for all records exchanged with the Xero API.

    Fields use Xero's PascalCase names as aliases. Subclasses list the fields
    the API sends in the legacy ``/Date(...)/`` format in
    ``legacy_date_fields``, mapped to whether the normalized value keeps its
    UTC ``Z`` suffix.

    Example:
        class Report(XeroModel):
            legacy_date_fields = {"UpdatedDateUTC": True}

            report_id: Optional[str] = Field(None, alias="ReportID")
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    legacy_date_fields: ClassVar[Dict[str, bool]] = {}

    @classmethod
    def normalize_dates(cls, data: Any) -> Any:
        """Convert legacy timestamps in raw API data, nested records included.

        Raises:
            MalformedTimestampError: If a declared field cannot be parsed
        """
        if not isinstance(data, dict):
            return data

        normalized = dict(data)
        for alias, is_utc in cls.legacy_date_fields.items():
            value = normalized.get(alias)
            if isinstance(value, str):
                normalized[alias] = decode(value, is_utc)

        for name, field in cls.model_fields.items():
            key = field.alias or name
            nested = _nested_record(field.annotation)
            if nested is None or key not in normalized:
                continue
            value = normalized[key]
            if isinstance(value, list):
                normalized[key] = [nested.normalize_dates(item) for item in value]
            else:
                normalized[key] = nested.normalize_dates(value)

        return normalized

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "XeroModel":
        """Build a record from raw API data, normalizing legacy timestamps."""
        return cls.model_validate(cls.normalize_dates(data))

    def to_api(self) -> Dict[str, Any]:
        """Serialize to the API's JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


