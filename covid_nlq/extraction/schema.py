"""COVID query JSON schema (Pydantic models).

This schema is the contract between the LLM output and the deterministic query builder. Every field
is optional, but a field that is present must be valid; otherwise the whole response is treated as
malformed.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    AllowInfNan,
    BaseModel,
    ConfigDict,
    Strict,
    StrictStr,
    StringConstraints,
    field_validator,
)

ISO_DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"

# Numbers must arrive as JSON numbers: numeric strings, booleans, NaN and infinities are rejected.
Coordinate = Annotated[float, Strict(), AllowInfNan(False)]
IsoDateString = Annotated[str, Strict(), StringConstraints(pattern=ISO_DATE_PATTERN)]


class CovidQuery(BaseModel):
    """Structured filters for the `covid19_open_data` table.

    Unknown keys are ignored, so the schema is a superset check rather than a closed record.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    country_name: StrictStr | None = None
    latitude: Coordinate | None = None
    longitude: Coordinate | None = None
    date: IsoDateString | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: Any) -> Any:
        """Reject `null` for a present key; an absent field is expressed by omitting the key."""

        if value is None:
            raise ValueError("field must be omitted rather than null")
        return value


COVID_FIELD_TYPES: dict[str, str] = {
    "country_name": "string",
    "latitude": "number",
    "longitude": "number",
    "date": "date",
}


def describe_covid_fields() -> list[dict[str, Any]]:
    """Return the keys (and their types) a COVID query may contain, in declaration order."""

    return [
        {"key": name, "type": COVID_FIELD_TYPES[name], "optional": True}
        for name in CovidQuery.model_fields
    ]


def covid_query_from_obj(obj: Any) -> CovidQuery:
    """Validate and parse a CovidQuery from an arbitrary decoded JSON object."""

    return CovidQuery.model_validate(obj)
