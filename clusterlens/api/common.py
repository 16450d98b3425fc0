from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Union

from clusterlens.constants import DataSource


# Raw quantity as it arrives from the API server: "500m", "2Gi", 4
Quantity = Union[str, int, float]

CAMEL_MODEL_CONFIG = {
    "populate_by_name": True,
    "alias_generator": to_camel,
}


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys for the dashboard"""

    model_config = CAMEL_MODEL_CONFIG

    def to_dict(self) -> dict:
        """Serialise for the API; unset optional fields are omitted, not zeroed"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SourcedResult(CamelModel):
    source: DataSource = DataSource.LIVE

    @property
    def is_baseline(self) -> bool:
        return self.source == DataSource.BASELINE
