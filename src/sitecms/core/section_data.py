"""Typed variants of the content_sections.data JSON bag, keyed by section_type"""

import json
import logging
from typing import Any, Union

from pydantic import BaseModel, ValidationError

from sitecms.crud.models import SectionTypeEnum


logger = logging.getLogger(__name__)


class Button(BaseModel):
    text: str = ""
    link: str = "#"
    style: str = "primary"


class Feature(BaseModel):
    title: str = ""
    description: str = ""


class Stat(BaseModel):
    number: str = ""
    label: str = ""


class EmptyData(BaseModel):
    pass


class ButtonsData(BaseModel):
    buttons: list[Button] = []


class FeaturesData(BaseModel):
    features: list[Feature] = []


class StatsData(BaseModel):
    stats: list[Stat] = []


class ProductData(BaseModel):
    features: list[Union[str, Feature]] = []

    def feature_titles(self) -> list[str]:
        return [f if isinstance(f, str) else f.title for f in self.features]


SectionData = Union[EmptyData, ButtonsData, FeaturesData, StatsData, ProductData]

DATA_MODELS: dict[str, type[BaseModel]] = {
    SectionTypeEnum.hero.value: ButtonsData,
    SectionTypeEnum.cta.value: ButtonsData,
    SectionTypeEnum.feature.value: FeaturesData,
    SectionTypeEnum.stats.value: StatsData,
    SectionTypeEnum.product.value: ProductData,
    SectionTypeEnum.solution.value: ProductData,
}


def load_json_object(raw: Any) -> dict:
    """Return raw as a dict, decoding JSON strings; anything malformed becomes {}."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (str, bytes)) and raw:
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed section data: %.60r", raw)
            return {}
        return value if isinstance(value, dict) else {}
    return {}


def parse_section_data(section_type: str, raw: Any) -> SectionData:
    """Validate the data bag against the variant for section_type.

    Invalid payloads degrade to the variant's empty instance so rendering
    still shows title, content, and image.
    """
    model = DATA_MODELS.get(section_type, EmptyData)
    try:
        return model.model_validate(load_json_object(raw))
    except ValidationError as e:
        logger.warning("Invalid %s section data, rendering without it: %s", section_type, e.error_count())
        return model()
