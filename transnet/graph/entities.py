"""Resolve the typed entities a translation record contributes to the graph."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from ..data.models import AttributeKind, EntitySpec, TranslationRecord
from ..data.preprocess import clean_entity_value, normalize_whitespace
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

Extractor = Callable[[TranslationRecord, EntitySpec], object]

_EXTRACTORS: Dict[AttributeKind, Extractor] = {
    AttributeKind.AUTHOR: lambda record, _: record.author,
    AttributeKind.TRANSLATOR: lambda record, _: record.translator,
    AttributeKind.PUBLISHER: lambda record, _: record.publisher,
    AttributeKind.JOURNAL: lambda record, _: record.journal,
    AttributeKind.CITY: lambda record, _: record.city,
    AttributeKind.ORIGINAL_CITY: lambda record, _: record.original_city,
    AttributeKind.SOURCE_LANGUAGE: lambda record, _: record.source_language,
    AttributeKind.TARGET_LANGUAGE: lambda record, _: record.target_language,
    AttributeKind.CUSTOM: lambda record, spec: record.extra.get(spec.custom_name or "", ""),
}


@dataclass(frozen=True, slots=True)
class ResolvedEntity:
    """An entity occurrence inside one record."""

    identity: str
    name: str
    group: str


def make_identity(group: str, value: str) -> str:
    return f"{group}:{normalize_whitespace(value)}"


class EntityResolver:
    """Map records to the entities selected by an ordered list of entity specs."""

    def __init__(self, entity_specs: Sequence[EntitySpec]):
        self.entity_specs = list(entity_specs)

    def resolve(self, record: TranslationRecord) -> List[ResolvedEntity]:
        resolved: List[ResolvedEntity] = []
        for spec in self.entity_specs:
            extractor = _EXTRACTORS.get(spec.kind)
            if extractor is None:
                continue
            value = clean_entity_value(extractor(record, spec))
            if value is None:
                continue
            group = spec.attribute_key
            resolved.append(ResolvedEntity(make_identity(group, value), value, group))
        if not resolved:
            LOGGER.debug("Record %r resolved to no entities", record.record_id)
        return resolved


def resolve_entities(
    record: TranslationRecord, entity_specs: Sequence[EntitySpec]
) -> List[ResolvedEntity]:
    """Convenience wrapper around `EntityResolver.resolve`."""
    return EntityResolver(entity_specs).resolve(record)
