"""Perspective taxonomy: the fixed set of named sections of a document.

The taxonomy is configuration data supplied once at startup. It knows which
top-level keys are perspectives, which perspective a bare field name belongs
to, and how to label a perspective for humans.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

DEFAULT_PERSPECTIVES: tuple[str, ...] = (
    "taxonomy",
    "physicalCharacteristics",
    "ecologyAndHabitat",
    "culinaryAndNutritional",
    "medicinalAndHealth",
    "cultivationAndProcessing",
    "safetyAndIdentification",
    "chemicalAndProperties",
    "culturalAndHistorical",
    "commercialAndMarket",
    "environmentalAndConservation",
    "researchAndInnovation",
)

DEFAULT_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "root": "Overview",
        "taxonomy": "Taxonomy",
        "physicalCharacteristics": "Physical",
        "ecologyAndHabitat": "Ecology",
        "culinaryAndNutritional": "Culinary",
        "medicinalAndHealth": "Medicinal",
        "cultivationAndProcessing": "Cultivation",
        "safetyAndIdentification": "Safety",
        "chemicalAndProperties": "Chemical",
        "culturalAndHistorical": "Cultural",
        "commercialAndMarket": "Commercial",
        "environmentalAndConservation": "Environment",
        "researchAndInnovation": "Research",
    }
)

DEFAULT_FIELD_MAP: Mapping[str, str] = MappingProxyType(
    {
        "primaryCompounds": "chemicalAndProperties",
        "secondaryMetabolites": "chemicalAndProperties",
        "enzymeActivity": "chemicalAndProperties",
        "nutritionalValue": "culinaryAndNutritional",
        "flavorProfile": "culinaryAndNutritional",
        "preparationMethods": "culinaryAndNutritional",
        "cultivationDifficulty": "cultivationAndProcessing",
        "substratePreferences": "cultivationAndProcessing",
        "cultivationMethods": "cultivationAndProcessing",
        "medicinalProperties": "medicinalAndHealth",
        "activeCompounds": "medicinalAndHealth",
        "therapeuticApplications": "medicinalAndHealth",
        "activeResearchAreas": "researchAndInnovation",
        "innovativeApplications": "researchAndInnovation",
        "substrate": "ecologyAndHabitat",
        "seasonality": "ecologyAndHabitat",
        "primarySeason": "ecologyAndHabitat",
        "habitat": "ecologyAndHabitat",
        "edibility": "safetyAndIdentification",
        "toxicityLevel": "safetyAndIdentification",
        "capColor": "physicalCharacteristics",
        "sporePrintColor": "physicalCharacteristics",
        "kingdom": "taxonomy",
        "phylum": "taxonomy",
        "class": "taxonomy",
        "order": "taxonomy",
        "family": "taxonomy",
        "genus": "taxonomy",
        "commercialValue": "commercialAndMarket",
        "marketSegments": "commercialAndMarket",
        "ecologicalRole": "environmentalAndConservation",
        "ecosystemServices": "environmentalAndConservation",
        "historicalSignificance": "culturalAndHistorical",
        "firstDocumented": "culturalAndHistorical",
    }
)


@dataclass(frozen=True, slots=True)
class PerspectiveTaxonomy:
    """Known perspectives plus the field-to-perspective lookup table.

    Attributes:
        names: Perspective names in display order.
        field_map: Bare field name to perspective name. Every perspective
            name also maps to itself.
        labels: Short human labels, keyed by perspective name or ``root``.
    """

    names: Sequence[str] = DEFAULT_PERSPECTIVES
    field_map: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_FIELD_MAP))
    labels: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_LABELS))

    def __post_init__(self) -> None:
        names = tuple(dict.fromkeys(self.names))
        merged = {name: name for name in names}
        merged.update(self.field_map)
        object.__setattr__(self, "names", names)
        object.__setattr__(self, "field_map", MappingProxyType(merged))
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    def is_perspective(self, name: str) -> bool:
        return name in self.names

    def perspective_for_field(self, field_name: str) -> str | None:
        """Return the perspective a bare field name belongs to, if any."""
        return self.field_map.get(field_name)

    def label(self, name: str) -> str:
        return self.labels.get(name, name)

    def candidates(self, active: Iterable[str] | None) -> tuple[str, ...]:
        """Return the perspectives to search for a lookup.

        Args:
            active: Currently active perspective names, in caller order.

        Returns:
            The known active perspectives (deduplicated, order kept), or every
            known perspective when none of the active names is a perspective.
        """
        chosen = tuple(name for name in dict.fromkeys(active or ()) if name in self.names)
        return chosen if chosen else tuple(self.names)
