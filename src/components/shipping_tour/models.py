"""
Shipping tour component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TourStep:
    """One step of a guided tour."""

    name: str
    heading: str
    descriptions: tuple[str, ...]
    reference_element: str


@dataclass(frozen=True)
class TourConfig:
    """Guided tour configuration consumed by the admin client."""

    placement: str
    steps: tuple[TourStep, ...]
    close_option: str

    def to_dict(self) -> dict[str, object]:
        return {
            "placement": self.placement,
            "steps": [
                {
                    "referenceElements": {"desktop": s.reference_element},
                    "meta": {
                        "name": s.name,
                        "heading": s.heading,
                        "descriptions": {"desktop": list(s.descriptions)},
                    },
                }
                for s in self.steps
            ],
            "closeOption": self.close_option,
        }


@dataclass(frozen=True)
class GetTourOutput:
    """Output from the tour visibility check."""

    show: bool
    config: TourConfig | None = None


@dataclass(frozen=True)
class CloseTourOutput:
    """Output from closing the tour."""

    updated: dict[str, str] = field(default_factory=dict)
