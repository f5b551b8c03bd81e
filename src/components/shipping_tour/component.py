"""
Shipping tour component - Onboarding tour for default shipping zones.

The tour is shown once default shipping zones were created for the store
and the merchant has not reviewed them yet. Closing it marks them reviewed.
"""

from __future__ import annotations

from src.components.site_visibility.ports import OptionsStorePort
from src.domain.entities import (
    CREATED_DEFAULT_SHIPPING_ZONES_OPTION,
    REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION,
)

from .models import CloseTourOutput, GetTourOutput, TourConfig, TourStep

SHIPPING_ZONES_TABLE = "table.wc-shipping-zones"

SHIPPING_TOUR = TourConfig(
    placement="auto",
    steps=(
        TourStep(
            name="shipping-zones",
            heading="Shipping zones",
            descriptions=(
                "We added a few shipping zones for you based on your location, "
                "but you can manage them at any time.",
                "A shipping zone is a geography area where a certain set of "
                "shipping methods are offered.",
            ),
            reference_element=SHIPPING_ZONES_TABLE,
        ),
        TourStep(
            name="shipping-methods",
            heading="Shipping methods",
            descriptions=(
                "We defaulted to some recommended shipping methods based on your "
                "store location, but you can manage them at any time within each "
                "shipping zone settings.",
            ),
            reference_element=SHIPPING_ZONES_TABLE,
        ),
    ),
    close_option=REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION,
)


def should_show_tour(created_defaults: str | None, reviewed_defaults: str | None) -> bool:
    return created_defaults == "yes" and reviewed_defaults != "yes"


def run_get_tour(*, options: OptionsStorePort) -> GetTourOutput:
    """Return the tour configuration if the tour should be shown."""
    show = should_show_tour(
        options.get(CREATED_DEFAULT_SHIPPING_ZONES_OPTION),
        options.get(REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION),
    )
    return GetTourOutput(show=show, config=SHIPPING_TOUR if show else None)


def run_close_tour(*, options: OptionsStorePort) -> CloseTourOutput:
    """Mark the default shipping zones as reviewed."""
    options.set(REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION, "yes")
    return CloseTourOutput(updated={REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION: "yes"})
