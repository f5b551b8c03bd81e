"""
Shipping tour component - Default shipping zones onboarding tour.
"""

from .component import (
    SHIPPING_TOUR,
    run_close_tour,
    run_get_tour,
    should_show_tour,
)
from .models import CloseTourOutput, GetTourOutput, TourConfig, TourStep

__all__ = [
    "run_get_tour",
    "run_close_tour",
    "should_show_tour",
    "SHIPPING_TOUR",
    "TourConfig",
    "TourStep",
    "GetTourOutput",
    "CloseTourOutput",
]
