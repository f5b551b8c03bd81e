"""
Shipping tour component unit tests.
"""

from __future__ import annotations

import pytest

from src.components.shipping_tour import (
    SHIPPING_TOUR,
    run_close_tour,
    run_get_tour,
    should_show_tour,
)
from src.domain.entities import (
    CREATED_DEFAULT_SHIPPING_ZONES_OPTION,
    REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION,
)


class MockOptionsStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._options = dict(initial or {})

    def get(self, name: str) -> str | None:
        return self._options.get(name)

    def set(self, name: str, value: str) -> None:
        self._options[name] = value

    def add_if_absent(self, name: str, value: str) -> None:
        self._options.setdefault(name, value)


class TestShouldShowTour:
    @pytest.mark.parametrize(
        ("created", "reviewed", "expected"),
        [
            ("yes", None, True),
            ("yes", "no", True),
            ("yes", "yes", False),
            ("no", None, False),
            (None, None, False),
        ],
    )
    def test_gate(self, created: str | None, reviewed: str | None, expected: bool) -> None:
        assert should_show_tour(created, reviewed) is expected


class TestRunGetTour:
    def test_shown_after_defaults_created(self) -> None:
        options = MockOptionsStore({CREATED_DEFAULT_SHIPPING_ZONES_OPTION: "yes"})

        result = run_get_tour(options=options)

        assert result.show is True
        assert result.config is SHIPPING_TOUR

    def test_hidden_without_defaults(self) -> None:
        result = run_get_tour(options=MockOptionsStore())

        assert result.show is False
        assert result.config is None

    def test_two_steps_on_zones_table(self) -> None:
        config = SHIPPING_TOUR.to_dict()

        steps = config["steps"]
        assert isinstance(steps, list)
        assert [s["meta"]["name"] for s in steps] == ["shipping-zones", "shipping-methods"]
        assert all(s["referenceElements"]["desktop"] == "table.wc-shipping-zones" for s in steps)
        assert config["placement"] == "auto"


class TestRunCloseTour:
    def test_close_hides_tour(self) -> None:
        options = MockOptionsStore({CREATED_DEFAULT_SHIPPING_ZONES_OPTION: "yes"})

        result = run_close_tour(options=options)

        assert result.updated == {REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION: "yes"}
        assert options.get(REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION) == "yes"
        assert run_get_tour(options=options).show is False
