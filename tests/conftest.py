"""Pytest configuration and shared fixtures for glassopt tests."""

from __future__ import annotations

import pytest

from glassopt.domain.value_objects import Piece, PieceSpec
from glassopt.infrastructure.bin_packing import PackingResult, plan_sheets


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def kitchen_specs() -> list[PieceSpec]:
    """A small mixed cut list for a 3600x2500 sheet."""
    return [
        PieceSpec(id="door", width=1821, height=366, quantity=2, label="Door"),
        PieceSpec(id="shelf", width=1200, height=400, quantity=3),
        PieceSpec(id="top", width=2400, height=600, color="#87CEEB"),
        PieceSpec(id="splash", width=900, height=300, quantity=4),
    ]


@pytest.fixture
def small_result() -> PackingResult:
    """Two sheets worth of 900x900 pieces on a 1000x1000 sheet."""
    pieces = [Piece(id="sq", width=900, height=900, instance=i) for i in range(2)]
    pieces.append(Piece(id="strip", width=1000, height=50, label="Strip"))
    return plan_sheets(1000, 1000, pieces)
