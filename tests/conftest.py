"""Pytest configuration for the FeInt object model suite."""

import sys
from pathlib import Path

import pytest

# Add src directory to path so the suite runs without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from feint import Constructor, Method, Runtime, RuntimeConfig, Signature, TypeDefinition  # noqa: E402


@pytest.fixture
def rt() -> Runtime:
    """A fresh runtime with Int and Float registered."""
    return Runtime()


@pytest.fixture
def strict_rt() -> Runtime:
    return Runtime(RuntimeConfig(strict_math=True))


def _point_norm2(rt, this):
    d = rt.dispatcher
    x = d.read_field(this, "x")
    y = d.read_field(this, "y")
    return d.apply_operator(d.apply_operator(x, "*", x), "+", d.apply_operator(y, "*", y))


@pytest.fixture
def point_type() -> TypeDefinition:
    """``Point(x, y)`` with a ``norm2`` method."""
    return TypeDefinition.build(
        "Point",
        Constructor.assigning("x", "y"),
        methods=[Method("norm2", _point_norm2, Signature())],
    )
