# tests/conftest.py
import sys
import os

# Add repository root to path so the src.* imports resolve
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from src.shared_coord_exporter.core.mep_model import (
    ElementKind,
    FlowDirection,
    HostCategory,
    HostElement,
    LocationCurve,
    LocationPoint,
    Point3,
)
from src.shared_coord_exporter.mep.connectivity.connector_graph import ConnectorGraph


def _pipe(unique_id, start=(0.0, 0.0, 0.0), end=(10.0, 0.0, 0.0), name=None):
    return HostElement(
        unique_id=unique_id,
        name=name or f"Pipe {unique_id}",
        category=HostCategory.PIPE_CURVES,
        category_name="Pipes",
        kind=ElementKind.PIPE,
        location=LocationCurve(Point3(*start), Point3(*end)),
    )


def _family(
    unique_id,
    family_name,
    category=HostCategory.MECHANICAL_EQUIPMENT,
    category_name="Mechanical Equipment",
    point=(0.0, 0.0, 0.0),
):
    return HostElement(
        unique_id=unique_id,
        name=family_name,
        category=category,
        category_name=category_name,
        kind=ElementKind.FAMILY_INSTANCE,
        family_name=family_name,
        location=LocationPoint(Point3(*point)) if point is not None else None,
    )


def _fitting(unique_id, family_name="Standard Elbow", category=HostCategory.PIPE_FITTING):
    category_name = "Pipe Fittings" if category == HostCategory.PIPE_FITTING else "Pipe Accessories"
    return _family(unique_id, family_name, category=category, category_name=category_name)


@pytest.fixture
def make_pipe():
    """Factory for pipe snapshots."""
    return _pipe


@pytest.fixture
def make_family():
    """Factory for family instance snapshots."""
    return _family


@pytest.fixture
def make_fitting():
    """Factory for pipe fitting/accessory snapshots."""
    return _fitting


@pytest.fixture
def pump_pipe_tank_graph():
    """
    Pump (outlet) -> pipe -> tank (inlet).

    Element ids: "pump-1", "pipe-1", "tank-1".
    """
    graph = ConnectorGraph()
    graph.add_element(_family("pump-1", "Centrifugal Pump", point=(0.0, 0.0, 0.0)))
    graph.add_element(_pipe("pipe-1", start=(0.0, 0.0, 0.0), end=(20.0, 0.0, 0.0)))
    graph.add_element(_family("tank-1", "Storage Tank", point=(20.0, 0.0, 0.0)))

    pump_out = graph.add_connector("pump-1", FlowDirection.OUT)
    pipe_in = graph.add_connector("pipe-1", FlowDirection.IN)
    pipe_out = graph.add_connector("pipe-1", FlowDirection.OUT)
    tank_in = graph.add_connector("tank-1", FlowDirection.IN)

    graph.connect(pump_out, pipe_in)
    graph.connect(pipe_out, tank_in)
    return graph


@pytest.fixture
def pipe_elbow_valve_graph():
    """
    Pipe -> elbow fitting -> valve.

    Element ids: "pipe-1", "elbow-1", "valve-1". The pipe's connector
    toward the elbow has outlet direction.
    """
    graph = ConnectorGraph()
    graph.add_element(_pipe("pipe-1"))
    graph.add_element(_fitting("elbow-1"))
    graph.add_element(_family(
        "valve-1", "Gate Valve",
        category=HostCategory.PIPE_ACCESSORY, category_name="Pipe Accessories",
    ))

    pipe_out = graph.add_connector("pipe-1", FlowDirection.OUT)
    elbow_a = graph.add_connector("elbow-1")
    elbow_b = graph.add_connector("elbow-1")
    valve_in = graph.add_connector("valve-1", FlowDirection.IN)

    graph.connect(pipe_out, elbow_a)
    graph.connect(elbow_b, valve_in)
    return graph
