"""Shared pytest fixtures."""

import pytest

from stat_profiler.profiling.column_classifier import ColumnClassifier


@pytest.fixture
def housing_rows():
    """Small mixed-type table with a clean linear relationship."""
    header = ['Rooms', 'Price', 'Distance', 'Region']
    rows = [
        {'Rooms': '1', 'Price': '120', 'Distance': '9.5', 'Region': 'North'},
        {'Rooms': '2', 'Price': '150', 'Distance': '8.1', 'Region': 'North'},
        {'Rooms': '3', 'Price': '185', 'Distance': '7.7', 'Region': 'South'},
        {'Rooms': '4', 'Price': '210', 'Distance': '5.2', 'Region': 'South'},
        {'Rooms': '5', 'Price': '240', 'Distance': '4.9', 'Region': 'East'},
        {'Rooms': '6', 'Price': '275', 'Distance': '3.0', 'Region': 'East'},
        {'Rooms': '', 'Price': '300', 'Distance': '2.2', 'Region': 'North'},
        {'Rooms': '8', 'Price': '330', 'Distance': '1.5', 'Region': None},
    ]
    return header, rows


@pytest.fixture
def housing_dataset(housing_rows):
    header, rows = housing_rows
    return ColumnClassifier.build_dataset(header, rows)


@pytest.fixture
def grouped_dataset():
    """Numeric score split into three well separated groups."""
    header = ['score', 'group']
    rows = []
    for label, scores in (('A', [1, 2, 3]), ('B', [4, 5, 6]), ('C', [7, 8, 9])):
        for score in scores:
            rows.append({'score': score, 'group': label})
    return ColumnClassifier.build_dataset(header, rows)


@pytest.fixture
def housing_csv(tmp_path):
    path = tmp_path / 'housing.csv'
    path.write_text(
        "Rooms,Price,Region\n"
        "1,120,North\n"
        "2,150,North\n"
        "3,185,South\n"
        "4,210,South\n"
        "5,240,East\n"
        "6,275,East\n"
    )
    return path
