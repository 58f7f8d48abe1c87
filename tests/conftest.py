import pytest


@pytest.fixture
def people_records():
    return [
        {"name": "John", "age": 30, "email": "john@example.com"},
        {"name": "Jane", "age": 25, "email": "jane@example.com"},
        {"name": "", "age": 35, "email": "bob@example.com"},
    ]


@pytest.fixture
def sparse_records():
    return [
        {"name": "John", "age": 30},
        {"name": "", "age": 25},
        {"name": "Bob", "age": None},
    ]
