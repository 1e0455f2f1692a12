"""Pytest configuration and shared fixtures."""
import pytest

import formtree.config as config_module
from formtree import ArrayDataSource, Form, get_default_generator


@pytest.fixture(autouse=True)
def reset_ids_and_options():
    """Reset the default id generator and saved options around each test."""
    # Store original values
    original_saved = config_module._saved_options

    get_default_generator().reset()
    config_module._saved_options = None

    yield

    # Restore original values after test
    get_default_generator().reset()
    config_module._saved_options = original_saved


@pytest.fixture
def form_with_defaults():
    """Form whose single data source provides default values."""
    return Form('defaults', data_sources=[ArrayDataSource({
        'foo': 'default foo',
        'grp': {'bar': 'default bar', 'list': ['x', 'y']},
    })])
