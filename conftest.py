import pytest

from apps.core.schema import SchemaCapabilities, reset_schema_capabilities, set_schema_capabilities


@pytest.fixture(autouse=True)
def schema_capabilities():
    """Every test starts on the current schema; tests may downgrade it."""
    set_schema_capabilities(SchemaCapabilities())
    yield
    reset_schema_capabilities()
