import pytest

from elements.store import ElementStore


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "te" / "test.db")


@pytest.fixture
def store(store_path):
    store = ElementStore.open(store_path)
    yield store
    store.close()


@pytest.fixture
def populated_store_path(store_path):
    """A closed store holding three Measures and one GoodsNomenclature."""
    with ElementStore.open(store_path) as store:
        store.insert("1", "Measure", '{"hjid":"1","sid":"100"}')
        store.insert("2", "Measure", '{"hjid":"2","sid":"200"}')
        store.insert("3", "Measure", '{"hjid":"3","sid":"300"}')
        store.insert("4", "GoodsNomenclature", '{"hjid":"4","code":"0101210000"}')
        store.flush()
    return store_path
