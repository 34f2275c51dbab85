import pytest

from common.tests.util import write_taric_file
from elements.exceptions import DuplicateIdentifierError
from elements.store import ElementStore
from importer.taric import parse_taric_file


def test_parse_taric_file(tmp_path, store_path, measure_xml, goods_xml):
    taric_file = write_taric_file(tmp_path / "export.xml", measure_xml, goods_xml)

    count = parse_taric_file(taric_file, store_path)

    assert count == 2
    with ElementStore.open_read_only(store_path) as store:
        assert {tc.type for tc in store.type_counts()} == {
            "Measure",
            "GoodsNomenclature",
        }
        assert store.element("11").payload["sid"] == "3000001"


def test_parse_taric_file_replaces_previous_contents(tmp_path, store_path, goods_xml):
    first = write_taric_file(
        tmp_path / "first.xml",
        "<Measure><hjid>1</hjid></Measure>",
    )
    second = write_taric_file(tmp_path / "second.xml", goods_xml)

    parse_taric_file(first, store_path)
    parse_taric_file(second, store_path)

    with ElementStore.open_read_only(store_path) as store:
        assert [tc.type for tc in store.type_counts()] == ["GoodsNomenclature"]


def test_parse_taric_file_reports_progress(tmp_path, store_path, measure_xml):
    taric_file = write_taric_file(tmp_path / "export.xml", *[measure_xml] * 50)
    samples = []

    parse_taric_file(taric_file, store_path, chunk_size=256, on_progress=samples.append)

    assert len(samples) > 1
    assert samples == sorted(samples)
    assert samples[-1] == 1.0


def test_parse_taric_file_strict(tmp_path, store_path):
    taric_file = write_taric_file(
        tmp_path / "export.xml",
        "<Measure><hjid>5</hjid></Measure>",
        "<Measure><hjid>5</hjid></Measure>",
    )

    with pytest.raises(DuplicateIdentifierError):
        parse_taric_file(taric_file, store_path, strict=True)


def test_parse_taric_file_missing_input(tmp_path, store_path):
    with pytest.raises(FileNotFoundError):
        parse_taric_file(str(tmp_path / "missing.xml"), store_path)
