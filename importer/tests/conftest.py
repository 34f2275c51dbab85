import pytest

from common.tests.util import RecordingStore


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "te" / "test.db")


@pytest.fixture
def measure_xml():
    return (
        "      <Measure>\n"
        "        <hjid>11</hjid>\n"
        "        <sid>3000001</sid>\n"
        "        <metainfo>\n"
        "          <origin>T</origin>\n"
        "          <status>PUBLISHED</status>\n"
        "        </metainfo>\n"
        "        <validityStartDate>2021-01-01</validityStartDate>\n"
        "        <measureType>\n"
        "          <hjid>12</hjid>\n"
        "          <measureTypeId>103</measureTypeId>\n"
        "        </measureType>\n"
        "      </Measure>"
    )


@pytest.fixture
def goods_xml():
    return (
        "      <GoodsNomenclature>\n"
        "        <hjid>21</hjid>\n"
        "        <goodsNomenclatureItemId>0101210000</goodsNomenclatureItemId>\n"
        "        <goodsNomenclatureDescriptionPeriod>\n"
        "          <hjid>22</hjid>\n"
        "          <metainfo><origin>T</origin></metainfo>\n"
        "          <goodsNomenclatureDescription>\n"
        "            <description>Pure-bred breeding animals</description>\n"
        "          </goodsNomenclatureDescription>\n"
        "        </goodsNomenclatureDescriptionPeriod>\n"
        "      </GoodsNomenclature>"
    )
