import pytest

from aamva_dlid import tables

from aamva_dlid.tables._csv_reading import read_csv_without_comments


def test_subfile_designator_size():
    assert tables.SUBFILE_DESIGNATOR_SIZE == 10


def test_recognized_subfile_types():
    assert tables.RECOGNIZED_SUBFILE_TYPES == ("DL", "ID")


def test_comments_skipped():
    rows = read_csv_without_comments("data_elements.csv")
    assert rows[0] == {
        "element_id": "DCA",
        "description": "Jurisdiction-specific vehicle class",
    }


def test_data_elements():
    assert tables.data_element_name("DCS") == "Customer family name"
    assert tables.data_element_name("DAQ") == "Customer ID number"
    assert tables.data_element_name("ZZZ") is None
    
    for element_id in tables.DATA_ELEMENTS:
        assert len(element_id) == 3
        assert element_id.isupper()


def test_issuers():
    assert tables.ISSUERS["636000"] == tables.Issuer("Virginia", "USA")
    assert tables.issuer_name("636000") == "Virginia, USA"
    assert tables.issuer_name("604428") == "Quebec, Canada"
    assert tables.issuer_name("000000") is None
    
    for iin in tables.ISSUERS:
        assert len(iin) == 6
        assert iin.isdigit()
