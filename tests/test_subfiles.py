import pytest

import logging

from aamva_dlid.string_io import StringIO
from aamva_dlid.exceptions import InsufficientData, ParseError
from aamva_dlid.structures import SubfileDesignator
from aamva_dlid.parser import Parser
from aamva_dlid.parser.subfiles import read_window, scan_records

from sample_payloads import make_payload


def test_read_window():
    reader = StringIO("0123456789")
    reader.read(8)
    designator = SubfileDesignator(type="DL", offset=2, length=3)
    assert read_window(reader, designator) == "234"
    
    # Cursor unaffected
    assert reader.pos == 8
    
    with pytest.raises(InsufficientData):
        read_window(reader, designator.replace(offset=8, length=3))


class TestScanRecords(object):
    
    @pytest.mark.parametrize(
        "window,expectation",
        [
            # Empty subfiles
            ("DL", {}),
            ("DL\r", {}),
            # Typical subfile
            ("DLDAQT64235789\nDCSSAMPLE\r", {"DAQ": "T64235789", "DCS": "SAMPLE"}),
            # Separator before the terminator
            ("DLDAQT64235789\nDCSSAMPLE\n\r", {"DAQ": "T64235789", "DCS": "SAMPLE"}),
            # End of window terminates the last record
            ("DLDAQT64235789\nDCSSAMPLE", {"DAQ": "T64235789", "DCS": "SAMPLE"}),
            ("DLDAQ1\n", {"DAQ": "1"}),
            # Empty values
            ("DLDAQ\nDCS\r", {"DAQ": "", "DCS": ""}),
            # Consecutive separators are skipped
            ("DL\nDAQ1\n\nDCS2\r", {"DAQ": "1", "DCS": "2"}),
            # Anything after the terminator is ignored
            ("DLDAQ1\rdcs?", {"DAQ": "1"}),
            # The record separator has no special meaning in records
            ("DLDAQ1\x1e2\r", {"DAQ": "1\x1e2"}),
        ],
    )
    def test_valid(self, window, expectation):
        assert scan_records(window, "\n", "\r") == expectation
    
    def test_custom_separators(self):
        assert scan_records("IDDAQ1*DCS2~", "*", "~") == {"DAQ": "1", "DCS": "2"}
    
    def test_order_preserved(self):
        records = scan_records("DLDCS1\nDAQ2\nDAC3\r", "\n", "\r")
        assert list(records) == ["DCS", "DAQ", "DAC"]
    
    @pytest.mark.parametrize("window", ["DLdaq1\r", "DLDA1\r", "DL123\r", "DL   \r"])
    def test_invalid_key(self, window):
        with pytest.raises(ParseError, match=r"Invalid record in subfile DL"):
            scan_records(window, "\n", "\r")
    
    @pytest.mark.parametrize("window", ["DLD", "DLDA", "DLDAQ1\nDC"])
    def test_truncated_key(self, window):
        with pytest.raises(ParseError, match=r"Truncated record key in subfile DL"):
            scan_records(window, "\n", "\r")
    
    def test_window_too_short(self):
        with pytest.raises(ParseError):
            scan_records("D", "\n", "\r")
    
    def test_duplicate_keys(self, caplog):
        with caplog.at_level(logging.WARNING):
            records = scan_records("DLDAQ1\nDCS2\nDAQ3\r", "\n", "\r")
        assert records == {"DAQ": "3", "DCS": "2"}
        assert "Duplicate record DAQ in subfile DL" in caplog.text


class TestSubfileSteps(object):
    
    def test_recognized_types(self):
        parser = Parser(make_payload([("DL", "DLDAQ1\r"), ("ID", "IDDCS2\r")]))
        parser.parse()
        assert parser.subfiles == {"DL": {"DAQ": "1"}, "ID": {"DCS": "2"}}
    
    def test_subfiles_read_only(self):
        parser = Parser(make_payload([("DL", "DLDAQ1\r")]))
        parser.parse()
        with pytest.raises(TypeError):
            parser.subfiles["DL"]["DAQ"] = "2"
        with pytest.raises(TypeError):
            parser.subfiles["ID"] = {}
    
    def test_unrecognized_type_skipped_but_awaited(self):
        payload = make_payload([("DL", "DLDAQ1\r"), ("ZV", "ZVZVA01\r")])
        parser = Parser(payload[:-1])
        with pytest.raises(InsufficientData):
            parser.parse()
        assert not parser.complete
        
        parser.append(payload[-1])
        assert parser.complete
        assert parser.subfiles == {"DL": {"DAQ": "1"}}
        assert [d["type"] for d in parser.subfile_designators] == ["DL", "ZV"]
    
    def test_duplicate_subfile_type_last_wins(self):
        parser = Parser(make_payload([("DL", "DLDAQ1\r"), ("DL", "DLDAQ2\r")]))
        parser.parse()
        assert parser.subfiles == {"DL": {"DAQ": "2"}}
        assert [d["type"] for d in parser.subfile_designators] == ["DL", "DL"]
    
    def test_unrecognized_type_not_scanned(self):
        parser = Parser(make_payload([("ZV", "ZVnot records at all")]))
        parser.parse()
        assert parser.subfiles == {}
    
    def test_offsets_respected(self):
        # Junk between subfiles is not read
        payload = make_payload([("DL", "DLDAQ1\r"), ("ID", "IDDCS2\r")])
        designators = payload[21:41]
        moved_designators = "DL00440007ID00510007"
        assert designators == "DL00410007ID00480007"
        payload = payload[:21] + moved_designators + "XXX" + payload[41:]
        parser = Parser(payload)
        parser.parse()
        assert parser.subfiles == {"DL": {"DAQ": "1"}, "ID": {"DCS": "2"}}
    
    def test_subfile_window_before_designators(self):
        # Windows are read from the declared offset, even within the header
        payload = make_payload([("DL", "DLDAQ1\r")])
        payload = payload.replace("DL00310007", "DL00000007")
        parser = Parser(payload)
        with pytest.raises(ParseError):
            parser.parse()
