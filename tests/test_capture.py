import pytest

from aamva_dlid.exceptions import HeaderParseError
from aamva_dlid.capture import (
    DLIDInput,
    SpecialCharInput,
    get_special_char,
)

from sample_payloads import EXAMPLE_PAYLOAD, EXAMPLE_SUBFILES


class FakeClock(object):
    
    def __init__(self):
        self.now = 0.0
    
    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dlid_input(clock):
    return DLIDInput(timeout=0.2, clock=clock)


def type_text(dlid_input, text):
    for char in text:
        dlid_input.append(char)


class TestDLIDInput(object):
    
    def test_initial_state(self):
        dlid_input = DLIDInput("hello")
        assert dlid_input.state == {
            "value": "hello",
            "is_capturing": False,
            "is_parsing_dlid": False,
            "result": None,
        }
    
    def test_ordinary_typing(self, dlid_input):
        type_text(dlid_input, "hi")
        assert dlid_input.state["value"] == "hi"
        assert not dlid_input.state["is_capturing"]
    
    def test_capture_payload(self, dlid_input):
        type_text(dlid_input, "hi")
        
        dlid_input.append("@")
        assert dlid_input.state["value"] == "hi@"
        assert dlid_input.state["is_capturing"]
        assert not dlid_input.state["is_parsing_dlid"]
        
        type_text(dlid_input, "\n\x1e")
        assert not dlid_input.state["is_parsing_dlid"]
        dlid_input.append("\r")
        assert dlid_input.state["is_parsing_dlid"]
        
        type_text(dlid_input, EXAMPLE_PAYLOAD[4:-1])
        assert dlid_input.state["is_capturing"]
        assert dlid_input.state["result"] is None
        
        dlid_input.append(EXAMPLE_PAYLOAD[-1])
        assert not dlid_input.state["is_capturing"]
        assert not dlid_input.state["is_parsing_dlid"]
        assert dlid_input.state["result"]["subfiles"] == EXAMPLE_SUBFILES
        
        # Captured characters are not added to the value
        assert dlid_input.state["value"] == "hi@"
        
        # Typing continues normally afterwards
        dlid_input.append("!")
        assert dlid_input.state["value"] == "hi@!"
    
    def test_header_error_cancels_capture(self, dlid_input):
        type_text(dlid_input, "me@ ")
        assert not dlid_input.state["is_capturing"]
        assert dlid_input.state["value"] == "me@ "
        
        type_text(dlid_input, "example.com")
        assert dlid_input.state["value"] == "me@ example.com"
    
    def test_header_error_after_several_characters(self, dlid_input):
        type_text(dlid_input, "@\n\x1ex")
        assert not dlid_input.state["is_capturing"]
        assert dlid_input.state["value"] == "@\n\x1ex"
    
    def test_other_errors_swallow_input_until_timeout(self, dlid_input, clock):
        type_text(dlid_input, "@\n\x1e\rAAMVA")
        assert dlid_input.state["is_capturing"]
        assert dlid_input.state["value"] == "@"
        
        clock.now = 0.1
        dlid_input.append("x")
        assert dlid_input.state["is_capturing"]
        assert dlid_input.state["value"] == "@"
        
        clock.now = 0.35
        assert dlid_input.check_timeout() is True
        assert not dlid_input.state["is_capturing"]
        assert dlid_input.state["value"] == "@\n\x1e\rAAMVAx"
    
    def test_timeout(self, dlid_input, clock):
        type_text(dlid_input, "@\n")
        
        clock.now = 0.1
        assert dlid_input.check_timeout() is False
        assert dlid_input.state["is_capturing"]
        
        clock.now = 0.3
        dlid_input.append("x")
        assert not dlid_input.state["is_capturing"]
        assert dlid_input.state["value"] == "@\nx"
    
    def test_input_extends_timeout(self, dlid_input, clock):
        dlid_input.append("@")
        for i, char in enumerate(EXAMPLE_PAYLOAD[1:]):
            clock.now = (i + 1) * 0.15
            dlid_input.append(char)
        assert dlid_input.state["result"] is not None
    
    def test_check_timeout_when_idle(self, dlid_input, clock):
        clock.now = 100
        assert dlid_input.check_timeout() is False
    
    def test_subscribe(self, dlid_input):
        calls = []
        unsubscribe = dlid_input.subscribe(lambda: calls.append(dlid_input.state))
        
        dlid_input.append("a")
        assert len(calls) == 1
        assert calls[0]["value"] == "a"
        
        unsubscribe()
        dlid_input.append("b")
        assert len(calls) == 1
        
        # Idempotent
        unsubscribe()
    
    def test_set_value(self, dlid_input):
        dlid_input.set_value("ab")
        assert dlid_input.state["value"] == "ab"
        
        dlid_input.set_value("abc@")
        assert dlid_input.state["value"] == "abc@"
        assert dlid_input.state["is_capturing"]
        
        # The replacement is typed into the capture; "x" is not a valid separator
        dlid_input.set_value("x")
        assert dlid_input.state["value"] == "x"
        assert not dlid_input.state["is_capturing"]


@pytest.mark.parametrize(
    "key,ctrl,expectation",
    [
        ("j", True, "\n"),
        ("6", True, "\x1e"),
        ("^", True, "\x1e"),
        ("Enter", False, "\r"),
        ("j", False, None),
        ("6", False, None),
        ("a", True, None),
    ],
)
def test_get_special_char(key, ctrl, expectation):
    assert get_special_char(key, ctrl) == expectation


class TestSpecialCharInput(object):
    
    def test_alt_code(self):
        special_char_input = SpecialCharInput()
        assert special_char_input.on_key_down("Alt", alt=True) is None
        assert special_char_input.on_key_down("3", alt=True) is None
        assert special_char_input.on_key_down("0", alt=True) is None
        assert special_char_input.on_key_up("3") is None
        assert special_char_input.on_key_up("Alt") == "\x1e"
        
        # Buffer reset
        assert special_char_input.on_key_down("Alt", alt=True) is None
        assert special_char_input.on_key_up("Alt") is None
    
    def test_alt_without_code(self):
        special_char_input = SpecialCharInput()
        special_char_input.on_key_down("Alt", alt=True)
        assert special_char_input.on_key_up("Alt") is None
    
    def test_invalid_alt_code(self):
        special_char_input = SpecialCharInput()
        for digit in "99999999":
            special_char_input.append_alt_code(digit)
        assert special_char_input.finish() is None
    
    def test_ctrl_and_enter(self):
        special_char_input = SpecialCharInput()
        assert special_char_input.on_key_down("j", ctrl=True) == "\n"
        assert special_char_input.on_key_down("Enter") == "\r"
        assert special_char_input.on_key_down("a") is None
        assert special_char_input.on_key_down("a", alt=True) is None
    
    def test_reset(self):
        special_char_input = SpecialCharInput()
        special_char_input.append_alt_code("1")
        special_char_input.reset()
        assert special_char_input.finish() is None
