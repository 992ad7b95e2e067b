"""
Tests for the AI dictionary and the raw-to-bracketed decoder.

Tests cover:
- 3-character before 2-character AI lookup
- Fixed-length clamping and variable-length consumption
- Separator boundaries
- Skipped-character diagnostics
"""

import pytest
from gs1_scanner import decode, decode_with_diagnostics, load_ai_dictionary
from gs1_scanner.core.ai_dictionary import AIDictionary, AIEntry, EXTRACTED_AIS


class TestAIDictionary:
    """Tests for the static AI table."""

    def test_fixed_lengths(self):
        """Test fixed lengths of the core AIs."""
        dictionary = load_ai_dictionary()
        assert dictionary.get("01").length == 14
        assert dictionary.get("17").length == 6
        assert dictionary.get("20").length == 2

    def test_variable_lengths(self):
        """Test that batch, serial and count are variable-length."""
        dictionary = load_ai_dictionary()
        for ai in ("10", "21", "30", "240", "251"):
            assert dictionary.get(ai).is_variable, ai

    def test_extracted_ais_are_known(self):
        """Every AI the extractor reads is in the dictionary."""
        dictionary = load_ai_dictionary()
        assert all(ai in dictionary for ai in EXTRACTED_AIS)
        assert len(dictionary) == 19

    def test_three_char_preferred(self):
        """Test 3-character AI wins over 2-character AI."""
        dictionary = AIDictionary({
            "24": AIEntry("24", "TWO", 2),
            "240": AIEntry("240", "THREE", 0),
        })
        entry, size = dictionary.find_match("240ABC")
        assert entry.ai == "240"
        assert size == 3

    def test_no_match(self):
        """Test unknown prefix."""
        entry, size = load_ai_dictionary().find_match("99XYZ")
        assert entry is None
        assert size == 0

    def test_dictionary_is_read_only(self):
        """Test entries cannot be replaced through all_entries()."""
        dictionary = load_ai_dictionary()
        copy = dictionary.all_entries()
        copy["01"] = AIEntry("01", "BROKEN", 3)
        assert dictionary.get("01").length == 14


class TestDecode:
    """Tests for decode()."""

    def test_standard_payload_with_separators(self):
        """Test GTIN + expiry + batch + serial with separators."""
        result = decode("010629700000123417250630|10ABC001|21SN123")
        assert result == "(01)06297000001234(17)250630(10)ABC001(21)SN123"

    def test_fixed_length_clamped(self):
        """Test a truncated fixed-length value is clamped to the part end."""
        assert decode("0106297") == "(01)06297"

    def test_variable_consumes_rest_of_part(self):
        """Two variable AIs without a separator cannot be split."""
        assert decode("10ABC21SN1") == "(10)ABC21SN1"

    def test_value_never_spans_separator(self):
        """Test a fixed-length value stops at the separator."""
        assert decode("10AB|1712") == "(10)AB(17)12"

    def test_three_char_ai(self):
        """Test 3-character AI decoding."""
        assert decode("240XYZ-1") == "(240)XYZ-1"

    def test_nothing_decoded_returns_input(self):
        """Test input returned unchanged when no AI is found."""
        assert decode("ABC") == "ABC"

    def test_empty_payload(self):
        """Test empty payload."""
        assert decode("") == ""


class TestDecodeDiagnostics:
    """Tests for decode_with_diagnostics()."""

    def test_clean_decode_has_no_skips(self):
        """Test no skips reported for a well-formed payload."""
        result = decode_with_diagnostics("0106297000001234|10LOT1")
        assert result.skipped == 0
        assert result.decoded
        assert [e.ai for e in result.elements] == ["01", "10"]
        assert result.elements[1].part_index == 1

    def test_leading_garbage_is_counted(self):
        """Test an unknown leading character is skipped and counted."""
        result = decode_with_diagnostics("X0106297000001234")
        assert result.bracketed == "(01)06297000001234"
        assert result.skipped == 1
        assert result.skipped_positions == ((0, 0),)

    def test_skip_positions_per_part(self):
        """Test skipped positions carry their part index."""
        result = decode_with_diagnostics("ZZ|X10A")
        assert result.bracketed == "(10)A"
        assert result.skipped_positions == ((0, 0), (0, 1), (1, 0))

    def test_undecodable_payload(self):
        """Test undecodable payload reports every character."""
        result = decode_with_diagnostics("ABC")
        assert not result.decoded
        assert result.bracketed == "ABC"
        assert result.skipped == 3

    def test_skip_is_logged(self, caplog):
        """Test a warning is logged when characters are dropped."""
        with caplog.at_level("WARNING", logger="gs1_scanner.core.raw_decoder"):
            decode_with_diagnostics("X0106297000001234")
        assert "skipped 1 character" in caplog.text


class TestDecodeRoundTrip:
    """Decoding fixed-length payloads gives the same fields as bracketed input."""

    @pytest.mark.parametrize("raw,bracketed", [
        ("0106297000001234", "(01)06297000001234"),
        ("010629700000123417250630", "(01)06297000001234(17)250630"),
        ("01062970000012341725063011240101", "(01)06297000001234(17)250630(11)240101"),
        ("1725063001062970000012342001", "(17)250630(01)06297000001234(20)01"),
    ])
    def test_fixed_length_round_trip(self, raw, bracketed):
        assert decode(raw) == bracketed
