#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for byte input decoding."""

from unittest.mock import patch

import pytest

from fswikifmt.utils.encoding import decode_text, detect_encoding

JAPANESE_TEXT = "!見出し\n\nこれは日本語の段落です。ウィキの本文をここに書きます。\n" * 20


@pytest.mark.unit
class TestDetectEncoding:
    """Tests for chardet-based detection."""

    def test_detects_euc_jp(self) -> None:
        """Test detection of a legacy Japanese encoding."""
        encoding = detect_encoding(JAPANESE_TEXT.encode("euc-jp"))

        assert encoding is not None
        assert encoding.lower().replace("_", "-") == "euc-jp"

    def test_no_result(self) -> None:
        """Test that an empty detection result gives None."""
        with patch("fswikifmt.utils.encoding.chardet.detect", return_value={"encoding": None, "confidence": 0.0}):
            assert detect_encoding(b"abc") is None

    def test_below_threshold(self) -> None:
        """Test that a low-confidence result is ignored."""
        result = {"encoding": "windows-1252", "confidence": 0.3}
        with patch("fswikifmt.utils.encoding.chardet.detect", return_value=result):
            assert detect_encoding(b"abc", confidence_threshold=0.5) is None
            assert detect_encoding(b"abc", confidence_threshold=0.2) == "windows-1252"

    def test_samples_leading_bytes(self) -> None:
        """Test that only the sample is passed to chardet."""
        with patch("fswikifmt.utils.encoding.chardet.detect", return_value=None) as detect:
            detect_encoding(b"x" * 100, sample_size=10)

        detect.assert_called_once_with(b"x" * 10)


@pytest.mark.unit
class TestDecodeText:
    """Tests for the decoding strategy order."""

    def test_forced_encoding(self) -> None:
        """Test that a forced encoding is used without detection."""
        data = "見出し".encode("shift_jis")

        with patch("fswikifmt.utils.encoding.detect_encoding") as detect:
            assert decode_text(data, encoding="shift_jis") == "見出し"

        detect.assert_not_called()

    def test_forced_encoding_errors_propagate(self) -> None:
        """Test that a failing forced encoding raises."""
        with pytest.raises(UnicodeDecodeError):
            decode_text("日本".encode("utf-8"), encoding="ascii")

    def test_utf8_bom(self) -> None:
        """Test that a byte order mark is honored and removed."""
        assert decode_text(b"\xef\xbb\xbf!Title") == "!Title"

    def test_detected_encoding(self) -> None:
        """Test decoding detected EUC-JP text."""
        assert decode_text(JAPANESE_TEXT.encode("euc-jp")) == JAPANESE_TEXT

    def test_fallback_without_detection(self) -> None:
        """Test that fallbacks are tried in order when detection is off."""
        data = "café".encode("latin-1")

        assert decode_text(data, detect=False, fallback_encodings=("utf-8", "latin-1")) == "café"

    def test_unknown_fallback_is_skipped(self) -> None:
        """Test that an unknown fallback codec does not stop decoding."""
        assert decode_text(b"abc", detect=False, fallback_encodings=("no-such-codec", "ascii")) == "abc"

    def test_replacement_when_everything_fails(self) -> None:
        """Test the final UTF-8 decode with replacement characters."""
        result = decode_text(b"ab\xffcd", detect=False, fallback_encodings=("ascii",))

        assert result == "ab�cd"
