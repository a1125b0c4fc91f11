#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/utils/encoding.py
"""Character encoding detection for byte input.

Wiki pages exported from older FSWiki installations are frequently stored
in legacy Japanese encodings (EUC-JP, Shift_JIS) rather than UTF-8, so byte
input is decoded with chardet-based detection before falling back to a
fixed list of encodings.
"""

from __future__ import annotations

import logging
from typing import Iterable

import chardet

from fswikifmt.constants import (
    DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
    DEFAULT_CHARDET_SAMPLE_SIZE,
    DEFAULT_FALLBACK_ENCODINGS,
)

logger = logging.getLogger(__name__)


def detect_encoding(
    data: bytes,
    sample_size: int = DEFAULT_CHARDET_SAMPLE_SIZE,
    confidence_threshold: float = DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
) -> str | None:
    """Detect the character encoding of ``data`` using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of leading bytes to sample
    confidence_threshold : float, default 0.7
        Minimum confidence (0.0-1.0) required to trust the detection

    Returns
    -------
    str | None
        Detected encoding name, or None when chardet finds nothing or is
        not confident enough

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: no encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} for {encoding} below threshold {confidence_threshold}")
        return None

    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    return encoding


def decode_text(
    data: bytes,
    encoding: str | None = None,
    detect: bool = True,
    fallback_encodings: Iterable[str] = DEFAULT_FALLBACK_ENCODINGS,
    confidence_threshold: float = DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
) -> str:
    """Decode document bytes to text.

    The strategies are tried in order:
    1. ``encoding`` when given (errors propagate)
    2. a UTF-8 byte order mark
    3. chardet detection, if ``detect`` is enabled
    4. each of ``fallback_encodings``
    5. UTF-8 with replacement characters

    Parameters
    ----------
    data : bytes
        Binary data to decode
    encoding : str, optional
        Forced encoding
    detect : bool, default True
        Whether to try chardet detection
    fallback_encodings : iterable of str
        Encodings tried after detection
    confidence_threshold : float, default 0.7
        Minimum chardet confidence

    Returns
    -------
    str
        Decoded text

    Raises
    ------
    UnicodeDecodeError
        If a forced ``encoding`` cannot decode the data
    LookupError
        If a forced ``encoding`` is unknown

    """
    if encoding:
        return data.decode(encoding)

    if data.startswith(b"\xef\xbb\xbf"):
        return data.decode("utf-8-sig")

    candidates: list[str] = []
    if detect:
        detected = detect_encoding(data, confidence_threshold=confidence_threshold)
        if detected:
            candidates.append(detected)
    candidates.extend(fallback_encodings)

    for candidate in candidates:
        try:
            text = data.decode(candidate)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {candidate}: {e}")
            continue
        logger.debug(f"Decoded input with encoding: {candidate}")
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")
