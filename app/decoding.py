"""
Byte decoding for uploaded ledgers.

Rules:
- UTF-8 is tried first (utf-8-sig, so a leading BOM never reaches the header).
- If that fails, use the best guess from charset-normalizer.
- Last resort: UTF-8 with replacement characters, so ingestion can still run.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)


def decode_ledger_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text and report how it was done.
    """
    detected: Optional[str] = None
    decode_used = "utf-8-sig"
    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except UnicodeDecodeError:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding
            decode_used = detected
            text = str(match)
        else:
            decode_used = "utf-8"
            text = raw.decode(decode_used, errors="replace")
            decode_fallback = True
        logger.info("Ledger is not UTF-8; decoded as %s", decode_used)

    return text, {
        "detected": detected,
        "decode_used": "utf-8" if decode_used == "utf-8-sig" else decode_used,
        "decode_fallback": decode_fallback,
    }
