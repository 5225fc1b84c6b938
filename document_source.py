#!/usr/bin/env python3
"""
Loading source documents for export.

A source document can come from a file, stdin ("-"), raw JSON text, or an
HTTP(S) URL. URL fetches are retried with exponential backoff on connection
errors, timeouts and 5xx responses.

Usage:
    from document_source import load_document

    document = load_document("results.json")
    document = load_document("https://example.org/api/election/42/results")
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Union

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)

from export_errors import MalformedInputError
from export_types import Language

logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 30  # seconds
URL_PREFIXES = ("http://", "https://")


def parse_document(raw: Union[str, bytes, bytearray], language: Language = Language.EN) -> dict:
    """
    Parse JSON text into a source document.

    Args:
        raw: JSON text or UTF-8 bytes (a leading byte-order mark is allowed)
        language: Language for the error message

    Returns:
        The parsed document

    Raises:
        MalformedInputError: If the text is not JSON or the top level is not an object
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInputError.localized(language, f"not UTF-8 text ({e.reason})") from e
    else:
        raw = raw.lstrip("\ufeff")

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedInputError.localized(
            language, f"invalid JSON at line {e.lineno} column {e.colno}"
        ) from e

    if not isinstance(document, dict):
        raise MalformedInputError.localized(language, "top-level value must be a JSON object")
    return document


def _is_transient(exc: BaseException) -> bool:
    """Connection problems, timeouts and server errors are worth retrying."""
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code >= 500
    return False


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception(_is_transient),
    reraise=True
)
def fetch_document(url: str, timeout: int = DEFAULT_TIMEOUT) -> bytes:
    """
    Download a source document.

    Raises:
        requests.HTTPError: On a 4xx response, or a 5xx after 3 attempts
        requests.ConnectionError: After 3 failed attempts
    """
    logger.info(f"Fetching source document: {url}")
    response = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
    response.raise_for_status()
    return response.content


def load_document(
    source: str,
    language: Language = Language.EN,
    timeout: int = DEFAULT_TIMEOUT,
    max_bytes: Optional[int] = None,
) -> dict:
    """
    Load and parse a source document.

    Args:
        source: "-" for stdin, an http(s) URL, or a file path
        language: Language for error messages
        timeout: Request timeout for URLs, in seconds
        max_bytes: Reject files larger than this (None = no limit)

    Returns:
        The parsed document

    Raises:
        FileNotFoundError: If a file path does not exist
        ValueError: If the file exceeds max_bytes
        MalformedInputError: If the content is not a JSON object
    """
    if source == "-":
        return parse_document(sys.stdin.read(), language)

    if source.lower().startswith(URL_PREFIXES):
        return parse_document(fetch_document(source, timeout=timeout), language)

    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"Source document not found: {source}")
    size = path.stat().st_size
    if max_bytes is not None and size > max_bytes:
        raise ValueError(f"Source document too large: {size} bytes (max {max_bytes})")
    logger.debug(f"Reading source document: {path} ({size} bytes)")
    return parse_document(path.read_bytes(), language)
