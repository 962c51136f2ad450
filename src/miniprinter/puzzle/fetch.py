"""Puzzle document retrieval.

Downloads the daily mini crossword JSON and validates it into a
PuzzleDocument. Nothing is printed if this step fails.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Union

import aiohttp
from pydantic import ValidationError

from miniprinter.config.settings import DEFAULT_PUZZLE_URL
from miniprinter.errors import FetchError, SchemaError
from miniprinter.puzzle.models import PuzzleDocument

logger = logging.getLogger(__name__)


def parse_puzzle(payload: Any) -> PuzzleDocument:
    """Validate a decoded JSON payload into a PuzzleDocument.

    Args:
        payload: Decoded JSON body

    Returns:
        Validated puzzle document

    Raises:
        SchemaError: if the payload does not match the model
    """
    try:
        return PuzzleDocument.model_validate(payload)
    except ValidationError as e:
        raise SchemaError(f"Puzzle document has unexpected shape: {e}") from e


async def fetch_puzzle(
    url: str = DEFAULT_PUZZLE_URL,
    user_agent: str = "miniprinter",
    timeout: float = 30.0,
) -> PuzzleDocument:
    """Download and validate the puzzle document.

    Args:
        url: Puzzle endpoint
        user_agent: User-Agent header value
        timeout: Total request timeout in seconds

    Returns:
        Validated puzzle document

    Raises:
        FetchError: on network failure, timeout or a non-2xx response
        SchemaError: if the body is not JSON or does not match the model
    """
    logger.info(f"Fetching puzzle from {url}")
    try:
        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout),
            headers={"User-Agent": user_agent},
        ) as session:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(f"Puzzle request failed: HTTP {response.status}")
                body = await response.read()
    except asyncio.TimeoutError as e:
        raise FetchError(f"Timed out fetching puzzle after {timeout}s") from e
    except aiohttp.ClientError as e:
        raise FetchError(f"Network error fetching puzzle: {e}") from e

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise SchemaError(f"Puzzle response is not valid JSON: {e}") from e

    document = parse_puzzle(payload)
    logger.info(f"Fetched puzzle for {document.publication_date.isoformat()}")
    return document


def load_puzzle(path: Union[str, Path]) -> PuzzleDocument:
    """Load a puzzle document saved to disk.

    Raises:
        FetchError: if the file cannot be read
        SchemaError: if the file is not JSON or does not match the model
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FetchError(f"Cannot read puzzle file {path}: {e}") from e

    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise SchemaError(f"Puzzle file {path} is not valid JSON: {e}") from e

    logger.info(f"Loaded puzzle from {path}")
    return parse_puzzle(payload)
