"""Suite file loading utilities."""

import json
import logging
from pathlib import Path
from typing import List, Union

import aiofiles

from .models import TestSpec

logger = logging.getLogger(__name__)


async def load_suite(path: Union[str, Path]) -> List[TestSpec]:
    """
    Load test specs from a JSON suite file.

    The file must contain an array of test objects with the fields
    name, uri, requests, duration, method, body, headers and concurrency.

    Returns:
        List of specs in file order (not yet validated)

    Raises:
        FileNotFoundError: If the suite file does not exist
        ValueError: If the file is not a JSON array of test objects
    """
    suite_path = Path(path)
    if not suite_path.is_file():
        raise FileNotFoundError(f"Suite file not found: {suite_path}")

    async with aiofiles.open(suite_path, "r", encoding="utf-8") as f:
        content = await f.read()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Error parsing suite file {suite_path}: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Suite file {suite_path} must contain a JSON array of tests")

    specs = [TestSpec.from_dict(entry) for entry in data]
    logger.info(f"Loaded {len(specs)} tests from {suite_path}")
    return specs
