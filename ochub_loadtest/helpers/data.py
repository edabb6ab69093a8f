"""Sample-data fixtures for test iterations.

Fixtures are loaded once per file and shared read-only by every simulated
user of the process.

- `load_json_data()`   : load a JSON fixture, empty tuple on failure
- `random_sample()`    : random element
- `sequential_sample()`: element by iteration index (wraps around)

Fixture files shipped with the package (`ochub_loadtest/data/`):
- fashion-mnist.json : image samples (784 pixels each)
- wine.json          : wine feature samples (13 features)
- qwen-prompts.json  : LLM prompt samples
- rag-queries.json   : RAG query samples
"""

from __future__ import annotations

import json
import logging
import random
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple, Union

from ..utils.errors import EmptyDataError, FixtureLoadError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def read_fixture(path: Union[str, Path]) -> Tuple[Any, ...]:
    """
    Read a JSON fixture. A single object is normalized to a one-element tuple.

    Raises:
        FixtureLoadError: if the file is missing or not valid JSON
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise FixtureLoadError("Fixture not found", path=str(path)) from exc
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FixtureLoadError(f"Cannot read fixture: {exc}", path=str(path)) from exc
    return tuple(data) if isinstance(data, list) else (data,)


@lru_cache(maxsize=None)
def _load_cached(name: str, resolved: str) -> Tuple[Any, ...]:
    try:
        items = read_fixture(resolved)
    except FixtureLoadError as e:
        logger.error("Failed to load %s: %s", name, e)
        return ()
    logger.info("Loaded %d %s sample(s)", len(items), name)
    return items


def load_json_data(
    name: str,
    path: Union[str, Path],
    relative_to: Optional[Union[str, Path]] = None,
) -> Tuple[Any, ...]:
    """
    Load a JSON fixture once and share it read-only.

    Args:
        name: label used in log messages (e.g. 'wine-samples')
        path: fixture path; relative paths resolve against `relative_to`
            (a file or directory), else against the packaged data directory
        relative_to: usually `__file__` of the consuming module

    Returns:
        Tuple of samples; empty if the fixture could not be loaded
    """
    path = Path(path)
    if not path.is_absolute():
        if relative_to is None:
            base = DATA_DIR
        else:
            base = Path(relative_to)
            if not base.is_dir():
                base = base.parent
        path = base / path
    return _load_cached(name, str(path.resolve()))


def random_sample(data: Sequence[Any], rng: Optional[random.Random] = None) -> Any:
    """
    Random element from `data`.

    Raises:
        EmptyDataError: if `data` is empty
    """
    if not data:
        raise EmptyDataError("Data array is empty")
    return (rng or random).choice(data)


def sequential_sample(data: Sequence[Any], index: int) -> Any:
    """
    Element at `index` modulo the length of `data`; useful for deterministic runs.

    Raises:
        EmptyDataError: if `data` is empty
    """
    if not data:
        raise EmptyDataError("Data array is empty")
    return data[index % len(data)]
