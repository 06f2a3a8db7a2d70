"""Holds the server's text resources as a module-global.

The server populates this module during startup using `load_resources()`;
tools read it through `get_resource_map()`.
"""
from pathlib import Path
from typing import Dict, List, Tuple
import logging

logger = logging.getLogger(__name__)

RESOURCE_SUFFIXES = (".md", ".txt")

resource_map: Dict[str, str] = {}


def load_resources(resources_dir: Path) -> List[Tuple[Path, str]]:
    """Read every markdown/text file under `resources_dir` and index it by lower-cased stem."""
    files: List[Tuple[Path, str]] = []
    mapping: Dict[str, str] = {}
    if resources_dir.is_dir():
        for file_path in sorted(resources_dir.iterdir()):
            if file_path.is_file() and file_path.suffix.lower() in RESOURCE_SUFFIXES:
                content = file_path.read_text(encoding="utf-8")
                files.append((file_path, content))
                mapping[file_path.stem.lower()] = content
    else:
        logger.warning(f"Resources directory {resources_dir} not found")
    set_resource_map(mapping)
    logger.info(f"Total resources discovered: {len(files)}, resource names: {list(mapping.keys())}")
    return files


def set_resource_map(mapping: Dict[str, str]) -> None:
    global resource_map
    resource_map = mapping


def get_resource_map() -> Dict[str, str]:
    return resource_map
