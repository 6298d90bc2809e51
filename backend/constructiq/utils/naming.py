# backend/constructiq/utils/naming.py
import re
from typing import Any, Dict, List

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")
_NUMBER_CHUNK = re.compile(r"(\d+)")


def to_snake(name: str) -> str:
    """jobNumber -> job_number; snake_case input is returned unchanged"""
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def to_camel(name: str) -> str:
    """job_number -> jobNumber; camelCase input is returned unchanged"""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def snake_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {to_snake(key): value for key, value in data.items()}


def camel_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {to_camel(key): value for key, value in data.items()}


def natural_key(value: str) -> List[Any]:
    """Sort key that orders digit runs numerically: '2.9' < '2.10' < '10'"""
    return [int(chunk) if chunk.isdigit() else chunk.casefold()
            for chunk in _NUMBER_CHUNK.split(value or "")]
