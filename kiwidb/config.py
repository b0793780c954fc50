"""Server configuration read from an INI file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

_UINT_RE = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1
_DIGITS = "0123456789"

_UNITS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}

_TRUE_WORDS = frozenset(("yes", "true", "1", "on"))
_FALSE_WORDS = frozenset(("no", "false", "0", "off"))


class ConfigError(Exception):
    """Base class of configuration errors."""


class ConfigFileError(ConfigError):
    """The configuration file could not be read."""

    def __init__(self, path: Union[str, Path], source: OSError) -> None:
        self.path = path
        self.source = source
        super().__init__(f"Could not read file {path}: {source}")


class InvalidConfigError(ConfigError):
    """The file content is not a valid configuration."""

    def __init__(self, source: object) -> None:
        self.source = source
        super().__init__(f"Invalid configuration: {source}")


class ConfigValidationError(ConfigError):
    """A configuration value lies outside its allowed range."""

    def __init__(self, problems: Dict[str, str]) -> None:
        self.problems = problems
        detail = "; ".join(f"{name}: {text}" for name, text in problems.items())
        super().__init__(f"validate fail: {detail}")


class MemoryParseError(ValueError):
    """A memory size could not be read."""


class InvalidNumberError(MemoryParseError):
    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid data: {source}")


class UnknownUnitError(MemoryParseError):
    def __init__(self, unit: str) -> None:
        self.unit = unit
        super().__init__(
            f"invalid memory uint: '{unit}'. support: B, K, M, G, T (ignore letter case)"
        )


class InvalidMemoryFormatError(MemoryParseError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"wrong format: '{raw}'. correct example: 256MB, 1.5GB, 512K")


class OutOfRangeError(MemoryParseError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"out of range: '{raw}'. max : ~16EB (2^64 bytes)")


def _parse_uint(text: str, maximum: int) -> int:
    if not _UINT_RE.fullmatch(text):
        raise ValueError(f"invalid digit found in string: {text!r}")
    value = int(text)
    if value > maximum:
        raise ValueError(f"number too large to fit in target type: {text!r}")
    return value


def parse_memory(text: str) -> int:
    """Read a size such as "512", "256MB" or "1,024K" into a byte count."""
    cleaned = text.strip().replace(",", "").upper()
    num_end = max((i + 1 for i, ch in enumerate(cleaned) if ch in _DIGITS), default=0)
    num_str = cleaned[:num_end]
    unit = cleaned[num_end:].strip()

    if not num_str:
        raise InvalidMemoryFormatError(text)
    try:
        number = _parse_uint(num_str, _U64_MAX)
    except ValueError as exc:
        raise InvalidNumberError(str(exc)) from None

    multiplier = _UNITS.get(unit)
    if multiplier is None:
        raise UnknownUnitError(unit)

    size = number * multiplier
    if size > _U64_MAX:
        raise OutOfRangeError(text)
    return size


def parse_bool(text: str) -> bool:
    """Read yes/no, true/false, 1/0 or on/off, ignoring case."""
    word = text.lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError("expected one of: yes, no, true, false, 1, 0, on, off")


def _read_ini(content: str) -> Dict[str, str]:
    """Return the key=value pairs that stand before any section header."""
    values: Dict[str, str] = {}
    in_section = False
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line[0] in ";#":
            continue
        if line.startswith("["):
            if not line.endswith("]"):
                raise ValueError(f"unterminated section header: {line!r}")
            in_section = True
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ValueError(f"expected key=value, got {line!r}")
        if not in_section:
            values[key.strip()] = value.strip()
    return values


@dataclass
class Config:
    """Server settings; every field has a default."""

    port: int = 8080
    timeout: int = 50
    log_dir: str = "/data/kiwi_rs/logs"
    memory: int = 1024 * 1024 * 1024
    redis_compatible_mode: bool = False

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Config":
        """Read, parse and validate the configuration file at path."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigFileError(path, exc) from exc

        try:
            config = cls._from_values(_read_ini(content))
        except ValueError as exc:
            raise InvalidConfigError(exc) from exc

        config.validate()
        return config

    @classmethod
    def _from_values(cls, values: Dict[str, str]) -> "Config":
        config = cls()
        if "port" in values:
            config.port = _parse_uint(values["port"], 2**16 - 1)
        if "timeout" in values:
            config.timeout = _parse_uint(values["timeout"], 2**32 - 1)
        if "log_dir" in values:
            config.log_dir = values["log_dir"]
        if "memory" in values:
            config.memory = parse_memory(values["memory"])
        if "redis_compatible_mode" in values:
            config.redis_compatible_mode = parse_bool(values["redis_compatible_mode"])
        return config

    def validate(self) -> None:
        """Raise ConfigValidationError when a value is out of range."""
        problems: Dict[str, str] = {}
        if not 1024 <= self.port <= 65535:
            problems["port"] = f"{self.port} is outside 1024..65535"
        if not 1 <= self.timeout <= 1000:
            problems["timeout"] = f"{self.timeout} is outside 1..1000"
        if problems:
            raise ConfigValidationError(problems)