"""Operating-system information: kernel, distribution, memory, input devices, displays."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Iterable

INPUT_DIR = Path("/dev/input")
MEMINFO_PATH = Path("/proc/meminfo")
RELEASE_FILES = (
    Path("/etc/os-release"),
    Path("/usr/lib/os-release"),
    Path("/etc/lsb-release"),
)

_ULONG_MAX = 2**64 - 1
_UINT_MASK = 0xFFFFFFFF
_UNSIGNED = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d+)")


@dataclass(frozen=True)
class Memory:
    """Memory statistics in bytes."""

    physical_available: int = 0
    physical_total: int = 0
    virtual_available: int = 0
    virtual_total: int = 0


class Kernel(Enum):
    WINDOWS_NT = auto()
    LINUX = auto()
    DARWIN = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class KernelInfo:
    variant: Kernel = Kernel.UNKNOWN
    major: int = 0
    minor: int = 0
    patch: int = 0
    build_number: int = 0


@dataclass(frozen=True)
class OSInfo:
    name: str = ""
    full_name: str = ""
    major: int = 0
    minor: int = 0
    patch: int = 0
    build_number: int = 0


@dataclass(frozen=True)
class Display:
    width: int = 0
    height: int = 0
    dpi: int = 0
    bpp: int = 0
    refresh_rate: float = 0.0


@dataclass(frozen=True)
class DisplayConfig:
    width: int = 0
    height: int = 0
    refresh_rates: list[float] = field(default_factory=list)


def _read_lines(path: str | os.PathLike[str]) -> list[str] | None:
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            return handle.read().split("\n")
    except OSError:
        return None


def _strtoul(text: str) -> tuple[int, str]:
    """Parse a leading unsigned decimal like strtoul; return the value and the rest."""
    match = _UNSIGNED.match(text)
    if not match:
        return 0, text
    value = min(int(match.group(2)), _ULONG_MAX)
    if match.group(1) == "-":
        value = -value % (_ULONG_MAX + 1)
    return value, text[match.end():]


def _after_equals(line: str) -> str:
    return line[line.find("=") + 1:]


def mouse_amount(input_dir: str | os.PathLike[str] = INPUT_DIR) -> int:
    """Return the number of mouse device nodes."""
    try:
        return sum(1 for _ in Path(input_dir).glob("mouse*"))
    except OSError:
        return 0


def keyboard_amount() -> int:
    """Return the number of keyboards; not detectable here, so always 0."""
    return 0


def other_hid_amount() -> int:
    """Return the number of other HIDs; not detectable here, so always 0."""
    return 0


def memory(meminfo_path: str | os.PathLike[str] = MEMINFO_PATH) -> Memory:
    """Return memory statistics read from a meminfo file."""
    lines = _read_lines(meminfo_path)
    if lines is None:
        return Memory()

    values = {"physical_available": 0, "physical_total": 0, "virtual_available": 0, "virtual_total": 0}
    for line in lines:
        value = (_strtoul(line[line.find(":") + 1:])[0] * 1024) & _ULONG_MAX
        if line.startswith("MemTotal"):
            values["physical_total"] = value
        elif line.startswith("MemAvailable"):
            values["physical_available"] = value
        elif line.startswith("VmallocTotal"):
            values["virtual_total"] = value
        elif line.startswith("VmallocUsed"):
            values["virtual_available"] = (values["virtual_total"] - value) & _ULONG_MAX
    return Memory(**values)


def parse_kernel_release(sysname: str, release: str) -> KernelInfo:
    """Build kernel information from a uname system name and release string."""
    major, rest = _strtoul(release)
    minor, rest = _strtoul(rest[1:])
    patch, rest = _strtoul(rest[1:])
    build_number, _ = _strtoul(rest[1:])

    variant = {"Linux": Kernel.LINUX, "Darwin": Kernel.DARWIN}.get(sysname, Kernel.UNKNOWN)
    return KernelInfo(
        variant,
        major & _UINT_MASK,
        minor & _UINT_MASK,
        patch & _UINT_MASK,
        build_number & _UINT_MASK,
    )


def kernel_info() -> KernelInfo:
    """Return information about the running kernel."""
    uts = os.uname()
    return parse_kernel_release(uts.sysname, uts.release)


def _trim_quotes(text: str) -> str:
    if text.endswith('"'):
        text = text[:-1]
    if text.startswith('"'):
        text = text[1:]
    return text


def parse_os_release(text: str) -> OSInfo:
    """Parse the contents of an os-release file."""
    name = full_name = ""
    numbers = [0, 0, 0, 0]
    for line in text.split("\n"):
        if line.startswith("NAME"):
            name = _after_equals(line)
        elif line.startswith("PRETTY_NAME"):
            full_name = _after_equals(line)
        elif line.startswith("VERSION_ID"):
            marker = _after_equals(line)
            if marker.startswith('"'):
                marker = marker[1:]
            numbers[0], marker = _strtoul(marker)
            for position in range(1, 4):
                if not marker or marker[0] == '"':
                    break
                numbers[position], marker = _strtoul(marker[1:])

    major, minor, patch, build_number = (number & _UINT_MASK for number in numbers)
    return OSInfo(_trim_quotes(name), _trim_quotes(full_name), major, minor, patch, build_number)


def parse_lsb_release(text: str) -> OSInfo:
    """Parse the contents of an lsb-release file."""
    name = full_name = ""
    numbers = [0, 0, 0, 0]
    for line in text.split("\n"):
        if line.startswith("DISTRIB_ID"):
            name = _after_equals(line)
        elif line.startswith("DISTRIB_RELEASE"):
            marker = _after_equals(line)
            numbers[0], marker = _strtoul(marker)
            numbers[1], marker = _strtoul(marker[1:])
            numbers[2], marker = _strtoul(marker[1:])
            numbers[3], _ = _strtoul(marker[1:])
        elif line.startswith("DISTRIB_DESCRIPTION"):
            start = line.find('"') + 1
            full_name = line[start:len(line) - 1]

    major, minor, patch, build_number = (number & _UINT_MASK for number in numbers)
    return OSInfo(name, full_name, major, minor, patch, build_number)


def _parser_for(path: Path) -> Callable[[str], OSInfo]:
    return parse_lsb_release if path.name.endswith("lsb-release") else parse_os_release


def os_info(paths: Iterable[str | os.PathLike[str]] = RELEASE_FILES) -> OSInfo:
    """Return distribution information from the first readable release file.

    Files whose name ends in ``lsb-release`` are read in lsb-release format,
    all others in os-release format.
    """
    for candidate in paths:
        path = Path(candidate)
        lines = _read_lines(path)
        if lines is not None:
            return _parser_for(path)("\n".join(lines))
    return OSInfo()


def displays() -> list[Display]:
    """Return connected displays; no detection method is available here."""
    return []


def available_display_configurations() -> list[list[DisplayConfig]]:
    """Return display configurations; no detection method is available here."""
    return []