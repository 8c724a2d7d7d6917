"""Processor information: architecture, caches, counts, frequency and features."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

CPUINFO_PATH = Path("/proc/cpuinfo")
CACHE_ROOT = Path("/sys/devices/system/cpu/cpu0/cache")

_ULONG_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d+)")
_FLOAT = re.compile(r"[ \t\n\v\f\r]*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_CACHE_SIZE = re.compile(r"\s*(\d+)\s*(\S?)")
_LEADING_INT = re.compile(r"\s*(\d+)")
_SIZE_MULTIPLIERS = {"K": 1024, "M": 1024**2, "G": 1024**3}


class Architecture(Enum):
    X64 = auto()
    ARM = auto()
    ITANIUM = auto()
    X86 = auto()
    UNKNOWN = auto()


class Endianness(Enum):
    LITTLE = auto()
    BIG = auto()


class InstructionSet(Enum):
    # x86
    S3D_NOW = auto()
    S3D_NOW_EXTENDED = auto()
    MMX = auto()
    MMX_EXTENDED = auto()
    SSE = auto()
    SSE2 = auto()
    SSE3 = auto()
    SSSE3 = auto()
    SSE4A = auto()
    SSE41 = auto()
    SSE42 = auto()
    AES = auto()
    AVX = auto()
    AVX2 = auto()
    AVX_512 = auto()
    AVX_512_F = auto()
    AVX_512_CD = auto()
    AVX_512_PF = auto()
    AVX_512_ER = auto()
    AVX_512_VL = auto()
    AVX_512_BW = auto()
    AVX_512_BQ = auto()
    AVX_512_DQ = auto()
    AVX_512_IFMA = auto()
    AVX_512_VBMI = auto()
    HLE = auto()
    BMI1 = auto()
    BMI2 = auto()
    ADX = auto()
    MPX = auto()
    SHA = auto()
    PREFETCH_WT1 = auto()
    FMA3 = auto()
    FMA4 = auto()
    XOP = auto()
    RD_RAND = auto()
    X64 = auto()
    X87_FPU = auto()
    # ARM
    FHM = auto()
    DOTPROD = auto()
    RDM = auto()
    LSE = auto()
    PMULL = auto()
    SPECRES = auto()
    SB = auto()
    FRINTTS = auto()
    LRCPC = auto()
    LRCPC2 = auto()
    FCMA = auto()
    JSCVT = auto()
    PAUTH = auto()
    PAUTH2 = auto()
    FPAC = auto()
    DPB = auto()
    DPB2 = auto()
    BF16 = auto()
    I8MM = auto()
    ECV = auto()
    LES2 = auto()
    CSV2 = auto()
    CSV3 = auto()
    DIT = auto()
    FP16 = auto()
    SSBS = auto()
    BTI = auto()
    FP_SYNC_EXCEPTION = auto()
    NEON = auto()
    ARMV8_1_ATOMICS = auto()
    ARMV8_2_FHM = auto()
    ARMV8_2_COMPNUM = auto()
    WATCHPOINT = auto()
    BREAKPOINT = auto()
    ARMV8_CRC32 = auto()
    ARMV8_GPI = auto()
    ADV_SIMD = auto()
    ADV_SIMD_HPFP_CVT = auto()
    UCNORMAL_MEM = auto()


class CacheType(Enum):
    UNIFIED = auto()
    INSTRUCTION = auto()
    DATA = auto()
    TRACE = auto()


@dataclass(frozen=True)
class Quantities:
    """Processor counts: hyperthreads, physical cores and packages/sockets."""

    logical: int = 0
    physical: int = 0
    packages: int = 0


@dataclass(frozen=True)
class Cache:
    """Properties of one cache level."""

    size: int = 0
    line_size: int = 0
    associativity: int = 0
    type: CacheType = CacheType.UNIFIED


_IS = InstructionSet

# Kernel feature flag -> instruction sets it indicates.
_FLAG_SETS: dict[str, tuple[InstructionSet, ...]] = {
    # x86 "flags"
    "3dnow": (_IS.S3D_NOW,),
    "3dnowext": (_IS.S3D_NOW_EXTENDED,),
    "mmx": (_IS.MMX,),
    "mmxext": (_IS.MMX_EXTENDED,),
    "sse": (_IS.SSE,),
    "sse2": (_IS.SSE2,),
    "pni": (_IS.SSE3,),
    "ssse3": (_IS.SSSE3,),
    "sse4a": (_IS.SSE4A,),
    "sse4_1": (_IS.SSE41,),
    "sse4_2": (_IS.SSE42,),
    "aes": (_IS.AES,),
    "avx": (_IS.AVX,),
    "avx2": (_IS.AVX2,),
    "avx512f": (_IS.AVX_512_F,),
    "avx512cd": (_IS.AVX_512_CD,),
    "avx512pf": (_IS.AVX_512_PF,),
    "avx512er": (_IS.AVX_512_ER,),
    "avx512vl": (_IS.AVX_512_VL,),
    "avx512bw": (_IS.AVX_512_BW,),
    "avx512dq": (_IS.AVX_512_DQ,),
    "avx512ifma": (_IS.AVX_512_IFMA,),
    "avx512vbmi": (_IS.AVX_512_VBMI,),
    "hle": (_IS.HLE,),
    "bmi1": (_IS.BMI1,),
    "bmi2": (_IS.BMI2,),
    "adx": (_IS.ADX,),
    "mpx": (_IS.MPX,),
    "sha_ni": (_IS.SHA,),
    "prefetchwt1": (_IS.PREFETCH_WT1,),
    "fma": (_IS.FMA3,),
    "fma4": (_IS.FMA4,),
    "xop": (_IS.XOP,),
    "rdrand": (_IS.RD_RAND,),
    "lm": (_IS.X64,),
    "fpu": (_IS.X87_FPU,),
    # ARM "Features"
    "asimd": (_IS.NEON, _IS.ADV_SIMD),
    "asimdhp": (_IS.ADV_SIMD_HPFP_CVT,),
    "fphp": (_IS.FP16,),
    "pmull": (_IS.PMULL,),
    "sha1": (_IS.SHA,),
    "sha2": (_IS.SHA,),
    "sha3": (_IS.SHA,),
    "sha512": (_IS.SHA,),
    "crc32": (_IS.ARMV8_CRC32,),
    "atomics": (_IS.LSE, _IS.ARMV8_1_ATOMICS),
    "asimdrdm": (_IS.RDM,),
    "jscvt": (_IS.JSCVT,),
    "fcma": (_IS.FCMA, _IS.ARMV8_2_COMPNUM),
    "lrcpc": (_IS.LRCPC,),
    "ilrcpc": (_IS.LRCPC2,),
    "dcpop": (_IS.DPB,),
    "dcpodp": (_IS.DPB2,),
    "asimddp": (_IS.DOTPROD,),
    "asimdfhm": (_IS.FHM, _IS.ARMV8_2_FHM),
    "dit": (_IS.DIT,),
    "ssbs": (_IS.SSBS,),
    "sb": (_IS.SB,),
    "paca": (_IS.PAUTH,),
    "frint": (_IS.FRINTTS,),
    "i8mm": (_IS.I8MM,),
    "bf16": (_IS.BF16,),
    "bti": (_IS.BTI,),
    "ecv": (_IS.ECV,),
}

_AVX_512_PARTS = frozenset(
    {
        _IS.AVX_512_F,
        _IS.AVX_512_CD,
        _IS.AVX_512_PF,
        _IS.AVX_512_ER,
        _IS.AVX_512_VL,
        _IS.AVX_512_BW,
        _IS.AVX_512_DQ,
        _IS.AVX_512_IFMA,
        _IS.AVX_512_VBMI,
    }
)

# Flag names consulted directly when a set is not otherwise reported.
_FALLBACK_NAMES: dict[InstructionSet, tuple[str, ...]] = {
    _IS.S3D_NOW: ("3dnow", "3dnowext"),
    _IS.MMX: ("mmx",),
    _IS.SSE: ("sse",),
    _IS.SSE2: ("sse2",),
    _IS.SSE3: ("ssse3", "sse3"),
    _IS.AVX: ("avx",),
}


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


def _strtod(text: str) -> float:
    match = _FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


def _after_colon(line: str) -> str:
    return line[line.find(":") + 1:]


def architecture_from_machine(machine: str) -> Architecture:
    """Classify a uname machine string."""
    if machine == "x86_64":
        return Architecture.X64
    if machine.startswith("arm"):
        return Architecture.ARM
    if machine in ("ia64", "IA64"):
        return Architecture.ITANIUM
    if machine == "i686":
        return Architecture.X86
    return Architecture.UNKNOWN


def architecture() -> Architecture:
    """Return the architecture of the running processor."""
    try:
        machine = os.uname().machine
    except (AttributeError, OSError):
        return Architecture.UNKNOWN
    return architecture_from_machine(machine)


def endianness() -> Endianness:
    """Return the byte order of the running processor."""
    return Endianness.BIG if sys.byteorder == "big" else Endianness.LITTLE


def frequency(cpuinfo_path: str | os.PathLike[str] = CPUINFO_PATH) -> int:
    """Return the current processor frequency in Hz, or 0 if unknown."""
    lines = _read_lines(cpuinfo_path)
    if lines is None:
        return 0
    for line in lines:
        if line.startswith("cpu MHz"):
            return max(0, int(_strtod(_after_colon(line)) * 1_000_000))
    return 0


def _cpuinfo_value(key: str, cpuinfo_path: str | os.PathLike[str]) -> str:
    lines = _read_lines(cpuinfo_path)
    if lines is None:
        return ""
    for line in lines:
        if line.startswith(key):
            return _after_colon(line).lstrip(" \t")
    return ""


def vendor(cpuinfo_path: str | os.PathLike[str] = CPUINFO_PATH) -> str:
    """Return the processor vendor string."""
    return _cpuinfo_value("vendor", cpuinfo_path)


def model_name(cpuinfo_path: str | os.PathLike[str] = CPUINFO_PATH) -> str:
    """Return the processor model name."""
    return _cpuinfo_value("model name", cpuinfo_path)


def _online_processors() -> int:
    try:
        count = os.sysconf("SC_NPROCESSORS_ONLN")
    except (AttributeError, ValueError, OSError):
        count = os.cpu_count() or 0
    return max(0, count)


def quantities(cpuinfo_path: str | os.PathLike[str] = CPUINFO_PATH) -> Quantities:
    """Return logical, physical and package processor counts."""
    logical = _online_processors()
    lines = _read_lines(cpuinfo_path)
    if lines is None:
        return Quantities(logical=logical)

    package_ids: dict[int, None] = {}
    for line in lines:
        if line.startswith("physical id"):
            digit = re.search(r"[0-9]", line)
            if digit:
                package_ids.setdefault(_strtoul(line[digit.start():])[0], None)

    packages = len(package_ids)
    physical = logical // packages if packages else 0
    return Quantities(logical=logical, physical=physical, packages=packages)


def _read_first(path: Path) -> str | None:
    lines = _read_lines(path)
    return None if lines is None else "\n".join(lines)


def cache(level: int, cache_root: str | os.PathLike[str] = CACHE_ROOT) -> Cache:
    """Return the properties of the cache at the given sysfs index level."""
    prefix = Path(cache_root) / f"index{level}"

    size = 0
    text = _read_first(prefix / "size")
    if text is not None:
        match = _CACHE_SIZE.match(text)
        if match:
            size = int(match.group(1)) * _SIZE_MULTIPLIERS.get(match.group(2), 1)

    line_size = 0
    text = _read_first(prefix / "coherency_line_size")
    if text is not None and (match := _LEADING_INT.match(text)):
        line_size = int(match.group(1))

    associativity = 0
    text = _read_first(prefix / "associativity")
    if text is not None and (match := _LEADING_INT.match(text)):
        associativity = int(match.group(1)) & 0xFF

    cache_type = CacheType.UNIFIED
    text = _read_first(prefix / "type")
    if text is not None:
        tokens = text.split()
        token = tokens[0] if tokens else ""
        for suffix, kind in (
            ("nified", CacheType.UNIFIED),
            ("nstruction", CacheType.INSTRUCTION),
            ("ata", CacheType.DATA),
            ("race", CacheType.TRACE),
        ):
            if token.find(suffix) == 1:
                cache_type = kind
                break

    return Cache(size=size, line_size=line_size, associativity=associativity, type=cache_type)


def _feature_flags(lines: list[str], prefixes: tuple[str, ...]) -> set[str]:
    return {
        flag
        for line in lines
        if line.startswith(prefixes)
        for flag in _after_colon(line).split()
    }


def supported_instruction_sets(
    cpuinfo_path: str | os.PathLike[str] = CPUINFO_PATH,
) -> list[InstructionSet]:
    """Return every instruction set the kernel reports, in enumeration order."""
    lines = _read_lines(cpuinfo_path)
    if lines is None:
        return []
    found: set[InstructionSet] = set()
    for flag in _feature_flags(lines, ("flags", "Features")):
        found.update(_FLAG_SETS.get(flag, ()))
    if found & _AVX_512_PARTS:
        found.add(InstructionSet.AVX_512)
    return [iset for iset in InstructionSet if iset in found]


def instruction_set_supported(
    instruction_set: InstructionSet,
    cpuinfo_path: str | os.PathLike[str] = CPUINFO_PATH,
) -> bool:
    """Return whether the processor supports the given instruction set."""
    if instruction_set in supported_instruction_sets(cpuinfo_path):
        return True
    names = _FALLBACK_NAMES.get(instruction_set)
    if not names:
        return False
    lines = _read_lines(cpuinfo_path)
    if lines is None:
        return False
    return any(name in _feature_flags(lines, ("flags",)) for name in names)