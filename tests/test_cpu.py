import os
import sys

import pytest

from hwinfo.cpu import (
    Architecture,
    Cache,
    CacheType,
    Endianness,
    InstructionSet,
    Quantities,
    architecture,
    architecture_from_machine,
    cache,
    endianness,
    frequency,
    instruction_set_supported,
    model_name,
    quantities,
    supported_instruction_sets,
    vendor,
)


def _cpuinfo(tmp_path, text):
    path = tmp_path / "cpuinfo"
    path.write_text(text)
    return path


def _cache_dir(tmp_path, level, **files):
    index = tmp_path / f"index{level}"
    index.mkdir(parents=True)
    for name, content in files.items():
        (index / name).write_text(content)
    return tmp_path


@pytest.mark.parametrize(
    ("machine", "expected"),
    [
        ("x86_64", Architecture.X64),
        ("armv7l", Architecture.ARM),
        ("ia64", Architecture.ITANIUM),
        ("IA64", Architecture.ITANIUM),
        ("i686", Architecture.X86),
        ("aarch64", Architecture.UNKNOWN),
        ("i386", Architecture.UNKNOWN),
    ],
)
def test_architecture_from_machine(machine, expected):
    assert architecture_from_machine(machine) is expected


def test_architecture_matches_uname():
    assert architecture() is architecture_from_machine(os.uname().machine)


def test_endianness_matches_byteorder():
    expected = Endianness.BIG if sys.byteorder == "big" else Endianness.LITTLE
    assert endianness() is expected


def test_frequency_reads_first_mhz_line(tmp_path):
    path = _cpuinfo(tmp_path, "processor\t: 0\ncpu MHz\t\t: 2400.000\ncpu MHz\t\t: 1200.000\n")
    assert frequency(path) == 2400 * 1_000_000


def test_frequency_without_line_is_zero(tmp_path):
    assert frequency(_cpuinfo(tmp_path, "processor\t: 0\n")) == 0


def test_frequency_missing_file_is_zero(tmp_path):
    assert frequency(tmp_path / "absent") == 0


def test_vendor_and_model_name(tmp_path):
    path = _cpuinfo(
        tmp_path,
        "vendor_id\t: GenuineExample\nmodel name\t: Example CPU @ 2.00GHz\n",
    )
    assert vendor(path) == "GenuineExample"
    assert model_name(path) == "Example CPU @ 2.00GHz"


def test_vendor_missing_file_is_empty(tmp_path):
    assert vendor(tmp_path / "absent") == ""
    assert model_name(tmp_path / "absent") == ""


def test_quantities_counts_distinct_packages(tmp_path):
    path = _cpuinfo(
        tmp_path,
        "physical id\t: 0\nphysical id\t: 0\nphysical id\t: 1\nphysical id\t: 1\n",
    )
    result = quantities(path)
    assert result.packages == 2
    assert result.physical == result.logical // 2


def test_quantities_missing_file_has_only_logical(tmp_path):
    result = quantities(tmp_path / "absent")
    assert result == Quantities(logical=result.logical, physical=0, packages=0)
    assert result.logical >= 1


def test_cache_reads_sysfs_files(tmp_path):
    root = _cache_dir(
        tmp_path,
        1,
        size="32K\n",
        coherency_line_size="64\n",
        associativity="8\n",
        type="Data\n",
    )
    assert cache(1, root) == Cache(size=32 * 1024, line_size=64, associativity=8, type=CacheType.DATA)


@pytest.mark.parametrize(
    ("content", "expected"),
    [("2M\n", 2 * 1024 * 1024), ("1G\n", 1024 * 1024 * 1024), ("512\n", 512)],
)
def test_cache_size_suffixes(tmp_path, content, expected):
    root = _cache_dir(tmp_path, 2, size=content)
    assert cache(2, root).size == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Unified", CacheType.UNIFIED),
        ("Instruction", CacheType.INSTRUCTION),
        ("Data", CacheType.DATA),
        ("Trace", CacheType.TRACE),
    ],
)
def test_cache_types(tmp_path, name, expected):
    root = _cache_dir(tmp_path, 3, type=name + "\n")
    assert cache(3, root).type is expected


def test_cache_missing_level_is_default(tmp_path):
    assert cache(7, tmp_path) == Cache(0, 0, 0, CacheType.UNIFIED)


def test_supported_instruction_sets_in_enum_order(tmp_path):
    path = _cpuinfo(tmp_path, "flags\t\t: lm fpu sse2 mmx avx pni sse\n")
    assert supported_instruction_sets(path) == [
        InstructionSet.MMX,
        InstructionSet.SSE,
        InstructionSet.SSE2,
        InstructionSet.SSE3,
        InstructionSet.AVX,
        InstructionSet.X64,
        InstructionSet.X87_FPU,
    ]


def test_avx512_part_implies_avx512(tmp_path):
    path = _cpuinfo(tmp_path, "flags\t\t: avx512f\n")
    result = supported_instruction_sets(path)
    assert InstructionSet.AVX_512 in result
    assert InstructionSet.AVX_512_F in result


def test_arm_features_line(tmp_path):
    path = _cpuinfo(tmp_path, "Features\t: fp asimd aes\n")
    result = supported_instruction_sets(path)
    assert InstructionSet.NEON in result
    assert InstructionSet.AES in result


def test_supported_instruction_sets_missing_file(tmp_path):
    assert supported_instruction_sets(tmp_path / "absent") == []


def test_instruction_set_supported_via_fallback_names(tmp_path):
    path = _cpuinfo(tmp_path, "flags\t\t: ssse3 3dnowext\n")
    assert instruction_set_supported(InstructionSet.SSE3, path) is True
    assert instruction_set_supported(InstructionSet.S3D_NOW, path) is True
    assert instruction_set_supported(InstructionSet.SSE2, path) is False


def test_instruction_set_without_names_is_unsupported(tmp_path):
    path = _cpuinfo(tmp_path, "flags\t\t: sse\n")
    assert instruction_set_supported(InstructionSet.AVX_512_F, path) is False


def test_instruction_set_missing_file(tmp_path):
    assert instruction_set_supported(InstructionSet.MMX, tmp_path / "absent") is False