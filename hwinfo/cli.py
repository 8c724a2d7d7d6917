"""Command-line reports for processor, graphics, PCI and system information."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from typing import Sequence, TextIO

from hwinfo import cpu, gpu, pci, system

VERSION = "0.1.0"

PCI_IDS_CANDIDATES = (
    Path("/usr/share/hwdata/pci.ids"),
    Path("/usr/share/misc/pci.ids"),
    Path("/usr/share/pci.ids"),
    Path("/usr/local/share/pci.ids"),
)

_ULLONG_MODULUS = 2**64
_NUMBER = re.compile(r"[ \t\n\v\f\r]*([+-]?)(0[xX](?=[0-9a-fA-F])[0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_CACHE_TYPE_NAMES = {
    cpu.CacheType.UNIFIED: "Unified",
    cpu.CacheType.INSTRUCTION: "Instruction",
    cpu.CacheType.DATA: "Data",
    cpu.CacheType.TRACE: "Trace",
}

_ARCHITECTURE_NAMES = {
    cpu.Architecture.X64: "x64",
    cpu.Architecture.ARM: "ARM",
    cpu.Architecture.ITANIUM: "Itanium",
    cpu.Architecture.X86: "x86",
}

_ENDIANNESS_NAMES = {
    cpu.Endianness.LITTLE: "Little-Endian",
    cpu.Endianness.BIG: "Big-Endian",
}

_REPORTED_SETS = (
    ("3D-now!", cpu.InstructionSet.S3D_NOW),
    ("MMX    ", cpu.InstructionSet.MMX),
    ("SSE    ", cpu.InstructionSet.SSE),
    ("SSE2   ", cpu.InstructionSet.SSE2),
    ("SSE3   ", cpu.InstructionSet.SSE3),
    ("AVX    ", cpu.InstructionSet.AVX),
    ("Neon   ", cpu.InstructionSet.NEON),
)

_GPU_VENDOR_NAMES = {
    gpu.Vendor.INTEL: "Intel",
    gpu.Vendor.AMD: "AMD",
    gpu.Vendor.NVIDIA: "NVidia",
    gpu.Vendor.MICROSOFT: "Microsoft",
    gpu.Vendor.QUALCOMM: "Qualcomm",
    gpu.Vendor.APPLE: "Apple",
}

_KERNEL_NAMES = {
    system.Kernel.WINDOWS_NT: "Windows NT",
    system.Kernel.LINUX: "Linux",
    system.Kernel.DARWIN: "Darwin",
}


def _header(out: TextIO) -> None:
    out.write(f"hwinfo version {VERSION}\n")


def _number(value: float) -> str:
    """Format a floating-point value the way a default C++ stream does."""
    return f"{value:g}"


def _parse_id(text: str) -> int:
    """Parse an unsigned integer with base auto-detection; garbage gives 0."""
    match = _NUMBER.match(text)
    if not match:
        return 0
    digits = match.group(2)
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    value = min(value, _ULLONG_MODULUS - 1)
    if match.group(1) == "-":
        value = -value % _ULLONG_MODULUS
    return value


def _format_pci_id(pci_id: int) -> str:
    return f"0x{pci_id:016X}"


def _no_arguments(prog: str, description: str, argv: Sequence[str] | None) -> None:
    argparse.ArgumentParser(prog=prog, description=description).parse_args(argv)


def cpu_main(argv: Sequence[str] | None = None) -> int:
    """Print a processor report."""
    _no_arguments("hwinfo-cpu", "Show processor information.", argv)
    out = sys.stdout
    _header(out)

    counts = cpu.quantities()
    out.write(
        "\n  Quantities:\n"
        f"    Logical CPUs : {counts.logical}\n"
        f"    Physical CPUs: {counts.physical}\n"
        f"    CPU packages : {counts.packages}\n"
    )

    out.write("\n  Caches:\n")
    for level in range(1, 4):
        info = cpu.cache(level)
        out.write(
            f"    L{level}:\n"
            f"      Size         : {info.size}B\n"
            f"      Line size    : {info.line_size}B\n"
            f"      Associativity: {info.associativity}\n"
            f"      Type         : {_CACHE_TYPE_NAMES.get(info.type, 'Unknown')}\n"
        )

    out.write(
        "\n"
        f"  Architecture: {_ARCHITECTURE_NAMES.get(cpu.architecture(), 'Unknown')}\n"
        f"  Frequency: {cpu.frequency()} Hz\n"
        f"  Endianness: {_ENDIANNESS_NAMES.get(cpu.endianness(), 'Unknown')}\n"
        f"  Model name: {cpu.model_name()}\n"
        f"  Vendor ID: {cpu.vendor()}\n"
    )

    out.write("\n  Instruction set support:\n")
    for label, instruction_set in _REPORTED_SETS:
        supported = cpu.instruction_set_supported(instruction_set)
        out.write(f"    {label}: {'true' if supported else 'false'}\n")

    out.write("\n")
    return 0


def gpu_main(argv: Sequence[str] | None = None) -> int:
    """Print a graphics device report."""
    _no_arguments("hwinfo-gpu", "Show graphics device information.", argv)
    out = sys.stdout
    _header(out)

    devices = gpu.device_properties()
    out.write("\n  Properties:\n")
    if not devices:
        out.write("    No detection methods enabled\n")
    for number, device in enumerate(devices, start=1):
        out.write(
            f"    Device #{number}:\n"
            f"      Vendor       : {_GPU_VENDOR_NAMES.get(device.vendor, 'Unknown')}\n"
            f"      Name         : {device.name}\n"
            f"      RAM size     : {device.memory_size}B\n"
            f"      Cache size   : {device.cache_size}B\n"
            f"      Max frequency: {device.max_frequency}Hz\n"
        )

    out.write("\n")
    return 0


def _find_pci_ids() -> Path | None:
    return next((path for path in PCI_IDS_CANDIDATES if path.is_file()), None)


def _print_unrecognised(out: TextIO, subsystem: str, pci_id: int) -> None:
    out.write(f"Unrecognised {subsystem} with ID {_format_pci_id(pci_id)}\n")


def _print_vendor(out: TextIO, vendor_id: int, vendor_name: str | None) -> bool:
    if vendor_name is not None:
        out.write(f"Vendor {_format_pci_id(vendor_id)} {vendor_name}\n")
    else:
        _print_unrecognised(out, "vendor", vendor_id)
    return vendor_name is not None


def pci_main(argv: Sequence[str] | None = None) -> int:
    """Look up PCI vendor and device names.

    Returns 1 if the vendor is unknown, 2 if the device is unknown, 3 if both are.
    """
    parser = argparse.ArgumentParser(prog="hwinfo-pci", description="Identify a PCI vendor and device.")
    parser.add_argument("vendor_id", nargs="?")
    parser.add_argument("device_id", nargs="?")
    parser.add_argument("--pci-ids", type=Path, help="path of the pci.ids database")
    args = parser.parse_args(argv)

    out = sys.stdout
    _header(out)

    if args.vendor_id is None:
        out.write(f"Usage: {parser.prog} <vendor_id> [device_id]\n")
        return 0

    ids_path = args.pci_ids or _find_pci_ids()
    if ids_path is None:
        parser.error("no pci.ids database found; pass --pci-ids")
    try:
        database = pci.load_database(ids_path)
    except OSError as error:
        parser.error(f"cannot read {ids_path}: {error}")

    vendor_id = _parse_id(args.vendor_id)
    if args.device_id is None:
        return 0 if _print_vendor(out, vendor_id, database.identify_vendor(vendor_id)) else 1

    device_id = _parse_id(args.device_id)
    device = database.identify_device(vendor_id, device_id)
    vendor_ok = _print_vendor(out, vendor_id, device.vendor_name)

    if device.device_name is not None:
        out.write(f"Device {_format_pci_id(device_id)} {device.device_name}\n")
    else:
        _print_unrecognised(out, "device", device_id)

    return (0 if vendor_ok else 1) | (0 if device.device_name is not None else 2)


def system_main(argv: Sequence[str] | None = None) -> int:
    """Print a system report."""
    _no_arguments("hwinfo-system", "Show system information.", argv)
    out = sys.stdout
    _header(out)

    out.write(
        "\n  Connected HIDs:\n"
        f"    Mice     : {system.mouse_amount()}\n"
        f"    Keyboards: {system.keyboard_amount()}\n"
        f"    Other    : {system.other_hid_amount()}\n"
    )

    mem = system.memory()
    out.write(
        "\n  Memory:\n"
        "    Physical:\n"
        f"      Available: {mem.physical_available}B\n"
        f"      Total    : {mem.physical_total}B\n"
        "    Virtual:\n"
        f"      Available: {mem.virtual_available}B\n"
        f"      Total    : {mem.virtual_total}B\n"
    )

    kernel = system.kernel_info()
    out.write(
        "\n  Kernel:\n"
        f"    Variant: {_KERNEL_NAMES.get(kernel.variant, 'Unknown')}\n"
        f"    Version: {kernel.major}.{kernel.minor}.{kernel.patch} build {kernel.build_number}\n"
    )

    os_info = system.os_info()
    out.write(
        "\n  OS:\n"
        f"    Name     : {os_info.name}\n"
        f"    Full name: {os_info.full_name}\n"
        f"    Version  : {os_info.major}.{os_info.minor}.{os_info.patch} build {os_info.build_number}\n"
    )

    screens = system.displays()
    out.write("\n  Displays:\n")
    if not screens:
        out.write("    None connected or no detection method enabled\n")
    for number, screen in enumerate(screens, start=1):
        out.write(
            f"    #{number}:\n"
            f"      Resolution  : {screen.width}x{screen.height}\n"
            f"      DPI         : {screen.dpi}\n"
            f"      Colour depth: {screen.bpp}b\n"
            f"      Refresh rate: {_number(screen.refresh_rate)}Hz\n"
        )

    configurations = system.available_display_configurations()
    out.write("\n  Display configurations:\n")
    if not configurations:
        out.write("    No displays connected, no detection method enabled, or not supported\n")
    for display_number, display_configs in enumerate(configurations, start=1):
        out.write(f"    Display #{display_number}:\n")
        for config_number, config in enumerate(display_configs, start=1):
            rates = ", ".join(f"{_number(rate)}Hz" for rate in config.refresh_rates)
            out.write(
                f"      #{config_number}:\n"
                f"        Resolution   : {config.width}x{config.height}\n"
                f"        Refresh rates: {rates}\n"
            )

    out.write("\n")
    return 0