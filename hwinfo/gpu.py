"""Graphics adapter information and vendor classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Vendor(Enum):
    INTEL = auto()
    AMD = auto()
    NVIDIA = auto()
    MICROSOFT = auto()
    QUALCOMM = auto()
    APPLE = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class DeviceProperties:
    """Properties of one graphics device; sizes in bytes, frequency in Hz."""

    vendor: Vendor = Vendor.UNKNOWN
    name: str = ""
    memory_size: int = 0
    cache_size: int = 0
    max_frequency: int = 0


_NAME_MARKERS: tuple[tuple[tuple[str, ...], Vendor], ...] = (
    (("NVIDIA",), Vendor.NVIDIA),
    (("AMD", "ATI", "ADVANCED MICRO DEVICES"), Vendor.AMD),
    (("INTEL",), Vendor.INTEL),
    (("MICROSOFT",), Vendor.MICROSOFT),
    (("QUALCOMM",), Vendor.QUALCOMM),
)

_OPENCL_NAMES: dict[str, Vendor] = {
    "Intel(R) Corporation": Vendor.INTEL,
    "Intel": Vendor.INTEL,
    "Advanced Micro Devices, Inc.": Vendor.AMD,
    "AMD": Vendor.AMD,
    "NVIDIA Corporation": Vendor.NVIDIA,
    "Apple": Vendor.APPLE,
}

_PCI_VENDORS: dict[int, Vendor] = {
    0x8086: Vendor.INTEL,  # Intel Corporation
    0x1002: Vendor.AMD,  # Advanced Micro Devices, Inc. [AMD/ATI]
    0x1022: Vendor.AMD,  # Advanced Micro Devices, Inc. [AMD]
    0x10DE: Vendor.NVIDIA,  # NVIDIA Corporation
    0x12D2: Vendor.NVIDIA,  # NVidia / SGS Thomson (Joint Venture)
    0x1414: Vendor.MICROSOFT,  # Microsoft Corporation
    0x168C: Vendor.QUALCOMM,  # Qualcomm Atheros
    0x17CB: Vendor.QUALCOMM,  # Qualcomm
    0x1969: Vendor.QUALCOMM,  # Qualcomm Atheros
    0x5143: Vendor.QUALCOMM,  # Qualcomm Inc
    0x106B: Vendor.APPLE,  # Apple Inc.
}


def vendor_from_name(name: str) -> Vendor:
    """Classify a free-form vendor or renderer string, ignoring case."""
    upper = name.upper()
    for markers, vendor in _NAME_MARKERS:
        if any(marker in upper for marker in markers):
            return vendor
    return Vendor.UNKNOWN


def vendor_from_opencl_name(name: str) -> Vendor:
    """Classify an exact OpenCL platform vendor string."""
    return _OPENCL_NAMES.get(name, Vendor.UNKNOWN)


def vendor_from_pci_id(vendor_id: int) -> Vendor:
    """Classify a PCI vendor ID."""
    return _PCI_VENDORS.get(vendor_id, Vendor.UNKNOWN)


def device_properties() -> list[DeviceProperties]:
    """Return the properties of every graphics device.

    No detection method is available here, so the list is always empty.
    """
    return []