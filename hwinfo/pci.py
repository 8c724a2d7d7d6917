"""PCI vendor and device name lookup from a pci.ids database."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Iterable

_HEX_NUMBER = re.compile(r"\s*(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class Device:
    """Names found for a vendor/device ID pair; None where not found."""

    vendor_name: str | None = None
    device_name: str | None = None


@dataclass
class _Vendor:
    name: str
    devices: dict[int, str] = field(default_factory=dict)


class PciDatabase:
    """Vendor and device names keyed by PCI ID."""

    def __init__(self, vendors: dict[int, _Vendor] | None = None) -> None:
        self._vendors: dict[int, _Vendor] = dict(vendors or {})

    def __len__(self) -> int:
        return len(self._vendors)

    def __contains__(self, vendor_id: object) -> bool:
        return vendor_id in self._vendors

    def identify_vendor(self, vendor_id: int) -> str | None:
        """Return the vendor's name, or None if not found."""
        vendor = self._vendors.get(vendor_id)
        return vendor.name if vendor else None

    def identify_device(self, vendor_id: int, device_id: int) -> Device:
        """Return the vendor and device names.

        Both are None if the vendor is unknown; only the device name is
        None if the vendor is known but the device is not.
        """
        vendor = self._vendors.get(vendor_id)
        if vendor is None:
            return Device()
        return Device(vendor.name, vendor.devices.get(device_id))


def parse_pci_ids(lines: Iterable[str]) -> PciDatabase:
    """Build a database from the lines of a pci.ids file.

    Parsing stops at the device-class section. The first entry wins where
    an ID occurs more than once. A device listed before any vendor raises
    ValueError.
    """
    vendors: dict[int, _Vendor] = {}
    current: _Vendor | None = None

    for raw in lines:
        line = raw.rstrip("\n")
        if not line:
            continue
        if line[0] == "C":
            break

        stripped = line.lstrip("\t")
        tabcount = len(line) - len(stripped)
        if not stripped or stripped[0] not in _HEX_DIGITS or tabcount >= 3:
            continue

        if line.endswith("\r"):
            line = line[:-1]
            stripped = line[tabcount:]

        match = _HEX_NUMBER.match(stripped)
        if match is None:
            continue
        number = int(match.group(1), 16)
        name = stripped[match.end():].lstrip()

        if tabcount == 0:
            current = vendors.setdefault(number, _Vendor(name))
            if current.name != name:
                # A repeated vendor ID: keep the first entry, ignore its devices.
                current = _Vendor(name)
        elif tabcount == 1:
            if current is None:
                raise ValueError(f"device {number:#x} listed before any vendor")
            current.devices.setdefault(number, name)

    return PciDatabase(vendors)


def load_database(path: str | os.PathLike[str]) -> PciDatabase:
    """Read and parse a pci.ids file."""
    with open(path, encoding="utf-8", errors="replace", newline="") as handle:
        return parse_pci_ids(handle)