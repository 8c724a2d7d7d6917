# hwinfo

Query information about the Linux machine you are running on: CPU counts,
caches, frequency, vendor, model and instruction sets; memory, kernel and
distribution details; and PCI vendor/device names from a `pci.ids` file.

Information is read from `/proc/cpuinfo`, `/proc/meminfo`,
`/sys/devices/system/cpu/cpu0/cache`, `/dev/input`, `uname` and the
release files `/etc/os-release`, `/usr/lib/os-release` and
`/etc/lsb-release` (the first one that can be read is used). Where a file
cannot be read or a value is missing, a zero or empty value is returned.

## Installation

```
pip install .
```

## Command-line tools

```
hwinfo-cpu                       # quantities, caches L1-L3, architecture, frequency, instruction sets
hwinfo-gpu                       # GPU devices
hwinfo-system                    # input devices, memory, kernel, OS, displays
hwinfo-pci <vendor_id> [device_id] [--pci-ids PATH]
```

`hwinfo-pci` accepts IDs in decimal, hexadecimal (`0x8086`) or octal (`010`)
form. It reads the `pci.ids` file given with `--pci-ids`, or else the first
one found among `/usr/share/hwdata/pci.ids`, `/usr/share/misc/pci.ids`,
`/usr/share/pci.ids` and `/usr/local/share/pci.ids`. Its exit status is 0
when everything was recognised, 1 when the vendor is unknown, 2 when the
device is unknown, and 3 when neither is. Run without IDs it prints a usage
line.

## Library use

```python
from hwinfo import cpu, system

q = cpu.quantities()
print(q.logical, q.physical, q.packages)

l2 = cpu.cache(2)          # sysfs cache index 2
print(l2.size, l2.line_size, l2.associativity, l2.type)

print(cpu.architecture(), cpu.endianness(), cpu.frequency())
print(cpu.vendor(), cpu.model_name())
print(cpu.supported_instruction_sets())
print(cpu.instruction_set_supported(cpu.InstructionSet.SSE2))

mem = system.memory()
print(mem.physical_total, mem.physical_available)

print(system.mouse_amount())
print(system.kernel_info())
print(system.os_info())
```

The file-reading functions take the path to read as an optional argument
(`cpuinfo_path`, `cache_root`, `meminfo_path`, `input_dir`, `paths`), and
the parsers `system.parse_os_release`, `system.parse_lsb_release`,
`system.parse_kernel_release` and `cpu.architecture_from_machine` work on
plain strings.

PCI lookups work from a parsed `pci.ids` file:

```python
from hwinfo import pci

db = pci.load_database("/usr/share/hwdata/pci.ids")
print(db.identify_vendor(0x8086))          # name or None
device = db.identify_device(0x8086, 0x1234)
print(device.vendor_name, device.device_name)
```

`pci.parse_pci_ids` builds the same database from any iterable of lines.

`hwinfo.gpu` provides `Vendor`, `DeviceProperties` and the classifiers
`vendor_from_name`, `vendor_from_opencl_name` and `vendor_from_pci_id`.

## What it does not do

- `gpu.device_properties()` always returns an empty list: there is no GPU
  detection, so `hwinfo-gpu` reports that no detection methods are enabled.
- `system.displays()` and `system.available_display_configurations()`
  always return empty lists.
- `system.keyboard_amount()` and `system.other_hid_amount()` always return 0.
- No `pci.ids` database is shipped; one must be present on the system or
  passed with `--pci-ids`.
- Only Linux-style interfaces are read; other operating systems mostly get
  zero or empty values.