import pytest

from hwinfo.gpu import (
    DeviceProperties,
    Vendor,
    device_properties,
    vendor_from_name,
    vendor_from_opencl_name,
    vendor_from_pci_id,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("NVIDIA Corporation", Vendor.NVIDIA),
        ("nvidia geforce", Vendor.NVIDIA),
        ("Advanced Micro Devices", Vendor.AMD),
        ("AMD Radeon", Vendor.AMD),
        ("ati radeon", Vendor.AMD),
        ("Mesa Intel(R) UHD", Vendor.INTEL),
        ("Microsoft Basic Render Driver", Vendor.MICROSOFT),
        ("Qualcomm Adreno", Vendor.QUALCOMM),
        ("llvmpipe", Vendor.UNKNOWN),
        ("", Vendor.UNKNOWN),
    ],
)
def test_vendor_from_name(name, expected):
    assert vendor_from_name(name) is expected


def test_vendor_from_name_nvidia_checked_first():
    assert vendor_from_name("NVIDIA AMD INTEL") is Vendor.NVIDIA


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Intel(R) Corporation", Vendor.INTEL),
        ("Intel", Vendor.INTEL),
        ("Advanced Micro Devices, Inc.", Vendor.AMD),
        ("AMD", Vendor.AMD),
        ("NVIDIA Corporation", Vendor.NVIDIA),
        ("Apple", Vendor.APPLE),
        ("nvidia corporation", Vendor.UNKNOWN),
        ("Intel Corporation", Vendor.UNKNOWN),
    ],
)
def test_vendor_from_opencl_name(name, expected):
    assert vendor_from_opencl_name(name) is expected


@pytest.mark.parametrize(
    ("vendor_id", "expected"),
    [
        (0x8086, Vendor.INTEL),
        (0x1002, Vendor.AMD),
        (0x1022, Vendor.AMD),
        (0x10DE, Vendor.NVIDIA),
        (0x12D2, Vendor.NVIDIA),
        (0x1414, Vendor.MICROSOFT),
        (0x168C, Vendor.QUALCOMM),
        (0x17CB, Vendor.QUALCOMM),
        (0x1969, Vendor.QUALCOMM),
        (0x5143, Vendor.QUALCOMM),
        (0x106B, Vendor.APPLE),
        (0x0000, Vendor.UNKNOWN),
        (0x10000 + 0x8086, Vendor.UNKNOWN),
    ],
)
def test_vendor_from_pci_id(vendor_id, expected):
    assert vendor_from_pci_id(vendor_id) is expected


def test_device_properties_empty_without_detection():
    assert device_properties() == []


def test_device_properties_defaults():
    props = DeviceProperties()
    assert (props.vendor, props.name, props.memory_size, props.cache_size, props.max_frequency) == (
        Vendor.UNKNOWN,
        "",
        0,
        0,
        0,
    )