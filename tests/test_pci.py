import pytest

from hwinfo.pci import Device, PciDatabase, load_database, parse_pci_ids

SAMPLE = """\
# Sample database
#
0abc  Example Vendor One
\t0001  Example Widget
\t0002  Example Gadget
\t\t0abc 0009  Example Subsystem
0def  Example Vendor Two
\t0100  Another Device

C 00  Unclassified device
\t00  Non-VGA unclassified device
"""


@pytest.fixture
def database():
    return parse_pci_ids(SAMPLE.splitlines(keepends=True))


def test_identify_vendor(database):
    assert database.identify_vendor(0x0ABC) == "Example Vendor One"
    assert database.identify_vendor(0x0DEF) == "Example Vendor Two"


def test_identify_unknown_vendor(database):
    assert database.identify_vendor(0x1111) is None


def test_identify_device_found(database):
    assert database.identify_device(0x0ABC, 0x0002) == Device("Example Vendor One", "Example Gadget")


def test_identify_device_unknown_device(database):
    assert database.identify_device(0x0DEF, 0x0001) == Device("Example Vendor Two", None)


def test_identify_device_unknown_vendor(database):
    assert database.identify_device(0x2222, 0x0001) == Device(None, None)


def test_subsystem_lines_are_not_devices(database):
    assert database.identify_device(0x0ABC, 0x0009).device_name is None


def test_class_section_ends_parsing(database):
    assert len(database) == 2
    assert 0x00 not in database


def test_crlf_lines_are_trimmed():
    db = parse_pci_ids(["1234  CRLF Vendor\r\n", "\t5678  CRLF Device\r\n"])
    assert db.identify_device(0x1234, 0x5678) == Device("CRLF Vendor", "CRLF Device")


def test_deeply_indented_lines_ignored():
    db = parse_pci_ids(["1234  Vendor", "\t\t\t5678  Too Deep"])
    assert db.identify_device(0x1234, 0x5678) == Device("Vendor", None)


def test_first_duplicate_vendor_wins():
    db = parse_pci_ids(["1234  First", "\t0001  Kept", "1234  Second", "\t0001  Dropped"])
    assert db.identify_device(0x1234, 0x0001) == Device("First", "Kept")


def test_first_duplicate_device_wins():
    db = parse_pci_ids(["1234  Vendor", "\t0001  Kept", "\t0001  Dropped"])
    assert db.identify_device(0x1234, 0x0001).device_name == "Kept"


def test_device_before_vendor_raises():
    with pytest.raises(ValueError):
        parse_pci_ids(["\t0001  Orphan"])


def test_empty_database():
    db = parse_pci_ids([])
    assert len(db) == 0
    assert db.identify_device(1, 2) == Device()


def test_empty_constructor_matches_empty_parse():
    assert PciDatabase().identify_vendor(0x0ABC) is None


def test_load_database(tmp_path):
    path = tmp_path / "pci.ids"
    path.write_text(SAMPLE, encoding="utf-8")
    db = load_database(path)
    assert db.identify_device(0x0ABC, 0x0001) == Device("Example Vendor One", "Example Widget")


def test_load_database_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_database(tmp_path / "absent.ids")