[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hwinfo"
version = "0.1.0"
description = "System information on Linux: CPU, memory, kernel and OS details, and PCI name lookup"
requires-python = ">=3.10"
dependencies = []
keywords = ["hardware", "cpu", "system-information", "pci", "memory", "kernel"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hwinfo-cpu = "hwinfo.cli:cpu_main"
hwinfo-gpu = "hwinfo.cli:gpu_main"
hwinfo-pci = "hwinfo.cli:pci_main"
hwinfo-system = "hwinfo.cli:system_main"

[tool.hatch.build.targets.wheel]
packages = ["hwinfo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
