"""Linux system information: CPU, memory, kernel, OS, GPU vendor classification and PCI names."""

__version__ = "0.1.0"
__all__ = ["cli", "cpu", "gpu", "pci", "system"]