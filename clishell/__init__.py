"""Building blocks for interactive command line shells."""

__version__ = "0.1.0"

__all__ = [
    "colors",
    "commonprefix",
    "fromstring",
    "inputdevice",
    "interfaces",
    "keyboard",
    "split",
    "telnet",
]