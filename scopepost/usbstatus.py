"""USB error codes, transfer defaults and device list entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "UsbError",
    "ConnectionSpeed",
    "DeviceListEntry",
    "libusb_error_string",
    "HANTEK_TIMEOUT",
    "HANTEK_TIMEOUT_MULTI",
    "HANTEK_ATTEMPTS",
    "HANTEK_ATTEMPTS_MULTI",
    "HANTEK_EP_OUT",
    "HANTEK_EP_IN",
]

HANTEK_TIMEOUT = 500  # timeout for USB transfers in ms
HANTEK_TIMEOUT_MULTI = 500  # timeout for multi packet transfers in ms
HANTEK_ATTEMPTS = 3  # transfer attempts
HANTEK_ATTEMPTS_MULTI = 1  # multi packet transfer attempts

HANTEK_EP_OUT = 0x02  # OUT endpoint for bulk transfers
HANTEK_EP_IN = 0x86  # IN endpoint for bulk transfers


class UsbError(IntEnum):
    """Result codes reported by the USB library."""

    SUCCESS = 0
    IO = -1
    INVALID_PARAM = -2
    ACCESS = -3
    NO_DEVICE = -4
    NOT_FOUND = -5
    BUSY = -6
    TIMEOUT = -7
    OVERFLOW = -8
    PIPE = -9
    INTERRUPTED = -10
    NO_MEM = -11
    NOT_SUPPORTED = -12
    OTHER = -99


class ConnectionSpeed(IntEnum):
    """Speed of the USB connection."""

    FULLSPEED = 0  # 64 byte bulk transfers
    HIGHSPEED = 1  # 512 byte bulk transfers


_ERROR_TEXT = {
    UsbError.SUCCESS: "Success (no error)",
    UsbError.IO: "Input/output error",
    UsbError.INVALID_PARAM: "Invalid parameter",
    UsbError.ACCESS: "Access denied (insufficient permissions)",
    UsbError.NO_DEVICE: "No such device (it may have been disconnected)",
    UsbError.NOT_FOUND: "Entity not found",
    UsbError.BUSY: "Resource busy",
    UsbError.TIMEOUT: "Operation timed out",
    UsbError.OVERFLOW: "Overflow",
    UsbError.PIPE: "Pipe error",
    UsbError.INTERRUPTED: "System call interrupted (perhaps due to signal)",
    UsbError.NO_MEM: "Insufficient memory",
    UsbError.NOT_SUPPORTED: "Operation not supported or unimplemented on this platform",
}


def libusb_error_string(error: int) -> str:
    """Human readable text for a USB error code."""
    return _ERROR_TEXT.get(error, "Other error")


@dataclass
class DeviceListEntry:
    """A device shown in the device selection list."""

    id: int
    name: str
    can_connect: bool = False
    need_firmware: bool = False
    error_message: str = ""

    def status(self) -> str:
        """Status text: the error if any, else readiness or firmware state."""
        if self.error_message:
            return self.error_message
        if self.can_connect:
            return "Ready"
        if self.need_firmware:
            return "Firmware upload"
        return "Cannot connect"