"""Abstract interface for byte transports.

The codec never touches a serial port or a storage reader itself. A transport
moves raw bytes, feeds received bytes one at a time into an Unpacker, and
owns the return channel that state reports travel back on.

Design Pattern: Strategy Pattern / Adapter Pattern
- Transport: Abstract interface
- LoopbackTransport: In-process implementation (testing without hardware)
- Serial or file-backed transports: provided by the application
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class Transport(ABC):
    """Abstract interface for byte transports carrying packed text.

    Examples:
        ```python
        from meatpack.transport import LoopbackTransport

        link = LoopbackTransport()
        link.connect("loop://", 115200)

        def on_receive(text: bytes):
            print(text.decode("ascii"), end="")

        link.attach_rx_callback(on_receive)
        link.write(b"G28\\n")
        link.poll()
        link.disconnect()
        ```
    """

    @abstractmethod
    def connect(self, port: str, baudrate: int = 115200) -> None:
        """Open the link.

        Args:
            port: Port name or URL (e.g., "/dev/ttyACM0")
            baudrate: Serial baud rate

        Raises:
            ConnectionError: If the link cannot be opened
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Send raw bytes (already packed, or plain text while packing is off).

        Raises:
            RuntimeError: If the link is not open
        """
        pass

    @abstractmethod
    def attach_rx_callback(self, callback: Callable[[bytes], None]) -> None:
        """Register a callback for decoded text on the receiving side.

        Args:
            callback: Function with signature (text: bytes) -> None
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the link."""
        pass
