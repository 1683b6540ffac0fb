"""Runtime configuration for the unpacker.

Configuration is held by each codec instance instead of a process-wide flag,
so independent streams can be decoded side by side.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CodecConfig:
    """Configuration for one unpacking session.

    Attributes:
        packing_enabled: Whether incoming bytes are packed (default False).
            The sender switches this over the wire with the enable, disable
            and toggle commands. While disabled, bytes pass through unchanged
            and only the 0xFF 0xFF command prefix is interpreted.

        strict: Raise ProtocolError on desynchronization (default True).
            When False, the fault is logged and counted and decoding carries
            on from the idle state.

    Examples:
        ```python
        from meatpack import CodecConfig, Unpacker

        # Receiver that expects packed data from the first byte
        unpacker = Unpacker(CodecConfig(packing_enabled=True))

        # Tolerant receiver for a noisy line
        unpacker = Unpacker(CodecConfig(strict=False))
        ```
    """

    packing_enabled: bool = False
    strict: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.packing_enabled, bool):
            raise TypeError(f"packing_enabled must be a bool, got {self.packing_enabled!r}")

        if not isinstance(self.strict, bool):
            raise TypeError(f"strict must be a bool, got {self.strict!r}")
