"""Transports carrying packed text.

The codec itself is transport-agnostic. This package provides the interface
a transport implements, an in-process loopback for testing without hardware,
and a host-side sender that packs text and issues in-band commands.

## Quick Start

```python
from meatpack.transport import LoopbackTransport, PackedSender

link = LoopbackTransport()
link.connect("loop://", 115200)
link.attach_rx_callback(lambda text: print(text.decode("ascii"), end=""))

sender = PackedSender(link)
sender.enable_packing()
sender.send("G28\\nG1 X10 Y10\\n")
sender.flush()

link.poll()
print(link.read_responses())  # ['[MP] ON']
link.disconnect()
```
"""

from meatpack.transport.driver import Transport
from meatpack.transport.loopback import LoopbackTransport
from meatpack.transport.sender import PackedSender

__all__ = [
    "Transport",
    "LoopbackTransport",
    "PackedSender",
]
