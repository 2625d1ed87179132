"""
lookout CDP backend.

Implements the driver and browsing context interfaces over the Chrome DevTools Protocol.
"""

from lookout.cdp.cdp_driver import CDPContext, CDPDriver
from lookout.cdp.cdp_session import CDPSession

__all__ = [
    "CDPContext",
    "CDPDriver",
    "CDPSession",
]
