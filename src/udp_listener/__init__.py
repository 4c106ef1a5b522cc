"""
UDP Listener service for receiving OSC packets from VMC senders.
"""

from .listener import UDPListener

__all__ = ["UDPListener"]
