"""
UDP listener service for receiving VMC OSC packets.

Listens on UDP port 39600, hands every datagram to a packet handler and
keeps receive statistics. Each datagram is handled to completion before the
next one is received; malformed datagrams are counted and dropped.
"""

import asyncio
import socket
import logging
from typing import Optional, Callable, Dict, Any

from src.keymap.constants import ListenerDefaults
from src.osc import DecodeError


logger = logging.getLogger(__name__)


class UDPListener:
    """
    Async UDP listener for OSC packets.

    Receives UDP packets and passes the raw payload to ``packet_handler``.
    Only packet-level outcomes are counted here; the handler keeps its own
    action counters.
    """

    def __init__(
        self,
        host: str = ListenerDefaults.HOST,
        port: int = ListenerDefaults.PORT,
        packet_handler: Optional[Callable[[bytes], Any]] = None,
        max_datagram_size: int = ListenerDefaults.MAX_DATAGRAM_SIZE
    ):
        """
        Initialize UDP listener.

        Args:
            host: Host to bind to (default: 0.0.0.0 for all interfaces)
            port: UDP port to listen on (default: 39600, 0 picks a free port)
            packet_handler: Synchronous callback: handler(data), raises DecodeError
                on malformed packets
            max_datagram_size: Receive buffer size per datagram
        """
        self.host = host
        self.port = port
        self.packet_handler = packet_handler
        self.max_datagram_size = max_datagram_size
        self.running = False
        self.socket: Optional[socket.socket] = None
        self._started = asyncio.Event()

        # Statistics
        self.stats = {
            "packets_received": 0,
            "packets_processed": 0,
            "parse_errors": 0,
            "handler_errors": 0
        }

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually bound, once started."""
        if self.socket is None:
            return None
        return self.socket.getsockname()[1]

    async def wait_started(self):
        """Wait until the socket is bound."""
        await self._started.wait()

    async def start(self):
        """Bind the socket and run the receive loop until stopped."""
        self.running = True

        self.socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.socket.bind((self.host, self.port))
        self.socket.setblocking(False)

        logger.info(f"UDP listener started on {self.host}:{self.bound_port}")
        self._started.set()

        await self._receive_loop()

    async def stop(self):
        """Stop the UDP listener."""
        self.running = False
        if self.socket:
            self.socket.close()
            self.socket = None
        self._started.clear()
        logger.info("UDP listener stopped")

    async def _receive_loop(self):
        """Main receive loop."""
        loop = asyncio.get_running_loop()

        while self.running:
            try:
                data, addr = await asyncio.wait_for(
                    loop.sock_recvfrom(self.socket, self.max_datagram_size),
                    timeout=0.5
                )
            except asyncio.TimeoutError:
                continue
            except asyncio.CancelledError:
                break
            except OSError as e:
                if not self.running:
                    break
                logger.error(f"Error in receive loop: {e}")
                await asyncio.sleep(0.1)
                continue

            self.stats["packets_received"] += 1
            self.process_packet(data, addr)

    def process_packet(self, data: bytes, addr: tuple = None):
        """
        Handle one received datagram.

        Args:
            data: Raw packet data
            addr: Source address tuple
        """
        if self.packet_handler is None:
            self.stats["packets_processed"] += 1
            return

        try:
            self.packet_handler(data)
        except DecodeError as e:
            logger.debug(f"Dropping malformed packet from {addr}: {e}")
            self.stats["parse_errors"] += 1
            return
        except Exception as e:
            logger.error(f"Failed to process packet from {addr}: {e}")
            self.stats["handler_errors"] += 1
            return

        self.stats["packets_processed"] += 1

    def get_stats(self) -> Dict[str, Any]:
        """
        Get listener statistics.

        Returns:
            dict: packets_received, packets_processed, parse_errors, handler_errors
        """
        return dict(self.stats)
