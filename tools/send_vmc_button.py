#!/usr/bin/env python3
"""
Manual VMC sender - sends controller button presses to a running keymap service.

Usage (from the repository root):
    python3 -m src.main --dry-run
    python3 tools/send_vmc_button.py [next|previous|both] [--bundle] [--port=PORT]
"""

import sys
import os
import socket
import time

# Run from anywhere inside the repository
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.keymap.constants import ListenerDefaults, VMCConstants
from src.keymap.vmc import build_controller_input
from src.osc import build_osc_bundle, build_osc_message


BUTTONS = {
    "next": VMCConstants.BUTTON_NEXT.decode("ascii"),
    "previous": VMCConstants.BUTTON_PREVIOUS.decode("ascii"),
}


def build_packets(which: str, as_bundle: bool):
    names = list(BUTTONS.values()) if which == "both" else [BUTTONS[which]]
    messages = [build_controller_input(name) for name in names]
    # Unrelated traffic the keymap must ignore
    messages.append(build_osc_message("/VMC/Ext/Root/Pos", "root", 0.0, 0.0, 0.0))

    if as_bundle:
        return [build_osc_bundle(1, *messages)]
    return messages


def main():
    which = "next"
    as_bundle = False
    port = ListenerDefaults.PORT

    for arg in sys.argv[1:]:
        if arg in ("next", "previous", "both"):
            which = arg
        elif arg == "--bundle":
            as_bundle = True
        elif arg.startswith("--port="):
            port = int(arg.split("=", 1)[1])
        else:
            print(__doc__)
            sys.exit(1)

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    packets = build_packets(which, as_bundle)

    print(f"Sending {len(packets)} packet(s) to 127.0.0.1:{port}")
    for packet in packets:
        sock.sendto(packet, ("127.0.0.1", port))
        print(f"  → {len(packet)} bytes: {packet[:24].hex()}...")
        time.sleep(0.1)

    sock.close()
    print("✓ Done. Check the keymap service log for key presses.")


if __name__ == "__main__":
    main()
