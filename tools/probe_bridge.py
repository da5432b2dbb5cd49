"""
BroadLink RM Diagnostic Script for the Dyson BP01

Discovers BroadLink RMs on the LAN, pings the selected one, reads its
sensors if it has any and optionally sends one of the Dyson BP01 IR signals
so you can watch the fan react.

Usage:
    python probe_bridge.py                            # Discover and probe the first RM
    python probe_bridge.py 34:EA:34:B5:6C:01          # Probe a specific RM
    python probe_bridge.py 34:EA:34:B5:6C:01 active   # ...and send the power signal
"""

import os
import sys
from datetime import datetime

import broadlink
from broadlink.exceptions import BroadlinkException
from icmplib import ICMPLibError, ping

# ── IR signals captured from the BP01 remote ──────────────────────────

SIGNALS = {
    "active": (
        "26005800481718161916161916311817191619171816192d181918171817181719161817"
        "181718161a2e1816192d19171800066b45191631190006604817182d1a00066147151a2d"
        "190006614916192d190006604618172f18000d05"
    ),
    "up": (
        "260058004718181619161917172f1817191618171817182c1919172e1618182f16191630"
        "1a2d192d1817182f161817181a00066d4618182d190006614618172f1900065f4817182e"
        "1900065f4816182e180006604818172d19000d05"
    ),
    "down": (
        "2600580047161917171719151a2d171818171619161a182d1a15173019151a2d192d1a17"
        "18161730161819161718172f1a0006664617182f1900065f4817182e1800066044191730"
        "1a00065e4818172d1a00065f4618182e19000d05"
    ),
    "swing": (
        "260058004716191517191917192c1619171816191819182d151b1916182d192e19171817"
        "182c1730181815301a2d192d160006594718192d1700066243191731180006604816192d"
        "190006604717182d190006604817182d18000d05"
    ),
}

DISCOVERY_TIMEOUT = 5
PING_COUNT = 4

# ── Globals ───────────────────────────────────────────────────────────

log_file = None


def log(msg: str) -> None:
    """Print to console and write to log file."""
    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    line = f"[{timestamp}] {msg}"
    print(line)
    if log_file:
        log_file.write(line + "\n")
        log_file.flush()


def format_mac(mac: bytes) -> str:
    """Format raw MAC bytes like '34:EA:34:B5:6C:01'."""
    return ":".join(f"{b:02X}" for b in mac)


def discover_bridge(target_mac: str | None = None):
    """Discover RMs and return the first one matching ``target_mac``."""
    log(f"Discovering BroadLink devices ({DISCOVERY_TIMEOUT} seconds)...")
    devices = broadlink.discover(timeout=DISCOVERY_TIMEOUT)
    if not devices:
        log("  No BroadLink devices found.")
        return None

    selected = None
    for device in devices:
        mac = format_mac(device.mac)
        log(f"  FOUND: BroadLink {device.model} ({mac}) at {device.host[0]}")
        if selected is None and (target_mac is None or mac == target_mac):
            selected = device

    if selected is None:
        log(f"  No device matches {target_mac}.")
    return selected


def probe_ping(host: str) -> None:
    """Ping the RM and report round-trip times and loss."""
    log(f"Pinging {host} ({PING_COUNT} packets)...")
    try:
        result = ping(host, count=PING_COUNT, interval=0.5, timeout=1, privileged=False)
    except ICMPLibError as e:
        log(f"  Ping error: {e}")
        return
    log(
        f"  alive={result.is_alive} loss={result.packet_loss:.0%} "
        f"rtt min/avg/max={result.min_rtt}/{result.avg_rtt}/{result.max_rtt} ms"
    )


def probe_sensors(device) -> None:
    """Read temperature and humidity if the RM has a sensor."""
    if not hasattr(device, "check_sensors"):
        log("  No sensors on this model.")
        return
    try:
        data = device.check_sensors()
    except BroadlinkException as e:
        log(f"  Sensor read error: {e}")
        return
    log(f"  temperature={data.get('temperature')}°C humidity={data.get('humidity')}%")


def main():
    global log_file

    # Set up log file
    os.makedirs("logs", exist_ok=True)
    log_filename = f"logs/probe_bridge_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    log_file = open(log_filename, "w", encoding="utf-8")
    log(f"Log file: {log_filename}")

    # Parse CLI args
    target_mac = sys.argv[1].replace("-", ":").upper() if len(sys.argv) > 1 else None
    signal_name = sys.argv[2].lower() if len(sys.argv) > 2 else None
    if signal_name is not None and signal_name not in SIGNALS:
        log(f"ERROR: unknown signal '{signal_name}', expected one of {', '.join(SIGNALS)}")
        return

    device = discover_bridge(target_mac)
    if device is None:
        return
    host = device.host[0]

    probe_ping(host)

    log(f"Authenticating with {host}...")
    try:
        device.auth()
    except BroadlinkException as e:
        log(f"ERROR: Authentication failed: {e}")
        return
    log("AUTHENTICATED")

    probe_sensors(device)

    if signal_name is not None:
        log(f"Sending '{signal_name}' signal...")
        try:
            device.send_data(bytes.fromhex(SIGNALS[signal_name]))
        except BroadlinkException as e:
            log(f"  Send error: {e}")
            return
        log("  Sent. Watch the fan.")

    log("Done.")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        log("Interrupted by user. Exiting.")
    finally:
        if log_file:
            log_file.close()
