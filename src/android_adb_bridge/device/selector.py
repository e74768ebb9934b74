"""Device queries - how a connection is routed to one device or emulator.

Query forms understood by the adb server:

host-serial:<serial>[:<port>]
    Target a device by serial. Survives the device being reconnected. The
    optional :port suffix is for devices attached with 'adb connect'.

host:transport:<transport-id>
    Target the transport listed as transport_id:<n> in 'devices -l'. The
    id changes if the device is briefly unplugged.

host:transport-usb
    The single device attached over USB. Fails if there is more than one.

host:transport-local
    The single emulator attached over TCP. Fails if there is more than one.

host:transport-any
    The single device or emulator attached. Fails if there is more than one.

host:transport-id:<transport-id>
    Same as host:transport:<id>, spelled the way newer servers prefer.
"""

from __future__ import annotations

TRANSPORT_ANY = "host:transport-any"
TRANSPORT_USB = "host:transport-usb"
TRANSPORT_LOCAL = "host:transport-local"
DEVICES_QUERY = "host:devices-l"

FEATURES_SUFFIX = ":features"

# Stripped in order when deriving a display name
_NAME_PREFIXES = ("host:", "host-serial:", "transport:")


def serial_query(serial: str, port: int | None = None) -> str:
    if port is None:
        return f"host-serial:{serial}"
    return f"host-serial:{serial}:{port}"


def transport_query(transport_id: int) -> str:
    return f"host:transport:{transport_id}"


def transport_id_query(transport_id: int) -> str:
    return f"host:transport-id:{transport_id}"


def display_name(device_query: str, serial: str | None = None) -> str:
    """Name shown for a client: the serial if known, else the bare query.

    'host:transport-id:5' -> 'transport-id:5', 'host-serial:abc' -> 'abc',
    'host:transport:7' -> '7'.
    """
    if serial is not None:
        return serial
    name = device_query
    for prefix in _NAME_PREFIXES:
        name = name.removeprefix(prefix)
    return name


def features_destination(device_query: str) -> str:
    """Destination that reports the feature list of the queried device.

    host:transport* queries move to the host-transport* namespace so the
    server answers about the target device; host-serial: queries are used
    as-is.
    """
    return device_query.replace("host:transport", "host-transport") + FEATURES_SUFFIX
