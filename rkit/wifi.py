"""Wireless network management through wpa_cli and shell networking tools."""

from __future__ import annotations

import enum
import shlex
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional

Runner = Callable[[str], str]

DEFAULT_INTERFACE = "wlan0"
DRIVER_MODULE = "brcmfmac"
DRIVER_PATH = (
    "/lib/modules/3.0.35PSP-0.0.1.051215-04858-g6b447a6-dirty/kernel/drivers/net/"
    "wireless/brcm80211/brcmfmac/brcmfmac.ko"
)
SUPPLICANT_CONFIG = "/etc/wpa_supplicant.conf"


class Mode(enum.IntEnum):
    """Operations that run() can dispatch."""

    LIST = 1
    SCAN = 2
    ADD = 3
    CONNECT = 4
    GET_IP = 5
    REMOVE = 6
    DISCONNECT = 7
    STATUS = 8
    RESET = 9


class AuthMode(enum.IntEnum):
    """Authentication schemes for a new network."""

    WEP = 1
    WPA_PERSONAL = 2
    WPA2_PERSONAL = 3
    WPA2_ENTERPRISE = 4


@dataclass
class WifiSettings:
    """Parameters of a network and of its IP configuration."""

    ssid: str = ""
    network: int = 0
    auth_mode: Optional[AuthMode] = None
    hidden: bool = False
    psk_key: str = ""
    wep_key: str = ""
    identity: str = ""
    password: str = ""
    dhcp: bool = True
    ip: str = ""
    mask: str = ""
    gateway: str = ""


def _shell(command: str) -> str:
    return subprocess.run(
        command, shell=True, capture_output=True, text=True, check=False
    ).stdout


def _quoted(value: str) -> str:
    return shlex.quote(f'"{value}"')


class WpaCli:
    """Drives wpa_supplicant on one interface; every command goes through runner."""

    def __init__(self, runner: Optional[Runner] = None, interface: str = DEFAULT_INTERFACE) -> None:
        self._runner = runner or _shell
        self.interface = interface
        self.result = ""

    def _sh(self, command: str) -> str:
        return self._runner(command)

    def cli(self, command: str) -> str:
        """Run a wpa_cli command on the interface and return its trimmed output."""
        return self._runner(f"wpa_cli -i {self.interface} {command}").strip()

    def list_networks(self) -> str:
        return self.cli("list_networks")

    def scan(self) -> str:
        """Trigger a scan, wait for it and return the scan results."""
        self.cli("scan")
        self._sh("sleep 3")
        return self.cli("scan_results")

    def add_network(self, settings: WifiSettings) -> str:
        """Create and configure a network, save the config and return its id."""
        nid = self.cli("add_network")
        self.cli(f"set_network {nid} ssid {_quoted(settings.ssid)}")
        if settings.hidden:
            self.cli(f"set_network {nid} scan_ssid 1")
        mode = settings.auth_mode
        if mode is AuthMode.WEP:
            self.cli(f"set_network {nid} key_mgmt NONE")
            self.cli(f"set_network {nid} wep_key0 {_quoted(settings.wep_key)}")
        elif mode in (AuthMode.WPA_PERSONAL, AuthMode.WPA2_PERSONAL):
            proto = "WPA" if mode is AuthMode.WPA_PERSONAL else "RSN"
            self.cli(f"set_network {nid} key_mgmt WPA-PSK")
            self.cli(f"set_network {nid} proto {proto}")
            self.cli(f"set_network {nid} pairwise TKIP CCMP")
            self.cli(f"set_network {nid} group TKIP CCMP")
            self.cli(f"set_network {nid} psk {_quoted(settings.psk_key)}")
        elif mode is AuthMode.WPA2_ENTERPRISE:
            self.cli(f"set_network {nid} key_mgmt WPA-EAP")
            self.cli(f"set_network {nid} proto WPA2")
            self.cli(f"set_network {nid} pairwise CCMP")
            self.cli(f"set_network {nid} group CCMP")
            self.cli(f"set_network {nid} eap PEAP")
            self.cli(f"set_network {nid} identity {_quoted(settings.identity)}")
            self.cli(f"set_network {nid} password {_quoted(settings.password)}")
        self.cli("save_config")
        return nid

    def connect(self, network: int) -> None:
        """Enable and select a network, then save the config."""
        self.cli(f"enable_network {network}")
        self._sh("sleep 1")
        self.cli(f"select_network {network}")
        self._sh("sleep 1")
        self.cli("save_config")

    def obtain_ip(self, settings: WifiSettings) -> None:
        """Get an address by DHCP or apply the static one in settings."""
        if settings.dhcp:
            self._sh(f"udhcpc -n -f -q -i {self.interface}")
            return
        self._sh(f"ip addr add {settings.ip}/{settings.mask} brd + dev {self.interface}")
        self._sh(f"ip route add default via {settings.gateway} dev {self.interface}")
        self._sh(f"ping -c 3 {settings.gateway}")

    def remove(self, network: int) -> None:
        self.cli(f"remove_network {network}")
        self._sh("sleep 1")
        self.cli("save_config")

    def disconnect(self, network: int, ip: str) -> None:
        """Disable a network, drop its address and renew by DHCP."""
        self.cli(f"disable_network {network}")
        self._sh("sleep 1")
        self._sh(f"ip addr del {ip} brd + dev {self.interface}")
        self._sh(f"udhcpc -n -f -q -i {self.interface}")

    def status(self) -> str:
        return self.cli("status")

    def reset(self) -> None:
        """Reload the wireless driver and restart wpa_supplicant."""
        for command in (
            f"rmmod {DRIVER_MODULE}",
            f"insmod {DRIVER_PATH}",
            "sleep 1",
            "killall -9 wpa_supplicant",
            "sleep 2",
            f"wpa_supplicant -B -i{self.interface} -c {SUPPLICANT_CONFIG} -dddd -Dwext",
            "sleep 5",
        ):
            self._sh(command)

    def run(self, mode: Mode, settings: Optional[WifiSettings] = None) -> Optional[str]:
        """Perform one operation; output-producing ones return and keep it in result."""
        mode = Mode(mode)
        needs_settings = mode in (
            Mode.ADD, Mode.CONNECT, Mode.GET_IP, Mode.REMOVE, Mode.DISCONNECT
        )
        if needs_settings and settings is None:
            raise ValueError(f"{mode.name} needs network settings")
        output: Optional[str] = None
        if mode is Mode.LIST:
            output = self.list_networks()
        elif mode is Mode.SCAN:
            output = self.scan()
        elif mode is Mode.ADD:
            output = self.add_network(settings)
        elif mode is Mode.CONNECT:
            self.connect(settings.network)
        elif mode is Mode.GET_IP:
            self.obtain_ip(settings)
        elif mode is Mode.REMOVE:
            self.remove(settings.network)
        elif mode is Mode.DISCONNECT:
            self.disconnect(settings.network, settings.ip)
        elif mode is Mode.STATUS:
            output = self.status()
        else:
            self.reset()
        if output is not None:
            self.result = output
        return output