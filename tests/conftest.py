"""Test configuration and sample VPN configuration fixtures."""

from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest


OPENVPN_CONFIG = textwrap.dedent(
    """\
    client
    dev tun
    proto udp
    remote vpn.example.com 1194
    resolv-retry infinite
    nobind
    persist-key
    persist-tun
    remote-cert-tls server
    cipher AES-256-GCM
    auth SHA256
    tls-client
    verb 3
    """
)

OPENVPN_INLINE_CONFIG = textwrap.dedent(
    """\
    # Profile: Office Gateway
    client
    remote gw.example.org 443 tcp
    remote backup.example.org 443 tcp
    auth-user-pass
    comp-lzo
    <ca>
    -----BEGIN CERTIFICATE-----
    remote evil.example.com 1
    -----END CERTIFICATE-----
    </ca>
    <tls-crypt>
    -----BEGIN OpenVPN Static key V1-----
    abcdef
    -----END OpenVPN Static key V1-----
    </tls-crypt>
    """
)

IKEV2_CONFIG = textwrap.dedent(
    """\
    # Corporate IKEv2
    config setup
        charondebug="ike 1, knl 1, cfg 0"
        uniqueids=no

    conn %default
        keyexchange=ikev2

    conn corp-vpn
        auto=start
        type=tunnel
        ike=aes128-sha256-modp2048!
        esp=aes128-sha256!
        left=%defaultroute
        leftid=alice@example.com
        leftauth=eap
        leftsourceip=%config
        right=vpn.corp.example.com
        rightid=@vpn.corp.example.com
        rightauth=pubkey
        rightsubnet=0.0.0.0/0
        fragmentation=yes
        rekey=yes
        reauth=yes
    """
)

WIREGUARD_PRIVATE_KEY = "yAnz5TF+lXXJte14tji3zlMNq+hd2rYUIgJBgB3fBmk="
WIREGUARD_PUBLIC_KEY = "xTIBA5rboUvnH4htodjb6e697QjLERt1NAB4mZqp8Dg="

WIREGUARD_CONFIG = textwrap.dedent(
    f"""\
    [Interface]
    PrivateKey = {WIREGUARD_PRIVATE_KEY}
    Address = 10.8.0.2/24
    DNS = 9.9.9.9

    [Peer]
    PublicKey = {WIREGUARD_PUBLIC_KEY}
    Endpoint = vpn.example.com:51821
    AllowedIPs = 0.0.0.0/0
    PersistentKeepalive = 15
    """
)


@pytest.fixture
def openvpn_config() -> str:
    return OPENVPN_CONFIG


@pytest.fixture
def openvpn_inline_config() -> str:
    return OPENVPN_INLINE_CONFIG


@pytest.fixture
def ikev2_config() -> str:
    return IKEV2_CONFIG


@pytest.fixture
def wireguard_config() -> str:
    return WIREGUARD_CONFIG


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and filter changes made by ``setup_logging``."""

    root = logging.getLogger()
    handlers = root.handlers[:]
    filters = root.filters[:]
    level = root.level

    yield

    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.filters = filters
    root.setLevel(level)


@dataclass
class SimpleFS:
    """Lightweight fake file-system helper used by CLI tests."""

    root: Path

    def create_file(self, relative_path: str, contents: str = "") -> Path:
        file_path = self.root / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(contents)
        return file_path


@pytest.fixture
def fs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SimpleFS:
    """Provide a simple fake file-system rooted at ``tmp_path``."""

    monkeypatch.chdir(tmp_path)
    return SimpleFS(tmp_path)
