from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from vpnimport import import_config
from vpnimport.core.import_manager import ImportManager
from vpnimport.core.parsers.common import BaseExtractor
from vpnimport.core.parsers.openvpn import OpenVpnExtractor
from vpnimport.models import ImportErrorKind, ProtocolKind


def test_empty_content():
    for text in ("", "   \n\t"):
        result = import_config(text)

        assert not result.success
        assert result.profile is None
        assert result.error.kind is ImportErrorKind.EMPTY_CONTENT


def test_unidentified_protocol():
    result = import_config("just some notes about my vpn")

    assert result.error.kind is ImportErrorKind.PROTOCOL_IDENTIFICATION_FAILED
    assert result.error.protocol == "Unknown"


def test_ambiguous_config_reported_as_identification_failure(openvpn_config, wireguard_config):
    result = import_config(openvpn_config + wireguard_config)
    assert result.error.kind is ImportErrorKind.PROTOCOL_IDENTIFICATION_FAILED


def test_imports_openvpn(openvpn_config):
    result = import_config(openvpn_config)

    assert result.success
    assert result.error is None
    assert result.protocol_detected == "OpenVPN"
    assert result.profile.protocol == "OpenVPN (UDP)"
    assert result.profile.server == "vpn.example.com"
    assert result.profile.port == 1194
    assert result.profile.encryption == "AES-256-GCM"


def test_imports_ikev2(ikev2_config):
    result = import_config(ikev2_config)

    assert result.protocol_detected == "IKEv2"
    assert result.profile.server == "vpn.corp.example.com"


def test_imports_wireguard(wireguard_config):
    result = import_config(wireguard_config)

    assert result.protocol_detected == "WireGuard"
    assert result.profile.port == 51821


def test_placeholder_key_is_parsing_failure(wireguard_config):
    config = wireguard_config.replace(
        "yAnz5TF+lXXJte14tji3zlMNq+hd2rYUIgJBgB3fBmk=", "CLIENT_PRIVATE_KEY_HERE"
    )
    result = import_config(config)

    assert result.error.kind is ImportErrorKind.PARSING_FAILED
    assert result.error.protocol == "WireGuard"
    assert "PrivateKey" in result.error.message
    assert result.error.message.startswith("Failed to parse WireGuard configuration")


def test_unsupported_protocol(openvpn_config):
    manager = ImportManager(extractors={})
    result = manager.import_config(openvpn_config)

    assert result.error.kind is ImportErrorKind.UNSUPPORTED_PROTOCOL
    assert result.error.protocol == "OpenVPN"


class _EmptyExtractor(BaseExtractor):
    kind = ProtocolKind.OPENVPN

    def parse(self):
        return None


def test_missing_profile_data(openvpn_config):
    manager = ImportManager(extractors={ProtocolKind.OPENVPN: _EmptyExtractor})
    result = manager.import_config(openvpn_config)

    assert result.error.kind is ImportErrorKind.MISSING_PROFILE_DATA
    assert result.error.protocol == "OpenVPN"


def test_import_is_idempotent(openvpn_inline_config):
    first = import_config(openvpn_inline_config)
    second = import_config(openvpn_inline_config)

    assert first == second
    assert first.profile is not second.profile


def test_profile_not_shared_between_calls(wireguard_config):
    first = import_config(wireguard_config).profile
    first.protocol_specific["mtu"] = "9000"

    assert import_config(wireguard_config).profile.protocol_specific["mtu"] == "1420"


def test_concurrent_imports(openvpn_config, ikev2_config, wireguard_config):
    texts = [openvpn_config, ikev2_config, wireguard_config] * 20
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(import_config, texts))

    assert [r.protocol_detected for r in results] == ["OpenVPN", "IKEv2", "WireGuard"] * 20


def test_result_to_dict_success(openvpn_config):
    data = import_config(openvpn_config).to_dict()

    assert data["success"] is True
    assert data["protocol_detected"] == "OpenVPN"
    assert data["parser_used"] == "OpenVPN"
    assert data["profile_data"]["server"] == "vpn.example.com"
    assert data["profile_data"]["protocol_specific"]["device_type"] == "tun"


def test_result_to_dict_failure():
    assert import_config("").to_dict() == {
        "success": False,
        "error": "Empty configuration content",
        "error_type": "EMPTY_CONTENT",
    }


def test_registered_extractors_default():
    assert ImportManager().extractors[ProtocolKind.OPENVPN] is OpenVpnExtractor


def test_imports_wireguard_with_crlf_line_endings(wireguard_config):
    result = import_config(wireguard_config.replace("\n", "\r\n"))

    assert result.success
    assert result.protocol_detected == "WireGuard"
    assert result.profile.server == "vpn.example.com"
