from __future__ import annotations

import pytest

from vpnimport.core.parsers.ikev2 import Ikev2Detector, Ikev2Extractor


def test_detects_ikev2_config(ikev2_config):
    assert Ikev2Detector(ikev2_config).detect() is True


def test_requires_conn_section():
    config = "config setup\n  keyexchange=ikev2\n  ike=aes256\n  esp=aes256\n"
    assert Ikev2Detector(config).detect() is False


def test_accepts_keyword_threshold_without_exchange():
    config = "conn office\n  authby=secret\n  ike=aes256\n  esp=aes256\n  auto=add\n"
    assert Ikev2Detector(config).detect() is True


def test_accepts_config_setup_with_two_keywords():
    config = "config setup\n\nconn office\n  authby=secret\n  auto=add\n"
    assert Ikev2Detector(config).detect() is True


def test_rejects_insufficient_keywords():
    config = "conn office\n  authby=secret\n  auto=add\n"
    assert Ikev2Detector(config).detect() is False


def test_rejects_wireguard_markers():
    config = "conn office\n  keyexchange=ikev2\n  PrivateKey = abc\n"
    assert Ikev2Detector(config).detect() is False


def test_rejects_openvpn_markers():
    config = "conn office\n  keyexchange=ikev2\ndev tun\n"
    assert Ikev2Detector(config).detect() is False


def test_extracts_profile(ikev2_config):
    result = Ikev2Extractor(ikev2_config).extract()

    assert result.success
    profile = result.profile
    assert profile.name == "corp-vpn"
    assert profile.server == "vpn.corp.example.com"
    assert profile.port == 500
    assert profile.protocol == "IKEv2/IPSec"
    assert profile.username == "alice@example.com"
    assert profile.password == ""
    assert profile.auth_method == "EAP"
    assert profile.encryption == "AES-128"
    assert profile.compression is False

    specific = profile.protocol_specific
    assert specific["ike_parameters"] == "aes128-sha256-modp2048!"
    assert specific["esp_parameters"] == "aes128-sha256!"
    assert specific["connection_type"] == "tunnel"
    assert specific["auto_setting"] == "start"
    assert specific["right_id"] == "@vpn.corp.example.com"
    assert specific["left_source_ip"] == "%config"
    assert specific["right_subnet"] == "0.0.0.0/0"
    assert specific["fragmentation"] is True
    assert specific["force_encaps"] is False
    assert specific["charon_debug"] == "ike 1, knl 1, cfg 0"
    assert specific["has_certificates"] is False
    assert specific["supports_mobility"] is True


def test_server_falls_back_to_rightid_then_server():
    assert Ikev2Extractor('conn a\n rightid="gw.example.com"\n').server() == "gw.example.com"
    assert Ikev2Extractor("conn a\n server=gw2.example.com\n").server() == "gw2.example.com"


def test_missing_server_fails():
    result = Ikev2Extractor("conn office\n  keyexchange=ikev2\n").extract()

    assert not result.success
    assert "server address" in result.error


def test_commented_settings_are_ignored():
    config = "conn office\n# right=old.example.com\n  right=new.example.com\n"
    assert Ikev2Extractor(config).server() == "new.example.com"


def test_name_falls_back_to_comment_then_server():
    config = "# Branch office\nconn %default\n  right=gw.example.com\n"
    assert Ikev2Extractor(config).extract().profile.name == "Branch office"

    config = "conn %default\n  right=gw.example.com\n"
    assert Ikev2Extractor(config).extract().profile.name == "IKEv2 (gw.example.com)"


def test_explicit_port_wins():
    config = "conn a\n  right=gw.example.com:4501\n  port=4500\n"
    assert Ikev2Extractor(config).port() == 4500


def test_inline_port_pattern():
    config = "conn a\n  right=gw.example.com:4501\n"
    assert Ikev2Extractor(config).port() == 4501


def test_non_numeric_port_uses_inline_or_default():
    assert Ikev2Extractor("conn a\n  right=gw\n  port=ipsec\n").port() == 500


@pytest.mark.parametrize(
    "settings,expected",
    [
        ("leftauth=psk", "PSK"),
        ("authby=secret", "PSK"),
        ("leftauth=pubkey\n rightauth=cert", "Certificate"),
        ("leftauth=certificate", "Certificate"),
        ("rightauth=EAP", "EAP"),
        ("", "PSK"),
    ],
)
def test_auth_method(settings, expected):
    config = f"conn a\n right=gw.example.com\n {settings}\n"
    assert Ikev2Extractor(config).auth_method() == expected


@pytest.mark.parametrize(
    "ike,expected",
    [
        ("aes128-sha256-modp2048", "AES-128"),
        ("aes256gcm16-prfsha384-ecp384", "AES-256"),
        ("3des-sha1-modp1024", "3DES"),
        ("chacha20poly1305-prfsha256", "AES-256"),
        ("", "AES-256"),
    ],
)
def test_encryption(ike, expected):
    assert Ikev2Extractor.encryption(ike) == expected
