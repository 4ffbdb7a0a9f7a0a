import re

# Default file names
CONFIG_FILE_NAME = "vpnimport.yaml"

# Callers bound the input before handing it to the engine
MAX_CONFIG_BYTES = 1024 * 1024  # 1 MiB

# Default ports per dialect
OPENVPN_DEFAULT_PORT = 1194
IKEV2_DEFAULT_PORT = 500
WIREGUARD_DEFAULT_PORT = 51820

# Comment lines at least this long are never used as profile names
MAX_PROFILE_NAME_LENGTH = 50

# Template key literals shipped in example WireGuard configs
WIREGUARD_PLACEHOLDER_PRIVATE_KEY = "CLIENT_PRIVATE_KEY_HERE"
WIREGUARD_PLACEHOLDER_PUBLIC_KEY = "SERVER_PUBLIC_KEY_HERE"

# Keys distinctive to each dialect, used for detection scoring
OPENVPN_KEYWORDS = (
    "dev tun",
    "dev tap",
    "proto udp",
    "proto tcp",
    "cipher ",
    "auth ",
    "tls-client",
    "tls-server",
    "tls-auth",
    "tls-crypt",
    "ca ",
    "cert ",
    "key ",
    "persist-key",
    "persist-tun",
    "resolv-retry",
    "nobind",
    "verb ",
    "explicit-exit-notify",
    "remote-cert-tls",
    "auth-nocache",
    "setenv opt",
)
OPENVPN_EMBEDDED_BLOCKS = ("<ca>", "<cert>", "<key>", "<tls-crypt>", "<tls-auth>")

# Inline blocks whose body is key or certificate data, not directives
OPENVPN_KEY_MATERIAL_BLOCKS = frozenset(
    {
        "ca",
        "cert",
        "key",
        "tls-crypt",
        "tls-crypt-v2",
        "tls-auth",
        "extra-certs",
        "secret",
        "pkcs12",
        "dh",
        "crl-verify",
        "http-proxy-user-pass",
        "auth-user-pass",
    }
)

IKEV2_KEYWORDS = (
    "keyexchange=ikev2",
    "ike=",
    "esp=",
    "authby=",
    "leftauth=",
    "rightauth=",
    "leftid=",
    "rightid=",
    "leftsourceip=",
    "rightsubnet=",
    "auto=add",
    "auto=start",
    "rekey=",
    "reauth=",
    "closeaction=",
    "fragmentation=",
    "forceencaps=",
    "charondebug=",
    "leftcert=",
    "rightcert=",
    "type=tunnel",
)

WIREGUARD_KEYWORDS = (
    "PrivateKey",
    "PublicKey",
    "Endpoint",
    "AllowedIPs",
    "PersistentKeepalive",
    "ListenPort",
    "DNS",
    "Address",
    "MTU",
)

# Structural patterns shared by the detectors
OPENVPN_REMOTE_RE = re.compile(r"^[ \t]*remote[ \t]+\S+", re.MULTILINE)
IKEV2_CONN_RE = re.compile(r"^[ \t]*conn[ \t]+\S+", re.MULTILINE)
WIREGUARD_PRIVATE_KEY_RE = re.compile(r"PrivateKey[ \t]*=[ \t]*\S")
