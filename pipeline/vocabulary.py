"""
Constant tables used by the dataset classifier.
"""

import re

MAX_SAMPLE_ROWS = 200
MAX_JSON_DEPTH = 50
# bracket nesting beyond this is rejected before decoding
MAX_JSON_NESTING = 512

KEYWORD_WEIGHT = 0.7
PATTERN_WEIGHT = 0.3


# ---------------- Vocabulary ----------------
_ATTACK_TERMS = (
    "attack", "threat", "malware", "virus", "worm", "trojan", "ransomware",
    "spyware", "phishing", "ddos", "dos", "r2l", "u2r", "probe", "exploit",
    "botnet", "backdoor", "rootkit", "keylogger", "xss", "csrf", "injection",
    "overflow",
)

_NETWORK_TERMS = (
    "ip", "port", "protocol", "tcp", "udp", "icmp", "http", "https", "ftp",
    "ssh", "telnet", "smtp", "dns", "dhcp", "network", "traffic", "packet",
    "frame", "payload",
)

_SECURITY_OPS_TERMS = (
    "intrusion", "detection", "prevention", "firewall", "ids", "ips", "siem",
    "anomaly", "signature", "alert", "alarm", "log", "audit", "incident",
    "vulnerability", "patch", "update",
)

# KDD Cup 99 / NSL-KDD feature names
_KDD_COLUMNS = (
    "duration", "service", "flag", "src_bytes", "dst_bytes", "land",
    "wrong_fragment", "urgent", "hot", "num_failed_logins", "logged_in",
    "num_compromised", "root_shell", "su_attempted", "num_root",
    "num_file_creations", "num_shells", "num_access_files",
    "num_outbound_cmds", "is_host_login", "is_guest_login", "count",
    "srv_count", "serror_rate", "srv_serror_rate", "rerror_rate",
    "srv_rerror_rate", "same_srv_rate", "diff_srv_rate", "srv_diff_host_rate",
    "dst_host_count", "dst_host_srv_count", "dst_host_same_srv_rate",
    "dst_host_diff_srv_rate", "dst_host_same_src_port_rate",
    "dst_host_srv_diff_host_rate", "dst_host_serror_rate",
    "dst_host_srv_serror_rate", "dst_host_rerror_rate",
    "dst_host_srv_rerror_rate",
)

# dict.fromkeys keeps first-seen order while dropping repeats
CYBER_KEYWORDS = tuple(dict.fromkeys(
    _ATTACK_TERMS + _NETWORK_TERMS + _SECURITY_OPS_TERMS + _KDD_COLUMNS
))

KEYWORD_REGEXES = tuple(
    (kw, re.compile(r"\b" + re.escape(kw) + r"\b"))
    for kw in CYBER_KEYWORDS
)


# ---------------- Structural patterns ----------------
_OCTET = r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"

_PATTERN_SOURCES = (
    # IPv4 address
    (r"\b(?:" + _OCTET + r"\.){3}" + _OCTET + r"\b", 0),
    # TCP/UDP port, 1-65535
    (r"\b(?:6553[0-5]|655[0-2][0-9]|65[0-4][0-9]{2}|6[0-4][0-9]{3}"
     r"|[1-5][0-9]{4}|[1-9][0-9]{0,3})\b", 0),
    # MAC address
    (r"\b(?:[0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}\b", 0),
    # Apache / nginx access log timestamp
    (r"\b\d{1,2}/\w{3}/\d{4}:\d{2}:\d{2}:\d{2}\b", 0),
    # traffic label
    (r"\b(?:normal|attack|anomaly|benign|malicious)\b", re.IGNORECASE),
    # KDD attack category
    (r"\b(?:dos|r2l|u2r|probe)\b", re.IGNORECASE),
    # MD5
    (r"\b[0-9a-fA-F]{32}\b", 0),
    # SHA-1
    (r"\b[0-9a-fA-F]{40}\b", 0),
    # SHA-256
    (r"\b[0-9a-fA-F]{64}\b", 0),
    # URL
    (r"\bhttps?://[^\s\"',]+", re.IGNORECASE),
)

PATTERN_TABLE = tuple(
    (f"pattern_{i}", re.compile(src, flags))
    for i, (src, flags) in enumerate(_PATTERN_SOURCES)
)


# ---------------- Calibration tables ----------------
# Each table is (minimum distinct matches, value), highest band first.
EXTENDED_KEYWORD_STEPS = ((8, 0.95), (5, 0.9), (3, 0.85), (2, 0.65), (1, 0.4), (0, 0.0))
EXTENDED_PATTERN_STEPS = ((3, 0.9), (2, 0.85), (1, 0.7), (0, 0.0))
# keyed on keyword count: more vocabulary evidence lowers the bar
EXTENDED_THRESHOLD_STEPS = ((8, 0.75), (5, 0.78), (3, 0.80), (0, 0.85))

LEGACY_KEYWORD_STEPS = ((5, 0.95), (3, 0.85), (2, 0.6), (1, 0.3), (0, 0.0))
LEGACY_PATTERN_STEPS = ((2, 0.9), (1, 0.7), (0, 0.0))
LEGACY_THRESHOLD_STEPS = ((0, 0.80),)
