"""Application-wide constants."""

from __future__ import annotations

# QR Code Generation Defaults
MAX_QR_DIMENSION = 2400
DEFAULT_QR_BORDER = 4
DEFAULT_QR_FILL_COLOR = "black"
DEFAULT_QR_BACKGROUND_COLOR = "white"

# Wire tokens for the T: segment of the payload
WIRE_WPA = "WPA"
WIRE_WEP = "WEP"
WIRE_OPEN = "nopass"

# User-entered security label normalization
SECURITY_ALIASES = {
    "WPA/WPA2/WPA3": "WPA",
    "WPA2": "WPA",
    "WPA3": "WPA",
    "OPEN": "NOPASS",
    "NONE": "NOPASS",
    "NO PASSWORD": "NOPASS",
}

# NetworkManager key-mgmt tokens (exact match, lowercase)
NMCLI_SECURITY_MAP = {
    "wpa-psk": WIRE_WPA,
    "sae": WIRE_WPA,
    "wpa-eap": WIRE_WPA,
    "wpa-eap-suite-b-192": WIRE_WPA,
    "wep-psk": WIRE_WEP,
    "wep-key": WIRE_WEP,
    "none": WIRE_OPEN,
    "owe": WIRE_OPEN,
}

# netsh "Authentication" markers (substring match on the uppercased value, first hit wins)
NETSH_SECURITY_MARKERS = (
    ("WPA2PSK", WIRE_WPA),
    ("WPAPSK", WIRE_WPA),
    ("WPA2-PERSONAL", WIRE_WPA),
    ("WPA-PERSONAL", WIRE_WPA),
    ("WPA3SAE", WIRE_WPA),
    ("WPA3-PERSONAL", WIRE_WPA),
    ("WEP", WIRE_WEP),
    ("OPEN", WIRE_OPEN),
)

# Native tooling
NMCLI_PROFILE_FIELDS = (
    "GENERAL.NAME,802-11-WIRELESS.SSID,802-11-WIRELESS-SECURITY.KEY-MGMT,"
    "802-11-WIRELESS-SECURITY.PSK,TYPE"
)
NMCLI_WIRELESS_TYPE = "802-11-wireless"
MACOS_WIFI_PORT_MARKERS = ("Hardware Port: Wi-Fi", "Hardware Port: AirPort")
NETSH_KEY_CONTENT_LABEL = "Key Content"
NETSH_AUTHENTICATION_LABEL = "Authentication"
NETSH_KEY_ABSENT = "not present"

COMMAND_TIMEOUT_SECONDS = 30
COMPILER_PROBE_TIMEOUT_SECONDS = 15
COMPILE_TIMEOUT_SECONDS = 120

# Document export
LATEX_COMPILER = "pdflatex"
TEMP_QR_IMAGE_FILENAME = "qrlan_qr_temp.png"
TEMP_LATEX_FILENAME = "qrlan_latex_temp.tex"
TITLE_PLACEHOLDER = "{{QRLAN_PDF_TITLE}}"
IMAGE_PATH_PLACEHOLDER = "{{QR_CODE_IMAGE_PATH}}"
LATEX_AUX_SUFFIXES = (".aux", ".log", ".out", ".fls", ".toc", ".synctex.gz", ".fdb_latexmk", ".pdf")

_LATEX_INSTALL_WINDOWS = "For Windows use:\nMiKTeX (https://miktex.org/download)"
_LATEX_INSTALL_MACOS = "For macOS use:\nMacTeX (https://www.tug.org/mactex/mactex-download.html)"
_LATEX_INSTALL_LINUX = (
    "For Linux (Debian/Ubuntu) use:\n"
    "sudo apt-get install texlive-latex-base texlive-fonts-recommended texlive-lang-english\n"
    "\n"
    "For Linux (Fedora) use:\n"
    "sudo dnf install texlive-scheme-basic texlive-collection-fontsrecommended "
    "texlive-collection-langenglish"
)
LATEX_MISSING_HEADER = (
    'No LaTeX distribution was found. Ensure that the "pdflatex" command is available.'
)
LATEX_INSTALL_HINTS = {
    "win32": _LATEX_INSTALL_WINDOWS,
    "darwin": _LATEX_INSTALL_MACOS,
    "linux": _LATEX_INSTALL_LINUX,
}
LATEX_INSTALL_HINT_ALL = "\n\n".join(
    (_LATEX_INSTALL_WINDOWS, _LATEX_INSTALL_MACOS, _LATEX_INSTALL_LINUX)
)

# Output naming
DEFAULT_FILENAME_SUFFIX = "_qrcode"
KNOWN_OUTPUT_EXTENSIONS = ("pdf", "png", "jpg", "svg")
