"""
Embedded OpenType (EOT) output.

An EOT file is a little-endian header describing the font followed by the
TrueType data. Fonts are written uncompressed, version 0x00020001.
"""

import struct
from dataclasses import dataclass
from io import BytesIO

from fontTools.ttLib import TTFont

EOT_VERSION = 0x00020001
EOT_MAGIC = 0x504C
DEFAULT_CHARSET = 0x01
FS_SELECTION_ITALIC = 0x01

# Name table IDs copied into the header
NAME_ID_FAMILY = 1
NAME_ID_STYLE = 2
NAME_ID_VERSION = 5
NAME_ID_FULL = 4

# EOTSize, FontDataSize, Version, Flags
_PREFIX = struct.Struct("<4L")
# Charset, Italic, Weight, fsType, MagicNumber, UnicodeRange1-4,
# CodePageRange1-2, CheckSumAdjustment, Reserved1-4, Padding1
_FIXED = struct.Struct("<BBLHH4L2LL4LH")

PANOSE_FIELDS = (
    "bFamilyType",
    "bSerifStyle",
    "bWeight",
    "bProportion",
    "bContrast",
    "bStrokeVariation",
    "bArmStyle",
    "bLetterForm",
    "bMidline",
    "bXHeight",
)


@dataclass(frozen=True)
class EotHeader:
    """Fixed fields of an EOT header."""

    eot_size: int
    font_data_size: int
    version: int
    flags: int
    magic: int


def _name_entry(text: str) -> bytes:
    data = text.encode("utf-16-le")
    return struct.pack("<H", len(data)) + data


def _debug_name(font: TTFont, name_id: int) -> str:
    return font["name"].getDebugName(name_id) or ""


def build_eot(ttf_data: bytes) -> bytes:
    """
    Wrap TrueType data in an EOT header.

    Args:
        ttf_data: Compiled TrueType font

    Returns:
        EOT file contents
    """
    font = TTFont(BytesIO(ttf_data))
    os2 = font["OS/2"]

    panose = bytes(getattr(os2.panose, field) for field in PANOSE_FIELDS)
    fixed = _FIXED.pack(
        DEFAULT_CHARSET,
        1 if os2.fsSelection & FS_SELECTION_ITALIC else 0,
        os2.usWeightClass,
        os2.fsType,
        EOT_MAGIC,
        os2.ulUnicodeRange1,
        os2.ulUnicodeRange2,
        os2.ulUnicodeRange3,
        os2.ulUnicodeRange4,
        os2.ulCodePageRange1,
        os2.ulCodePageRange2,
        font["head"].checkSumAdjustment,
        0,
        0,
        0,
        0,
        0,
    )

    names = b"\x00\x00".join(
        _name_entry(_debug_name(font, name_id))
        for name_id in (NAME_ID_FAMILY, NAME_ID_STYLE, NAME_ID_VERSION, NAME_ID_FULL)
    )
    # Padding5, then an empty RootString
    trailer = struct.pack("<HH", 0, 0)
    font.close()

    body = panose + fixed + names + trailer
    eot_size = _PREFIX.size + len(body) + len(ttf_data)
    prefix = _PREFIX.pack(eot_size, len(ttf_data), EOT_VERSION, 0)
    return prefix + body + ttf_data


def read_eot_header(data: bytes) -> EotHeader:
    """Parse the fixed fields of an EOT header."""
    eot_size, font_data_size, version, flags = _PREFIX.unpack_from(data)
    magic_offset = _PREFIX.size + len(PANOSE_FIELDS) + 8
    (magic,) = struct.unpack_from("<H", data, magic_offset)
    return EotHeader(eot_size, font_data_size, version, flags, magic)


def extract_font_data(data: bytes) -> bytes:
    """Return the TrueType data embedded in an EOT file."""
    header = read_eot_header(data)
    return data[header.eot_size - header.font_data_size : header.eot_size]
