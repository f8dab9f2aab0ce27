# Bradford Arrington 2025
import string
from typing import Dict

from hufferr import CorruptTable, IOFailure

# Listing lines are "<character>: <codeword>"; characters that would break a line are escaped
ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\\": "\\\\"}
UNESCAPES = {escaped: c for c, escaped in ESCAPES.items()}
HEX_WIDTHS = {"\\x": 2, "\\u": 4, "\\U": 8}


def format_symbol(c: str) -> str:
    if c in ESCAPES:
        return ESCAPES[c]
    if c.isprintable():
        return c
    value = ord(c)
    if value <= 0xFF:
        return f"\\x{value:02x}"
    if value <= 0xFFFF:
        return f"\\u{value:04x}"
    return f"\\U{value:08x}"


def parse_symbol(text: str) -> str:
    if len(text) == 1 and text != "\\":
        return text
    if text in UNESCAPES:
        return UNESCAPES[text]

    width = HEX_WIDTHS.get(text[:2])
    digits = text[2:]
    if width is None or len(digits) != width or any(d not in string.hexdigits for d in digits):
        raise CorruptTable(f"Unrecognised character {text!r} in codeword listing")
    try:
        return chr(int(digits, 16))
    except ValueError:
        raise CorruptTable(f"Character {text!r} is out of range") from None


def write_encoding(codes: Dict[str, str], file_name: str):
    try:
        with open(file_name, "w", encoding="utf-8", newline="\n") as ofs:
            for c, code in codes.items():
                ofs.write(f"{format_symbol(c)}: {code}\n")
    except OSError as e:
        raise IOFailure(f"Cannot write codeword listing {file_name}: {e}") from e


def read_encoding(file_name: str) -> Dict[str, str]:
    codes: Dict[str, str] = {}
    try:
        with open(file_name, "r", encoding="utf-8", newline="\n") as ifs:
            lines = ifs.read().split("\n")
    except OSError as e:
        raise IOFailure(f"Cannot read codeword listing {file_name}: {e}") from e

    for line_number, line in enumerate(lines, 1):
        if not line:
            continue
        symbol_text, separator, code = line.rpartition(": ")
        if not separator or not code or code.strip("01"):
            raise CorruptTable(f"Malformed listing line {line_number}: {line!r}")
        c = parse_symbol(symbol_text)
        if c in codes:
            raise CorruptTable(f"Duplicate entry for {symbol_text!r} on line {line_number}")
        codes[c] = code
    return codes
