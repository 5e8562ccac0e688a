"""Minimal ABI codec for the ERC-20 read calls the scanner issues.

Covers only what balance discovery needs: building `balanceOf`,
`decimals()` and `symbol()` calldata, and decoding uint256 and
string return values. Strings are decoded as ABI dynamic strings (offset
word, length word, UTF-8 bytes); contracts that return a bytes32 symbol
instead fall back to fixed-width decoding of the first word.
"""

from app.dustsweep.application.exceptions import AbiDecodeError

WORD_SIZE = 32

BALANCE_OF_SELECTOR = "0x70a08231"
DECIMALS_SELECTOR = "0x313ce567"
SYMBOL_SELECTOR = "0x95d89b41"

# uint8 is the declared return type of decimals()
MAX_DECIMALS = 255


def encode_address(address: str) -> str:
    """Left-pad a 20-byte address to one 32-byte word (hex, no 0x)."""
    body = address[2:] if address.lower().startswith("0x") else address
    if len(body) != 40:
        raise ValueError(f"Not a 20-byte address: {address}")
    return body.lower().rjust(WORD_SIZE * 2, "0")


def balance_of_calldata(wallet: str) -> str:
    """Calldata for `balanceOf(wallet)`."""
    return BALANCE_OF_SELECTOR + encode_address(wallet)


def hex_to_bytes(result_hex: str) -> bytes:
    """Convert a 0x-prefixed hex return value to bytes.

    Raises:
        AbiDecodeError: If the value is empty or not valid hex.
    """
    if not result_hex:
        raise AbiDecodeError("empty return value")
    body = result_hex[2:] if result_hex.lower().startswith("0x") else result_hex
    if not body:
        raise AbiDecodeError("empty return value")
    if len(body) % 2:
        body = "0" + body
    try:
        return bytes.fromhex(body)
    except ValueError as e:
        raise AbiDecodeError(f"invalid hex: {e}") from e


def decode_uint256(result_hex: str) -> int:
    """Decode a uint256 return value.

    Raises:
        AbiDecodeError: If the value is empty or not valid hex.
    """
    raw = hex_to_bytes(result_hex)
    return int.from_bytes(raw[:WORD_SIZE], "big")


def decode_decimals(result_hex: str) -> int:
    """Decode a `decimals()` return value, rejecting out-of-range results.

    Raises:
        AbiDecodeError: If the value is malformed or exceeds uint8.
    """
    value = decode_uint256(result_hex)
    if value > MAX_DECIMALS:
        raise AbiDecodeError(f"decimals out of range: {value}")
    return value


def decode_string(result_hex: str) -> str:
    """Decode a `symbol()` / `name()` return value.

    Tries the dynamic-string layout first and falls back to treating the
    first word as a NUL-padded fixed-size string.

    Raises:
        AbiDecodeError: If neither layout yields a non-empty string.
    """
    raw = hex_to_bytes(result_hex)
    try:
        return decode_dynamic_string(raw)
    except AbiDecodeError:
        return decode_fixed_string(raw)


def decode_dynamic_string(raw: bytes) -> str:
    """Decode the ABI dynamic-string layout.

    Layout: offset word, then at that offset a length word followed by
    `length` bytes of UTF-8 padded with NULs to a word boundary.

    Raises:
        AbiDecodeError: If any field points outside the buffer or the
            bytes are not UTF-8.
    """
    if len(raw) < 2 * WORD_SIZE:
        raise AbiDecodeError("too short for a dynamic string")

    offset = int.from_bytes(raw[:WORD_SIZE], "big")
    if offset + WORD_SIZE > len(raw):
        raise AbiDecodeError(f"string offset {offset} out of bounds")

    length = int.from_bytes(raw[offset : offset + WORD_SIZE], "big")
    start = offset + WORD_SIZE
    end = start + length
    if end > len(raw):
        raise AbiDecodeError(f"string length {length} out of bounds")

    try:
        text = raw[start:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise AbiDecodeError(f"string is not UTF-8: {e}") from e

    text = text.strip("\x00").strip()
    if not text:
        raise AbiDecodeError("empty string")
    return text


def decode_fixed_string(raw: bytes) -> str:
    """Decode the first word as a NUL-padded bytes32 string.

    Raises:
        AbiDecodeError: If the word is empty after trimming or not UTF-8.
    """
    word = raw[:WORD_SIZE].rstrip(b"\x00").lstrip(b"\x00")
    try:
        text = word.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise AbiDecodeError(f"bytes32 is not UTF-8: {e}") from e
    if not text:
        raise AbiDecodeError("empty bytes32 string")
    return text
