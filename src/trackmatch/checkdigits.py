"""Check-digit validators for tracking-number formats.

Every validator takes a normalised string and returns a bool. Malformed
input (wrong length, unexpected characters) is simply invalid; nothing here
raises.
"""

import re
from typing import Callable

_DIGITS = re.compile(r"^\d+\Z", re.ASCII)
_S10 = re.compile(r"^[A-Z]{2}(\d{9})[A-Z]{2}\Z", re.ASCII)
_S10_SERIAL = re.compile(r"^\d{9}\Z", re.ASCII)
_UPS_1Z = re.compile(r"^1Z[0-9A-Z]{16}\Z", re.ASCII)

S10_WEIGHTS = (8, 6, 4, 2, 3, 5, 9, 7)


def _is_numeric(number: str, min_length: int = 2) -> bool:
    return len(number) >= min_length and bool(_DIGITS.match(number))


def _mod11_remainder_check(total: int) -> int:
    check = 11 - (total % 11)
    if check == 10:
        return 0
    if check == 11:
        return 5
    return check


def validate_mod10(number: str) -> bool:
    """Validate a trailing Luhn (mod-10) check digit."""
    if not _is_numeric(number):
        return False

    total = 0
    for position, char in enumerate(reversed(number[:-1])):
        digit = int(char)
        if position % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return (10 - total % 10) % 10 == int(number[-1])


def validate_mod11(number: str) -> bool:
    """Validate a trailing mod-11 check digit (weights 2..11 from the right)."""
    if not _is_numeric(number):
        return False

    total = 0
    for position, char in enumerate(reversed(number[:-1])):
        total += int(char) * (position % 10 + 2)

    return _mod11_remainder_check(total) == int(number[-1])


def validate_s10(number: str) -> bool:
    """Validate a UPU S10 identifier such as ``RR123456785GB``.

    A bare nine-digit serial number is accepted as well, so callers can check
    the serial on its own.
    """
    match = _S10.match(number)
    if match:
        serial = match.group(1)
    elif _S10_SERIAL.match(number):
        serial = number
    else:
        return False

    total = sum(int(digit) * weight for digit, weight in zip(serial, S10_WEIGHTS))
    return _mod11_remainder_check(total) == int(serial[8])


def _ups_value(char: str) -> int:
    if char.isdigit():
        return int(char)
    return (ord(char) - 63) % 10


def validate_ups_1z(number: str) -> bool:
    """Validate a UPS ``1Z`` tracking number check digit.

    Letters are mapped onto digits (A=2, B=3, ... wrapping at 10), digits in
    odd positions of the body are summed and digits in even positions are
    doubled.
    """
    if not _UPS_1Z.match(number):
        return False

    body = number[2:-1]
    check_char = number[-1]
    if not check_char.isdigit():
        return False

    total = 0
    for position, char in enumerate(body, start=1):
        value = _ups_value(char)
        total += value * 2 if position % 2 == 0 else value

    return (10 - total % 10) % 10 == int(check_char)


def _weighted_mod10(number: str) -> bool:
    total = 0
    for position, char in enumerate(reversed(number[:-1])):
        total += int(char) * (3 if position % 2 == 0 else 1)
    return (10 - total % 10) % 10 == int(number[-1])


def validate_fedex(number: str) -> bool:
    """Validate a FedEx Express (12 digit) or Ground (14/15 digit) number.

    Args:
        number: Normalised tracking number.

    Returns:
        True if the trailing check digit matches. Lengths other than 12, 14
        and 15 are never valid.
    """
    if not _is_numeric(number):
        return False

    if len(number) == 12:
        weights = (1, 3, 7)
        total = 0
        for position, char in enumerate(reversed(number[:-1])):
            total += int(char) * weights[position % 3]
        check = total % 11
        if check == 10:
            check = 0
        return check == int(number[-1])

    if len(number) in (14, 15):
        return _weighted_mod10(number)

    return False


CHECK_DIGIT_VALIDATORS: dict[str, Callable[[str], bool]] = {
    "mod10": validate_mod10,
    "mod11": validate_mod11,
    "s10": validate_s10,
    "ups_1z": validate_ups_1z,
    "fedex": validate_fedex,
}
