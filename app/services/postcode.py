import re

# shifted number keys on a UK keyboard, in key order 1..0
_SHIFTED_DIGITS = {"!": "1", '"': "2", "£": "3", "$": "4", "%": "5", "^": "6", "&": "7", "*": "8", "(": "9", ")": "0", " ": ""}

AREA_PATTERN = re.compile(r"([A-Z]\S\d?\d)")


def replace_incorrect_numbers(value: str) -> str:
    """Swap shifted characters typed by mistake for the digit on the same key, and drop spaces."""
    return "".join(_SHIFTED_DIGITS.get(char, char) for char in value.strip())


def small_postcode(postcode: str, alpha: bool = False) -> str:
    """
    Area part of a postcode used for coverage matching.

    "AB1 2CD" -> "AB1", "sw1a 1aa" -> "SW1A". Cleaned values shorter than 5
    characters are returned whole.
    """
    pcode = replace_incorrect_numbers(postcode)
    if len(pcode) >= 5:
        pcode = pcode[:-3]
    if alpha:
        pcode = re.sub(r"[^A-Za-z_]", "", pcode)
    return pcode.upper()


def is_postcode_area(postcode: str) -> bool:
    return AREA_PATTERN.search(small_postcode(postcode)) is not None


def format_postcodes(postcodes):
    """",AB1,AB2," -> "AB1, AB2"."""
    if not postcodes:
        return postcodes
    return postcodes[1:-1].replace(",", ", ")


def first_name(name) -> str:
    if not name:
        return name
    return name.split(" ")[0]
