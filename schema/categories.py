"""
schema.categories - Display metadata for IPN category codes.

Unknown codes fall back to the code itself, "<code> components",
and the generic Device:Device symbol.
"""

from __future__ import annotations

# code → (display name, description, default KiCad symbol)
_CATEGORIES: dict[str, tuple[str, str, str]] = {
    "CAP": ("Capacitors",             "Capacitor components",             "Device:C"),
    "RES": ("Resistors",              "Resistor components",              "Device:R"),
    "DIO": ("Diodes",                 "Diode components",                 "Device:D"),
    "LED": ("LEDs",                   "Light emitting diode components",  "Device:LED"),
    "SCR": ("Screws",                 "Screw and fastener components",    "Mechanical:MountingHole"),
    "MCH": ("Mechanical",             "Mechanical components",            "Mechanical:MountingHole"),
    "PCA": ("PCB Assemblies",         "Printed circuit board assemblies", ""),
    "PCB": ("Printed Circuit Boards", "Printed circuit boards",           ""),
    "ASY": ("Assemblies",             "Assembly components",              ""),
    "DOC": ("Documentation",          "Documentation components",         ""),
    "DFW": ("Firmware",               "Firmware components",              ""),
    "DSW": ("Software",               "Software components",              ""),
    "DCL": ("Declarations",           "Declaration components",           ""),
    "FIX": ("Fixtures",               "Fixture components",               ""),
    "CNT": ("Connectors",             "Connector components",             "Connector:Conn_01x02"),
    "ANA": ("Analog ICs",             "Analog IC components",             "Device:IC"),
    "OSC": ("Oscillators",            "Oscillator components",            "Device:Oscillator"),
    "XTL": ("Crystals",               "Crystal components",               "Device:Crystal"),
    "IND": ("Inductors",              "Inductor components",              "Device:L"),
    "FER": ("Ferrites",               "Ferrite components",               "Device:Ferrite_Bead"),
    "FUS": ("Fuses",                  "Fuse components",                  "Device:Fuse"),
    "REL": ("Relays",                 "Relay components",                 "Relay:Relay_SPDT"),
    "TRF": ("Transformers",           "Transformer components",           "Device:Transformer"),
    "SNS": ("Sensors",                "Sensor components",                "Sensor:Sensor"),
    "DSP": ("Displays",               "Display components",               ""),
    "SPK": ("Speakers",               "Speaker components",               ""),
    "MIC": ("Microphones",            "Microphone components",            ""),
    "ANT": ("Antennas",               "Antenna components",               "Device:Antenna"),
    "CBL": ("Cables",                 "Cable components",                 ""),
}

DEFAULT_SYMBOL = "Device:Device"


def category_name(code: str) -> str:
    entry = _CATEGORIES.get(code)
    return entry[0] if entry else code


def category_description(code: str) -> str:
    entry = _CATEGORIES.get(code)
    return entry[1] if entry else f"{code} components"


def symbol_id(code: str) -> str:
    entry = _CATEGORIES.get(code)
    return (entry[2] if entry else "") or DEFAULT_SYMBOL
