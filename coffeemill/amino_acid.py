"""Conversion between three-letter and one-letter amino acid codes."""

from __future__ import annotations

from types import MappingProxyType

AMINO_ACID_3TO1 = MappingProxyType({
    "ALA": "A",
    "ASX": "B",
    "CYS": "C",
    "ASP": "D",
    "GLU": "E",
    "PHE": "F",
    "GLY": "G",
    "HIS": "H",
    "HIE": "H",
    "HID": "H",
    "HIP": "H",
    "ILE": "I",
    "LYS": "K",
    "LEU": "L",
    "MET": "M",
    "ASN": "N",
    "PRO": "P",
    "GLN": "Q",
    "ARG": "R",
    "SER": "S",
    "THR": "T",
    "SEC": "U",
    "VAL": "V",
    "TRP": "W",
    "XAA": "X",
    "TYR": "Y",
    "GLX": "Z",
})

AMINO_ACID_1TO3 = MappingProxyType({
    "A": "ALA",
    "B": "ASX",
    "C": "CYS",
    "D": "ASP",
    "E": "GLU",
    "F": "PHE",
    "G": "GLY",
    "H": "HIS",
    "I": "ILE",
    "K": "LYS",
    "L": "LEU",
    "M": "MET",
    "N": "ASN",
    "P": "PRO",
    "Q": "GLN",
    "R": "ARG",
    "S": "SER",
    "T": "THR",
    "U": "SEC",
    "V": "VAL",
    "W": "TRP",
    "X": "XAA",
    "Y": "TYR",
    "Z": "GLX",
})


def three_to_one(code: str) -> str:
    """Return the one-letter code of a three-letter residue name."""
    try:
        return AMINO_ACID_3TO1[code]
    except KeyError:
        raise KeyError(f"unknown three-letter amino acid code: {code!r}") from None


def one_to_three(code: str) -> str:
    """Return the three-letter residue name of a one-letter code."""
    try:
        return AMINO_ACID_1TO3[code]
    except KeyError:
        raise KeyError(f"unknown one-letter amino acid code: {code!r}") from None