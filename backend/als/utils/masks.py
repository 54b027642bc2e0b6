"""Input masks for Brazilian documents, plates and container seals.

Each mask strips the input back to its raw characters before formatting, so
applying a mask to an already-masked value returns it unchanged.
"""

import re
from datetime import date, datetime, timezone

_NON_DIGIT = re.compile(r"\D")
_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def _digits(value: str) -> str:
    return _NON_DIGIT.sub("", value or "")


def mask_cpf(value: str) -> str:
    """12345678901 → 123.456.789-01"""
    v = _digits(value)
    v = re.sub(r"(\d{3})(\d)", r"\1.\2", v, count=1)
    v = re.sub(r"(\d{3})(\d)", r"\1.\2", v, count=1)
    v = re.sub(r"(\d{3})(\d{1,2})", r"\1-\2", v, count=1)
    return re.sub(r"(-\d{2})\d+?$", r"\1", v, count=1)


def mask_cnpj(value: str) -> str:
    """12345678000195 → 12.345.678/0001-95"""
    v = _digits(value)
    v = re.sub(r"^(\d{2})(\d)", r"\1.\2", v, count=1)
    v = re.sub(r"^(\d{2})\.(\d{3})(\d)", r"\1.\2.\3", v, count=1)
    v = re.sub(r"\.(\d{3})(\d)", r".\1/\2", v, count=1)
    v = re.sub(r"(\d{4})(\d)", r"\1-\2", v, count=1)
    return v[:18]


def mask_rg(value: str) -> str:
    """123456789 → 12.345.678-9"""
    v = _digits(value)
    v = re.sub(r"(\d{2})(\d)", r"\1.\2", v, count=1)
    v = re.sub(r"(\d{3})(\d)", r"\1.\2", v, count=1)
    v = re.sub(r"(\d{3})(\d{1,2})", r"\1-\2", v, count=1)
    return re.sub(r"(-\d{1})\d+?$", r"\1", v, count=1)


def mask_phone(value: str) -> str:
    """13991234567 → (13) 99123-4567"""
    v = _digits(value)
    v = re.sub(r"(\d{2})(\d)", r"(\1) \2", v, count=1)
    v = re.sub(r"(\d{5})(\d)", r"\1-\2", v, count=1)
    return re.sub(r"(-\d{4})\d+?$", r"\1", v, count=1)


def mask_plate(value: str) -> str:
    """abc1d23 → ABC-1D23 (old and Mercosul plates)"""
    v = _NON_ALNUM.sub("", (value or "").upper())
    v = re.sub(r"^([A-Z]{3})([0-9A-Z]{1,4})$", r"\1-\2", v, count=1)
    return v[:8]


def mask_cep(value: str) -> str:
    """11010000 → 11010-000"""
    v = _digits(value)
    v = re.sub(r"(\d{5})(\d)", r"\1-\2", v, count=1)
    return re.sub(r"(-\d{3})\d+?$", r"\1", v, count=1)


def mask_seal(value: str, carrier: str = "") -> str:
    """Format a container seal number the way the carrier prints it."""
    if not value:
        return ""
    carrier = (carrier or "").upper()
    clean = _NON_ALNUM.sub("", value.upper())

    if "MSC" in carrier:
        return _digits(clean)[:10]

    if any(name in carrier for name in ("MAERSK", "HAMBURG", "ALIANÇA", "MERCOSUL")):
        if clean.startswith("MLBR"):
            return "ML-BR" + clean[4:12]
        if clean and not clean.startswith("ML"):
            return "ML-BR" + clean[:8]
        return clean[:15]

    if "CMA" in carrier or "CGM" in carrier:
        if clean.startswith("CMA"):
            return "CMA-" + clean[3:11]
        return "CMA-" + clean[:8]

    if "HAPAG" in carrier:
        return clean[:12]

    return clean[:15]


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting the trailing ``Z`` browsers emit."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_br_date(value: str | date | None) -> str:
    """Format a date as DD/MM/YYYY; empty input gives an empty string.

    Strings that are not ISO dates (already typed as DD/MM/YYYY, say) are
    returned as given.
    """
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = parse_iso(value)
        except ValueError:
            return value
    return value.strftime("%d/%m/%Y")


def calculate_duration(start_iso: str | None, now: datetime | None = None) -> str:
    """Elapsed time since ``start_iso`` as HH:MM:SS (never negative)."""
    if not start_iso:
        return "00:00:00"
    try:
        start = parse_iso(start_iso)
    except ValueError:
        return "00:00:00"
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    total = int(max(0.0, (now - start).total_seconds()))
    return f"{total // 3600:02d}:{total % 3600 // 60:02d}:{total % 60:02d}"
