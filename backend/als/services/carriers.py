"""Shipping-line lookup by container BIC code, plus the default operations.

The BIC code (ISO 6346 owner code) is the first four characters of a
container number, e.g. ``MSCU1234567`` → MSC.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Carrier:
    name: str
    prefixes: tuple[str, ...]
    seal_pattern: str  # MSC | MAERSK | CMA | HAPAG | GENERIC


CARRIERS: list[Carrier] = [
    Carrier("MSC", ("MEDU", "MSCU", "TCLU", "TTNU", "GLDU"), "MSC"),
    Carrier("MAERSK", ("MAEU", "MSKU", "PONU", "MRKU", "RKLU"), "MAERSK"),
    Carrier("HAMBURG SUD", ("SUDU", "HASU"), "MAERSK"),
    Carrier("CMA CGM", ("CMAU", "APZU", "CNXU", "CGMU", "TOLU"), "CMA"),
    Carrier("HAPAG-LLOYD", ("HLCU", "HAMU", "UASC", "CPPU", "HLBU"), "HAPAG"),
    Carrier("ONE", ("ONEU", "NYKU", "MOLU", "KKFU"), "GENERIC"),
    Carrier("EVERGREEN", ("EGCU", "EMCU", "UGMU", "EISU"), "GENERIC"),
    Carrier("ZIM", ("ZIMU", "ZCSU", "ZUXU"), "GENERIC"),
    Carrier("COSCO", ("COSU", "CHLU", "CCLU", "FESU"), "GENERIC"),
    Carrier("ALIANÇA", ("ALXU", "ALNU", "ALBU"), "MAERSK"),
    Carrier("MERCOSUL", ("MNCU", "MSRU"), "MAERSK"),
    Carrier("WAN HAI", ("WHLU", "WHSU"), "GENERIC"),
    Carrier("YANG MING", ("YMLU", "YMMU"), "GENERIC"),
]

_BY_PREFIX = {prefix: carrier for carrier in CARRIERS for prefix in carrier.prefixes}


def lookup_carrier_by_container(container: str | None) -> Carrier | None:
    if not container or len(container) < 4:
        return None
    return _BY_PREFIX.get(container[:4].upper())


def carrier_name_for_container(container: str | None) -> str:
    carrier = lookup_carrier_by_container(container)
    return carrier.name if carrier else ""


@dataclass(frozen=True)
class OperationDefinition:
    category: str
    clients: list[str] = field(default_factory=list)


DEFAULT_OPERATIONS: list[OperationDefinition] = [
    OperationDefinition("Aliança", ["Volkswagen"]),
    OperationDefinition("Mercosul", ["Owens"]),
    OperationDefinition("Industria", ["Diageo"]),
    OperationDefinition("Carga Solta", ["Geral"]),
]


def suggest_operations(customer_name: str, current: list[str] | None = None) -> list[str]:
    """Operations for a new customer: ``current`` plus every default category
    whose name or client appears in the customer name."""
    name = (customer_name or "").upper()
    operations = list(current or [])
    for op in DEFAULT_OPERATIONS:
        matched = op.category.upper() in name or any(c.upper() in name for c in op.clients)
        if matched and op.category not in operations:
            operations.append(op.category)
    return operations
