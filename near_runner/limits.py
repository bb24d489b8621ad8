from __future__ import annotations

import shlex
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple

from .calls import ContractCall
from .constants import DEFAULT_MAX_DEPOSIT, YOCTO_PER_NEAR

# Deposit flag -> power of ten that converts its value into NEAR
DEPOSIT_FLAGS: Dict[str, int] = {
    "--deposit": 0,
    "--amount": 0,
    "--depositYocto": -YOCTO_PER_NEAR,
}
# Methods that must pay for the storage they allocate
PAYABLE_METHODS = {"nft_mint"}


def parse_near_amount(token: str) -> Optional[Decimal]:
    if not token or token.startswith("$"):
        return None
    try:
        value = Decimal(token.replace("_", ""))
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return value


def _deposit_tokens(tokens: List[str]) -> List[Tuple[str, Optional[str]]]:
    """Return (flag, raw value) for every deposit flag; the value is None when absent."""

    values: List[Tuple[str, Optional[str]]] = []
    for idx, token in enumerate(tokens):
        flag, sep, inline = token.partition("=")
        if flag not in DEPOSIT_FLAGS:
            continue
        if sep:
            values.append((flag, inline))
        else:
            values.append((flag, tokens[idx + 1] if idx + 1 < len(tokens) else None))
    return values


def _check(
    method: Optional[str],
    view: bool,
    deposits: List[Tuple[str, Optional[str]]],
    max_deposit: Decimal,
) -> Optional[str]:
    if view and deposits:
        return f"view call {method or '<unknown>'} cannot attach a deposit"

    total = Decimal(0)
    for flag, raw in deposits:
        if raw is not None and raw.startswith("$"):
            # Expanded by the shell; nothing to check before running
            return None
        amount = parse_near_amount(raw or "")
        if amount is None:
            return f"no numeric amount found for {flag} ({raw or 'missing value'})"
        if DEPOSIT_FLAGS[flag]:
            if amount != amount.to_integral_value():
                return f"{flag} takes whole yoctoNEAR, got {raw}"
            amount = amount.scaleb(DEPOSIT_FLAGS[flag])
        total += amount

    if total > max_deposit:
        return f"deposit {total} NEAR exceeds limit of {max_deposit} NEAR"
    if method in PAYABLE_METHODS and total <= 0:
        return f"{method} requires a nonzero deposit to cover storage"
    return None


def check_deposit_limits(
    command: str, max_deposit: Decimal = DEFAULT_MAX_DEPOSIT
) -> Optional[str]:
    try:
        tokens = shlex.split(command)
    except ValueError as exc:
        return f"could not parse command: {exc}"
    if len(tokens) < 2 or tokens[1] not in ("call", "view"):
        return None

    view = tokens[1] == "view"
    method = tokens[3] if len(tokens) > 3 else None
    return _check(method, view, _deposit_tokens(tokens), max_deposit)


def check_call_limits(
    call: ContractCall, max_deposit: Decimal = DEFAULT_MAX_DEPOSIT
) -> Optional[str]:
    deposits: List[Tuple[str, Optional[str]]] = []
    if call.deposit is not None:
        deposits.append(("--deposit", call.deposit))
    if call.deposit_yocto is not None:
        deposits.append(("--depositYocto", str(call.deposit_yocto)))
    return _check(call.method, call.view, deposits, max_deposit)
