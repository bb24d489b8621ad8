from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_MINT_DEPOSIT, MEDIA_URL, NEAR_CLI, SECOND_RECEIVER
from .metadata import TokenMetadata


@dataclass(frozen=True)
class ContractCall:
    """One invocation of a contract method through the near CLI.

    ``account_id`` and the deposits only apply to change calls; views are
    signed by nobody and never carry a deposit. ``deposit`` is in NEAR,
    ``deposit_yocto`` in yoctoNEAR.
    """

    method: str
    args: Dict[str, Any] = field(default_factory=dict)
    account_id: Optional[str] = None
    deposit: Optional[str] = None
    deposit_yocto: Optional[int] = None
    view: bool = False

    def payload(self) -> str:
        return json.dumps(self.args, separators=(",", ":"))

    def to_argv(self, contract_id: str, near_cli: str = NEAR_CLI) -> List[str]:
        if self.view:
            argv = [near_cli, "view", contract_id, self.method]
            if self.args:
                argv.append(self.payload())
            return argv

        if not self.account_id:
            raise ValueError(f"change call {self.method!r} needs an acting account")
        argv = [near_cli, "call", contract_id, self.method, self.payload()]
        argv += ["--accountId", self.account_id]
        if self.deposit is not None:
            argv += ["--deposit", self.deposit]
        if self.deposit_yocto is not None:
            argv += ["--depositYocto", str(self.deposit_yocto)]
        return argv


FIRST_TOKEN = TokenMetadata(
    title="thevarus",
    description="pathogen",
    media=MEDIA_URL,
    copies=1,
)
SECOND_TOKEN = TokenMetadata(
    title="thevarus mutant",
    description="mutated pathogen",
    media=MEDIA_URL,
    copies=1,
)


def new_default_meta_call(contract_id: str) -> ContractCall:
    return ContractCall(
        method="new_default_meta",
        args={"owner_id": contract_id},
        account_id=contract_id,
    )


def mint_call(
    token_id: str,
    receiver_id: str,
    metadata: TokenMetadata,
    account_id: str,
    deposit: str = DEFAULT_MINT_DEPOSIT,
) -> ContractCall:
    return ContractCall(
        method="nft_mint",
        args={
            "token_id": token_id,
            "receiver_id": receiver_id,
            "metadata": metadata.to_json(),
        },
        account_id=account_id,
        deposit=deposit,
    )


def _page_args(from_index: Optional[int], limit: Optional[int]) -> Dict[str, Any]:
    args: Dict[str, Any] = {}
    if from_index is not None:
        # U128 on the contract side, so it travels as a string
        args["from_index"] = str(from_index)
    if limit is not None:
        args["limit"] = limit
    return args


def nft_tokens_call(
    from_index: Optional[int] = None, limit: Optional[int] = None
) -> ContractCall:
    return ContractCall("nft_tokens", _page_args(from_index, limit), view=True)


def nft_tokens_for_owner_call(
    account_id: str, from_index: Optional[int] = None, limit: Optional[int] = None
) -> ContractCall:
    args = {"account_id": account_id}
    args.update(_page_args(from_index, limit))
    return ContractCall("nft_tokens_for_owner", args, view=True)


def nft_metadata_call() -> ContractCall:
    return ContractCall("nft_metadata", view=True)


def nft_total_supply_call() -> ContractCall:
    return ContractCall("nft_total_supply", view=True)


def nft_supply_for_owner_call(account_id: str) -> ContractCall:
    return ContractCall("nft_supply_for_owner", {"account_id": account_id}, view=True)


def nft_token_call(token_id: str) -> ContractCall:
    return ContractCall("nft_token", {"token_id": token_id}, view=True)


def nft_cure_call(account_id: str) -> ContractCall:
    # Moves every token held by the caller to the burn account
    return ContractCall("nft_cure", account_id=account_id)


def default_sequence(
    contract_id: str,
    second_account_id: Optional[str] = None,
    second_receiver_id: str = SECOND_RECEIVER,
) -> List[ContractCall]:
    """Initialize the contract, mint two tokens, then enumerate them."""

    return [
        new_default_meta_call(contract_id),
        mint_call("0", contract_id, FIRST_TOKEN, account_id=contract_id),
        mint_call(
            "1",
            second_receiver_id,
            SECOND_TOKEN,
            account_id=second_account_id or contract_id,
        ),
        nft_tokens_call(),
        nft_tokens_for_owner_call(contract_id),
    ]


def inspect_sequence(contract_id: str) -> List[ContractCall]:
    return [
        nft_metadata_call(),
        nft_total_supply_call(),
        nft_supply_for_owner_call(contract_id),
    ]


def cure_sequence(contract_id: str, account_id: Optional[str] = None) -> List[ContractCall]:
    account = account_id or contract_id
    return [
        nft_supply_for_owner_call(account),
        nft_cure_call(account),
        nft_supply_for_owner_call(account),
    ]


def nft_transfer_call(
    receiver_id: str,
    token_id: str,
    account_id: str,
    approval_id: Optional[int] = None,
    memo: Optional[str] = None,
) -> ContractCall:
    """Transfer a token; NEP-171 requires exactly one yoctoNEAR attached."""

    args: Dict[str, Any] = {"receiver_id": receiver_id, "token_id": token_id}
    if approval_id is not None:
        args["approval_id"] = approval_id
    if memo is not None:
        args["memo"] = memo
    return ContractCall("nft_transfer", args, account_id=account_id, deposit_yocto=1)


def vaxxx_call(account_id: str, signer_id: str) -> ContractCall:
    # Adds account_id to the contract's vaxxxed set
    return ContractCall("vaxxx", {"account_id": account_id}, account_id=signer_id)


def vaxxx_pass_call(account_id: str) -> ContractCall:
    return ContractCall("vaxxx_pass", {"account_id": account_id}, view=True)


def vaxxx_list_call() -> ContractCall:
    return ContractCall("vaxxx_list", view=True)


def vaxxx_sequence(contract_id: str, account_id: Optional[str] = None) -> List[ContractCall]:
    """Vaxxx ``account_id`` (signed by the contract), then check the pass and the list."""

    account = account_id or contract_id
    return [
        vaxxx_call(account, signer_id=contract_id),
        vaxxx_pass_call(account),
        vaxxx_list_call(),
    ]
