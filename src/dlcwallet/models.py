"""Wallet server data types held by the caches."""

from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Decoded payloads are passed through as the server returns them
ContractInfo: TypeAlias = dict[str, Any]
Offer: TypeAlias = dict[str, Any]


class ServerModel(BaseModel):
    """Base for server objects: camelCase on the wire, unknown fields kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_wire(self) -> dict[str, Any]:
        """Serialize back to the server's camelCase form."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FundedAddress(ServerModel):
    """Wallet address holding a non-zero balance."""

    address: str
    value: int = 0


class AddressLabels(ServerModel):
    """Labels attached to one address."""

    address: str
    labels: list[str] = Field(default_factory=list)


class Contact(ServerModel):
    """Address book entry."""

    alias: str
    address: str
    memo: str = ""


class DLCContract(ServerModel):
    """DLC as reported by ``getdlc``/``getdlcs``.

    ``peer`` is asserted locally when a contact is attached or detached.
    """

    dlc_id: str
    contract_info: str = ""
    state: str = ""
    is_initiator: bool | None = None
    peer: str | None = None


class IncomingOffer(ServerModel):
    """Offer received from a peer and stored by the server until accepted or removed."""

    hash: str
    offer_tlv: str = Field(validation_alias=AliasChoices("offerTLV", "offer_tlv"), serialization_alias="offerTLV")
    peer: str | None = None
    message: str | None = None
    received_at: int | None = None


@dataclass
class OfferWithHex:
    """Decoded offer kept next to the hex it was decoded from."""

    offer: Offer
    hex: str

    @property
    def temporary_contract_id(self) -> str | None:
        """Temporary contract id of the decoded offer, if the server reported one."""
        value = self.offer.get("temporaryContractId")
        return value if isinstance(value, str) else None
