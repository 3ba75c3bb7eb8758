"""Address protocols and their availability across network versions."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Protocol, runtime_checkable

from coretypes.network import Version


class AddressProtocol(IntEnum):
    """Address protocol identifiers, the first byte of an address."""

    ID = 0
    SECP256K1 = 1
    CONTRACT = 2
    BLS = 3
    DELEGATED = 4
    PQC = 5
    UNKNOWN = 255


@runtime_checkable
class AddressLike(Protocol):
    """An address: a protocol, a payload and a byte encoding (empty when undefined)."""

    @property
    def protocol(self) -> int:
        """The address protocol identifier."""

    @property
    def payload(self) -> bytes:
        """The protocol-specific payload."""

    def __bytes__(self) -> bytes:
        """The full encoding; empty for the undefined address."""


_ALWAYS_VALID = frozenset(
    {
        AddressProtocol.ID,
        AddressProtocol.SECP256K1,
        AddressProtocol.CONTRACT,
        AddressProtocol.BLS,
        AddressProtocol.PQC,
    }
)


def address_valid_for_network_version(addr: Optional[AddressLike], nv: Version) -> bool:
    """Return whether ``addr`` is supported at network version ``nv``.

    The undefined address is always reported as supported.
    """
    if addr is None or not bytes(addr):
        return True
    try:
        protocol = AddressProtocol(addr.protocol)
    except ValueError:
        return False
    if protocol in _ALWAYS_VALID:
        return True
    if protocol is AddressProtocol.DELEGATED:
        return nv >= Version.VERSION_18
    return False