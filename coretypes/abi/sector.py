"""Sector numbers and sizes, registered proof types and replica identifiers."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

from coretypes.abi.key import encode_uvarint
from coretypes.bigint import Int
from coretypes.network import Version

_UINT64_MAX = 2**64 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

MAX_SECTOR_NUMBER = _INT64_MAX
"""The maximum assignable sector number."""

# The unit of storage power, measured in bytes.
StoragePower = Int
SectorQuality = Int

SealRandomness = bytes
InteractiveSealRandomness = bytes
PoStRandomness = bytes
ProverID = bytes

_BI_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


class _Uint64(int):
    """An int restricted to the unsigned 64-bit range."""

    def __new__(cls, value: int = 0):
        number = int.__new__(cls, value)
        if not 0 <= number <= _UINT64_MAX:
            raise ValueError(f"{cls.__name__} out of range: {int.__repr__(number)}")
        return number

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)


class SectorNumber(_Uint64):
    """Numeric identifier of a sector, usually relative to a miner."""


class SectorSize(_Uint64):
    """One of the sector sizes supported by the network, in bytes."""

    def short_string(self) -> str:
        """Abbreviate as a binary-unit size, truncating unless a power of 1024."""
        size = int(self)
        unit = 0
        while size >= 1024 and unit < len(_BI_UNITS) - 1:
            size //= 1024
            unit += 1
        return f"{size}{_BI_UNITS[unit]}"


@dataclass(frozen=True)
class SectorID:
    """A sector identified by its miner and number."""

    miner: int
    number: SectorNumber


def new_storage_power(n: int) -> Int:
    """Return a storage power holding ``n`` bytes."""
    if not _INT64_MIN <= n <= _INT64_MAX:
        raise ValueError(f"storage power out of int64 range: {n}")
    return Int(n)


class RegisteredPoStProof(IntEnum):
    """Proof-of-spacetime types; the values match the proofs library."""

    STACKED_DRG_WINNING_2KIB_V1 = 0
    STACKED_DRG_WINNING_8MIB_V1 = 1
    STACKED_DRG_WINNING_512MIB_V1 = 2
    STACKED_DRG_WINNING_32GIB_V1 = 3
    STACKED_DRG_WINNING_64GIB_V1 = 4

    STACKED_DRG_WINDOW_2KIB_V1 = 5
    STACKED_DRG_WINDOW_8MIB_V1 = 6
    STACKED_DRG_WINDOW_512MIB_V1 = 7
    STACKED_DRG_WINDOW_32GIB_V1 = 8
    STACKED_DRG_WINDOW_64GIB_V1 = 9

    STACKED_DRG_WINDOW_2KIB_V1_1 = 10
    STACKED_DRG_WINDOW_8MIB_V1_1 = 11
    STACKED_DRG_WINDOW_512MIB_V1_1 = 12
    STACKED_DRG_WINDOW_32GIB_V1_1 = 13
    STACKED_DRG_WINDOW_64GIB_V1_1 = 14

    def to_v1_1_post_proof(self) -> RegisteredPoStProof:
        """Return the V1_1 window PoSt proof equivalent to this window proof."""
        try:
            return _WINDOW_TO_V1_1[self]
        except KeyError:
            raise ValueError(f"input {int(self)} is not a V1 PostProof") from None

    def _info(self) -> PoStProofInfo:
        info = POST_PROOF_INFOS.get(self)
        if info is None:
            raise ValueError(f"unsupported proof type: {int(self)}")
        return info

    def sector_size(self) -> SectorSize:
        """Return the sector size this proof applies to."""
        return self._info().sector_size

    def proof_size(self) -> int:
        """Return the size of a single proof."""
        return self._info().proof_size


class RegisteredAggregationProof(IntEnum):
    """Proof aggregation schemes."""

    SNARK_PACK_V1 = 0
    SNARK_PACK_V2 = 1


class RegisteredUpdateProof(IntEnum):
    """Sector update proof types."""

    STACKED_DRG_2KIB_V1 = 0
    STACKED_DRG_8MIB_V1 = 1
    STACKED_DRG_512MIB_V1 = 2
    STACKED_DRG_32GIB_V1 = 3
    STACKED_DRG_64GIB_V1 = 4


class RegisteredSealProof(IntEnum):
    """Seal proof types; the values match the proofs library."""

    STACKED_DRG_2KIB_V1 = 0
    STACKED_DRG_8MIB_V1 = 1
    STACKED_DRG_512MIB_V1 = 2
    STACKED_DRG_32GIB_V1 = 3
    STACKED_DRG_64GIB_V1 = 4

    STACKED_DRG_2KIB_V1_1 = 5
    STACKED_DRG_8MIB_V1_1 = 6
    STACKED_DRG_512MIB_V1_1 = 7
    STACKED_DRG_32GIB_V1_1 = 8
    STACKED_DRG_64GIB_V1_1 = 9

    STACKED_DRG_2KIB_V1_1_FEAT_SYNTHETIC_POREP = 10
    STACKED_DRG_8MIB_V1_1_FEAT_SYNTHETIC_POREP = 11
    STACKED_DRG_512MIB_V1_1_FEAT_SYNTHETIC_POREP = 12
    STACKED_DRG_32GIB_V1_1_FEAT_SYNTHETIC_POREP = 13
    STACKED_DRG_64GIB_V1_1_FEAT_SYNTHETIC_POREP = 14

    def _info(self) -> SealProofInfo:
        info = SEAL_PROOF_INFOS.get(self)
        if info is None:
            raise ValueError(f"unsupported proof type: {int(self)}")
        return info

    def proof_size(self) -> int:
        """Return the size of seal proofs for this sector type."""
        return self._info().proof_size

    def sector_size(self) -> SectorSize:
        """Return the sector size sealed by this proof."""
        return self._info().sector_size

    def registered_winning_post_proof(self) -> RegisteredPoStProof:
        """Return the winning PoSt proof for this seal proof."""
        return self._info().winning_post_proof

    def registered_window_post_proof(self) -> RegisteredPoStProof:
        """Return the V1 window PoSt proof for this seal proof."""
        return self._info().window_post_proof

    def registered_window_post_proof_by_network_version(
        self, nv: Version
    ) -> RegisteredPoStProof:
        """Return the V1 window proof up to version 18 and the V1_1 proof after."""
        info = self._info()
        if nv <= Version.VERSION_18:
            return info.window_post_proof
        return info.window_post_proof.to_v1_1_post_proof()

    def registered_update_proof(self) -> RegisteredUpdateProof:
        """Return the sector update proof for this seal proof."""
        return self._info().update_proof

    def is_synthetic(self) -> bool:
        """Return whether this proof uses synthetic PoRep."""
        return self in SYNTHETIC

    def porep_id(self) -> bytes:
        """Return the 32-byte porep_id used when computing replica ids."""
        proof_id = _REGISTERED_PROOF_IDS.get(self)
        if proof_id is None:
            raise ValueError(f"unsupported proof type: {int(self)}")
        nonce = 0
        return (
            proof_id.to_bytes(8, "little") + nonce.to_bytes(8, "little") + bytes(16)
        )

    def replica_id(
        self, prover: int, sector: int, ticket: bytes, commd: bytes
    ) -> bytes:
        """Return the 32-byte replica_id, the main input when computing SDR."""
        prover_id = make_prover_id(prover)
        porep = self.porep_id()
        if len(ticket) != 32:
            raise ValueError(f"invalid ticket length {len(ticket)}")
        if len(commd) != 32:
            raise ValueError(f"invalid commd length {len(commd)}")
        sector_id = int(SectorNumber(sector)).to_bytes(8, "big")
        digest = hashlib.sha256(
            prover_id + sector_id + bytes(ticket) + bytes(commd) + porep
        ).digest()
        return _bytes_into_fr32_safe(digest)


@dataclass(frozen=True)
class SealProofInfo:
    """Metadata about a seal proof type."""

    proof_size: int
    sector_size: SectorSize
    winning_post_proof: RegisteredPoStProof
    window_post_proof: RegisteredPoStProof
    update_proof: RegisteredUpdateProof


@dataclass(frozen=True)
class PoStProofInfo:
    """Metadata about a PoSt proof type."""

    sector_size: SectorSize
    proof_size: int


def make_prover_id(actor: int) -> bytes:
    """Return the 32-byte prover id of an actor: its ID-address payload, zero padded."""
    if not 0 <= actor <= _UINT64_MAX:
        raise ValueError(
            f"failed to convert ActorID to prover id ([32]byte): id out of range: {actor}"
        )
    payload = encode_uvarint(int(actor))
    return payload + bytes(32 - len(payload))


def _bytes_into_fr32_safe(data: bytes) -> bytes:
    out = bytearray(data[:32].ljust(32, b"\x00"))
    out[31] &= 0b0011_1111
    return bytes(out)


_SS_2KIB = SectorSize(2 << 10)
_SS_8MIB = SectorSize(8 << 20)
_SS_512MIB = SectorSize(512 << 20)
_SS_32GIB = SectorSize(32 << 30)
_SS_64GIB = SectorSize(64 << 30)

_P = RegisteredPoStProof
_U = RegisteredUpdateProof
_S = RegisteredSealProof

# Per size: (sector size, proof size, winning, window, update).
_SIZE_FAMILIES = (
    (_SS_2KIB, 192, _P.STACKED_DRG_WINNING_2KIB_V1, _P.STACKED_DRG_WINDOW_2KIB_V1,
     _U.STACKED_DRG_2KIB_V1),
    (_SS_8MIB, 192, _P.STACKED_DRG_WINNING_8MIB_V1, _P.STACKED_DRG_WINDOW_8MIB_V1,
     _U.STACKED_DRG_8MIB_V1),
    (_SS_512MIB, 192, _P.STACKED_DRG_WINNING_512MIB_V1, _P.STACKED_DRG_WINDOW_512MIB_V1,
     _U.STACKED_DRG_512MIB_V1),
    (_SS_32GIB, 1920, _P.STACKED_DRG_WINNING_32GIB_V1, _P.STACKED_DRG_WINDOW_32GIB_V1,
     _U.STACKED_DRG_32GIB_V1),
    (_SS_64GIB, 1920, _P.STACKED_DRG_WINNING_64GIB_V1, _P.STACKED_DRG_WINDOW_64GIB_V1,
     _U.STACKED_DRG_64GIB_V1),
)

_SEAL_GENERATIONS = (
    (_S.STACKED_DRG_2KIB_V1, _S.STACKED_DRG_8MIB_V1, _S.STACKED_DRG_512MIB_V1,
     _S.STACKED_DRG_32GIB_V1, _S.STACKED_DRG_64GIB_V1),
    (_S.STACKED_DRG_2KIB_V1_1, _S.STACKED_DRG_8MIB_V1_1, _S.STACKED_DRG_512MIB_V1_1,
     _S.STACKED_DRG_32GIB_V1_1, _S.STACKED_DRG_64GIB_V1_1),
    (_S.STACKED_DRG_2KIB_V1_1_FEAT_SYNTHETIC_POREP,
     _S.STACKED_DRG_8MIB_V1_1_FEAT_SYNTHETIC_POREP,
     _S.STACKED_DRG_512MIB_V1_1_FEAT_SYNTHETIC_POREP,
     _S.STACKED_DRG_32GIB_V1_1_FEAT_SYNTHETIC_POREP,
     _S.STACKED_DRG_64GIB_V1_1_FEAT_SYNTHETIC_POREP),
)

SEAL_PROOF_INFOS: Dict[RegisteredSealProof, SealProofInfo] = {
    seal: SealProofInfo(
        proof_size=proof_size,
        sector_size=size,
        winning_post_proof=winning,
        window_post_proof=window,
        update_proof=update,
    )
    for generation in _SEAL_GENERATIONS
    for seal, (size, proof_size, winning, window, update) in zip(generation, _SIZE_FAMILIES)
}

SYNTHETIC = frozenset(_SEAL_GENERATIONS[2])

_REGISTERED_PROOF_IDS: Dict[RegisteredSealProof, int] = {
    seal: int(seal) for seal in RegisteredSealProof
}

_WINDOW_V1_1 = (
    _P.STACKED_DRG_WINDOW_2KIB_V1_1,
    _P.STACKED_DRG_WINDOW_8MIB_V1_1,
    _P.STACKED_DRG_WINDOW_512MIB_V1_1,
    _P.STACKED_DRG_WINDOW_32GIB_V1_1,
    _P.STACKED_DRG_WINDOW_64GIB_V1_1,
)

_WINDOW_TO_V1_1: Dict[RegisteredPoStProof, RegisteredPoStProof] = {}
for (_size, _proof, _winning, _window, _update), _v1_1 in zip(_SIZE_FAMILIES, _WINDOW_V1_1):
    _WINDOW_TO_V1_1[_window] = _v1_1
    _WINDOW_TO_V1_1[_v1_1] = _v1_1

POST_PROOF_INFOS: Dict[RegisteredPoStProof, PoStProofInfo] = {}
for (_size, _proof, _winning, _window, _update), _v1_1 in zip(_SIZE_FAMILIES, _WINDOW_V1_1):
    for _post in (_winning, _window, _v1_1):
        POST_PROOF_INFOS[_post] = PoStProofInfo(sector_size=_size, proof_size=192)