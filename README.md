# coretypes

Core value types for chain state, with their binary and CBOR encodings. Only the standard library is needed.

## Modules

- `coretypes.bigint`: the arbitrary-precision `Int`. `Int()` is the unset (nil) value.
  - Arithmetic helpers: `add`, `sub`, `mul`, `div`, `mod`, `exp`, `lsh`, `rsh`, `bit_len`, `cmp`, `maximum`, `minimum`, `total`, `product` and `subtract`.
  - Parsing: `from_string` and `must_from_string`.
  - Encodings: sign-prefixed bytes (`Int.to_bytes`, `from_bytes`, `positive_from_unsigned_bytes`), JSON strings (`Int.to_json`, `from_json`) and CBOR byte strings of at most 128 bytes (`Int.marshal_cbor`, `Int.unmarshal_cbor`).
- `coretypes.cbor`: CBOR header primitives and the marshalling protocols.
  - Primitives: `MajorType`, `encode_header`, `write_header`, `read_header` and `read_exact`.
  - Protocols: `Marshaler` and `Unmarshaler`.
  - Decoding and encoding failures raise `CborError`, which is a `ValueError`.
- `coretypes.crypto`: signature types and randomness domains.
  - Enumerations: `SigType`, with `SigType.label()` and `get_type_by_name`, and `DomainSeparationTag`.
  - CBOR records: `Signature`, `PqcSignature`, `SignPQCCert` and `SignPqcCertPubkey`.
  - `Signature` methods: `set`, `get`, `equals`, `serialize` and `chain_length`.
- `coretypes.ipld`: byte converters for schema fields.
  - `big_int_from_bytes` and `big_int_to_bytes`.
  - `token_amount_from_bytes` and `token_amount_to_bytes`.
  - `signature_from_bytes` and `signature_to_bytes`: a type byte followed by the data, for secp256k1 and BLS.
- `coretypes.network`: the network `Version` enumeration.
- `coretypes.abi.numbers`: `ActorID`, `MethodNum`, `ChainEpoch` and `DealID` as range-checked integers, and `new_token_amount`.
- `coretypes.abi.address`: `AddressProtocol`, the `AddressLike` protocol and `address_valid_for_network_version`.
- `coretypes.abi.cbor_bytes`: three byte-level types.
  - `CborBytes`: a CBOR byte string.
  - `CborBytesTransparent`: raw pass-through bytes.
  - `EmptyValue` and `EMPTY`: a value that serializes as zero bytes.
- `coretypes.abi.key`: mapping keys.
  - `AddrKey` and `IdAddrKey`.
  - `IntKey` and `UIntKey`, varint encoded, with `parse_int_key`, `parse_uint_key` and `encode_uvarint`.
- `coretypes.abi.piece`: piece sizes and piece metadata.
  - `UnpaddedPieceSize` and `PaddedPieceSize`, with `padded`, `unpadded` and `validate`.
  - `PieceInfo`.
- `coretypes.abi.sector`: sectors and registered proofs.
  - Sector types: `SectorNumber`, `SectorSize` (with `short_string`) and `SectorID`.
  - Proof enumerations: `RegisteredSealProof`, `RegisteredPoStProof`, `RegisteredAggregationProof` and `RegisteredUpdateProof`.
  - Proof metadata tables: `SEAL_PROOF_INFOS` and `POST_PROOF_INFOS`.
  - Identifiers: `make_prover_id`, `RegisteredSealProof.porep_id` and `RegisteredSealProof.replica_id`.

## Examples

```python
import io
from coretypes import bigint
from coretypes.abi.piece import UnpaddedPieceSize
from coretypes.abi.sector import SectorSize, RegisteredSealProof

n = bigint.from_string("12345678901234567890")
buf = io.BytesIO()
n.marshal_cbor(buf)
buf.seek(0)
assert bigint.Int.unmarshal_cbor(buf).equals(n)

assert UnpaddedPieceSize(127).padded() == 128
UnpaddedPieceSize(127).validate()          # raises ValueError when invalid

print(SectorSize(34359738368).short_string())                 # 32GiB
print(RegisteredSealProof.STACKED_DRG_32GIB_V1.proof_size())  # 1920
```

## What it does not do

- It has no address type of its own. Functions that take an address accept any object that satisfies `AddressLike`: it must have `protocol`, `payload` and `bytes()`.
- It does not compute content identifiers. `PieceInfo.piece_cid` holds raw bytes.
- It provides no block store or other storage.
- It has no command-line interface.

## Tests

```
pip install -e .[test]
pytest
```