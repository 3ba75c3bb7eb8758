"""Actor numbers, address checks, mapping keys, CBOR byte types, piece sizes and sector proof types."""