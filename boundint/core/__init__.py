"""
Core value types, codecs and contracts.

This package is independent of any ledger, keeper or persistence layer:
consumers only rely on the arithmetic and serialization contract.
"""
