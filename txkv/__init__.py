"""
TxKV: Embedded Transactional Key-Value Store

A single-process, in-memory key-value store holding integer values,
driven by a line-oriented text protocol with MULTI/EXEC/DISCARD
transaction buffering.
"""

__version__ = "1.0.0"
