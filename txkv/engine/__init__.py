"""Command execution and transaction handling for TxKV."""

from .executor import CommandExecutor
from .transaction import TransactionCoordinator, TransactionState

__all__ = ["CommandExecutor", "TransactionCoordinator", "TransactionState"]
