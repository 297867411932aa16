from .program import DialectAccount, DialectProgram, create_dialect_program
from .rpc import SolanaRpcClient

__all__ = ["DialectAccount", "DialectProgram", "SolanaRpcClient", "create_dialect_program"]
