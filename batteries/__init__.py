from batteries.batteries_datatypes import BatteriesError, ContractViolation, TypeMismatch
from batteries.batteries_list import List
from batteries.batteries_operator import OPERATORS as operator
from batteries import batteries_list as list

__all__ = [
    "BatteriesError",
    "ContractViolation",
    "TypeMismatch",
    "List",
    "list",
    "operator",
]
