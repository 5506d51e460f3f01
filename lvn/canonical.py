"""
Canonicalization Model

Defines when two computations are the same value: constant interning and the
canonical expression key used by value numbering. Commutative operators are
normalized by ordering their operand numbers.
"""

from dataclasses import dataclass, field

from .ir import BinaryOpcode


# Commutative operations (a op b == b op a)
COMMUTATIVE_OPCODES = frozenset({BinaryOpcode.ADD, BinaryOpcode.MUL})

_OPCODE_NAMES = {
    BinaryOpcode.ADD: "add",
    BinaryOpcode.SUB: "sub",
    BinaryOpcode.MUL: "mul",
    BinaryOpcode.UDIV: "div",
    BinaryOpcode.SDIV: "div",
}

UNKNOWN_OPCODE_NAME = "unknown"


@dataclass(frozen=True)
class Expression:
    """One arithmetic computation over value numbers, in canonical form."""
    opcode: BinaryOpcode
    lhs: int
    rhs: int

    def __repr__(self):
        return f"({self.opcode.value} {self.lhs} {self.rhs})"


def is_commutative(opcode: BinaryOpcode) -> bool:
    return opcode in COMMUTATIVE_OPCODES


def make_expression(opcode: BinaryOpcode, lhs: int, rhs: int) -> Expression:
    """Build the canonical key for `lhs opcode rhs`.

    Commutative opcodes put the smaller operand number first; every other
    opcode keeps the operands as given.
    """
    if is_commutative(opcode) and lhs > rhs:
        lhs, rhs = rhs, lhs
    return Expression(opcode, lhs, rhs)


def opcode_name(opcode: BinaryOpcode) -> str:
    """Display mnemonic for diagnostics. Never used for equivalence."""
    return _OPCODE_NAMES.get(opcode, UNKNOWN_OPCODE_NAME)


@dataclass
class ValueNumberCounter:
    """The next value number to hand out. Numbers start at 1."""
    next: int = 1

    def allocate(self) -> int:
        vn = self.next
        self.next += 1
        return vn

    @property
    def issued(self) -> int:
        return self.next - 1


@dataclass
class ConstantTable:
    """Maps literal integer values to their value number."""
    numbers: dict[int, int] = field(default_factory=dict)

    def lookup(self, value: int):
        return self.numbers.get(value)

    def __contains__(self, value: int) -> bool:
        return value in self.numbers

    def __len__(self) -> int:
        return len(self.numbers)


def intern_constant(value: int, table: ConstantTable, counter: ValueNumberCounter) -> int:
    """Return the value number of literal `value`, allocating one on first use."""
    vn = table.lookup(value)
    if vn is None:
        vn = counter.allocate()
        table.numbers[value] = vn
    return vn
