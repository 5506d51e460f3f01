"""
IR - Basic Blocks of Straight-Line Instructions

The host representation consumed by value numbering: a function is an ordered
list of basic blocks, each an ordered list of instructions. Instructions come
from a closed set of kinds (store, load, binary arithmetic, everything else).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class SSAValue:
    """A value defined exactly once: an instruction result, a parameter or a stack slot."""
    id: int
    name: Optional[str] = None

    def __repr__(self):
        if self.name:
            return f"%{self.name}"
        return f"%{self.id}"


@dataclass(frozen=True)
class Global:
    """A module-level memory location."""
    name: str

    def __repr__(self):
        return f"@{self.name}"


@dataclass(frozen=True, eq=False)
class Const:
    """A literal integer operand.

    Each Const object is its own value identity: two occurrences of the same
    literal are different operands unless something interns them by value.
    """
    value: int

    def __repr__(self):
        return f"{self.value}"


# Memory location operands
Pointer = Union[SSAValue, Global]

# Type alias for any operand
Value = Union[SSAValue, Global, Const]


class BinaryOpcode(Enum):
    """Binary arithmetic opcodes."""
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    UDIV = "udiv"
    SDIV = "sdiv"
    UREM = "urem"
    SREM = "srem"
    SHL = "shl"
    LSHR = "lshr"
    ASHR = "ashr"
    AND = "and"
    OR = "or"
    XOR = "xor"


@dataclass
class Store:
    """store value -> pointer. Defines no SSA value."""
    value: Value
    pointer: Pointer

    def __repr__(self):
        return f"store {self.value!r}, {self.pointer!r}"


@dataclass
class Load:
    """result = load pointer"""
    result: SSAValue
    pointer: Pointer

    def __repr__(self):
        return f"{self.result!r} = load {self.pointer!r}"


@dataclass
class BinaryOp:
    """result = opcode lhs, rhs"""
    opcode: BinaryOpcode
    result: SSAValue
    lhs: Value
    rhs: Value

    @property
    def operands(self) -> list[Value]:
        return [self.lhs, self.rhs]

    def __repr__(self):
        return f"{self.result!r} = {self.opcode.value} {self.lhs!r}, {self.rhs!r}"


@dataclass
class Other:
    """Any instruction value numbering does not look at (alloca, br, ret, call, ...)."""
    opcode: str
    result: Optional[SSAValue] = None
    operands: list = field(default_factory=list)

    def __repr__(self):
        ops_str = ", ".join(repr(o) for o in self.operands)
        if self.result is not None:
            return f"{self.result!r} = {self.opcode} {ops_str}".rstrip()
        return f"{self.opcode} {ops_str}".rstrip()


# Instruction type alias
Instruction = Union[Store, Load, BinaryOp, Other]


@dataclass
class BasicBlock:
    """A basic block: a label and its instructions in program order."""
    name: str
    instructions: list[Instruction] = field(default_factory=list)

    def __repr__(self):
        return f"BasicBlock({self.name}, {len(self.instructions)} insts)"


@dataclass
class Function:
    """A function body: blocks in layout order."""
    name: str
    params: list[SSAValue] = field(default_factory=list)
    blocks: list[BasicBlock] = field(default_factory=list)

    def instructions(self):
        """Iterate over every instruction, block order then intra-block order."""
        for block in self.blocks:
            yield from block.instructions

    def __repr__(self):
        return f"Function({self.name}, {len(self.blocks)} blocks)"


@dataclass
class Module:
    """A collection of functions analyzed independently."""
    name: str = "module"
    functions: list[Function] = field(default_factory=list)
    globals: list[Global] = field(default_factory=list)


def count_instructions(func: Function) -> int:
    """Count total instructions in a function."""
    return sum(len(block.instructions) for block in func.blocks)
