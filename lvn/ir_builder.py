"""
IR Builder

Provides a builder API for constructing functions in program order.
"""

from typing import Optional

from .ir import (
    SSAValue, Global, Const, Value, Pointer, BinaryOpcode,
    Store, Load, BinaryOp, Other, Instruction, BasicBlock, Function, Module,
)


class FunctionBuilder:
    """Builder for constructing a Function block by block."""

    def __init__(self, name: str = "f"):
        self._name = name
        self._ssa_counter = 0
        self._params: list[SSAValue] = []
        self._blocks: list[BasicBlock] = []
        self._current: Optional[BasicBlock] = None

    def _new_ssa(self, name: Optional[str] = None) -> SSAValue:
        """Create a new SSA value."""
        v = SSAValue(self._ssa_counter, name)
        self._ssa_counter += 1
        return v

    def _emit(self, inst: Instruction):
        """Append an instruction to the current block, opening 'entry' if needed."""
        if self._current is None:
            self.block("entry")
        self._current.instructions.append(inst)

    # === Structure ===

    def param(self, name: Optional[str] = None) -> SSAValue:
        """Declare a function parameter."""
        v = self._new_ssa(name)
        self._params.append(v)
        return v

    def block(self, name: str) -> BasicBlock:
        """Start a new basic block; later instructions go into it."""
        if any(b.name == name for b in self._blocks):
            raise ValueError(f"Duplicate block name: {name}")
        bb = BasicBlock(name)
        self._blocks.append(bb)
        self._current = bb
        return bb

    # === Constants ===

    def const(self, value: int) -> Const:
        """Create a literal operand. Every call returns a distinct occurrence."""
        return Const(value)

    # === Memory ===

    def alloca(self, name: Optional[str] = None) -> SSAValue:
        """Reserve a stack slot and return its address."""
        result = self._new_ssa(name)
        self._emit(Other("alloca", result, []))
        return result

    def load(self, pointer: Pointer, name: Optional[str] = None) -> SSAValue:
        """Load from memory at pointer."""
        result = self._new_ssa(name)
        self._emit(Load(result, pointer))
        return result

    def store(self, value: Value, pointer: Pointer):
        """Store value to memory at pointer."""
        self._emit(Store(value, pointer))

    # === Arithmetic ===

    def binop(self, opcode: BinaryOpcode | str, a: Value, b: Value,
              name: Optional[str] = None) -> SSAValue:
        """Emit a binary arithmetic operation."""
        if isinstance(opcode, str):
            try:
                opcode = BinaryOpcode(opcode)
            except ValueError:
                raise ValueError(f"Unknown binary opcode: {opcode}") from None
        result = self._new_ssa(name)
        self._emit(BinaryOp(opcode, result, a, b))
        return result

    def add(self, a: Value, b: Value, name: Optional[str] = None) -> SSAValue:
        return self.binop(BinaryOpcode.ADD, a, b, name)

    def sub(self, a: Value, b: Value, name: Optional[str] = None) -> SSAValue:
        return self.binop(BinaryOpcode.SUB, a, b, name)

    def mul(self, a: Value, b: Value, name: Optional[str] = None) -> SSAValue:
        return self.binop(BinaryOpcode.MUL, a, b, name)

    def udiv(self, a: Value, b: Value, name: Optional[str] = None) -> SSAValue:
        return self.binop(BinaryOpcode.UDIV, a, b, name)

    def sdiv(self, a: Value, b: Value, name: Optional[str] = None) -> SSAValue:
        return self.binop(BinaryOpcode.SDIV, a, b, name)

    def xor(self, a: Value, b: Value, name: Optional[str] = None) -> SSAValue:
        return self.binop(BinaryOpcode.XOR, a, b, name)

    def shl(self, a: Value, b: Value, name: Optional[str] = None) -> SSAValue:
        return self.binop(BinaryOpcode.SHL, a, b, name)

    # === Everything else ===

    def other(self, opcode: str, operands: Optional[list] = None,
              name: Optional[str] = None, has_result: bool = True) -> Optional[SSAValue]:
        """Emit an instruction value numbering does not interpret."""
        result = self._new_ssa(name) if has_result else None
        self._emit(Other(opcode, result, list(operands or [])))
        return result

    def br(self, target: str):
        self._emit(Other("br", None, [f"label %{target}"]))

    def cond_br(self, cond: Value, then_target: str, else_target: str):
        self._emit(Other("br", None, [cond, f"label %{then_target}", f"label %{else_target}"]))

    def ret(self, value: Optional[Value] = None):
        self._emit(Other("ret", None, [value] if value is not None else []))

    def build(self) -> Function:
        """Build the final Function."""
        return Function(
            name=self._name,
            params=list(self._params),
            blocks=list(self._blocks),
        )


class ModuleBuilder:
    """Collects functions and globals into a Module."""

    def __init__(self, name: str = "module"):
        self._name = name
        self._functions: list[Function] = []
        self._globals: list[Global] = []

    def global_(self, name: str) -> Global:
        g = Global(name)
        self._globals.append(g)
        return g

    def function(self, name: str) -> FunctionBuilder:
        """Start a function; call add() with its built result."""
        return FunctionBuilder(name)

    def add(self, func: Function) -> Function:
        self._functions.append(func)
        return func

    def build(self) -> Module:
        return Module(self._name, list(self._functions), list(self._globals))
