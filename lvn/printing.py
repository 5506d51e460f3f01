"""
IR Printing Utilities

Renders values and instructions in an LLVM-like textual form. All scalars are
printed as i32.
"""

from typing import Optional, TextIO

from .ir import (
    SSAValue, Global, Const, Store, Load, BinaryOp, Other, Instruction,
    Function, Module,
)

_TYPE = "i32"
_PTR_TYPE = "i32*"


def render_value(value) -> str:
    """Render an operand without its type."""
    if isinstance(value, (SSAValue, Global, Const)):
        return repr(value)
    return str(value)


def _typed(value) -> str:
    if isinstance(value, (SSAValue, Const)):
        return f"{_TYPE} {render_value(value)}"
    if isinstance(value, Global):
        return f"{_PTR_TYPE} {render_value(value)}"
    # Labels and other pre-rendered operands
    return str(value)


def render_instruction(inst: Instruction) -> str:
    """Render a single instruction."""
    if isinstance(inst, Store):
        return f"store {_TYPE} {render_value(inst.value)}, {_PTR_TYPE} {render_value(inst.pointer)}"
    if isinstance(inst, Load):
        return f"{render_value(inst.result)} = load {_TYPE}, {_PTR_TYPE} {render_value(inst.pointer)}"
    if isinstance(inst, BinaryOp):
        return (f"{render_value(inst.result)} = {inst.opcode.value} {_TYPE} "
                f"{render_value(inst.lhs)}, {render_value(inst.rhs)}")
    if isinstance(inst, Other):
        if inst.opcode == "alloca":
            return f"{render_value(inst.result)} = alloca {_TYPE}"
        ops_str = ", ".join(_typed(o) for o in inst.operands)
        text = f"{inst.opcode} {ops_str}" if ops_str else inst.opcode
        if inst.opcode == "ret" and not inst.operands:
            text = "ret void"
        if inst.result is not None:
            return f"{render_value(inst.result)} = {text}"
        return text
    raise ValueError(f"Unknown instruction type: {type(inst)}")


def print_function(func: Function, file: Optional[TextIO] = None):
    """Pretty-print a function."""
    params = ", ".join(_typed(p) for p in func.params)
    print(f"define {_TYPE} @{func.name}({params}) {{", file=file)
    for i, block in enumerate(func.blocks):
        if i > 0:
            print(file=file)
        print(f"{block.name}:", file=file)
        for inst in block.instructions:
            print(f"  {render_instruction(inst)}", file=file)
    print("}", file=file)


def print_module(module: Module, file: Optional[TextIO] = None):
    """Pretty-print every function of a module."""
    print(f"; ModuleID = '{module.name}'", file=file)
    for g in module.globals:
        print(f"{render_value(g)} = global {_TYPE} 0", file=file)
    for func in module.functions:
        print(file=file)
        print_function(func, file=file)
