"""
Local Value Numbering

Assigns every value computed by a function a number such that instructions
computing the same value share it:
- Canonicalization: constant interning and commutative expression keys
- Numbering engine: one pass over the function with function-wide tables
- Diagnostics: one record per store, load and binary arithmetic instruction

The analysis never modifies the function it reads.
"""

# IR types
from .ir import (
    SSAValue,
    Global,
    Const,
    Value,
    BinaryOpcode,
    Store,
    Load,
    BinaryOp,
    Other,
    Instruction,
    BasicBlock,
    Function,
    Module,
    count_instructions,
)

# IR builder
from .ir_builder import FunctionBuilder, ModuleBuilder

# Canonicalization
from .canonical import (
    Expression,
    ConstantTable,
    ValueNumberCounter,
    COMMUTATIVE_OPCODES,
    make_expression,
    intern_constant,
    opcode_name,
    is_commutative,
)

# Diagnostics
from .diagnostics import (
    NumberingRecord,
    DiagnosticSink,
    StreamSink,
    RecordingSink,
    NullSink,
    format_record,
)

# Numbering engine
from .numbering import (
    NumberingState,
    NumberingResult,
    ValueNumbering,
    UnresolvedOperandError,
)

# Pass infrastructure
from .pass_manager import PassConfig, PassMetrics, FunctionPass, PassManager

# Passes
from .passes import ValueNumberingPass

# Entry points
from .analyze import analyze_function, analyze_module, default_pipeline

# Printing utilities
from .printing import render_instruction, render_value, print_function, print_module


__all__ = [
    # IR
    'SSAValue', 'Global', 'Const', 'Value', 'BinaryOpcode',
    'Store', 'Load', 'BinaryOp', 'Other', 'Instruction',
    'BasicBlock', 'Function', 'Module', 'count_instructions',
    # Builder
    'FunctionBuilder', 'ModuleBuilder',
    # Canonicalization
    'Expression', 'ConstantTable', 'ValueNumberCounter', 'COMMUTATIVE_OPCODES',
    'make_expression', 'intern_constant', 'opcode_name', 'is_commutative',
    # Diagnostics
    'NumberingRecord', 'DiagnosticSink', 'StreamSink', 'RecordingSink', 'NullSink',
    'format_record',
    # Numbering
    'NumberingState', 'NumberingResult', 'ValueNumbering', 'UnresolvedOperandError',
    # Pass infrastructure
    'PassConfig', 'PassMetrics', 'FunctionPass', 'PassManager',
    # Passes
    'ValueNumberingPass',
    # Entry points
    'analyze_function', 'analyze_module', 'default_pipeline',
    # Printing
    'render_instruction', 'render_value', 'print_function', 'print_module',
]
