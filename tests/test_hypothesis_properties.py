import io

import pytest
from hypothesis import given, settings, assume
from hypothesis.strategies import composite
from hypothesis import strategies as st

from whitespace_interp.assembler import parse_program
from whitespace_interp.runtime.machine import Machine
from whitespace_interp.core.instruction import Opcode, OPCODES_WITH_OPERAND
from whitespace_interp.core.errors import MalformedProgram

from program_builder import ws

integers = st.integers(min_value=-(2 ** 70), max_value=2 ** 70)
stack_prefix = st.lists(integers, max_size=8)


@composite
def mnemonic_sequences(draw):
    """Random instruction listings using every opcode."""
    lines = []
    for opcode in draw(st.lists(st.sampled_from(list(Opcode)), max_size=40)):
        if opcode in OPCODES_WITH_OPERAND:
            lines.append(f"{opcode.name} {draw(integers)}")
        else:
            lines.append(opcode.name)
    return lines


def final_stack(lines):
    machine = Machine(stdin=io.StringIO(), stdout=io.StringIO())
    machine.run(parse_program(ws(*lines)))
    return machine.stack.to_list()


def pushes(values):
    return [f"PUSH {v}" for v in values]


@settings(max_examples=200, deadline=None)
@given(lines=mnemonic_sequences())
def test_assembly_is_deterministic(lines):
    source = ws(*lines)
    first = parse_program(source)
    second = parse_program(source)
    assert first == second
    assert [instr.display for instr in first] == lines


@settings(max_examples=300, deadline=None)
@given(source=st.text(alphabet=" \t\nx", max_size=200))
def test_random_sources_assemble_or_fail_cleanly(source):
    """Arbitrary input either assembles or raises MalformedProgram, never anything else."""
    try:
        program = parse_program(source)
    except MalformedProgram:
        return
    assert all(instr.display for instr in program)


@settings(deadline=None)
@given(prefix=stack_prefix, value=integers)
def test_push_then_discard_is_identity(prefix, value):
    assert final_stack(pushes(prefix) + [f"PUSH {value}", "DISCARD"]) == prefix


@settings(deadline=None)
@given(prefix=stack_prefix, value=integers)
def test_dup_then_discard_is_identity(prefix, value):
    before = prefix + [value]
    assert final_stack(pushes(before) + ["DUP", "DISCARD"]) == before


@settings(deadline=None)
@given(prefix=stack_prefix, value=integers)
def test_copy_zero_equals_dup(prefix, value):
    lines = pushes(prefix + [value])
    assert final_stack(lines + ["COPY 0"]) == final_stack(lines + ["DUP"])


@settings(deadline=None)
@given(address=st.integers(min_value=0, max_value=5000), value=integers)
def test_store_retrieve_round_trip(address, value):
    lines = [f"PUSH {address}", f"PUSH {value}", "STORE", f"PUSH {address}", "RETRIEVE"]
    assert final_stack(lines) == [value]


@settings(deadline=None)
@given(a=integers, b=integers)
def test_subtraction_operand_order(a, b):
    assert final_stack([f"PUSH {a}", f"PUSH {b}", "SUB"]) == [a - b]


@settings(deadline=None)
@given(a=integers, b=integers)
def test_division_identity(a, b):
    """Quotient and remainder recombine to the dividend; |remainder| < |divisor|."""
    assume(b != 0)
    quotient, = final_stack([f"PUSH {a}", f"PUSH {b}", "DIV"])
    remainder, = final_stack([f"PUSH {a}", f"PUSH {b}", "MOD"])
    assert quotient * b + remainder == a
    assert abs(remainder) < abs(b)
    assert remainder == 0 or (remainder < 0) == (a < 0)
