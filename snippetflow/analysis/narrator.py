"""
Execution step narration: one human-readable step per statement, plus the variable-flow map.
"""

from __future__ import annotations

from typing import Sequence

from snippetflow.analysis.data_model import ExecutionStep, MemoryEvent, VariableFlowEvent
from snippetflow.classify.statement import (
    KIND_ASSIGNMENT,
    KIND_CALL,
    KIND_CONDITIONAL,
    KIND_FOR,
    KIND_FUNCTION,
    KIND_RETURN,
    KIND_VARIABLE,
    KIND_WHILE,
    Statement,
)

COMPLEXITY_WEIGHTS: dict[str, int] = {
    KIND_VARIABLE: 1,
    KIND_ASSIGNMENT: 1,
    KIND_CONDITIONAL: 2,
    KIND_FOR: 3,
    KIND_WHILE: 3,
    KIND_FUNCTION: 2,
    KIND_CALL: 1,
    KIND_RETURN: 1,
}


def create_execution_step(statement: Statement, step_number: int) -> ExecutionStep:
    kind = statement.kind
    name = statement.name
    events: tuple[MemoryEvent, ...] = ()

    if kind == KIND_VARIABLE:
        description = f"Declare variable '{name}'"
        explanation = f"Create a new variable named '{name}' in memory"
        category = "memory"
        events = (MemoryEvent("create", name or "", "variable"),)
    elif kind == KIND_ASSIGNMENT:
        description = f"Assign value to '{name}'"
        explanation = f"Update the value stored in variable '{name}'"
        category = "memory"
        events = (MemoryEvent("update", name or "", "assignment"),)
    elif kind == KIND_FUNCTION:
        description = f"Define function '{name}'"
        explanation = f"Create a new function named '{name}' that can be called later"
        category = "definition"
        events = (MemoryEvent("create", name or "", "function"),)
    elif kind == KIND_CONDITIONAL:
        description = f"Check condition: {statement.condition}"
        explanation = f"Evaluate the condition '{statement.condition}' and branch accordingly"
        category = "control"
    elif kind == KIND_FOR:
        description = f"Start for loop with '{statement.loop_variable}'"
        explanation = f"Initialize loop variable '{statement.loop_variable}' and begin iteration"
        category = "control"
        if statement.loop_variable:
            events = (MemoryEvent("create", statement.loop_variable, "loop_variable"),)
    elif kind == KIND_WHILE:
        description = f"Start while loop: {statement.condition}"
        explanation = f"Check condition '{statement.condition}' and repeat while true"
        category = "control"
    elif kind == KIND_CALL:
        description = f"Call function '{name}'"
        explanation = f"Execute the function '{name}' with given parameters"
        category = "execution"
    elif kind == KIND_RETURN:
        description = "Return from function"
        explanation = "Exit the current function and return control to caller"
        category = "control"
    else:
        description = f"Execute: {statement.raw_text}"
        explanation = f"Run the statement: {statement.raw_text}"
        category = "execution"

    return ExecutionStep(
        step_number=step_number,
        kind=kind,
        description=description,
        explanation=explanation,
        code=statement.raw_text,
        line_number=statement.line_number,
        indent_depth=statement.indent_depth,
        category=category,  # type: ignore[arg-type]
        complexity_weight=COMPLEXITY_WEIGHTS.get(kind, 1),
        memory_events=events,
    )


def generate_execution_steps(statements: Sequence[Statement]) -> tuple[ExecutionStep, ...]:
    """One step per statement, numbered from 1, in source order."""
    return tuple(create_execution_step(s, n) for n, s in enumerate(statements, start=1))


def track_variable_flow(
    statements: Sequence[Statement],
) -> dict[str, tuple[VariableFlowEvent, ...]]:
    """variable -> events in source order; declarations "declare", everything else "modify"."""
    flow: dict[str, list[VariableFlowEvent]] = {}
    for s in statements:
        action = "declare" if s.kind == KIND_VARIABLE else "modify"
        for variable in s.referenced_variables:
            flow.setdefault(variable, []).append(
                VariableFlowEvent(s.line_number, s.kind, action)  # type: ignore[arg-type]
            )
    return {variable: tuple(events) for variable, events in flow.items()}
