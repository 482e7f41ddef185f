"""State reachability advisories for state machine diagrams."""

import networkx as nx

from .base import ValidationResult


def check_unreachable_states(obj: dict) -> ValidationResult:
    """Warn about states that cannot be reached from an initial state.

    An unreachable state indicates either:
    - A missing transition to that state
    - A state that should be removed
    - A missing initial state marker

    These are advisories only; they never make a diagram invalid.

    Args:
        obj: A state machine candidate whose ``states`` is a list.

    Returns:
        ValidationResult with warnings.
    """
    result = ValidationResult()

    states = [
        s
        for s in obj.get("states") or []
        if isinstance(s, dict) and isinstance(s.get("id"), str)
    ]
    if not states:
        return result

    initial = [s["id"] for s in states if s.get("isInitial") is True]
    if not initial:
        result.add_warning(
            code="NO_INITIAL_STATE",
            message="State machine has states but no initial state defined",
        )
        return result

    graph = nx.DiGraph()
    graph.add_nodes_from(s["id"] for s in states)
    transitions = obj.get("stateTransitions")
    for transition in transitions if isinstance(transitions, list) else []:
        if not isinstance(transition, dict):
            continue
        source, target = transition.get("source"), transition.get("target")
        if graph.has_node(source) and graph.has_node(target):
            graph.add_edge(source, target)

    reachable = set(initial)
    for state_id in initial:
        reachable |= nx.descendants(graph, state_id)

    for index, state in enumerate(obj["states"]):
        if isinstance(state, dict) and isinstance(state.get("id"), str):
            if state["id"] not in reachable:
                result.add_warning(
                    code="UNREACHABLE_STATE",
                    message=f"State '{state['id']}' cannot be reached from an initial state",
                    path=f"states[{index}]",
                )

    return result
