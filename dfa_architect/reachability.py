from collections import deque


def reachable_from(automaton, start_id):
    """Breadth-first search over transition edges, ignoring symbols.

    Edges whose source or target is not a known state are skipped. An unknown
    ``start_id`` yields an empty set.
    """
    if automaton.state(start_id) is None:
        return set()

    visited = {start_id}
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        for transition in automaton.transitions_from(current):
            target = transition.target
            if target in visited or automaton.state(target) is None:
                continue
            visited.add(target)
            queue.append(target)
    return visited


def reachable(automaton):
    """States reachable from the unique start state (empty if it is not unique)."""
    start = automaton.start_state()
    if start is None:
        return set()
    return reachable_from(automaton, start.id)


def unreachable(automaton):
    """Ids of states that cannot be reached, in automaton order."""
    start = automaton.start_state()
    if start is None:
        return []
    seen = reachable_from(automaton, start.id)
    return [state.id for state in automaton.states if state.id not in seen]
