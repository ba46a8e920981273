# martiallang

A small library for describing martial arts systems as states, roles and
sequences of actions. It tokenizes Martial DSL text, checks that a set of
declarations is consistent, and turns a validated system into a directed
graph that can be analysed or exported.

## The Martial DSL

```text
// Roles may be declared in several files; they are merged.
roles { Top, Bottom, Neutral }

// A state may restrict which roles can occupy it.
state Mount roles { Top, Bottom }
state Guard

// A sequence is a chain of actions. Each step must start where the
// previous one ended.
sequence Escape:
    Shrimp: Mount[Bottom] -> Guard[Bottom]

// Groups cluster related states for display.
group Positions { Mount, Guard }
```

## Modules

### `martiallang.lexer`

`tokenize(source)` returns a list of `PositionedToken` objects, each holding
a `Token` and the `Position` (1-based line and column) where it starts. The
list always ends with an `EOF` token. A `Lexer(source)` does the same step by
step with `next_token()`, can be iterated, or can be drained with
`tokenize()`.

A `Token` has a `kind` (a `TokenKind`: the keywords `roles`, `state`,
`sequence`, `group`, identifiers, `{ } [ ] : , ->` and `EOF`) and, for
identifiers, the identifier's `text`. Whitespace and `//` comments are
skipped. Text that is not a token raises `LexError`, which carries a
`message` and a `position`.

```python
from martiallang.lexer import tokenize

tokens = tokenize("state Mount roles { Top, Bottom }")
print([str(t.token) for t in tokens])
# ['state', 'Mount', 'roles', '{', 'Top', ',', 'Bottom', '}', 'EOF']
```

### `martiallang.ast`

Frozen dataclasses for declarations: `RolesDecl(roles)`,
`State(name, allowed_roles=None)`, `StateRef(state, role)`,
`SequenceStep(action_name, from_, to)`, `Sequence(name, steps)`,
`GroupDecl(name, states)`, and `MartialFile(declarations)` holding the
declarations of one file in order.

### `martiallang.semantic`

`SemanticValidator` collects declarations, either a whole `MartialFile` at a
time with `add_file`, or one by one with `add_roles`, `add_state`,
`add_sequence` and `add_group`. Roles are merged; a state, sequence or group
name defined twice raises `SemanticError` at once.

`validate(system_name)` checks the collection as a whole and returns a
`MartialSystem` (`name`, `roles`, `states`, `sequences`, `groups`). It raises
`SemanticError` (with `message` and `context`) when no roles are declared, a
state names an undefined or repeated role, a sequence is empty, a step refers
to an undefined state or role or to a role its state does not allow, two
consecutive steps do not join up, or a group is empty or names an undefined
state.

```python
from martiallang.ast import RolesDecl, Sequence, SequenceStep, State, StateRef
from martiallang.semantic import SemanticValidator

validator = SemanticValidator()
validator.add_roles(RolesDecl(["Top", "Bottom"]))
validator.add_state(State("Mount", ["Top", "Bottom"]))
validator.add_state(State("Guard"))
validator.add_sequence(Sequence("Escape", [
    SequenceStep("Shrimp", StateRef("Mount", "Bottom"), StateRef("Guard", "Bottom")),
]))
system = validator.validate("BJJ")
```

### `martiallang.graph`

`MartialGraph.from_system(system)` builds a graph whose nodes are `Node`
objects (a state in a given role, sorted by state then role, with `id()`
such as `Mount[Bottom]`) and whose edges are `Edge` objects, one per step of
every sequence, carrying the action and the sequence name. The graph offers:

- `to_json()`: indented JSON with `system_name`, `nodes`, `edges` (whose
  endpoints appear under `from` and `to`) and, when there are any, `groups`;
- `to_dot()`: Graphviz DOT text, with each group drawn as a dashed
  `cluster_<name>` subgraph;
- `statistics()`: a `GraphStatistics` with `node_count`, `edge_count`,
  `self_loops`, and the lists `source_nodes`, `sink_nodes` and
  `isolated_nodes`;
- `reachable_from(node)`: the set of nodes reachable from a node, itself
  included;
- `find_unreachable_nodes()`: nodes that are neither the start of an edge nor
  reachable from one.

```python
from martiallang.graph import MartialGraph

graph = MartialGraph.from_system(system)
print(graph.to_dot())
```

## What it does not do

There is no parser from tokens to `MartialFile` declarations: the lexer
produces tokens, and the validator takes declarations built from the `ast`
classes, but nothing here connects the two. Nor is there a command-line tool
or anything that reads `.martial` files from disk; loading files and printing
results is left to the caller.

## Tests

```
pip install .[test]
pytest
```