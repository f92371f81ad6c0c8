# sapwood

Fine-grained reactivity for Python: signals, effects, memos and reactive
lists, plus a small in-memory DOM tree that updates itself when the state it
was built from changes. Each signal knows exactly which effects read it, so a
change re-runs only those effects and touches only the nodes they manage.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Signals and effects

```python
from sapwood.signal import Signal
from sapwood.effect import create_effect, create_memo

state = Signal(0)
double = create_memo(lambda: state.get() * 2)

seen = []
create_effect(lambda: seen.append(state.get()))

state.set(1)
assert double.get() == 2
assert seen == [0, 1]
```

`sapwood.signal`:

- `Signal(value)` holds a value. `get()` returns it and records it as a
  dependency of the running effect; `get_untracked()` returns it without
  recording; `set(value)` stores a new value and calls the subscribers;
  `trigger_subscribers()` calls them without changing the value.
- `Signal.handle()` returns a read-only `StateHandle` sharing the same state.
  Two signals compare equal when their current values are equal.

`sapwood.effect`:

- `create_effect(fn)` runs `fn` at once and again whenever a signal it read
  changes. Dependencies are recreated on every run, so a branch that is no
  longer taken stops being tracked.
- `create_memo(fn)` returns a `StateHandle` holding the derived value,
  recomputed once per change of its sources and notifying dependents every
  time. `create_selector(fn)` notifies dependents only when the new value is
  unequal to the old; `create_selector_with(fn, comparator)` uses
  `comparator(old, new)`, which returns `True` when the two are the same.
- `create_effect_initial(initial)` calls `initial()` once; it returns
  `(effect, value)`, `effect` is run on later changes and `value` is returned.

## Scopes and cleanup

`sapwood.scope` holds the reactive scopes:

```python
from sapwood.scope import create_root, on_cleanup

owner = create_root(lambda: on_cleanup(lambda: print("cleaned up")))
owner.dispose()  # prints "cleaned up"
```

- `create_root(fn)` runs `fn` in a new scope and returns its `Owner`.
  Effects created inside belong to that owner; `Owner.dispose()` stops them
  and runs the cleanup callbacks once. An `Owner` is also a context manager
  that disposes itself on exit.
- Effects created inside another effect are disposed each time the outer
  effect re-runs, and cleanup callbacks registered inside an effect run
  before its next run.
- `on_cleanup(fn)` registers `fn` with the current scope.
- `untrack(fn)` calls `fn` without recording dependencies and returns its
  result.

Creating an effect, or calling `on_cleanup`, outside any root emits a
`RuntimeWarning`: such effects are never disposed and such callbacks never
run.

## Reactive lists

```python
from sapwood.signal_vec import SignalVec

numbers = SignalVec([1, 2, 3])
squared = numbers.map(lambda x: x * x)

numbers.push(4)
assert squared.to_list() == [1, 4, 9, 16]
numbers.swap(0, 1)
assert squared.to_list() == [4, 1, 9, 16]
```

`SignalVec` records each change (`replace`, `insert`, `remove`, `swap`,
`push`, `pop`, `clear`) as a `VecDiff` with a `VecDiffKind`, notifies its
subscribers while the change is still pending in `changes`, and then applies
it. `update(index, value)` only queues its change; it is applied together
with the next one. Out-of-range indices raise `IndexError`; `pop()` on an
empty list does nothing. `map(f)` returns a derived `SignalVec` that follows
every change.

## Building trees

`sapwood.dom` provides `Node`, `Element`, `Text`, `Comment` and `Fragment`,
with `append_child`, `insert_before`, `replace_child`, `remove_child`,
`remove`, `text_content` and `to_html`. Inserting a fragment moves its
children. The helpers `element`, `fragment`, `attr` (a reactive attribute),
`event`, `append`, `append_static_text` and `set_noderef` build trees.

`sapwood.render.append_render(parent, fn)` appends the rendering of `fn()`
and keeps it up to date: text is changed in place, a `TemplateResult` is
swapped for the new one, and a `TemplateList` (a `SignalVec` of
`TemplateResult`s) applies each pending list change to the parent.

```python
from sapwood import dom
from sapwood.render import append_render
from sapwood.signal import Signal
from sapwood.template import TemplateResult, render_to

count = Signal(0)

def app():
    p = dom.element("p")
    dom.attr(p, "class", lambda: "value")
    append_render(p, lambda: count.get())
    button = dom.element("button")
    dom.event(button, "click", lambda event: count.set(count.get_untracked() + 1))
    dom.append_static_text(button, "Increment")
    div = dom.element("div")
    dom.append(div, p)
    dom.append(div, button)
    return TemplateResult(div)

container = dom.element("section")
render_to(app, container)
assert container.to_html() == (
    '<section><div><p class="value">0</p><button>Increment</button></div></section>'
)

button = container.child_nodes[0].child_nodes[1]
button.dispatch_event("click")
assert container.text_content == "1Increment"
```

`render_to(template, parent)` builds the template in a new root that is kept
alive for the rest of the process. `TemplateResult.empty()` gives a result
holding a blank comment, useful as a placeholder. A `NodeRef` from
`sapwood.noderef` filled by `dom.set_noderef` gives later access to a node;
its `get()` raises `LookupError` while it is unset.

## Lists of items

`sapwood.flow.keyed(iterable, template, key)` and
`sapwood.flow.indexed(iterable, template)` render one template per item of a
list held in a signal, and re-render only items whose value changed:

```python
from sapwood import dom
from sapwood.flow import keyed
from sapwood.signal import Signal
from sapwood.template import TemplateResult, render_to

items = Signal([1, 2])

def item(n):
    li = dom.element("li")
    dom.append_static_text(li, n)
    return TemplateResult(li)

def app():
    ul = dom.element("ul")
    dom.append(ul, keyed(items.handle(), item, key=lambda n: n).node)
    return TemplateResult(ul)

container = dom.element("div")
render_to(app, container)
assert container.text_content == "12"

items.set([1, 2, 3])
assert container.text_content == "123"
items.set([2, 3])
assert container.text_content == "23"
```

## What it does not do

There is no template syntax or parser: trees are built by calling the
`sapwood.dom` helpers. The tree lives only in memory; nothing is drawn to a
screen or connected to a browser, and events happen only when
`Element.dispatch_event` is called. There is no command-line program.