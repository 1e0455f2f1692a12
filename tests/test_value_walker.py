"""Tests for ValueWalker distribution over containers."""
from formtree import Container, Form, Group, ValueWalker


def build_foo_group():
    foo = Group('foo')
    bar = foo.add_text('bar')
    baz = foo.add_text('ba[z]')
    qu = foo.add_group('qu')
    ux = qu.add_text('ux')
    unnamed = foo.add_group()
    xyzzy = unnamed.add_text('xyzzy')
    return foo, bar, baz, ux, xyzzy


VALUES = {
    'bar': 'first',
    'ba': {'z': 'second'},
    'qu': {'ux': 'third'},
    0: {'xyzzy': 'fourth'},
}


def test_walker_distributes_named_and_positional_values():
    foo, bar, baz, ux, xyzzy = build_foo_group()
    walker = ValueWalker(foo, VALUES).walk()

    assert bar.get_value() == 'first'
    assert baz.get_value() == 'second'
    assert ux.get_value() == 'third'
    assert xyzzy.get_value() == 'fourth'
    assert walker.index_count == 1
    assert walker.depth == 0
    assert walker.has_found()
    assert not walker.has_not_found()


def test_group_set_value_agrees_with_walker():
    foo, bar, baz, ux, xyzzy = build_foo_group()
    foo.set_value(VALUES)
    assert [bar.get_value(), baz.get_value(), ux.get_value(), xyzzy.get_value()] == \
        ['first', 'second', 'third', 'fourth']


def test_walk_is_idempotent():
    container = Container()
    text = container.add_text('foo')
    walker = ValueWalker(container, {'foo': 'value'})
    walker.walk()
    text.set_value('changed')
    walker.walk()
    assert text.get_value() == 'changed'
    assert len(walker.get_found()) == 1


def test_missing_keys_are_reported_not_raised():
    container = Container()
    found = container.add_text('found')
    missing = container.add_text('missing', value='untouched')
    deep = container.add_text('a[b][c]', value='deep')

    container.set_value({'found': 'yes', 'a': {'x': 1}})

    walker = container.get_last_value_walker()
    assert found.get_value() == 'yes'
    assert missing.get_value() == 'untouched'
    assert deep.get_value() == 'deep'
    assert walker.get_not_found() == [missing, deep]
    [record] = walker.get_found()
    assert (record.element, record.key, record.value) == (found, 'found', 'yes')


def test_form_set_value_reaches_nested_groups():
    form = Form('form')
    text = form.add_text('top')
    group = form.add_group('grp')
    inner = group.add_text('inner[x]')
    unnamed = form.add_group()
    positional = unnamed.add_text('pos')

    form.set_value({'top': 't', 'grp': {'inner': {'x': 'ix'}}, 0: {'pos': 'p'}})

    assert text.get_value() == 't'
    assert inner.get_value() == 'ix'
    assert positional.get_value() == 'p'


def test_sibling_unnamed_groups_each_claim_a_slot():
    form = Form('form')
    first = form.add_group().add_text('x')
    second = form.add_group().add_text('x')
    form.set_value([{'x': 'a'}, {'x': 'b'}])
    assert first.get_value() == 'a'
    assert second.get_value() == 'b'


def test_surplus_slots_go_to_last_unnamed_group():
    form = Form('form')
    group = form.add_group()
    first = group.add_text('first')
    second = group.add_text('second')
    form.set_value({0: {'first': 'a'}, 1: {'second': 'b'}})
    assert first.get_value() == 'a'
    assert second.get_value() == 'b'


def test_fieldset_receives_whole_value():
    form = Form('form')
    fieldset = form.add_fieldset()
    text = fieldset.add_text('name')
    form.set_value({'name': 'in fieldset'})
    assert text.get_value() == 'in fieldset'


def test_checkbox_array_through_walker():
    form = Form('form')
    boxes = [form.add_checkbox('veg[]', value_attribute=value)
             for value in ('carrot', 'pea', 'bean')]
    form.set_value({'veg': ['pea', 'bean']})
    assert [box.is_checked() for box in boxes] == [False, True, True]


def test_nested_plain_containers_use_relative_names():
    """Depth reduction never strips segments that are not container prefixes."""
    outer = Container()
    middle = outer.add_element(Container())
    inner = middle.add_element(Container())
    text = inner.add_text('a[b]')
    walker = ValueWalker(inner, {'a': {'b': 'value'}}).walk()
    assert walker.depth == 2
    assert text.get_value() == 'value'
