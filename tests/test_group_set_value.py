"""Tests for Group.set_value distribution and Group.get_value aggregation."""
from formtree import Fieldset, Group, InputCheckbox, InputRadio


def test_named_group_set_value():
    """Values reach elements with nested names, child groups and unnamed groups."""
    root = Group('root')
    e1 = root.add_text('e1')
    e2 = root.add_text('e2[sub1]')
    e3 = root.add_text('e3[sub1][sub2][sub3]')

    g2 = root.add_group('g2')
    g2e1 = g2.add_text('g2e1')
    g2e2 = g2.add_text('g2e2[sub1]')

    g3 = root.add_group()
    g3e1 = g3.add_text('g3e1')
    g3e2 = g3.add_text('g3e2')

    g4 = root.add_group('g4[sub1]')
    g4e1 = g4.add_text('g4e1')

    g5 = root.add_group('g5[sub1][sub2][sub3]')
    g5e1 = g5.add_text('g5e1')

    assert g3.name == 'root[]'
    assert g3e1.name == 'root[][g3e1]'
    assert g4e1.name == 'root[g4][sub1][g4e1]'

    root.set_value({
        'e1': 'e1 value',
        'e2': {'sub1': 'e2 value'},
        'e3': {'sub1': {'sub2': {'sub3': 'e3 value'}}},
        'g2': {'g2e1': 'g2e1 value', 'g2e2': {'sub1': 'g2e2 value'}},
        0: {'g3e1': 'g3e1 value'},
        1: {'g3e2': 'g3e2 value'},
        'g4': {'sub1': {'g4e1': 'g4e1 value'}},
        'g5': {'sub1': {'sub2': {'sub3': {'g5e1': 'g5e1 value'}}}},
    })

    assert e1.get_value() == 'e1 value'
    assert e2.get_value() == 'e2 value'
    assert e3.get_value() == 'e3 value'
    assert g2e1.get_value() == 'g2e1 value'
    assert g2e2.get_value() == 'g2e2 value'
    assert g3e1.get_value() == 'g3e1 value'
    assert g3e2.get_value() == 'g3e2 value'
    assert g4e1.get_value() == 'g4e1 value'
    assert g5e1.get_value() == 'g5e1 value'


def test_set_value_directly_on_nested_group():
    """A nested group's own value is relative to the group itself."""
    root = Group('root')
    g5 = root.add_group('g5[sub1][sub2][sub3]')
    g5e1 = g5.add_text('g5e1')
    g5.set_value({'g5e1': 'direct'})
    assert g5e1.get_value() == 'direct'
    assert g5.get_value() == {'g5e1': 'direct'}


def test_unnamed_group_set_value():
    root = Group()
    e1 = root.add_text('e1')
    e2 = root.add_text('e2[sub1]')
    g1 = root.add_group('g1')
    e3 = g1.add_text('e3')
    g2 = root.add_group()
    e4 = g2.add_text('e4')
    e5 = g2.add_text('e5')

    root.set_value({
        'e1': 'e1 value',
        'e2': {'sub1': 'e2 value'},
        'g1': {'e3': 'e3 value'},
        0: {'e4': 'e4 value'},
        1: {'e5': 'e5 value'},
    })

    assert e1.get_value() == 'e1 value'
    assert e2.get_value() == 'e2 value'
    assert e3.get_value() == 'e3 value'
    assert e4.get_value() == 'e4 value'
    assert e5.get_value() == 'e5 value'


def test_set_value_is_fluent():
    group = Group('grp')
    assert group.set_value({'foo': 'bar'}) is group


def test_positional_values_for_sibling_unnamed_groups():
    """Each unnamed child group claims one positional entry."""
    parent = Group()
    first = parent.add_group()
    first_x = first.add_text('x')
    second = parent.add_group()
    second_x = second.add_text('x')

    parent.set_value([{'x': 'a'}, {'x': 'b'}])

    assert first_x.get_value() == 'a'
    assert second_x.get_value() == 'b'


def test_set_value_is_idempotent():
    parent = Group('p')
    first = parent.add_group()
    first_x = first.add_text('x')
    second = parent.add_group()
    second_x = second.add_text('x')
    text = parent.add_text('t')
    value = {'t': 'text', 0: {'x': 'a'}, 1: {'x': 'b'}}

    parent.set_value(value)
    once = (text.get_value(), first_x.get_value(), second_x.get_value())
    parent.set_value(value)
    twice = (text.get_value(), first_x.get_value(), second_x.get_value())
    assert once == twice == ('text', 'a', 'b')


def test_set_value_updates_all_elements():
    """Values missing from the new input are cleared."""
    group = Group()
    foo = group.add_text('foo', value='foo value')
    bar = group.add_text('bar', value='bar value')

    group.set_value({'foo': 'new foo value'})
    assert foo.get_value() == 'new foo value'
    assert bar.get_value() is None

    group.set_value(None)
    assert foo.get_value() is None


def test_set_value_clears_nested_groups():
    group = Group('grp')
    inner = group.add_group('inner')
    text = inner.add_text('x', value='stale')
    group.set_value({'other': 'value'})
    assert text.get_value() is None


def test_checkbox_group():
    """Checkboxes named [] are checked by membership of their value."""
    group = Group('boxGroup')
    red = group.add_checkbox('', value_attribute='red')
    green = group.add_checkbox('', value_attribute='green')
    blue = group.add_checkbox('', value_attribute='blue')
    assert red.name == 'boxGroup[]'

    group.set_value(['red', 'blue'])

    assert red.is_checked()
    assert not green.is_checked()
    assert blue.is_checked()
    assert group.get_value() == ['red', 'blue']


def test_checkbox_array_under_unnamed_group():
    group = Group()
    boxes = [group.add_checkbox('colors[]', value_attribute=colour)
             for colour in ('red', 'green', 'blue')]
    group.set_value({'colors': ['red', 'blue']})
    assert [box.is_checked() for box in boxes] == [True, False, True]
    assert group.get_value() == {'colors': ['red', 'blue']}


def test_radio_group_unnamed():
    group = Group()
    radios = [group.add_radio('request20103', value_attribute=value)
              for value in ('first', 'second', 'third')]
    group.set_value({'request20103': 'second'})
    assert [radio.is_checked() for radio in radios] == [False, True, False]
    assert group.get_value() == {'request20103': 'second'}


def test_radio_group_named():
    group = Group('named')
    radios = [group.add_radio('request20103[sub]', value_attribute=value)
              for value in ('first', 'second', 'third')]
    group.set_value({'request20103': {'sub': 'third'}})
    assert [radio.is_checked() for radio in radios] == [False, False, True]
    assert group.get_value() == {'request20103': {'sub': 'third'}}


def test_scalar_value_is_not_descended():
    """A scalar where a sub-array is expected matches nothing."""
    group = Group('foo')
    text = group.add_text('bar[baz]')
    group.set_value({'bar': 'a string'})
    assert text.get_value() is None


def test_array_bracket_siblings_get_sequential_values():
    group = Group()
    first = group.add_text('a[]')
    second = group.add_text('a[]')
    group.set_value({'a': ['v0', 'v1']})
    assert first.get_value() == 'v0'
    assert second.get_value() == 'v1'
    assert group.get_value() == {'a': ['v0', 'v1']}


def test_fieldset_children_read_parent_values():
    group = Group('grp')
    fieldset = group.add_fieldset()
    text = fieldset.add_text('foo')
    assert fieldset.name is None
    assert text.name == 'foo'
    group.set_value({'foo': 'value'})
    assert text.get_value() == 'value'
    assert group.get_value() == {'foo': 'value'}


def test_fieldset_cannot_be_named():
    fieldset = Fieldset()
    fieldset.set_name('foo')
    assert fieldset.name is None
    assert not fieldset.prepends_name()


def test_get_value_missing_path_is_empty():
    group = Group('grp')
    group.add_text('foo')
    assert group.get_value() == {}


def test_checkable_set_value_compares_strings():
    box = InputCheckbox('box', value_attribute='5')
    assert box.set_value(5).is_checked()
    assert not box.set_value('6').is_checked()
    radio = InputRadio('r', value_attribute='1')
    assert radio.set_value(True).is_checked()


def test_siblings_sharing_a_head_key():
    """Composite fields like date[d] and date[m] each get their part."""
    group = Group('g')
    day = group.add_text('date[d]')
    month = group.add_text('date[m]')
    group.set_value({'date': {'d': 1, 'm': 2}})
    assert (day.get_value(), month.get_value()) == (1, 2)
    assert group.get_value() == {'date': {'d': 1, 'm': 2}}


def test_siblings_sharing_a_head_key_under_unnamed_group():
    group = Group()
    ax = group.add_text('a[x]')
    ay = group.add_text('a[y]')
    group.set_value({'a': {'x': 1, 'y': 2}})
    assert (ax.get_value(), ay.get_value()) == (1, 2)


def test_subgroup_next_to_bracketed_sibling():
    group = Group('g')
    ax = group.add_text('a[x]')
    ay = group.add_group('a').add_text('y')
    group.set_value({'a': {'x': 1, 'y': 2}})
    assert ax.get_value() == 1
    assert ay.get_value() == 2
    assert group.get_value() == {'a': {'x': 1, 'y': 2}}


def test_duplicate_name_takes_value_once():
    """A second non-radio element with the same name is cleared."""
    group = Group('g')
    first = group.add_text('foo')
    second = group.add_text('foo', value='old')
    group.set_value({'foo': 'new'})
    assert first.get_value() == 'new'
    assert second.get_value() is None


def test_fieldset_inside_named_group_round_trips():
    group = Group('grp')
    fieldset = group.add_fieldset()
    inner = fieldset.add_text('foo')
    outer = group.add_text('bar')
    assert fieldset.name is None
    group.set_value({'foo': 'v', 'bar': 'w'})
    assert inner.get_value() == 'v'
    assert outer.get_value() == 'w'
    assert group.get_value() == {'foo': 'v', 'bar': 'w'}


def test_fieldset_stays_unnamed_when_moved():
    first = Group('first')
    second = Group('second')
    fieldset = first.add_fieldset()
    assert fieldset.name is None
    second.append_child(fieldset)
    assert fieldset.name is None
    first.set_name('renamed')
    second.set_name('other')
    assert fieldset.name is None
