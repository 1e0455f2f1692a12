"""Tests for Node naming, container links, filters and misc accessors."""
import gc

import pytest

from formtree import (
    CannotSetOwnAncestor,
    Container,
    ContainerMustAlreadyHaveChild,
    Form,
    Group,
    InputText,
    InvalidName,
)


def test_element_name_is_not_nullable():
    with pytest.raises(InvalidName):
        InputText()
    text = InputText('foo')
    with pytest.raises(InvalidName):
        text.set_name(None)
    assert text.name == 'foo'


def test_empty_name_is_allowed():
    assert InputText('').name == ''


def test_group_name_is_nullable():
    group = Group('foo')
    group.set_name(None)
    assert group.name is None


def test_base_name_and_derived_name():
    group = Group('grp')
    text = group.add_text('foo[bar]')
    assert text.base_name == 'foo[bar]'
    assert text.name == 'grp[foo][bar]'


def test_set_name_is_fluent():
    text = InputText('foo')
    assert text.set_name('bar') is text
    assert text.set_id('baz') is text
    assert text.set_label('Label') is text
    assert text.label == 'Label'


def test_cannot_set_own_ancestor():
    outer = Group('outer')
    inner = outer.add_group('inner')
    with pytest.raises(CannotSetOwnAncestor):
        inner.append_child(outer)
    with pytest.raises(CannotSetOwnAncestor):
        outer.append_child(outer)
    assert outer not in inner


def test_set_container_requires_child_first():
    group = Group('grp')
    text = InputText('foo')
    with pytest.raises(ContainerMustAlreadyHaveChild):
        text.set_container(group)
    assert text.container is None


def test_cannot_set_own_ancestor_via_set_container():
    outer = Group('outer')
    inner = outer.add_group('inner')
    with pytest.raises(CannotSetOwnAncestor):
        outer.set_container(inner)


def test_nesting_depth():
    form = Form('form')
    group = form.add_group('a')
    inner = group.add_group('b')
    text = inner.add_text('c')
    assert form.get_nesting_depth() == 0
    assert group.get_nesting_depth() == 1
    assert text.get_nesting_depth() == 3


def test_get_form():
    form = Form('form')
    text = form.add_group('a').add_text('b')
    assert text.get_form() is form
    assert form.get_form() is form
    assert InputText('loose').get_form() is None


def test_container_reference_is_weak():
    """A node does not keep its container alive."""
    container = Container()
    text = container.add_text('foo')
    assert text.container is container
    container._elements.clear()
    del container
    gc.collect()
    assert text.container is None


def test_filters():
    text = InputText('foo', value=' value ')
    text.add_filter(str.strip)
    text.add_filter(lambda value, suffix: value + suffix, '!')
    assert text.get_raw_value() == ' value '
    assert text.get_value() == 'value!'


def test_filters_skipped_for_none():
    text = InputText('foo')
    text.add_filter(lambda value: 'filtered')
    assert text.get_value() is None


def test_filter_must_be_callable():
    with pytest.raises(TypeError):
        InputText('foo').add_filter('not callable')


def test_recursive_filters_apply_to_leaves():
    """Ancestor recursive filters run first, own filters last."""
    group = Group('grp')
    group.add_recursive_filter(str.upper)
    text = group.add_text('foo', value='abc')
    text.add_filter(lambda value: value + '.')
    listed = group.add_text('bar', value=['x', 'y'])
    assert text.get_value() == 'ABC.'
    assert listed.get_value() == ['X', 'Y']
    assert group.get_value() == {'foo': 'ABC.', 'bar': ['X', 'Y']}
    assert group.get_raw_value() == {'foo': 'abc', 'bar': ['x', 'y']}


def test_data_label():
    text = InputText('foo', data={'label': 'Foo'})
    assert text.label == 'Foo'
    assert text.data == {'label': 'Foo'}
