"""Tests for element id generation."""
import pytest

from formtree import Form, IdGenerator, InputText, InvalidId, options_context


def test_ids_from_names():
    generator = IdGenerator()
    assert generator.generate('foo') == 'foo-0'
    assert generator.generate('foo') == 'foo-1'
    assert generator.generate('a[b][]') == 'a-b-0'
    assert generator.generate('') == 'qfauto-0'
    assert generator.generate(None) == 'qfauto-1'
    assert generator.generate('1st') == 'qf1st-0'


def test_ids_without_forced_index():
    generator = IdGenerator()
    with options_context(id_force_append_index=False):
        assert generator.generate('foo') == 'foo'
        assert generator.generate('foo') == 'foo-1'
        assert generator.generate('array[8]') == 'array-8'
        assert generator.generate('array[]') == 'array'
        assert generator.generate('array[]') == 'array-1'


def test_generated_ids_never_collide():
    """A generated id never repeats one already issued by the generator."""
    generator = IdGenerator()
    with options_context(id_force_append_index=False):
        ids = [generator.generate(name) for name in
               ('array[8]', 'array', 'array', 'array', 'array', 'array',
                'array', 'array', 'array', 'array', 'array[8]')]
    assert len(ids) == len(set(ids))


def test_manual_ids_are_not_reused():
    generator = IdGenerator()
    generator.reserve('foo-3')
    assert generator.generate('foo') == 'foo-4'
    generator.reserve('bar')
    with options_context(id_force_append_index=False):
        assert generator.generate('bar') == 'bar-1'


def test_reset():
    generator = IdGenerator()
    generator.generate('foo')
    generator.reset()
    assert generator.generate('foo') == 'foo-0'


def test_node_gets_unique_ids():
    form = Form('form')
    ids = {form.add_text('foo').id for _ in range(5)}
    ids.add(form.add_text('foo[]').id)
    assert len(ids) == 6


def test_explicit_id_kept():
    text = InputText('foo', id='my-id')
    assert text.id == 'my-id'


def test_whitespace_in_id_rejected():
    with pytest.raises(InvalidId):
        InputText('foo', id='has space')
    text = InputText('foo')
    with pytest.raises(InvalidId):
        text.set_id("tab\there")


def test_form_with_own_generator():
    """Elements created through a form use the form's generator."""
    generator = IdGenerator()
    first = Form('first', id_generator=generator)
    second = Form('second', id_generator=IdGenerator())
    assert first.add_text('foo').id == 'foo-0'
    assert second.add_text('foo').id == 'foo-0'
    assert first.add_text('foo').id == 'foo-1'
