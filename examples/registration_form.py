"""
Registration form example.

Builds a small form with nested groups, a checkbox array and a repeated
unnamed group, resolves values from defaults and submitted data, and
prints the rendered tree.
"""

import logging
import pprint

from formtree import ArrayDataSource, ArrayRenderer, Form, IdGenerator, SubmitDataSource

logger = logging.getLogger(__name__)


def build_form(submitted=None) -> Form:
    sources = []
    if submitted is not None:
        sources.append(SubmitDataSource(submitted))
    sources.append(ArrayDataSource({'account': {'country': 'NZ'}}))
    form = Form('registration', data_sources=sources, id_generator=IdGenerator())

    account = form.add_group('account').set_label('Account')
    account.add_text('login')
    account.add_text('email')
    account.add_text('country')

    interests = form.add_group('interests')
    for topic in ('forms', 'parsers', 'trees'):
        interests.add_checkbox('', value_attribute=topic, data={'label': topic.title()})

    for _ in range(2):
        phone = form.add_group()
        phone.add_text('kind')
        phone.add_text('number')
    form.add_button('register')
    return form


def main():
    logging.basicConfig(level=logging.INFO)

    form = build_form()
    logger.info(f"Defaults only:\n{pprint.pformat(form.get_value())}")

    form = build_form({
        'account': {'login': 'ann', 'email': 'ann@example.org'},
        'interests': ['parsers', 'trees'],
        'register': '1',
    })
    logger.info(f"Submitted:\n{pprint.pformat(form.get_value())}")

    form.set_value({
        'account': {'login': 'bob'},
        0: {'kind': 'home', 'number': '555-0100'},
        1: {'kind': 'work', 'number': '555-0199'},
    })
    logger.info(f"Rendered:\n{pprint.pformat(ArrayRenderer().render(form))}")


if __name__ == '__main__':
    main()
